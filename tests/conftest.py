import pytest

from demoforge import config
from demoforge.core import clear_context
from demoforge.models import Section, TimelineEntry


@pytest.fixture(autouse=True)
def lenient_options(monkeypatch):
    """Unknown option keys are ignored unless a test opts into strict mode"""
    monkeypatch.setattr(config, "STRICT_OPTIONS", False)


@pytest.fixture(autouse=True)
def reset_log_context():
    yield
    clear_context()


@pytest.fixture
def sections():
    """Three analysed sections, the middle one important"""
    return [
        Section(name="Hero", text_length=300, visual_complexity="high"),
        Section(name="Features", text_length=800, interactive_elements=3, is_important=True),
        Section(name="Pricing", text_length=200, visual_complexity="low", has_animation=True),
    ]


@pytest.fixture
def timeline():
    """Contiguous three-entry timeline with an 800ms gap"""
    return [
        TimelineEntry(index=0, name="Hero", start_time=0.0, duration=4000.0),
        TimelineEntry(index=1, name="Features", start_time=4800.0, duration=6000.0, emphasis="high"),
        TimelineEntry(index=2, name="Pricing", start_time=11600.0, duration=3000.0),
    ]
