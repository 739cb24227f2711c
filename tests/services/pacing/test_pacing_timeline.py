"""
Tests for the pacing stages

Covers the duration estimator, the scheduler, voiceover sync and
dramatic pause injection.
"""

import pytest

from demoforge.core.exceptions import ConfigurationError
from demoforge.models import KeyMoment, Section, TimelineEntry
from demoforge.services.pacing import (
    add_dramatic_pauses,
    calculate_section_duration,
    detect_key_moments,
    find_entry_at,
    generate_pacing_timeline,
    reading_time_ms,
    style_factor,
    sync_with_voiceover,
)


class TestDurationEstimator:
    """Test suite for calculate_section_duration"""

    def test_empty_section_gets_base_duration(self):
        assert calculate_section_duration(Section()) == 1500

    def test_huge_section_is_capped(self):
        section = Section(text_length=100000, visual_complexity="high", interactive_elements=50)
        assert calculate_section_duration(section) == 15000

    @pytest.mark.parametrize("text_length", [0, 10, 250, 1000, 5000, 50000])
    def test_always_within_bounds(self, text_length):
        duration = calculate_section_duration(Section(text_length=text_length))
        assert 1500 <= duration <= 15000

    def test_monotonic_in_text_length(self):
        durations = [
            calculate_section_duration(Section(text_length=n))
            for n in range(0, 5000, 250)
        ]
        assert durations == sorted(durations)

    def test_complexity_multiplier(self):
        low = calculate_section_duration(Section(text_length=100, visual_complexity="low"))
        high = calculate_section_duration(Section(text_length=100, visual_complexity="high"))
        assert high > low

    def test_unknown_complexity_uses_medium(self):
        unknown = calculate_section_duration(Section(text_length=100, visual_complexity="weird"))
        medium = calculate_section_duration(Section(text_length=100, visual_complexity="medium"))
        assert unknown == medium

    def test_reading_time(self):
        # 330 chars = 66 words = 20 seconds at 3.3 words/s
        assert reading_time_ms(330) == pytest.approx(20000)

    def test_bonuses_add_up(self):
        base = Section(text_length=50, visual_complexity="low")
        boosted = Section(
            text_length=50, visual_complexity="low",
            interactive_elements=2, has_animation=True, is_important=True,
        )
        delta = calculate_section_duration(boosted) - calculate_section_duration(base)
        assert delta == pytest.approx(2 * 300 + 1000 + 1500)


class TestPacingScheduler:
    """Test suite for generate_pacing_timeline"""

    def test_timeline_is_contiguous(self, sections):
        result = generate_pacing_timeline(sections)
        entries = result.timeline

        assert entries[0].start_time == 0
        for current, following in zip(entries, entries[1:]):
            assert current.end_time + result.transition_gap == pytest.approx(following.start_time)

    def test_total_duration(self, sections):
        result = generate_pacing_timeline(sections, {"transition_gap": 500})
        expected = sum(e.duration for e in result.timeline) + 2 * 500
        assert result.total_duration == pytest.approx(expected)
        assert result.sections == 3

    def test_durations_clamped(self, sections):
        result = generate_pacing_timeline(
            sections, {"minSectionTime": 3000, "maxSectionTime": 5000, "targetDuration": 600000}
        )
        for entry in result.timeline:
            assert 3000 <= entry.duration <= 5000

    def test_target_too_small_clamps_to_minimum(self, sections):
        result = generate_pacing_timeline(sections, {"target_duration": 100})
        assert all(entry.duration == 2000 for entry in result.timeline)

    def test_emphasis_and_names(self):
        result = generate_pacing_timeline([
            {"textLength": 200, "isImportant": True},
            {"name": "Demo", "text_length": 100},
        ])
        assert result.timeline[0].name == "Section 1"
        assert result.timeline[0].emphasis == "high"
        assert result.timeline[1].name == "Demo"
        assert result.timeline[1].emphasis == "normal"

    def test_empty_sections_rejected(self):
        with pytest.raises(ConfigurationError):
            generate_pacing_timeline([])

    def test_zero_estimates_rejected(self, sections):
        with pytest.raises(ConfigurationError):
            generate_pacing_timeline(sections, estimator=lambda section: 0)

    def test_slower_style_is_not_shorter(self, sections):
        fast = generate_pacing_timeline(sections, {"style": "fast"})
        slow = generate_pacing_timeline(sections, {"style": "slow"})
        for f, s in zip(fast.timeline, slow.timeline):
            assert s.duration >= f.duration

    def test_unknown_style_uses_natural(self, sections):
        assert style_factor("glacial") == 1.0
        natural = generate_pacing_timeline(sections)
        unknown = generate_pacing_timeline(sections, {"style": "glacial"})
        assert [e.duration for e in unknown.timeline] == [e.duration for e in natural.timeline]

    def test_unknown_option_keys_ignored(self, sections):
        result = generate_pacing_timeline(sections, {"tempo": "allegro"})
        assert len(result.timeline) == 3

    def test_unknown_option_keys_strict(self, sections, monkeypatch):
        from demoforge import config
        monkeypatch.setattr(config, "STRICT_OPTIONS", True)
        with pytest.raises(ConfigurationError, match="tempo"):
            generate_pacing_timeline(sections, {"tempo": "allegro"})

    def test_deterministic(self, sections):
        first = generate_pacing_timeline(sections)
        second = generate_pacing_timeline(sections)
        assert [e.to_dict() for e in first.timeline] == [e.to_dict() for e in second.timeline]


class TestVoiceoverSync:
    """Test suite for sync_with_voiceover"""

    def test_entry_grows_to_fit_narration(self, timeline):
        sync_with_voiceover(timeline, [{"sectionIndex": 1, "duration": 8000}])

        features = timeline[1]
        assert features.duration == 8500
        assert features.has_voiceover is True
        assert features.voice_start == 4800
        assert features.voice_end == 12800
        assert timeline[2].start_time == 4800 + 8500 + 800

    def test_entry_never_shrinks(self, timeline):
        sync_with_voiceover(timeline, [{"section_index": 0, "duration": 1000}])
        assert timeline[0].duration == 4000
        assert timeline[0].has_voiceover is True

    def test_match_by_name(self, timeline):
        sync_with_voiceover(timeline, [{"name": "Pricing", "duration": 5000}])
        assert timeline[2].has_voiceover is True
        assert timeline[2].duration == 5500

    def test_unmatched_entries_flagged(self, timeline):
        sync_with_voiceover(timeline, [{"sectionIndex": 1, "duration": 1000}])
        assert timeline[0].has_voiceover is False
        assert timeline[2].has_voiceover is False
        assert timeline[0].voice_start is None

    def test_idempotent(self, timeline):
        segments = [{"sectionIndex": 0, "duration": 6000}, {"name": "Pricing", "duration": 4000}]
        sync_with_voiceover(timeline, segments)
        once = [e.to_dict() for e in timeline]
        sync_with_voiceover(timeline, segments)
        assert [e.to_dict() for e in timeline] == once

    def test_default_gap_matches_scheduler(self, sections):
        result = generate_pacing_timeline(sections)
        sync_with_voiceover(result.timeline, [{"sectionIndex": 0, "duration": 9000}])
        entries = result.timeline
        for current, following in zip(entries, entries[1:]):
            assert current.end_time + result.transition_gap == pytest.approx(following.start_time)

    def test_voice_window_follows_final_start(self, timeline):
        sync_with_voiceover(timeline, [
            {"sectionIndex": 0, "duration": 6000},
            {"sectionIndex": 2, "duration": 1000},
        ])
        pricing = timeline[2]
        assert pricing.voice_start == pricing.start_time == 6500 + 800 + 6000 + 800
        assert pricing.voice_end == pricing.voice_start + 1000

    def test_stale_voice_window_cleared(self, timeline):
        sync_with_voiceover(timeline, [{"sectionIndex": 0, "duration": 1000}])
        sync_with_voiceover(timeline, [{"sectionIndex": 1, "duration": 1000}])
        assert timeline[0].has_voiceover is False
        assert timeline[0].voice_start is None and timeline[0].voice_end is None

    def test_returns_same_list_and_stays_contiguous(self, timeline):
        result = sync_with_voiceover(timeline, [{"sectionIndex": 0, "duration": 9000}], transition_gap=300)
        assert result is timeline
        for current, following in zip(timeline, timeline[1:]):
            assert current.end_time + 300 == following.start_time


class TestDramaticPauses:
    """Test suite for pause detection and injection"""

    def test_detect_key_moments(self, timeline):
        moments = detect_key_moments(timeline)
        assert moments == [
            KeyMoment(time=5000.0, type="reveal", duration=600),
            KeyMoment(time=7800.0, type="emphasis", duration=400),
        ]

    def test_detected_pauses_attached(self, timeline):
        add_dramatic_pauses(timeline)
        pauses = timeline[1].pauses
        assert [(p.at, p.duration, p.type) for p in pauses] == [
            (200.0, 600, "reveal"),
            (3000.0, 400, "emphasis"),
        ]
        assert timeline[0].pauses == []

    def test_pauses_do_not_change_timing(self, timeline):
        before = [(e.start_time, e.duration) for e in timeline]
        add_dramatic_pauses(timeline, [{"time": 1000, "type": "reveal"}, {"time": 12000, "type": "emphasis"}])
        assert [(e.start_time, e.duration) for e in timeline] == before

    def test_default_pause_duration(self, timeline):
        add_dramatic_pauses(timeline, [{"time": 1000, "type": "reveal"}])
        assert timeline[0].pauses[0].duration == 500
        assert timeline[0].pauses[0].at == 1000

    def test_moment_in_gap_dropped(self, timeline):
        add_dramatic_pauses(timeline, [KeyMoment(time=4400, type="reveal")])
        assert all(not e.pauses for e in timeline)

    def test_shared_boundary_goes_to_later_entry(self):
        entries = [
            TimelineEntry(index=0, name="A", start_time=0, duration=1000),
            TimelineEntry(index=1, name="B", start_time=1000, duration=1000),
        ]
        assert find_entry_at(entries, 1000) is entries[1]

    def test_last_entry_owns_its_end(self, timeline):
        assert find_entry_at(timeline, timeline[-1].end_time) is timeline[-1]
        assert find_entry_at(timeline, timeline[0].end_time) is None

