"""
DemoForge - timeline and filter-graph compilation for narrated product demos
"""

__version__ = "0.1.0"
