"""Mood Service: pattern insights over mood-tracker history.

Components:
- pattern_analyzer.py: MoodPatternAnalyzer (mean, population std-dev, trend)
- config.py: MoodThresholds and suggestion copy
"""

from .config import MoodThresholds
from .pattern_analyzer import MoodPatternAnalyzer

__all__ = ["MoodPatternAnalyzer", "MoodThresholds"]
