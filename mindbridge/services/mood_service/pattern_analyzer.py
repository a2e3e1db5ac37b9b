"""Mood pattern analysis over a user's mood-tracker history.

Samples are taken in the order given (oldest first). The pattern label is
a variability prefix (possibly empty) followed by a trend suffix, e.g.
``high_variability_declining`` or ``_stable``.
"""
import logging
import statistics
from collections import defaultdict
from datetime import date, timezone
from typing import Dict, List, Optional, Sequence, Union

from mindbridge.shared.models import (
    DailyMoodTrend,
    FactorSummary,
    MoodFactor,
    MoodPatternResult,
    MoodSample,
)
from .config import (
    DECLINING_SUFFIX,
    DECLINING_SUGGESTION,
    HIGH_VARIABILITY_PATTERN,
    HIGH_VARIABILITY_SUGGESTIONS,
    IMPROVING_SUFFIX,
    IMPROVING_SUGGESTION,
    INSUFFICIENT_DATA_PATTERN,
    INSUFFICIENT_DATA_SUGGESTION,
    LOW_AVERAGE_SUGGESTION,
    LOW_VARIABILITY_PATTERN,
    LOW_VARIABILITY_SUGGESTIONS,
    MoodThresholds,
    STABLE_SUFFIX,
    STABLE_SUGGESTION,
)

logger = logging.getLogger(__name__)


SampleLike = Union[MoodSample, int]


def _rating(sample: SampleLike) -> int:
    return sample.mood if isinstance(sample, MoodSample) else sample


class MoodPatternAnalyzer:
    """Computes mood statistics, a pattern label and suggestions."""

    def __init__(self, thresholds: Optional[MoodThresholds] = None):
        self.thresholds = thresholds or MoodThresholds()

        logger.info(
            "MOOD_ANALYZER_INITIALIZED",
            extra={
                "min_samples": self.thresholds.min_samples,
                "recent_window": self.thresholds.recent_window,
            }
        )

    def analyze(self, samples: Optional[Sequence[SampleLike]]) -> MoodPatternResult:
        """Analyze a time-ordered mood history.

        Args:
            samples: MoodSample objects or bare 1-5 ratings, oldest first.
                Range validation is the caller's job.

        Returns:
            MoodPatternResult; ``insufficient_data`` without statistics when
            fewer than ``min_samples`` ratings are given
        """
        ratings = [_rating(sample) for sample in (samples or [])]
        if len(ratings) < self.thresholds.min_samples:
            return MoodPatternResult(
                pattern=INSUFFICIENT_DATA_PATTERN,
                suggestions=(INSUFFICIENT_DATA_SUGGESTION,),
            )

        average_mood = statistics.fmean(ratings)
        mood_variability = statistics.pstdev(ratings)
        recent_average = statistics.fmean(ratings[-self.thresholds.recent_window:])
        trend = recent_average - average_mood

        pattern = ""
        suggestions: List[str] = []

        if mood_variability > self.thresholds.high_variability_above:
            pattern = HIGH_VARIABILITY_PATTERN
            suggestions.extend(HIGH_VARIABILITY_SUGGESTIONS)
        elif mood_variability < self.thresholds.low_variability_below:
            pattern = LOW_VARIABILITY_PATTERN
            suggestions.extend(LOW_VARIABILITY_SUGGESTIONS)

        if trend > self.thresholds.improving_above:
            pattern += IMPROVING_SUFFIX
            suggestions.append(IMPROVING_SUGGESTION)
        elif trend < self.thresholds.declining_below:
            pattern += DECLINING_SUFFIX
            suggestions.append(DECLINING_SUGGESTION)
        else:
            pattern += STABLE_SUFFIX
            suggestions.append(STABLE_SUGGESTION)

        if average_mood < self.thresholds.low_average_below:
            suggestions.append(LOW_AVERAGE_SUGGESTION)

        logger.info(
            "MOOD_PATTERN_ANALYZED",
            extra={
                "sample_count": len(ratings),
                "pattern": pattern,
                "average_mood": average_mood,
                "mood_variability": mood_variability,
                "trend": trend,
            }
        )

        return MoodPatternResult(
            pattern=pattern,
            suggestions=tuple(suggestions),
            average_mood=average_mood,
            mood_variability=mood_variability,
            trend=trend,
        )

    def summarize_factors(self, samples: Sequence[MoodSample]) -> List[FactorSummary]:
        """Average mood per tagged factor, in MoodFactor declaration order.

        Factors that never appear are omitted.
        """
        by_factor: Dict[MoodFactor, List[int]] = defaultdict(list)
        for sample in samples:
            for factor in sample.factors:
                by_factor[factor].append(sample.mood)

        return [
            FactorSummary(
                factor=factor,
                entry_count=len(by_factor[factor]),
                average_mood=statistics.fmean(by_factor[factor]),
            )
            for factor in MoodFactor
            if factor in by_factor
        ]

    def daily_trends(self, samples: Sequence[MoodSample]) -> List[DailyMoodTrend]:
        """Mean mood and entry count per UTC calendar day, oldest day first."""
        by_day: Dict[date, List[int]] = defaultdict(list)
        for sample in samples:
            by_day[sample.recorded_at.astimezone(timezone.utc).date()].append(sample.mood)

        return [
            DailyMoodTrend(
                day=day,
                average_mood=statistics.fmean(moods),
                count=len(moods),
            )
            for day, moods in sorted(by_day.items())
        ]
