"""Tests for MoodPatternAnalyzer."""
from datetime import date, datetime, timedelta, timezone

import pytest

from mindbridge.shared.models import MoodFactor, MoodSample
from mindbridge.services.mood_service.config import (
    DECLINING_SUGGESTION,
    HIGH_VARIABILITY_SUGGESTIONS,
    IMPROVING_SUGGESTION,
    INSUFFICIENT_DATA_SUGGESTION,
    LOW_AVERAGE_SUGGESTION,
    LOW_VARIABILITY_SUGGESTIONS,
    STABLE_SUGGESTION,
)
from mindbridge.services.mood_service.pattern_analyzer import MoodPatternAnalyzer


@pytest.fixture
def analyzer():
    return MoodPatternAnalyzer()


def samples(*moods, factors=()):
    start = datetime(2026, 10, 1, 9, 0)
    return [
        MoodSample(
            mood=mood,
            recorded_at=start + timedelta(days=i),
            factors=frozenset(factors),
        )
        for i, mood in enumerate(moods)
    ]


class TestInsufficientData:

    @pytest.mark.parametrize("moods", [[], [5], [1, 5, 1, 5]])
    def test_fewer_than_five_samples(self, analyzer, moods):
        result = analyzer.analyze(moods)

        assert result.pattern == "insufficient_data"
        assert result.suggestions == (INSUFFICIENT_DATA_SUGGESTION,)
        assert result.has_statistics is False
        assert result.average_mood is None

    def test_none_history(self, analyzer):
        assert analyzer.analyze(None).pattern == "insufficient_data"

    def test_serialization_omits_statistics(self, analyzer):
        data = analyzer.analyze([3, 3]).to_dict()

        assert data == {
            "pattern": "insufficient_data",
            "suggestions": [INSUFFICIENT_DATA_SUGGESTION],
        }


class TestStatistics:

    def test_identical_moods(self, analyzer):
        result = analyzer.analyze([3, 3, 3, 3, 3])

        assert result.average_mood == 3
        assert result.mood_variability == 0
        assert result.trend == 0
        assert result.pattern.endswith("_stable")
        assert result.pattern == "low_variability_stable"

    def test_population_standard_deviation(self, analyzer):
        # mean 3, squared deviations 4+0+0+0+4 = 8, 8/5 = 1.6
        result = analyzer.analyze([1, 3, 3, 3, 5])

        assert result.mood_variability == pytest.approx(1.6 ** 0.5)

    def test_trend_uses_last_five(self, analyzer):
        result = analyzer.analyze([1, 1, 1, 1, 1, 5, 5, 5, 5, 5])

        assert result.average_mood == pytest.approx(3.0)
        assert result.trend == pytest.approx(2.0)

    def test_accepts_mood_samples(self, analyzer):
        result = analyzer.analyze(samples(4, 4, 4, 4, 4))

        assert result.average_mood == 4


class TestPatternLabels:

    def test_high_variability_improving(self, analyzer):
        result = analyzer.analyze([1, 1, 1, 1, 1, 5, 5, 5, 5, 5])

        assert result.pattern == "high_variability_improving"
        assert result.suggestions == HIGH_VARIABILITY_SUGGESTIONS + (IMPROVING_SUGGESTION,)

    def test_high_variability_declining(self, analyzer):
        result = analyzer.analyze([5, 5, 5, 5, 5, 1, 1, 1, 1, 1])

        assert result.pattern == "high_variability_declining"
        assert result.suggestions[-1] == DECLINING_SUGGESTION

    def test_moderate_variability_has_no_prefix(self, analyzer):
        # std-dev ~0.63, between the two bands
        result = analyzer.analyze([2, 3, 3, 3, 4])

        assert result.pattern == "_stable"
        assert result.suggestions == (STABLE_SUGGESTION,)

    def test_low_variability_stable(self, analyzer):
        result = analyzer.analyze([4, 4, 4, 4, 4])

        assert result.pattern == "low_variability_stable"
        assert result.suggestions == LOW_VARIABILITY_SUGGESTIONS + (STABLE_SUGGESTION,)

    @pytest.mark.parametrize("moods, variability, trend", [
        ([3] * 5 + [4] * 5, 0.5, 0.5),
        ([4] * 5 + [3] * 5, 0.5, -0.5),
        ([1, 1, 3, 3, 4], 1.2, 0.0),
    ])
    def test_thresholds_are_strict(self, analyzer, moods, variability, trend):
        """Values exactly on a band edge get neither prefix nor direction."""
        result = analyzer.analyze(moods)

        assert result.mood_variability == pytest.approx(variability)
        assert result.trend == pytest.approx(trend)
        assert result.pattern == "_stable"
        assert result.suggestions[0] == STABLE_SUGGESTION


class TestLowAverage:

    def test_all_ones_recommends_therapist_session(self, analyzer):
        result = analyzer.analyze([1, 1, 1, 1, 1])

        assert result.average_mood < 2.5
        assert LOW_AVERAGE_SUGGESTION in result.suggestions
        assert result.suggestions[-1] == LOW_AVERAGE_SUGGESTION

    def test_suggestion_order(self, analyzer):
        result = analyzer.analyze([3, 3, 3, 3, 3, 1, 1, 1, 1, 1])

        # variability 1.0 (no band), trend -1.0, average 2.0
        assert result.pattern == "_declining"
        assert result.suggestions == (DECLINING_SUGGESTION, LOW_AVERAGE_SUGGESTION)

    def test_average_at_threshold_does_not_trigger(self, analyzer):
        result = analyzer.analyze([2, 3, 2, 3, 2, 3, 2, 3, 2, 3])

        assert result.average_mood == pytest.approx(2.5)
        assert LOW_AVERAGE_SUGGESTION not in result.suggestions


class TestFactorSummary:

    def test_groups_by_factor(self, analyzer):
        history = (
            samples(4, 5, factors=[MoodFactor.EXERCISE, MoodFactor.SOCIAL])
            + samples(2, factors=[MoodFactor.WORK])
            + samples(1, 3, factors=[MoodFactor.WORK, MoodFactor.SLEEP])
        )

        summary = {s.factor: s for s in analyzer.summarize_factors(history)}

        assert set(summary) == {
            MoodFactor.EXERCISE, MoodFactor.SOCIAL, MoodFactor.WORK, MoodFactor.SLEEP,
        }
        assert summary[MoodFactor.EXERCISE].entry_count == 2
        assert summary[MoodFactor.EXERCISE].average_mood == pytest.approx(4.5)
        assert summary[MoodFactor.WORK].entry_count == 3
        assert summary[MoodFactor.WORK].average_mood == pytest.approx(2.0)

    def test_declaration_order(self, analyzer):
        history = samples(3, factors=[MoodFactor.WEATHER, MoodFactor.SLEEP])

        result = analyzer.summarize_factors(history)

        assert [s.factor for s in result] == [MoodFactor.SLEEP, MoodFactor.WEATHER]

    def test_no_factors(self, analyzer):
        assert analyzer.summarize_factors(samples(3, 4)) == []


class TestDailyTrends:

    def test_groups_by_day_oldest_first(self, analyzer):
        history = [
            MoodSample(mood=5, recorded_at=datetime(2026, 10, 2, 8, 0)),
            MoodSample(mood=2, recorded_at=datetime(2026, 10, 1, 9, 0)),
            MoodSample(mood=4, recorded_at=datetime(2026, 10, 1, 21, 0)),
        ]

        trends = analyzer.daily_trends(history)

        assert [(t.day, t.average_mood, t.count) for t in trends] == [
            (date(2026, 10, 1), 3.0, 2),
            (date(2026, 10, 2), 5.0, 1),
        ]

    def test_days_are_utc(self, analyzer):
        evening_in_new_york = datetime(
            2026, 10, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5))
        )

        trends = analyzer.daily_trends([MoodSample(mood=3, recorded_at=evening_in_new_york)])

        assert trends[0].day == date(2026, 10, 2)

    def test_serialization(self, analyzer):
        trends = analyzer.daily_trends(samples(1, 2))

        assert [t.to_dict() for t in trends] == [
            {"date": "2026-10-01", "average_mood": 1.0, "count": 1},
            {"date": "2026-10-02", "average_mood": 2.0, "count": 1},
        ]

    def test_no_samples(self, analyzer):
        assert analyzer.daily_trends([]) == []
