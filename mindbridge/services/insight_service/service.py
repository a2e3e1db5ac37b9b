"""Insight service - one entry point for the platform's AI analysis.

Composes the classifier, escalation and mood services behind the
operations the diary, mood-tracker and chat APIs call. Holds no
per-request state; one instance serves all requests.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from mindbridge.shared.models import (
    DailyMoodTrend,
    DistortionCategory,
    EscalationDecision,
    FactorSummary,
    MoodPatternResult,
    MoodSample,
    SentimentResult,
    ThoughtAnalysis,
    ThoughtEntry,
)
from mindbridge.services.classifier_service import (
    CognitiveDistortionDetector,
    LexiconSentimentAnalyzer,
    ReframingSuggester,
)
from mindbridge.services.escalation_service import EscalationEvaluator
from mindbridge.services.escalation_service.evaluator import TurnLike
from mindbridge.services.mood_service import MoodPatternAnalyzer
from mindbridge.services.mood_service.pattern_analyzer import SampleLike

logger = logging.getLogger(__name__)


class InsightService:
    """Facade over the insight components (all injectable for testing)."""

    def __init__(
        self,
        sentiment_analyzer: Optional[LexiconSentimentAnalyzer] = None,
        distortion_detector: Optional[CognitiveDistortionDetector] = None,
        reframing_suggester: Optional[ReframingSuggester] = None,
        escalation_evaluator: Optional[EscalationEvaluator] = None,
        mood_analyzer: Optional[MoodPatternAnalyzer] = None,
    ):
        self.sentiment_analyzer = sentiment_analyzer or LexiconSentimentAnalyzer()
        self.distortion_detector = distortion_detector or CognitiveDistortionDetector()
        self.reframing_suggester = reframing_suggester or ReframingSuggester()
        self.escalation_evaluator = escalation_evaluator or EscalationEvaluator(
            sentiment_analyzer=self.sentiment_analyzer,
        )
        self.mood_analyzer = mood_analyzer or MoodPatternAnalyzer()

        logger.info(
            "INSIGHT_SERVICE_INITIALIZED",
            extra={"llm_enabled": self.reframing_suggester.is_llm_available}
        )

    def analyze_sentiment(self, text: Optional[str]) -> SentimentResult:
        return self.sentiment_analyzer.analyze(text)

    def detect_distortions(self, text: Optional[str]) -> List[DistortionCategory]:
        return self.distortion_detector.detect(text)

    async def suggest_reframes(self, thought: Optional[str]) -> List[str]:
        return await self.reframing_suggester.suggest(thought)

    async def analyze_thought_entry(self, entry: ThoughtEntry) -> ThoughtAnalysis:
        """Build the AI analysis block for a thought-diary entry.

        Sentiment, distortions and reframes are all computed from the
        entry's ``thoughts`` field.
        """
        sentiment = self.analyze_sentiment(entry.thoughts)
        distortions = self.detect_distortions(entry.thoughts)
        suggestions = await self.suggest_reframes(entry.thoughts)

        logger.info(
            "THOUGHT_ENTRY_ANALYZED",
            extra={
                "sentiment_score": sentiment.score,
                "distortion_count": len(distortions),
                "suggestion_count": len(suggestions),
            }
        )

        return ThoughtAnalysis(
            sentiment_score=sentiment.score,
            cognitive_distortions=tuple(distortions),
            suggestions=tuple(suggestions),
            processed=True,
        )

    def analyze_mood_history(self, samples: Sequence[SampleLike]) -> MoodPatternResult:
        """Analyze mood history; MoodSample lists are sorted oldest first.

        The mood tracker store returns newest entries first, so timestamped
        samples are reordered before the trend window is taken.
        """
        if samples and all(isinstance(s, MoodSample) for s in samples):
            samples = sorted(samples, key=lambda s: s.recorded_at)
        return self.mood_analyzer.analyze(samples)

    def summarize_mood_factors(self, samples: Sequence[MoodSample]) -> List[FactorSummary]:
        return self.mood_analyzer.summarize_factors(samples)

    def mood_daily_trends(self, samples: Sequence[MoodSample]) -> List[DailyMoodTrend]:
        return self.mood_analyzer.daily_trends(samples)

    def should_escalate(self, history: Optional[Iterable[TurnLike]]) -> EscalationDecision:
        return self.escalation_evaluator.evaluate(history)
