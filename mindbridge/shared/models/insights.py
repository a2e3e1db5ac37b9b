"""Insight domain models shared by the MindBridge analysis services.

Every result here is a transient computation output: created per request,
never mutated, discarded once the response is serialized. Persisting the
originating diary/mood records is the platform API's job.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple


class SentimentInterpretation(Enum):
    """Buckets for comparative sentiment."""
    VERY_NEGATIVE = "very negative"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    VERY_POSITIVE = "very positive"


class DistortionCategory(Enum):
    """Cognitive distortions recognised by the thought-diary classifier.

    Declaration order is the order results are reported in.
    """
    ALL_OR_NOTHING = "all_or_nothing"
    OVERGENERALIZATION = "overgeneralization"
    MENTAL_FILTER = "mental_filter"
    DISQUALIFYING_POSITIVE = "disqualifying_positive"
    JUMPING_TO_CONCLUSIONS = "jumping_to_conclusions"
    MAGNIFICATION = "magnification"
    EMOTIONAL_REASONING = "emotional_reasoning"
    SHOULD_STATEMENTS = "should_statements"
    LABELING = "labeling"
    PERSONALIZATION = "personalization"


class TurnRole(Enum):
    """Author of a conversation turn."""
    USER = "user"
    ASSISTANT = "assistant"


class EscalationReason(Enum):
    """Why a conversation was (or was not) handed to a human therapist."""
    NONE = "none"
    CRISIS_DETECTED = "crisis_detected"
    SEVERE_NEGATIVE_SENTIMENT = "severe_negative_sentiment"
    USER_DISSATISFACTION = "user_dissatisfaction"


class MoodFactor(Enum):
    """Factors a user can tag on a mood entry."""
    SLEEP = "sleep"
    EXERCISE = "exercise"
    NUTRITION = "nutrition"
    SOCIAL = "social"
    WORK = "work"
    FAMILY = "family"
    HEALTH = "health"
    WEATHER = "weather"
    OTHER = "other"


MOOD_MIN = 1
MOOD_MAX = 5


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SentimentResult:
    """Lexicon sentiment of a single text sample."""
    score: float
    comparative: float
    interpretation: SentimentInterpretation

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "comparative": round(self.comparative, 4),
            "interpretation": self.interpretation.value,
        }


@dataclass(frozen=True)
class ConversationTurn:
    """One message in a user/assistant conversation."""
    role: TurnRole
    content: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationTurn":
        """Build a turn from a ``{"role", "content"}`` mapping.

        Raises:
            ValueError: If the role is unknown or content is not a string
        """
        role = TurnRole(data.get("role"))
        content = data.get("content") or ""
        if not isinstance(content, str):
            raise ValueError(f"Turn content must be a string, got {type(content).__name__}")
        return cls(role=role, content=content)


@dataclass(frozen=True)
class EscalationDecision:
    """Outcome of the therapist hand-off evaluation.

    Exactly one reason is reported; NONE always pairs with escalate=False.
    """
    escalate: bool
    reason: EscalationReason = EscalationReason.NONE
    message: Optional[str] = None

    def __post_init__(self):
        if self.escalate == (self.reason == EscalationReason.NONE):
            raise ValueError(
                f"Inconsistent decision: escalate={self.escalate}, reason={self.reason.value}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "escalate": self.escalate,
            "reason": self.reason.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class MoodSample:
    """A single mood-tracker entry.

    Naive ``recorded_at`` values are taken as UTC and stored aware.
    """
    mood: int
    recorded_at: datetime = field(default_factory=utcnow)
    factors: FrozenSet[MoodFactor] = frozenset()

    def __post_init__(self):
        if self.recorded_at.tzinfo is None:
            object.__setattr__(
                self, "recorded_at", self.recorded_at.replace(tzinfo=timezone.utc)
            )
        if isinstance(self.mood, bool) or not isinstance(self.mood, int):
            raise ValueError(f"Mood rating must be an integer, got {self.mood!r}")
        if not MOOD_MIN <= self.mood <= MOOD_MAX:
            raise ValueError(f"Mood rating must be {MOOD_MIN}-{MOOD_MAX}, got {self.mood}")


@dataclass(frozen=True)
class MoodPatternResult:
    """Descriptive mood pattern over a user's history.

    Statistics are None when there was not enough data to compute them.
    """
    pattern: str
    suggestions: Tuple[str, ...] = ()
    average_mood: Optional[float] = None
    mood_variability: Optional[float] = None
    trend: Optional[float] = None

    @property
    def has_statistics(self) -> bool:
        return self.average_mood is not None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "pattern": self.pattern,
            "suggestions": list(self.suggestions),
        }
        if self.has_statistics:
            result["average_mood"] = round(self.average_mood, 3)
            result["mood_variability"] = round(self.mood_variability, 3)
            result["trend"] = round(self.trend, 3)
        return result


@dataclass(frozen=True)
class FactorSummary:
    """Mood statistics for entries tagged with one factor."""
    factor: MoodFactor
    entry_count: int
    average_mood: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "factor": self.factor.value,
            "entry_count": self.entry_count,
            "average_mood": round(self.average_mood, 3),
        }


@dataclass(frozen=True)
class ThoughtEntry:
    """CBT thought-diary entry submitted for analysis."""
    situation: str
    thoughts: str
    emotions: str
    emotion_intensity: int = 50

    def __post_init__(self):
        for name in ("situation", "thoughts", "emotions"):
            if not getattr(self, name):
                raise ValueError(f"Thought entry field '{name}' is required")
        if not 0 <= self.emotion_intensity <= 100:
            raise ValueError(
                f"Emotion intensity must be 0-100, got {self.emotion_intensity}"
            )


@dataclass(frozen=True)
class ThoughtAnalysis:
    """AI analysis block attached to a thought-diary entry."""
    sentiment_score: float
    cognitive_distortions: Tuple[DistortionCategory, ...]
    suggestions: Tuple[str, ...]
    processed: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentiment_score": self.sentiment_score,
            "cognitive_distortions": [d.value for d in self.cognitive_distortions],
            "suggestions": list(self.suggestions),
            "processed": self.processed,
        }


@dataclass(frozen=True)
class DailyMoodTrend:
    """Mean mood of the entries recorded on one UTC calendar day."""
    day: date
    average_mood: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "average_mood": round(self.average_mood, 3),
            "count": self.count,
        }
