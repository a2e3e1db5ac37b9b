"""Shared domain models for the MindBridge platform."""
from .insights import (
    MOOD_MAX,
    MOOD_MIN,
    ConversationTurn,
    DailyMoodTrend,
    DistortionCategory,
    EscalationDecision,
    EscalationReason,
    FactorSummary,
    MoodFactor,
    MoodPatternResult,
    MoodSample,
    SentimentInterpretation,
    SentimentResult,
    ThoughtAnalysis,
    ThoughtEntry,
    TurnRole,
    utcnow,
)

__all__ = [
    "MOOD_MAX",
    "MOOD_MIN",
    "ConversationTurn",
    "DailyMoodTrend",
    "DistortionCategory",
    "EscalationDecision",
    "EscalationReason",
    "FactorSummary",
    "MoodFactor",
    "MoodPatternResult",
    "MoodSample",
    "SentimentInterpretation",
    "SentimentResult",
    "ThoughtAnalysis",
    "ThoughtEntry",
    "TurnRole",
    "utcnow",
]
