"""Escalation configuration: trigger thresholds, phrase lists, hand-off copy.

Crisis phrases always win over the softer triggers. Keep both phrase
lists lowercase; the combined conversation text is lowercased at match
time.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EscalationThresholds:
    """Thresholds for the sentiment and dissatisfaction triggers."""
    # Number of trailing user turns inspected
    user_turn_window: int = 3

    # Raw lexicon score (not comparative) below which we hand off
    severe_sentiment_score: float = -0.7

    # Distinct dissatisfaction phrases needed to hand off
    dissatisfaction_min_count: int = 2


CRISIS_KEYWORDS: Tuple[str, ...] = (
    "suicide",
    "kill myself",
    "end my life",
    "don't want to live",
    "hurt myself",
    "self-harm",
    "cutting myself",
    "overdose",
    "emergency",
    "crisis",
    "dangerous",
    "immediate help",
)

DISSATISFACTION_KEYWORDS: Tuple[str, ...] = (
    "you don't understand",
    "not helping",
    "useless",
    "want to talk to a real person",
    "want a human",
    "need a therapist",
)


CRISIS_MESSAGE = (
    "I notice you mentioned something concerning. I think it would be best "
    "to connect you with a human therapist right away."
)

SEVERE_SENTIMENT_MESSAGE = (
    "I can see you're going through a difficult time. Would you like to "
    "speak with a human therapist who might be better able to help?"
)

DISSATISFACTION_MESSAGE = (
    "I understand I might not be meeting your needs right now. Would you "
    "prefer to speak with a human therapist?"
)
