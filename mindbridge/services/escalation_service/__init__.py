"""Escalation Service: AI-to-therapist hand-off decisions.

Every user message in an AI conversation is followed by an escalation
check over the last three user turns. Crisis language always hands off.

Components:
- evaluator.py: EscalationEvaluator with three prioritized triggers
- config.py: Thresholds, crisis and dissatisfaction phrase lists
- handoff_publisher.py: Kinesis hand-off events for the therapist side
"""

from .config import (
    CRISIS_KEYWORDS,
    DISSATISFACTION_KEYWORDS,
    EscalationThresholds,
)
from .evaluator import EscalationEvaluator
from .handoff_publisher import EscalationHandoffEvent, HandoffEventPublisher

__all__ = [
    "CRISIS_KEYWORDS",
    "DISSATISFACTION_KEYWORDS",
    "EscalationEvaluator",
    "EscalationHandoffEvent",
    "EscalationThresholds",
    "HandoffEventPublisher",
]
