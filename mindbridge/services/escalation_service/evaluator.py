"""Escalation evaluator - AI to human therapist hand-off decision.

Looks only at the trailing user turns of a conversation and applies three
triggers in fixed priority order; the first one that fires decides:

1. Crisis phrase present        -> CRISIS_DETECTED
2. Raw sentiment score < -0.7   -> SEVERE_NEGATIVE_SENTIMENT
3. >= 2 dissatisfaction phrases -> USER_DISSATISFACTION

The evaluator keeps no state between calls.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from mindbridge.shared.models import (
    ConversationTurn,
    EscalationDecision,
    EscalationReason,
    TurnRole,
)
from mindbridge.services.classifier_service import LexiconSentimentAnalyzer
from .config import (
    CRISIS_KEYWORDS,
    CRISIS_MESSAGE,
    DISSATISFACTION_KEYWORDS,
    DISSATISFACTION_MESSAGE,
    EscalationThresholds,
    SEVERE_SENTIMENT_MESSAGE,
)

logger = logging.getLogger(__name__)


TurnLike = Union[ConversationTurn, Mapping[str, Any]]

NO_ESCALATION = EscalationDecision(escalate=False, reason=EscalationReason.NONE)


class EscalationEvaluator:
    """Decides whether a conversation should be handed to a therapist."""

    def __init__(
        self,
        thresholds: Optional[EscalationThresholds] = None,
        sentiment_analyzer: Optional[LexiconSentimentAnalyzer] = None,
        crisis_keywords: Sequence[str] = CRISIS_KEYWORDS,
        dissatisfaction_keywords: Sequence[str] = DISSATISFACTION_KEYWORDS,
    ):
        """Initialize evaluator.

        Args:
            thresholds: Trigger thresholds
            sentiment_analyzer: Shared classifier (injected for testing)
            crisis_keywords: Phrases that force an immediate hand-off
            dissatisfaction_keywords: Phrases signalling frustration with the AI
        """
        self.thresholds = thresholds or EscalationThresholds()
        self.sentiment_analyzer = sentiment_analyzer or LexiconSentimentAnalyzer()
        self.crisis_keywords = tuple(crisis_keywords)
        self.dissatisfaction_keywords = tuple(dissatisfaction_keywords)

        logger.info(
            "ESCALATION_EVALUATOR_INITIALIZED",
            extra={
                "user_turn_window": self.thresholds.user_turn_window,
                "crisis_keyword_count": len(self.crisis_keywords),
                "dissatisfaction_keyword_count": len(self.dissatisfaction_keywords),
            }
        )

    def evaluate(self, history: Optional[Iterable[TurnLike]]) -> EscalationDecision:
        """Evaluate the trailing window of a conversation.

        Args:
            history: Ordered conversation turns, oldest first. Turns may be
                ConversationTurn objects or {"role", "content"} mappings.

        Returns:
            EscalationDecision; NONE reason when no trigger fires
        """
        turns = [self._coerce_turn(turn) for turn in (history or [])]
        if not turns:
            return NO_ESCALATION

        combined_text = self.combine_user_turns(turns)
        lowered = combined_text.lower()

        crisis_matches = [k for k in self.crisis_keywords if k in lowered]
        if crisis_matches:
            logger.critical(
                "ESCALATION_CRISIS_DETECTED",
                extra={
                    "matched_count": len(crisis_matches),
                    "turn_count": len(turns),
                }
            )
            return EscalationDecision(
                escalate=True,
                reason=EscalationReason.CRISIS_DETECTED,
                message=CRISIS_MESSAGE,
            )

        sentiment = self.sentiment_analyzer.analyze(combined_text)
        if sentiment.score < self.thresholds.severe_sentiment_score:
            logger.warning(
                "ESCALATION_SEVERE_SENTIMENT",
                extra={
                    "sentiment_score": sentiment.score,
                    "threshold": self.thresholds.severe_sentiment_score,
                }
            )
            return EscalationDecision(
                escalate=True,
                reason=EscalationReason.SEVERE_NEGATIVE_SENTIMENT,
                message=SEVERE_SENTIMENT_MESSAGE,
            )

        dissatisfaction_count = sum(
            1 for k in self.dissatisfaction_keywords if k in lowered
        )
        if dissatisfaction_count >= self.thresholds.dissatisfaction_min_count:
            logger.warning(
                "ESCALATION_USER_DISSATISFIED",
                extra={"dissatisfaction_count": dissatisfaction_count}
            )
            return EscalationDecision(
                escalate=True,
                reason=EscalationReason.USER_DISSATISFACTION,
                message=DISSATISFACTION_MESSAGE,
            )

        logger.debug(
            "ESCALATION_NOT_REQUIRED",
            extra={
                "sentiment_score": sentiment.score,
                "dissatisfaction_count": dissatisfaction_count,
            }
        )
        return NO_ESCALATION

    def combine_user_turns(self, turns: Sequence[ConversationTurn]) -> str:
        """Join the last N user turns with single spaces, case preserved."""
        user_messages: List[str] = [
            turn.content for turn in turns if turn.role == TurnRole.USER
        ]
        window = user_messages[-self.thresholds.user_turn_window:]
        return " ".join(window)

    @staticmethod
    def _coerce_turn(turn: TurnLike) -> ConversationTurn:
        if isinstance(turn, ConversationTurn):
            return turn
        return ConversationTurn.from_dict(turn)
