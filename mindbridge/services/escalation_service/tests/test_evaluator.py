"""Tests for EscalationEvaluator - hand-off decisions must be predictable.

Trigger priority: crisis > severe sentiment > dissatisfaction.
"""
import pytest

from mindbridge.shared.models import (
    ConversationTurn,
    EscalationDecision,
    EscalationReason,
    TurnRole,
)
from mindbridge.services.escalation_service.config import (
    CRISIS_MESSAGE,
    DISSATISFACTION_MESSAGE,
    EscalationThresholds,
    SEVERE_SENTIMENT_MESSAGE,
)
from mindbridge.services.escalation_service.evaluator import EscalationEvaluator


@pytest.fixture
def evaluator():
    return EscalationEvaluator()


def user(content):
    return ConversationTurn(role=TurnRole.USER, content=content)


def assistant(content):
    return ConversationTurn(role=TurnRole.ASSISTANT, content=content)


class TestNoHistory:

    @pytest.mark.parametrize("history", [None, []])
    def test_empty_history_does_not_escalate(self, evaluator, history):
        decision = evaluator.evaluate(history)

        assert decision.escalate is False
        assert decision.reason == EscalationReason.NONE
        assert decision.message is None

    def test_assistant_only_history_does_not_escalate(self, evaluator):
        decision = evaluator.evaluate([assistant("How are you feeling today?")])

        assert decision.escalate is False


class TestCrisisTrigger:
    """Crisis phrases always escalate, regardless of sentiment."""

    def test_kill_myself_in_last_turn(self, evaluator):
        decision = evaluator.evaluate([
            user("Work was fine"),
            assistant("Glad to hear it."),
            user("I'm so happy and grateful but I want to kill myself"),
        ])

        assert decision.escalate is True
        assert decision.reason == EscalationReason.CRISIS_DETECTED
        assert decision.message == CRISIS_MESSAGE

    def test_crisis_match_is_case_insensitive(self, evaluator):
        decision = evaluator.evaluate([user("I think about SUICIDE a lot")])

        assert decision.reason == EscalationReason.CRISIS_DETECTED

    def test_crisis_beats_dissatisfaction(self, evaluator):
        decision = evaluator.evaluate([
            user("This is useless"),
            user("You're not helping"),
            user("I want to hurt myself"),
        ])

        assert decision.reason == EscalationReason.CRISIS_DETECTED

    def test_assistant_turns_are_ignored(self, evaluator):
        decision = evaluator.evaluate([
            assistant("If you ever think about suicide, call 988."),
            user("Thanks, that is helpful"),
        ])

        assert decision.escalate is False

    def test_only_last_three_user_turns_count(self, evaluator):
        decision = evaluator.evaluate([
            user("I want to kill myself"),
            user("I had a nice walk"),
            user("The food was good"),
            user("I feel calm now"),
        ])

        assert decision.escalate is False


class TestSevereSentimentTrigger:

    def test_negative_sentiment_escalates(self, evaluator):
        decision = evaluator.evaluate([user("I feel so sad and lonely")])

        assert decision.escalate is True
        assert decision.reason == EscalationReason.SEVERE_NEGATIVE_SENTIMENT
        assert decision.message == SEVERE_SENTIMENT_MESSAGE

    def test_sentiment_beats_dissatisfaction(self, evaluator):
        # useless (-2) + helping (+2) + sad (-2) = -2
        decision = evaluator.evaluate([
            user("You're useless and not helping, I'm so sad"),
        ])

        assert decision.reason == EscalationReason.SEVERE_NEGATIVE_SENTIMENT

    def test_threshold_is_on_raw_score(self):
        """A single -1 word in a long message still crosses -0.7."""
        evaluator = EscalationEvaluator()

        decision = evaluator.evaluate([
            user("the meeting ran long and it was a bit difficult for the team today"),
        ])

        assert decision.reason == EscalationReason.SEVERE_NEGATIVE_SENTIMENT


class TestDissatisfactionTrigger:

    def test_two_or_more_phrases_escalate(self, evaluator):
        decision = evaluator.evaluate([
            user("You don't understand me"),
            assistant("I'm sorry, can you tell me more?"),
            user("This is not helping"),
            user("I want to talk to a real person"),
        ])

        assert decision.escalate is True
        assert decision.reason == EscalationReason.USER_DISSATISFACTION
        assert decision.message == DISSATISFACTION_MESSAGE

    def test_single_phrase_does_not_escalate(self, evaluator):
        decision = evaluator.evaluate([user("This is not helping")])

        assert decision.escalate is False

    def test_repeated_phrase_counts_once(self, evaluator):
        decision = evaluator.evaluate([
            user("not helping"),
            user("not helping"),
            user("still not helping"),
        ])

        assert decision.escalate is False

    def test_custom_min_count(self):
        evaluator = EscalationEvaluator(
            thresholds=EscalationThresholds(dissatisfaction_min_count=1)
        )

        decision = evaluator.evaluate([user("I need a therapist")])

        assert decision.reason == EscalationReason.USER_DISSATISFACTION


class TestInputHandling:

    def test_accepts_mappings(self, evaluator):
        decision = evaluator.evaluate([
            {"role": "assistant", "content": "Hi there"},
            {"role": "user", "content": "I don't want to live anymore"},
        ])

        assert decision.reason == EscalationReason.CRISIS_DETECTED

    def test_unknown_role_raises(self, evaluator):
        with pytest.raises(ValueError):
            evaluator.evaluate([{"role": "system", "content": "hello"}])

    def test_combine_preserves_case_and_spacing(self, evaluator):
        combined = evaluator.combine_user_turns([
            user("One"),
            assistant("ignored"),
            user("Two"),
            user("Three"),
            user("Four"),
        ])

        assert combined == "Two Three Four"

    def test_evaluation_is_stateless(self, evaluator):
        crisis = [user("I want to end my life")]
        calm = [user("I had a good day")]

        assert evaluator.evaluate(crisis).escalate is True
        assert evaluator.evaluate(calm).escalate is False
        assert evaluator.evaluate(crisis).escalate is True


class TestEscalationDecision:

    def test_escalate_without_reason_is_invalid(self):
        with pytest.raises(ValueError):
            EscalationDecision(escalate=True, reason=EscalationReason.NONE)

    def test_reason_without_escalate_is_invalid(self):
        with pytest.raises(ValueError):
            EscalationDecision(escalate=False, reason=EscalationReason.CRISIS_DETECTED)

    def test_to_dict(self):
        decision = EscalationDecision(
            escalate=True,
            reason=EscalationReason.USER_DISSATISFACTION,
            message="msg",
        )

        assert decision.to_dict() == {
            "escalate": True,
            "reason": "user_dissatisfaction",
            "message": "msg",
        }
