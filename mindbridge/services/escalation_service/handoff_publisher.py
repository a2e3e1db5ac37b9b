"""Therapist hand-off event publisher.

When the evaluator decides to escalate, a hand-off event goes to a Kinesis
stream; the scheduling side consumes it and pages an on-call therapist.
Publishing never blocks or fails the chat response: the user still sees
the hand-off message even if the event is lost, and losses are logged at
CRITICAL level for alerting.
"""
import json
import logging
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from mindbridge.shared.models import EscalationDecision, EscalationReason, utcnow

logger = logging.getLogger(__name__)


PRIORITY_BY_REASON = {
    EscalationReason.CRISIS_DETECTED: "urgent",
    EscalationReason.SEVERE_NEGATIVE_SENTIMENT: "high",
    EscalationReason.USER_DISSATISFACTION: "normal",
}


@dataclass(frozen=True)
class EscalationHandoffEvent:
    """Immutable hand-off event published to Kinesis."""
    event_id: str
    reason: str
    session_id: str = ""
    user_id_hash: str = ""
    event_type: str = "escalation.handoff.requested"
    priority: str = "normal"
    requires_human_intervention: bool = True
    timestamp: datetime = field(default_factory=utcnow)

    def to_kinesis_payload(self) -> dict:
        """Convert to the Kinesis put_record Data payload."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "timestamp": (
                self.timestamp.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
            ),
            "source": "insight-service",
            "data": {
                "session_id": self.session_id,
                "user_id_hash": self.user_id_hash,
                "reason": self.reason,
                "priority": self.priority,
                "requires_human_intervention": self.requires_human_intervention,
            }
        }


class HandoffEventPublisher:
    """Publishes therapist hand-off events to a Kinesis stream."""

    def __init__(
        self,
        stream_name: str = "mindbridge-handoff-events",
        enabled: bool = True,
        region: Optional[str] = None,
    ):
        """Initialize publisher.

        Args:
            stream_name: Kinesis stream name
            enabled: Whether publishing is enabled (disable for local dev)
            region: AWS region (defaults to AWS_REGION env var)
        """
        self.stream_name = stream_name
        self.enabled = enabled
        self.region = region or os.getenv("AWS_REGION", "us-east-1")
        self._kinesis_client = None

        logger.info(
            "HANDOFF_PUBLISHER_INITIALIZED",
            extra={
                "stream_name": stream_name,
                "enabled": enabled,
                "region": self.region,
            }
        )

    @property
    def kinesis_client(self):
        """Lazily created boto3 Kinesis client; None if creation failed."""
        if self._kinesis_client is None and self.enabled:
            try:
                import boto3
                self._kinesis_client = boto3.client(
                    "kinesis",
                    region_name=self.region,
                )
            except Exception as e:
                logger.error(
                    "KINESIS_CLIENT_INIT_FAILED",
                    extra={"error": str(e)}
                )
        return self._kinesis_client

    def publish_handoff(
        self,
        decision: EscalationDecision,
        session_id: str,
        user_id_hash: str,
    ) -> bool:
        """Publish a hand-off event for an escalating decision.

        Args:
            decision: Evaluator output; non-escalating decisions are skipped
            session_id: Conversation session identifier
            user_id_hash: Hashed user identifier, also the partition key

        Returns:
            True if published, False if skipped or failed
        """
        if not decision.escalate:
            return False

        if not self.enabled:
            logger.info(
                "HANDOFF_PUBLISH_SKIPPED",
                extra={
                    "session_id": session_id,
                    "reason": "publishing_disabled",
                }
            )
            return False

        event = EscalationHandoffEvent(
            event_id=f"evt_{uuid.uuid4().hex[:12]}",
            reason=decision.reason.value,
            session_id=session_id,
            user_id_hash=user_id_hash,
            priority=PRIORITY_BY_REASON.get(decision.reason, "normal"),
        )
        payload = event.to_kinesis_payload()

        try:
            if self.kinesis_client is None:
                logger.critical(
                    "HANDOFF_EVENT_FALLBACK_LOG",
                    extra={
                        "event_id": event.event_id,
                        "payload": json.dumps(payload),
                        "reason": "kinesis_client_unavailable",
                        "action": "MANUAL_PROCESSING_REQUIRED",
                    }
                )
                return False

            response = self.kinesis_client.put_record(
                StreamName=self.stream_name,
                Data=json.dumps(payload),
                PartitionKey=user_id_hash,
            )

            logger.info(
                "HANDOFF_EVENT_PUBLISHED",
                extra={
                    "event_id": event.event_id,
                    "session_id": session_id,
                    "user_id_hash": user_id_hash,
                    "reason": event.reason,
                    "shard_id": response.get("ShardId"),
                    "sequence_number": response.get("SequenceNumber"),
                }
            )
            return True

        except Exception as e:
            logger.critical(
                "HANDOFF_EVENT_PUBLISH_FAILED",
                extra={
                    "event_id": event.event_id,
                    "session_id": session_id,
                    "user_id_hash": user_id_hash,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "action": "MANUAL_REVIEW_REQUIRED",
                    "payload": json.dumps(payload),
                }
            )
            return False
