"""Insight Service HTTP handler - AI analysis endpoints.

Called by the platform API (thought diary, mood tracker, AI chat) after it
has authenticated the user and loaded the records. Responses carry no
persistence identity; the caller stores them on its own records.

User identifiers are hashed with hash_pii() before logging; diary and chat
text is never logged.
"""
import asyncio
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from flask import Flask, request, jsonify

from mindbridge.shared.models import MoodFactor, MoodSample, ThoughtEntry, utcnow
from mindbridge.shared.utils import configure_pii_salt, hash_pii, hash_text_for_audit
from mindbridge.services.classifier_service import (
    ClassifierConfig,
    CognitiveDistortionDetector,
    LexiconSentimentAnalyzer,
    ReframingSuggester,
)
from mindbridge.services.escalation_service import (
    EscalationEvaluator,
    HandoffEventPublisher,
)
from mindbridge.services.llm_service import LLMConfig, create_llm
from mindbridge.services.mood_service import MoodPatternAnalyzer
from .service import InsightService

logger = logging.getLogger(__name__)

# Initialize Flask app
app = Flask(__name__)

# Configure PII salt from environment
pii_salt = os.getenv("PII_HASH_SALT", "default_dev_salt_change_in_production_32chars")
configure_pii_salt(pii_salt)

# Initialize components
config = ClassifierConfig(
    lexicon_version=os.getenv("LEXICON_VERSION", ClassifierConfig.lexicon_version),
)
sentiment_analyzer = LexiconSentimentAnalyzer(config=config)

llm_config = LLMConfig.from_env()
reframing_suggester = ReframingSuggester(
    llm=create_llm(llm_config) if llm_config else None,
    timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", "30")),
)

insight_service = InsightService(
    sentiment_analyzer=sentiment_analyzer,
    distortion_detector=CognitiveDistortionDetector(),
    reframing_suggester=reframing_suggester,
    escalation_evaluator=EscalationEvaluator(sentiment_analyzer=sentiment_analyzer),
    mood_analyzer=MoodPatternAnalyzer(),
)

handoff_publisher = HandoffEventPublisher(
    stream_name=os.getenv("KINESIS_STREAM_NAME", "mindbridge-handoff-events"),
    enabled=os.getenv("HANDOFF_PUBLISHING_ENABLED", "true").lower() == "true",
)


def _json_body() -> Optional[Dict[str, Any]]:
    """Request JSON if it is an object, else None."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _bad_request(event: str, message: str):
    logger.warning(event, extra={"reason": message})
    return jsonify({"success": False, "message": message}), 400


def _server_error(event: str, error: Exception, message: str):
    logger.error(
        event,
        extra={"error": str(error), "error_type": type(error).__name__}
    )
    return jsonify({"success": False, "message": message}), 500


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint for ECS/ALB."""
    return jsonify({
        "status": "healthy",
        "service": "insight-service",
        "lexicon_version": config.lexicon_version,
    }), 200


@app.route("/ready", methods=["GET"])
def ready():
    """Readiness check - verifies the insight service is initialized."""
    if insight_service is None:
        return jsonify({"status": "not_ready", "reason": "service_not_initialized"}), 503
    return jsonify({"status": "ready"}), 200


@app.route("/ai/analyze-sentiment", methods=["POST"])
def analyze_sentiment():
    """Score the sentiment of a text.

    Request Body:
        {"text": "I'm feeling really anxious about my presentation"}

    Response:
        {"success": true, "sentiment": {"score", "comparative", "interpretation"}}
    """
    try:
        data = _json_body()
        if not data or "text" not in data:
            return _bad_request("SENTIMENT_REQUEST_INVALID", "Missing required field: text")

        text = data.get("text")
        if text is not None and not isinstance(text, str):
            return _bad_request("SENTIMENT_REQUEST_INVALID", "Field 'text' must be a string")

        result = insight_service.analyze_sentiment(text)
        return jsonify({"success": True, "sentiment": result.to_dict()}), 200

    except Exception as e:
        return _server_error("SENTIMENT_ERROR", e, "Server error during sentiment analysis")


@app.route("/ai/detect-distortions", methods=["POST"])
def detect_distortions():
    """Detect cognitive distortions in a text.

    Response:
        {"success": true, "distortions": ["all_or_nothing", ...]}
    """
    try:
        data = _json_body()
        if not data or "text" not in data:
            return _bad_request("DISTORTION_REQUEST_INVALID", "Missing required field: text")

        text = data.get("text")
        if text is not None and not isinstance(text, str):
            return _bad_request("DISTORTION_REQUEST_INVALID", "Field 'text' must be a string")

        distortions = insight_service.detect_distortions(text)
        return jsonify({
            "success": True,
            "distortions": [d.value for d in distortions],
        }), 200

    except Exception as e:
        return _server_error("DISTORTION_ERROR", e, "Server error during distortion detection")


@app.route("/ai/generate-reframing", methods=["POST"])
def generate_reframing():
    """Generate CBT reframing suggestions for a negative thought.

    Request Body:
        {"thought": "I'm going to fail and everyone will think I'm incompetent"}

    Response:
        {"success": true, "suggestions": ["...", "...", "..."]}
    """
    try:
        data = _json_body()
        thought = (data or {}).get("thought")
        if not thought or not isinstance(thought, str):
            return _bad_request("REFRAMING_REQUEST_INVALID", "Missing required field: thought")

        suggestions = asyncio.run(insight_service.suggest_reframes(thought))
        return jsonify({"success": True, "suggestions": suggestions}), 200

    except Exception as e:
        return _server_error("REFRAMING_ERROR", e, "Server error during reframing generation")


@app.route("/ai/analyze-thought", methods=["POST"])
def analyze_thought():
    """Analyze a thought-diary entry.

    Request Body:
        {
            "situation": "...",
            "thoughts": "...",
            "emotions": "...",
            "emotion_intensity": 70 (optional, 0-100)
        }

    Response:
        {"success": true, "analysis": {"sentiment_score", "cognitive_distortions",
                                       "suggestions", "processed"}}
    """
    try:
        data = _json_body()
        if not data:
            return _bad_request("THOUGHT_REQUEST_INVALID", "Request body required")

        try:
            entry = ThoughtEntry(
                situation=data.get("situation") or "",
                thoughts=data.get("thoughts") or "",
                emotions=data.get("emotions") or "",
                emotion_intensity=int(data.get("emotion_intensity", 50)),
            )
        except (TypeError, ValueError) as e:
            return _bad_request("THOUGHT_REQUEST_INVALID", str(e))

        logger.info(
            "THOUGHT_ANALYSIS_REQUESTED",
            extra={
                "text_hash": hash_text_for_audit(entry.thoughts),
                "text_length": len(entry.thoughts),
            }
        )

        analysis = asyncio.run(insight_service.analyze_thought_entry(entry))
        return jsonify({"success": True, "analysis": analysis.to_dict()}), 200

    except Exception as e:
        return _server_error("THOUGHT_ANALYSIS_ERROR", e, "Server error during thought analysis")


@app.route("/ai/mood-patterns", methods=["POST"])
def mood_patterns():
    """Analyze mood-tracker history.

    Request Body:
        {
            "entries": [
                {"mood": 3, "recorded_at": "2026-10-01T09:00:00Z", "factors": ["sleep"]},
                ...
            ]
        }

    Response:
        {"success": true, "analysis": {...}, "factor_analysis": [...],
         "daily_trends": [{"date", "average_mood", "count"}, ...]}
    """
    try:
        data = _json_body()
        entries = (data or {}).get("entries")
        if not isinstance(entries, list):
            return _bad_request("MOOD_REQUEST_INVALID", "Missing required field: entries")

        try:
            samples = [_parse_mood_entry(entry) for entry in entries]
        except (TypeError, ValueError) as e:
            return _bad_request("MOOD_REQUEST_INVALID", str(e))

        analysis = insight_service.analyze_mood_history(samples)
        factors = insight_service.summarize_mood_factors(samples)
        daily = insight_service.mood_daily_trends(samples)

        return jsonify({
            "success": True,
            "analysis": analysis.to_dict(),
            "factor_analysis": [f.to_dict() for f in factors],
            "daily_trends": [d.to_dict() for d in daily],
        }), 200

    except Exception as e:
        return _server_error("MOOD_ANALYSIS_ERROR", e, "Server error during mood analysis")


@app.route("/ai/escalation", methods=["POST"])
def escalation():
    """Decide whether an AI conversation should go to a human therapist.

    Request Body:
        {
            "history": [{"role": "user" | "assistant", "content": "..."}],
            "session_id": "sess_123" (optional),
            "user_id": "user_456" (optional, hashed before use)
        }

    Response:
        {"success": true, "decision": {"escalate", "reason", "message"},
         "handoff_published": true | false}
    """
    try:
        data = _json_body()
        history = (data or {}).get("history")
        if not isinstance(history, list):
            return _bad_request("ESCALATION_REQUEST_INVALID", "Missing required field: history")
        if not all(isinstance(turn, dict) for turn in history):
            return _bad_request("ESCALATION_REQUEST_INVALID", "History turns must be objects")

        session_id = data.get("session_id", "unknown")
        user_id_hash = hash_pii(str(data.get("user_id", "unknown")))

        try:
            decision = insight_service.should_escalate(history)
        except ValueError as e:
            return _bad_request("ESCALATION_REQUEST_INVALID", str(e))

        published = False
        if decision.escalate:
            logger.warning(
                "ESCALATION_HANDOFF_REQUESTED",
                extra={
                    "session_id": session_id,
                    "user_id_hash": user_id_hash,
                    "reason": decision.reason.value,
                }
            )
            published = handoff_publisher.publish_handoff(
                decision=decision,
                session_id=session_id,
                user_id_hash=user_id_hash,
            )

        return jsonify({
            "success": True,
            "decision": decision.to_dict(),
            "handoff_published": published,
        }), 200

    except Exception as e:
        return _server_error("ESCALATION_ERROR", e, "Server error during escalation check")


def _parse_mood_entry(entry: Any) -> MoodSample:
    """Validate one mood entry from a request body.

    Raises:
        ValueError: On missing/out-of-range mood, unknown factor or bad date
    """
    if not isinstance(entry, dict):
        raise ValueError("Mood entries must be objects")

    factors: List[str] = entry.get("factors") or []
    recorded_at = _parse_timestamp(entry.get("recorded_at"))

    return MoodSample(
        mood=entry.get("mood"),
        recorded_at=recorded_at or utcnow(),
        factors=frozenset(MoodFactor(f) for f in factors),
    )


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into aware UTC; naive input is taken as UTC."""
    if not value:
        return None
    if not isinstance(value, str):
        raise ValueError(f"recorded_at must be an ISO-8601 string, got {value!r}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = int(os.getenv("PORT", "8004"))
    app.run(host="0.0.0.0", port=port, debug=False)
