"""Insight Service: the platform-facing AI analysis API.

Endpoints:
- POST /ai/analyze-sentiment - Lexicon sentiment of a text
- POST /ai/detect-distortions - Cognitive distortions in a text
- POST /ai/generate-reframing - CBT reframing suggestions
- POST /ai/analyze-thought - Full analysis of a thought-diary entry
- POST /ai/mood-patterns - Mood pattern and factor analysis
- POST /ai/escalation - AI-to-therapist hand-off decision
- GET /health, GET /ready

The Flask app lives in handler.py and is not imported here so the facade
can be used without configuring the HTTP layer.
"""

from .service import InsightService

__all__ = ["InsightService"]
