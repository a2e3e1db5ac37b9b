"""MindBridge analysis services.

- classifier_service: Sentiment scoring and cognitive distortion detection
- escalation_service: AI-to-therapist hand-off decisions and events
- mood_service: Mood-tracker pattern insights
- llm_service: Completion providers for reframing suggestions
- insight_service: Facade and HTTP handler used by the platform API

All services hash user identifiers with hash_pii() before logging.
"""
