"""Classifier Service: sentiment and cognitive distortion analysis.

Deterministic text heuristics applied to thought-diary entries and chat
messages. No model weights; all tables live in config.py.

Components:
- sentiment_analyzer.py: LexiconSentimentAnalyzer (score, comparative, bucket)
- distortion_detector.py: CognitiveDistortionDetector (ten CBT categories)
- reframing.py: ReframingSuggester (LLM suggestions with fixed fallback)
- config.py: Stopwords, polarity lexicon, distortion phrases

Usage:
    from mindbridge.services.classifier_service import LexiconSentimentAnalyzer
    result = LexiconSentimentAnalyzer().analyze("I feel hopeless today")
"""

from .config import (
    ClassifierConfig,
    DEFAULT_REFRAMING_SUGGESTIONS,
    DISTORTION_PATTERNS,
    SENTIMENT_LEXICON,
    STOPWORDS,
)
from .distortion_detector import CognitiveDistortionDetector
from .reframing import ReframingSuggester, parse_suggestions
from .sentiment_analyzer import LexiconSentimentAnalyzer, tokenize

__all__ = [
    "ClassifierConfig",
    "CognitiveDistortionDetector",
    "DEFAULT_REFRAMING_SUGGESTIONS",
    "DISTORTION_PATTERNS",
    "LexiconSentimentAnalyzer",
    "ReframingSuggester",
    "SENTIMENT_LEXICON",
    "STOPWORDS",
    "parse_suggestions",
    "tokenize",
]
