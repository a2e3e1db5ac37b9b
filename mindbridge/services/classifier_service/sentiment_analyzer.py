"""Lexicon-based sentiment analyzer.

Scores text by summing per-token polarity from SENTIMENT_LEXICON after
stopword removal. Deterministic and model-free, so it is cheap enough to
run on every diary entry and chat message.
"""
import logging
import re
from typing import List, Mapping, Optional, FrozenSet

from mindbridge.shared.models import SentimentInterpretation, SentimentResult
from .config import ClassifierConfig, SENTIMENT_LEXICON, STOPWORDS

logger = logging.getLogger(__name__)


_WORD_SPLIT = re.compile(r"\W+")


def tokenize(text: Optional[str]) -> List[str]:
    """Split text into lowercase word tokens on whitespace and punctuation.

    >>> tokenize("I can't sleep!")
    ['i', 'can', 't', 'sleep']
    """
    if not text:
        return []
    return [token for token in _WORD_SPLIT.split(text.lower()) if token]


class LexiconSentimentAnalyzer:
    """Sums lexicon polarity over stopword-filtered tokens.

    ``comparative`` normalizes the score by the unfiltered token count, and
    the interpretation bucket is chosen from ``comparative``.
    """

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        lexicon: Optional[Mapping[str, int]] = None,
        stopwords: Optional[FrozenSet[str]] = None,
    ):
        """Initialize analyzer.

        Args:
            config: Interpretation thresholds and lexicon version
            lexicon: Token polarity table (injected for testing)
            stopwords: Tokens ignored when scoring (injected for testing)
        """
        self.config = config or ClassifierConfig()
        self.lexicon = lexicon if lexicon is not None else SENTIMENT_LEXICON
        self.stopwords = stopwords if stopwords is not None else STOPWORDS

        logger.info(
            "SENTIMENT_ANALYZER_INITIALIZED",
            extra={
                "lexicon_version": self.config.lexicon_version,
                "lexicon_size": len(self.lexicon),
                "stopword_count": len(self.stopwords),
            }
        )

    def analyze(self, text: Optional[str]) -> SentimentResult:
        """Score a text sample.

        Args:
            text: Raw user text; None and "" are valid and score 0

        Returns:
            SentimentResult with score, comparative and interpretation
        """
        tokens = tokenize(text)
        if not tokens:
            return SentimentResult(
                score=0,
                comparative=0.0,
                interpretation=self.interpret(0.0),
            )

        score = sum(
            self.lexicon.get(token, 0)
            for token in tokens
            if token not in self.stopwords
        )
        comparative = score / len(tokens)

        logger.debug(
            "SENTIMENT_ANALYSIS_COMPLETE",
            extra={
                "token_count": len(tokens),
                "score": score,
                "comparative": comparative,
            }
        )

        return SentimentResult(
            score=score,
            comparative=comparative,
            interpretation=self.interpret(comparative),
        )

    def interpret(self, comparative: float) -> SentimentInterpretation:
        """Map a comparative score to its interpretation bucket."""
        if comparative < self.config.very_negative_below:
            return SentimentInterpretation.VERY_NEGATIVE
        elif comparative < self.config.negative_below:
            return SentimentInterpretation.NEGATIVE
        elif comparative < self.config.neutral_below:
            return SentimentInterpretation.NEUTRAL
        elif comparative < self.config.positive_below:
            return SentimentInterpretation.POSITIVE
        else:
            return SentimentInterpretation.VERY_POSITIVE
