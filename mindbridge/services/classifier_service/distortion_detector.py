"""Cognitive distortion detection for thought-diary entries.

Matching is plain substring containment on lowercased text, not word
boundary matching, so "should" also matches inside "shoulder". Product has
not asked for tighter matching yet; see DESIGN.md.
"""
import logging
from typing import List, Mapping, Optional, Tuple

from mindbridge.shared.models import DistortionCategory
from .config import DISTORTION_PATTERNS

logger = logging.getLogger(__name__)


class CognitiveDistortionDetector:
    """Flags CBT distortion categories whose phrases appear in a text."""

    def __init__(
        self,
        patterns: Optional[Mapping[DistortionCategory, Tuple[str, ...]]] = None,
    ):
        self.patterns = patterns if patterns is not None else DISTORTION_PATTERNS

        logger.info(
            "DISTORTION_DETECTOR_INITIALIZED",
            extra={
                "category_count": len(self.patterns),
                "phrase_count": sum(len(p) for p in self.patterns.values()),
            }
        )

    def detect(self, text: Optional[str]) -> List[DistortionCategory]:
        """Return the distortion categories present in ``text``.

        Each category is reported at most once, in DistortionCategory
        declaration order. Categories are independent, so one phrase can
        flag several of them.
        """
        if not text:
            return []

        lowered = text.lower()
        detected = [
            category
            for category in DistortionCategory
            if any(phrase in lowered for phrase in self.patterns.get(category, ()))
        ]

        logger.debug(
            "DISTORTION_DETECTION_COMPLETE",
            extra={
                "text_length": len(text),
                "categories": [c.value for c in detected],
            }
        )
        return detected
