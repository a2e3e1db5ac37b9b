"""CBT reframing suggestions for negative thoughts.

The LLM is an injected capability. Any failure (no credential, timeout,
provider error, unparseable output) yields DEFAULT_REFRAMING_SUGGESTIONS,
so callers never see an exception from here.
"""
import asyncio
import logging
import re
from typing import List, Optional, Sequence

from mindbridge.services.llm_service import BaseLLM
from .config import DEFAULT_REFRAMING_SUGGESTIONS

logger = logging.getLogger(__name__)


REFRAMING_PROMPT = (
    "The following is a negative thought from a thought diary. Please provide "
    "3 alternative, more balanced perspectives that could help reframe this "
    "thought in a CBT (Cognitive Behavioral Therapy) context. Keep the "
    "suggestions compassionate and non-dismissive of the person's feelings."
    "\n\nNegative thought: \"{thought}\"\n\nReframing suggestions:"
)

_LIST_MARKER = re.compile(r"\d+\.")


def parse_suggestions(completion: str, limit: int = 3) -> List[str]:
    """Split a numbered-list completion into suggestion strings.

    >>> parse_suggestions("1. Look at facts. 2. Ask a friend.")
    ['Look at facts.', 'Ask a friend.']
    """
    parts = (part.strip() for part in _LIST_MARKER.split(completion or ""))
    return [part for part in parts if part][:limit]


class ReframingSuggester:
    """Produces reframing suggestions, falling back to fixed defaults."""

    def __init__(
        self,
        llm: Optional[BaseLLM] = None,
        timeout_seconds: float = 30.0,
        defaults: Sequence[str] = DEFAULT_REFRAMING_SUGGESTIONS,
    ):
        """Initialize suggester.

        Args:
            llm: Completion capability; None means always use defaults
            timeout_seconds: Upper bound on one completion call
            defaults: Suggestions returned whenever the LLM path fails
        """
        self.llm = llm
        self.timeout_seconds = timeout_seconds
        self.defaults = list(defaults)

        logger.info(
            "REFRAMING_SUGGESTER_INITIALIZED",
            extra={
                "llm_enabled": llm is not None,
                "timeout_seconds": timeout_seconds,
            }
        )

    @property
    def is_llm_available(self) -> bool:
        return self.llm is not None

    async def suggest(self, thought: Optional[str]) -> List[str]:
        """Return up to three reframing suggestions for ``thought``."""
        if self.llm is None:
            return list(self.defaults)

        prompt = REFRAMING_PROMPT.format(thought=thought or "")

        try:
            response = await asyncio.wait_for(
                self.llm.generate(prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "REFRAMING_LLM_TIMEOUT",
                extra={"timeout_seconds": self.timeout_seconds, "action": "USING_DEFAULTS"}
            )
            return list(self.defaults)
        except Exception as e:
            logger.error(
                "REFRAMING_LLM_FAILED",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "action": "USING_DEFAULTS",
                }
            )
            return list(self.defaults)

        suggestions = parse_suggestions(response.text)
        if not suggestions:
            logger.warning(
                "REFRAMING_LLM_UNPARSEABLE",
                extra={"completion_length": len(response.text or ""), "action": "USING_DEFAULTS"}
            )
            return list(self.defaults)

        logger.info(
            "REFRAMING_SUGGESTIONS_GENERATED",
            extra={"suggestion_count": len(suggestions), "model": response.model}
        )
        return suggestions
