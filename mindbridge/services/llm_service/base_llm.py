"""LLM provider interface and implementations.

The insight services need one capability from an LLM: map a prompt to a
completion. ``BaseLLM.generate`` validates, times and logs the call; each
provider only implements ``_complete``.

Provider clients are opened per call. The Flask handler drives every
request through its own ``asyncio.run`` loop, and HTTP connection pools
are bound to the loop that created them.
"""

import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


MAX_PROMPT_LENGTH = 10000


class LLMProvider(Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    HUGGINGFACE = "huggingface"


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for LLM inference.

    ``endpoint`` is the Inference API URL for HuggingFace and an optional
    base URL (OpenAI-compatible gateway) for OpenAI.
    """
    provider: LLMProvider
    model_name: str
    endpoint: Optional[str] = None
    api_key: Optional[str] = None
    max_tokens: int = 250
    temperature: float = 0.7
    top_p: float = 0.9
    timeout_seconds: int = 30

    @classmethod
    def from_env(cls) -> Optional["LLMConfig"]:
        """Build a config from LLM_* / OPENAI_API_KEY environment variables.

        Returns:
            LLMConfig, or None when no credential is configured (callers
            fall back to their deterministic defaults)

        Raises:
            ValueError: If LLM_PROVIDER names an unknown provider
        """
        provider = LLMProvider(os.getenv("LLM_PROVIDER", LLMProvider.OPENAI.value))
        if provider == LLMProvider.OPENAI:
            api_key = os.getenv("OPENAI_API_KEY")
            default_model = "gpt-4o-mini"
        else:
            api_key = os.getenv("HF_API_TOKEN")
            default_model = "mistralai/Mistral-7B-Instruct-v0.2"

        endpoint = os.getenv("LLM_ENDPOINT")
        if not api_key and not (provider == LLMProvider.HUGGINGFACE and endpoint):
            logger.info(
                "LLM_NOT_CONFIGURED",
                extra={"provider": provider.value, "reason": "missing_credential"}
            )
            return None

        return cls(
            provider=provider,
            model_name=os.getenv("LLM_MODEL", default_model),
            endpoint=endpoint,
            api_key=api_key,
            timeout_seconds=int(os.getenv("LLM_TIMEOUT_SECONDS", "30")),
        )


@dataclass(frozen=True)
class LLMResponse:
    """Completion text plus call metadata."""
    text: str
    model: str
    provider: str
    tokens_used: Optional[int] = None
    latency_ms: Optional[float] = None


class BaseLLM(ABC):
    """Abstract completion provider."""

    def __init__(self, config: LLMConfig):
        self.config = config
        logger.info(
            "LLM_INITIALIZED",
            extra={
                "provider": config.provider.value,
                "model": config.model_name
            }
        )

    async def generate(self, prompt: str) -> LLMResponse:
        """Complete ``prompt``.

        Raises:
            ValueError: If the prompt is blank or longer than MAX_PROMPT_LENGTH
            Exception: Provider errors propagate after being logged
        """
        if not self.validate_prompt(prompt):
            raise ValueError("Invalid prompt")

        start_time = time.monotonic()
        try:
            text, tokens_used = await self._complete(prompt)
        except Exception as e:
            logger.error(
                "LLM_GENERATION_FAILED",
                extra={
                    "provider": self.config.provider.value,
                    "model": self.config.model_name,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise

        latency_ms = (time.monotonic() - start_time) * 1000
        logger.info(
            "LLM_GENERATION_SUCCEEDED",
            extra={
                "provider": self.config.provider.value,
                "model": self.config.model_name,
                "latency_ms": latency_ms,
                "tokens_used": tokens_used,
            }
        )
        return LLMResponse(
            text=text,
            model=self.config.model_name,
            provider=self.config.provider.value,
            tokens_used=tokens_used,
            latency_ms=latency_ms,
        )

    @abstractmethod
    async def _complete(self, prompt: str) -> Tuple[str, Optional[int]]:
        """Return ``(completion_text, tokens_used)`` for a validated prompt."""

    def validate_prompt(self, prompt: str) -> bool:
        """Check a prompt is non-blank and within MAX_PROMPT_LENGTH."""
        if not prompt or not prompt.strip():
            logger.warning("LLM_PROMPT_INVALID", extra={"reason": "empty_prompt"})
            return False

        if len(prompt) > MAX_PROMPT_LENGTH:
            logger.warning(
                "LLM_PROMPT_INVALID",
                extra={"reason": "prompt_too_long", "length": len(prompt)}
            )
            return False

        return True


class HuggingFaceLLM(BaseLLM):
    """HuggingFace Inference API (text-generation task)."""

    def __init__(self, config: LLMConfig):
        super().__init__(config)

        if not config.endpoint:
            raise ValueError("HuggingFace endpoint required")

        self.headers = {}
        if config.api_key:
            self.headers["Authorization"] = f"Bearer {config.api_key}"

    async def _complete(self, prompt: str) -> Tuple[str, Optional[int]]:
        import aiohttp

        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": self.config.max_tokens,
                "temperature": self.config.temperature,
                "top_p": self.config.top_p,
                "return_full_text": False,
            },
        }
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(
                self.config.endpoint, headers=self.headers, json=payload
            ) as response:
                response.raise_for_status()
                result = await response.json()

        # The API answers with a list for text-generation, a dict for some
        # custom endpoints.
        if isinstance(result, list):
            result = result[0] if result else {}
        return result.get("generated_text", ""), None


class OpenAILLM(BaseLLM):
    """OpenAI chat completions (single user message)."""

    def __init__(self, config: LLMConfig):
        super().__init__(config)

        if not config.api_key:
            raise ValueError("OpenAI API key required")

    async def _complete(self, prompt: str) -> Tuple[str, Optional[int]]:
        import openai

        async with openai.AsyncOpenAI(
            api_key=self.config.api_key,
            base_url=self.config.endpoint,
            timeout=self.config.timeout_seconds,
        ) as client:
            response = await client.chat.completions.create(
                model=self.config.model_name,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                top_p=self.config.top_p,
            )

        tokens_used = response.usage.total_tokens if response.usage else None
        return response.choices[0].message.content or "", tokens_used


def create_llm(config: LLMConfig) -> BaseLLM:
    """Build the provider named by ``config.provider``.

    Raises:
        ValueError: If the provider is unsupported or its settings incomplete
    """
    if config.provider == LLMProvider.HUGGINGFACE:
        return HuggingFaceLLM(config)
    if config.provider == LLMProvider.OPENAI:
        return OpenAILLM(config)
    raise ValueError(f"Unsupported provider: {config.provider}")
