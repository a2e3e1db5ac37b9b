"""LLM Service for MindBridge.

Provider-agnostic completion capability used for CBT reframing
suggestions. Every consumer must tolerate the LLM being absent or failing.
"""
from .base_llm import (
    BaseLLM,
    HuggingFaceLLM,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    OpenAILLM,
    create_llm,
)

__all__ = [
    "BaseLLM",
    "HuggingFaceLLM",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "OpenAILLM",
    "create_llm",
]
