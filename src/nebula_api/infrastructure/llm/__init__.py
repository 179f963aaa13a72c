"""
LLM Client Infrastructure
==========================

Wrapper for the OpenAI chat-completion API providing a clean interface for LLM operations.

This module abstracts the LLM client implementation following the
Dependency Inversion Principle - the domain layer depends on abstractions,
not concrete implementations.
"""

import json
import time
from abc import ABC, abstractmethod
from typing import List, Optional

from openai import AsyncOpenAI

from nebula_api.config import settings
from nebula_api.core import LLMException, ConfigurationException


class ChatCompletionResult:
    """Result of a chat completion."""

    def __init__(
        self,
        content: str,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        latency_ms: int
    ):
        self.content = content
        self.model = model
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.total_tokens = prompt_tokens + completion_tokens
        self.latency_ms = latency_ms


class ILLMClient(ABC):
    """
    Interface for LLM client operations.

    Following Interface Segregation Principle - only methods
    actually needed by the application are defined.
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.2,
        max_tokens: int = 300,
        response_format: Optional[dict] = None,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """Generate chat completion."""

    async def close(self) -> None:
        """Release network resources."""


class OpenAILLMClient(ILLMClient):
    """
    OpenAI client implementation for GPT models.

    Provides async wrapper around OpenAI SDK operations.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self._api_key = api_key or settings.openai_api_key
        if not self._api_key:
            raise ConfigurationException("OpenAI API key not configured")

        self._client = AsyncOpenAI(
            api_key=self._api_key,
            timeout=settings.llm_timeout_seconds,
            max_retries=0
        )
        self._model = model or settings.llm_model

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.2,
        max_tokens: int = 300,
        response_format: Optional[dict] = None,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """
        Generate chat completion using OpenAI GPT.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            response_format: e.g. {"type": "json_object"} to force a JSON reply
            operation: Operation label for logging (chat_completion, triage)

        Returns:
            ChatCompletionResult with generated text

        Raises:
            LLMException: If completion fails
        """
        start_time = time.perf_counter()

        request = {
            "model": self._model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if response_format is not None:
            request["response_format"] = response_format

        try:
            response = await self._client.chat.completions.create(**request)
        except Exception as e:
            raise LLMException(f"Chat completion failed: {str(e)}")

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        content = response.choices[0].message.content
        if content is None:
            raise LLMException("Chat completion returned no content")

        usage = response.usage
        return ChatCompletionResult(
            content=content,
            model=response.model or self._model,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            latency_ms=latency_ms
        )

    async def close(self) -> None:
        await self._client.close()


class MockLLMClient(ILLMClient):
    """
    Mock LLM client for local development and testing.

    Returns predictable triage responses based on keywords, without calling external APIs.
    """

    KEYWORDS = {
        "HVAC": ("heat", "heater", "furnace", "air condition", "a/c", "ac ", "thermostat", "hvac", "vent"),
        "plumbing": ("leak", "sink", "toilet", "pipe", "drain", "faucet", "water", "shower"),
        "electrical": ("outlet", "breaker", "light", "power", "spark", "wiring", "switch"),
    }

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.2,
        max_tokens: int = 300,
        response_format: Optional[dict] = None,
        operation: str = "chat_completion"
    ) -> ChatCompletionResult:
        """Return a keyword-based triage JSON object."""
        user_content = str(messages[-1].get("content", "")).lower() if messages else ""

        category = "other"
        for name, words in self.KEYWORDS.items():
            if any(word in user_content for word in words):
                category = name
                break

        urgent = any(word in user_content for word in ("flood", "spark", "smoke", "no heat", "badly", "urgent"))
        mock_response = {
            "category": category,
            "severity": "high" if urgent else "medium",
            "suggestion": "Mock: a technician will review this request."
        }
        content = json.dumps(mock_response)

        return ChatCompletionResult(
            content=content,
            model="mock-model",
            prompt_tokens=len(user_content.split()),
            completion_tokens=len(content.split()),
            latency_ms=0
        )


def build_llm_client() -> ILLMClient:
    """Create the configured LLM client (mock or OpenAI)."""
    if settings.mock_llm:
        return MockLLMClient()
    return OpenAILLMClient(settings.openai_api_key)
