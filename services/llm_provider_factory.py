"""
LLM Provider Factory
Provides a unified interface for different LLM providers (OpenAI, Mistral)
used to evaluate interview answers.
Allows easy swapping between providers via environment configuration
"""

import os
import logging
from typing import Dict, List, Optional, Any
from abc import ABC, abstractmethod
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


class LLMProvider(ABC):
    """Abstract base class for LLM providers"""

    @abstractmethod
    def create_chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        timeout: float = 30.0,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Create a chat completion using the provider's API.

        Returns a normalized response dictionary with:
        - content: str (the response text)
        - model: str (model used)
        - usage: dict (token usage stats)
        - raw_response: original API response object
        """
        pass

    @abstractmethod
    def get_available_models(self) -> List[str]:
        """Return list of available models for this provider"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return provider name ('openai', 'mistral', etc.)"""
        pass


def _normalize_response(response) -> Dict[str, Any]:
    """Flatten an OpenAI/Mistral chat response into the provider-neutral dict"""
    usage = response.usage
    return {
        "content": response.choices[0].message.content or "",
        "model": response.model,
        "usage": {
            "prompt_tokens": usage.prompt_tokens if usage else 0,
            "completion_tokens": usage.completion_tokens if usage else 0,
            "total_tokens": usage.total_tokens if usage else 0,
        },
        "raw_response": response
    }


class OpenAIProvider(LLMProvider):
    """OpenAI API provider implementation"""

    AVAILABLE_MODELS = [
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-4-turbo",
        "gpt-3.5-turbo",
    ]

    def __init__(self, api_key: Optional[str] = None):
        """Initialize OpenAI provider with API key"""
        from openai import OpenAI

        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError("OpenAI API key not configured: OPENAI_API_KEY not found in environment variables")

        # Single attempt per call: no SDK retries
        self.client = OpenAI(api_key=self.api_key, max_retries=0)
        logger.info("Initialized OpenAI provider")

    def create_chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        timeout: float = 30.0,
        **kwargs
    ) -> Dict[str, Any]:
        """Create chat completion using OpenAI API"""
        response = self.client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
            **kwargs  # Allow additional OpenAI-specific params
        )
        return _normalize_response(response)

    def get_available_models(self) -> List[str]:
        """Return list of available OpenAI models"""
        return self.AVAILABLE_MODELS

    def get_provider_name(self) -> str:
        return "openai"


class MistralProvider(LLMProvider):
    """Mistral AI provider implementation"""

    AVAILABLE_MODELS = [
        "mistral-large-latest",
        "mistral-small-latest",
        "mistral-medium-latest",
        "open-mixtral-8x22b",
    ]

    def __init__(self, api_key: Optional[str] = None):
        """Initialize Mistral provider with API key"""
        from mistralai import Mistral

        self.api_key = api_key or os.getenv("MISTRAL_API_KEY")
        if not self.api_key:
            raise ValueError("Mistral API key not configured: MISTRAL_API_KEY not found in environment variables")

        # No retry_config: the SDK makes a single attempt per call
        self.client = Mistral(api_key=self.api_key)
        logger.info("Initialized Mistral provider")

    def create_chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        timeout: float = 30.0,
        **kwargs
    ) -> Dict[str, Any]:
        """Create chat completion using Mistral API"""
        # Mistral SDK uses chat.complete() and takes the timeout in milliseconds
        response = self.client.chat.complete(
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout_ms=int(timeout * 1000),
            **kwargs
        )
        return _normalize_response(response)

    def get_available_models(self) -> List[str]:
        """Return list of available Mistral models"""
        return self.AVAILABLE_MODELS

    def get_provider_name(self) -> str:
        return "mistral"


class LLMProviderFactory:
    """Factory class for creating LLM provider instances"""

    # Default models per provider
    DEFAULT_MODELS = {
        "openai": "gpt-4o",
        "mistral": "mistral-large-latest",
    }

    @staticmethod
    def _resolve_provider_name(provider_name: Optional[str]) -> str:
        if provider_name is None:
            provider_name = os.getenv("LLM_PROVIDER", "openai")
        return provider_name.lower()

    @staticmethod
    def create_provider(provider_name: Optional[str] = None) -> LLMProvider:
        """
        Create an LLM provider instance based on configuration.

        Args:
            provider_name: Provider to use ("openai", "mistral").
                         If None, reads from LLM_PROVIDER env var (default: "openai")

        Returns:
            LLMProvider instance

        Raises:
            ValueError: If provider is not supported or API key is missing
        """
        provider_name = LLMProviderFactory._resolve_provider_name(provider_name)

        logger.info(f"Creating LLM provider: {provider_name}")

        if provider_name == "openai":
            return OpenAIProvider()
        elif provider_name == "mistral":
            return MistralProvider()
        else:
            raise ValueError(
                f"Unsupported LLM provider: {provider_name}. "
                f"Supported providers: openai, mistral"
            )

    @staticmethod
    def get_default_model(provider_name: Optional[str] = None) -> str:
        """
        Get the model to use for a provider.

        LLM_MODEL overrides the per-provider default when set.

        Args:
            provider_name: Provider name. If None, uses LLM_PROVIDER env var

        Returns:
            Model name
        """
        override = os.getenv("LLM_MODEL")
        if override:
            return override

        provider_name = LLMProviderFactory._resolve_provider_name(provider_name)
        return LLMProviderFactory.DEFAULT_MODELS.get(provider_name, "gpt-4o")


def get_llm_client(provider_name: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider client instance.

    Convenience wrapper around LLMProviderFactory.create_provider() for
    service modules.

    Args:
        provider_name: Provider to use ("openai", "mistral")

    Returns:
        LLMProvider instance
    """
    return LLMProviderFactory.create_provider(provider_name)
