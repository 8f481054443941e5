"""
Unit tests for the LLM provider factory.

Note: These tests mock the OpenAI and Mistral SDK clients to avoid actual API calls.
"""

import sys
import os
import pytest
from unittest.mock import MagicMock, patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.llm_provider_factory import (
    LLMProviderFactory,
    OpenAIProvider,
    MistralProvider,
    get_llm_client
)


def make_sdk_response(content='{"coverage_score": 10}', model='gpt-4o'):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.model = model
    response.usage.prompt_tokens = 300
    response.usage.completion_tokens = 50
    response.usage.total_tokens = 350
    return response


class TestLLMProviderFactory:
    """Tests for provider selection"""

    @patch('openai.OpenAI')
    @patch.dict(os.environ, {'LLM_PROVIDER': 'openai', 'OPENAI_API_KEY': 'test_key'})
    def test_creates_openai_provider(self, mock_openai):
        provider = get_llm_client()

        assert isinstance(provider, OpenAIProvider)
        assert provider.get_provider_name() == 'openai'
        mock_openai.assert_called_once_with(api_key='test_key', max_retries=0)

    @patch('mistralai.Mistral')
    @patch.dict(os.environ, {'LLM_PROVIDER': 'Mistral', 'MISTRAL_API_KEY': 'test_key'})
    def test_creates_mistral_provider(self, mock_mistral):
        provider = get_llm_client()

        assert isinstance(provider, MistralProvider)
        assert provider.get_provider_name() == 'mistral'

    @patch.dict(os.environ, {'LLM_PROVIDER': 'anthropic'})
    def test_rejects_unknown_provider(self):
        with pytest.raises(ValueError, match='Unsupported LLM provider'):
            LLMProviderFactory.create_provider()

    @patch.dict(os.environ, {'OPENAI_API_KEY': ''})
    def test_missing_openai_key_mentions_api_key(self):
        with pytest.raises(ValueError, match='API key'):
            LLMProviderFactory.create_provider('openai')

    @patch.dict(os.environ, {'MISTRAL_API_KEY': ''})
    def test_missing_mistral_key_mentions_api_key(self):
        with pytest.raises(ValueError, match='API key'):
            LLMProviderFactory.create_provider('mistral')

    @patch.dict(os.environ, {'LLM_PROVIDER': 'mistral', 'LLM_MODEL': ''})
    def test_default_model_per_provider(self):
        assert LLMProviderFactory.get_default_model() == 'mistral-large-latest'
        assert LLMProviderFactory.get_default_model('openai') == 'gpt-4o'

    @patch.dict(os.environ, {'LLM_MODEL': 'gpt-4o-mini'})
    def test_model_override(self):
        assert LLMProviderFactory.get_default_model('openai') == 'gpt-4o-mini'


class TestProviderCompletions:
    """Tests for normalized chat completions"""

    @patch('openai.OpenAI')
    def test_openai_completion(self, mock_openai):
        client = mock_openai.return_value
        client.chat.completions.create.return_value = make_sdk_response()

        provider = OpenAIProvider(api_key='test_key')
        result = provider.create_chat_completion(
            messages=[{"role": "user", "content": "Evaluate"}],
            model='gpt-4o',
            temperature=0.3,
            timeout=30.0
        )

        assert result['content'] == '{"coverage_score": 10}'
        assert result['model'] == 'gpt-4o'
        assert result['usage']['total_tokens'] == 350
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs['temperature'] == 0.3
        assert kwargs['timeout'] == 30.0

    @patch('mistralai.Mistral')
    def test_mistral_completion_uses_millisecond_timeout(self, mock_mistral):
        client = mock_mistral.return_value
        client.chat.complete.return_value = make_sdk_response(model='mistral-large-latest')

        provider = MistralProvider(api_key='test_key')
        result = provider.create_chat_completion(
            messages=[{"role": "user", "content": "Evaluate"}],
            model='mistral-large-latest',
            temperature=0.3,
            timeout=30.0
        )

        assert result['model'] == 'mistral-large-latest'
        assert client.chat.complete.call_args.kwargs['timeout_ms'] == 30000

    @patch('openai.OpenAI')
    def test_empty_content_becomes_empty_string(self, mock_openai):
        mock_openai.return_value.chat.completions.create.return_value = make_sdk_response(content=None)

        provider = OpenAIProvider(api_key='test_key')
        result = provider.create_chat_completion(messages=[], model='gpt-4o')

        assert result['content'] == ''


class TestSingleUpstreamAttempt:
    """Upstream failures reach the caller after exactly one attempt"""

    @patch('openai.OpenAI')
    def test_openai_client_built_without_retries(self, mock_openai):
        OpenAIProvider(api_key='test_key')

        assert mock_openai.call_args.kwargs['max_retries'] == 0

    @patch('mistralai.Mistral')
    def test_mistral_client_built_without_retry_config(self, mock_mistral):
        client = mock_mistral.return_value
        client.chat.complete.return_value = make_sdk_response(model='mistral-large-latest')

        provider = MistralProvider(api_key='test_key')
        provider.create_chat_completion(messages=[], model='mistral-large-latest')

        mock_mistral.assert_called_once_with(api_key='test_key')
        assert 'retries' not in client.chat.complete.call_args.kwargs

    def test_openai_rate_limit_is_not_retried(self):
        import httpx
        import openai

        hits = []

        def always_rate_limited(request):
            hits.append(request.url.path)
            return httpx.Response(
                429,
                json={"error": {"message": "Rate limit reached", "type": "requests"}}
            )

        provider = OpenAIProvider(api_key='test_key')
        provider.client = provider.client.with_options(
            http_client=httpx.Client(transport=httpx.MockTransport(always_rate_limited))
        )

        with pytest.raises(openai.RateLimitError):
            provider.create_chat_completion(
                messages=[{"role": "user", "content": "Evaluate"}],
                model='gpt-4o',
                timeout=30.0
            )

        assert len(hits) == 1
