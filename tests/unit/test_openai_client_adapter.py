from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from app.oracle.exceptions import OracleError, OracleNetworkError, OracleValidationError
from app.oracle.openai_client_adapter import OpenAIClientAdapter


def _make_mock_response(
    content: str | None,
    *,
    refusal: str | None = None,
    finish_reason: str = "stop",
) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    choice.message.refusal = refusal
    choice.finish_reason = finish_reason
    response = MagicMock()
    response.choices = [choice]
    return response


def _call(adapter: OpenAIClientAdapter) -> str:
    return adapter.create_chat_completion(
        model="m",
        temperature=0.0,
        system_prompt="system",
        user_prompt="user",
        schema_name="report_tier",
        json_schema={"type": "object"},
    )


def _make_adapter(mock_client: MagicMock) -> OpenAIClientAdapter:
    with patch(
        "app.oracle.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)


def _make_client_raising(exc: Exception) -> MagicMock:
    mock_client = MagicMock()
    mock_client.chat.completions.create.side_effect = exc
    return mock_client


class TestOpenAIClientAdapterConstruction:
    def test_disables_sdk_retries(self) -> None:
        with patch("app.oracle.openai_client_adapter.openai.OpenAI") as client_cls:
            OpenAIClientAdapter(api_key="k", timeout_seconds=12, base_url="http://llm")
        client_cls.assert_called_once_with(
            api_key="k", timeout=12, base_url="http://llm", max_retries=0
        )


class TestOpenAIClientAdapterResponses:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            '{"tier": "audit"}'
        )
        assert _call(_make_adapter(mock_client)) == '{"tier": "audit"}'

    def test_sends_strict_json_schema(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        _call(_make_adapter(mock_client))
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"]["type"] == "json_schema"
        assert kwargs["response_format"]["json_schema"]["name"] == "report_tier"
        assert kwargs["response_format"]["json_schema"]["strict"] is True
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(OracleError, match="empty answer for report_tier"):
            _call(_make_adapter(mock_client))

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        with pytest.raises(OracleError, match="no choices"):
            _call(_make_adapter(mock_client))

    def test_refusal_is_a_validation_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            None, refusal="cannot help"
        )
        with pytest.raises(OracleValidationError, match="refused report_tier: cannot help"):
            _call(_make_adapter(mock_client))

    def test_truncated_answer_is_a_validation_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            '{"tier": "au', finish_reason="length"
        )
        with pytest.raises(OracleValidationError, match="truncated"):
            _call(_make_adapter(mock_client))


class TestOpenAIClientAdapterErrors:
    def test_connection_failure(self) -> None:
        client = _make_client_raising(openai.APIConnectionError(request=MagicMock()))
        with pytest.raises(OracleNetworkError, match="unreachable"):
            _call(_make_adapter(client))

    def test_timeout(self) -> None:
        client = _make_client_raising(httpx.TimeoutException("timeout"))
        with pytest.raises(OracleNetworkError, match="unreachable"):
            _call(_make_adapter(client))

    def test_rate_limit(self) -> None:
        response = httpx.Response(429, request=httpx.Request("POST", "http://llm/chat"))
        client = _make_client_raising(
            openai.RateLimitError("slow down", response=response, body=None)
        )
        with pytest.raises(OracleNetworkError, match="rate limit"):
            _call(_make_adapter(client))

    def test_api_error(self) -> None:
        client = _make_client_raising(
            openai.APIError(message="server error", request=MagicMock(), body=None)
        )
        with pytest.raises(OracleNetworkError, match="API error"):
            _call(_make_adapter(client))
