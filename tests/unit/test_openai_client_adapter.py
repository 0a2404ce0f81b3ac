from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from docintake.extraction.client_base import CompletionRequest
from docintake.extraction.exceptions import ExtractionError, ExtractionNetworkError
from docintake.extraction.openai_client_adapter import OpenAIClientAdapter

_REQUEST = CompletionRequest(
    model="m",
    temperature=0.1,
    system_prompt="system",
    user_prompt="user",
    json_schema={"type": "object"},
)


def _make_mock_response(content: str | None, finish_reason: str = "stop") -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    choice.message.refusal = None
    choice.finish_reason = finish_reason
    response = MagicMock()
    response.choices = [choice]
    return response


def _make_adapter(mock_client: MagicMock) -> OpenAIClientAdapter:
    with patch(
        "docintake.extraction.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30)


def _status_error(cls: type[openai.APIStatusError], status: int) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return cls("rejected", response=response, body=None)


class TestOpenAIClientAdapter:
    def test_returns_content_and_requests_strict_schema(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')

        assert _make_adapter(mock_client).complete(_REQUEST) == '{"ok": true}'

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"]["json_schema"]["name"] == "extraction_result"
        assert kwargs["response_format"]["json_schema"]["strict"] is True
        assert kwargs["messages"][1] == {"role": "user", "content": "user"}

    def test_sdk_retries_are_disabled(self) -> None:
        with patch("docintake.extraction.openai_client_adapter.openai.OpenAI") as mock_openai:
            OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url="http://llm/v1")
        assert mock_openai.call_args.kwargs["max_retries"] == 0
        assert mock_openai.call_args.kwargs["base_url"] == "http://llm/v1"

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(ExtractionError, match="empty response"):
            _make_adapter(mock_client).complete(_REQUEST)

    def test_raises_error_for_truncated_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(
            '{"document_type": "Pass', finish_reason="length"
        )
        with pytest.raises(ExtractionError, match="truncated"):
            _make_adapter(mock_client).complete(_REQUEST)

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = MagicMock(choices=[])
        with pytest.raises(ExtractionError, match="no choices"):
            _make_adapter(mock_client).complete(_REQUEST)

    def test_wraps_connection_errors(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _make_adapter(mock_client).complete(_REQUEST)

    def test_wraps_httpx_timeouts(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(ExtractionNetworkError):
            _make_adapter(mock_client).complete(_REQUEST)

    def test_authentication_failure_is_not_a_network_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.AuthenticationError, 401
        )
        with pytest.raises(ExtractionError, match="rejected") as exc_info:
            _make_adapter(mock_client).complete(_REQUEST)
        assert not isinstance(exc_info.value, ExtractionNetworkError)

    def test_server_errors_are_network_errors(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = _status_error(
            openai.InternalServerError, 503
        )
        with pytest.raises(ExtractionNetworkError, match="API error"):
            _make_adapter(mock_client).complete(_REQUEST)
