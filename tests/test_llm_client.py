from unittest.mock import MagicMock, patch

import requests

from flowcaser.provider.llm_client import chat_completion_request, extract_message_content


def test_chat_completion_request_success():
    """Successful request returns the parsed body and sends a bearer token."""
    mock_response = MagicMock()
    mock_response.json.return_value = {"choices": [{"message": {"content": "hej"}}]}

    with patch("requests.post", return_value=mock_response) as mock_post:
        result = chat_completion_request("http://test", {"model": "m"}, "sk-1")
        assert result["ok"] is True
        assert result["data"]["choices"][0]["message"]["content"] == "hej"
        assert result["error"] is None
        mock_post.assert_called_once()
        headers = mock_post.call_args.kwargs["headers"]
        assert headers["Authorization"] == "Bearer sk-1"
        assert mock_post.call_args.kwargs["timeout"] == (5.0, 30.0)


def test_timeout_retry_success():
    """A timeout is retried once and the second attempt succeeds."""
    mock_response = MagicMock()
    mock_response.json.return_value = {"choices": []}

    with patch("requests.post", side_effect=[requests.exceptions.Timeout(), mock_response]) as mock_post, \
         patch("time.sleep") as mock_sleep:
        result = chat_completion_request("http://test", {"model": "m"}, "sk-1", retries=1)
        assert result["ok"] is True
        assert mock_post.call_count == 2
        mock_sleep.assert_called_once_with(0.5)


def test_http_error_is_not_retried():
    """A 500 response fails immediately and is classified as a bad response."""
    mock_response = MagicMock()
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("500 Server Error")

    with patch("requests.post", return_value=mock_response) as mock_post:
        result = chat_completion_request("http://test", {"model": "m"}, "sk-1", retries=3)
        assert result["ok"] is False
        assert result["error"]["type"] == "ProviderBadResponse"
        assert mock_post.call_count == 1


def test_connection_error_classified():
    with patch("requests.post", side_effect=requests.exceptions.ConnectionError("Connection failed")):
        result = chat_completion_request("http://test", {"model": "m"}, "sk-1", retries=0)
        assert result["ok"] is False
        assert result["error"]["type"] == "ProviderConnectionError"
        assert "Connection failed" in result["error"]["message"]


def test_timeout_classified():
    with patch("requests.post", side_effect=requests.exceptions.Timeout("Timeout")):
        result = chat_completion_request("http://test", {"model": "m"}, "sk-1", retries=0)
        assert result["ok"] is False
        assert result["error"]["type"] == "ProviderTimeout"


def test_json_error_classified():
    mock_response = MagicMock()
    mock_response.raise_for_status.return_value = None
    mock_response.json.side_effect = requests.exceptions.JSONDecodeError("Invalid JSON", "", 0)

    with patch("requests.post", return_value=mock_response):
        result = chat_completion_request("http://test", {"model": "m"}, "sk-1", retries=0)
        assert result["ok"] is False
        assert result["error"]["type"] == "ProviderBadResponse"


def test_all_retries_fail():
    calls = {"n": 0}

    def _boom(*args, **kwargs):
        calls["n"] += 1
        raise requests.exceptions.ConnectionError("Fail")

    with patch("requests.post", side_effect=_boom), patch("time.sleep"):
        result = chat_completion_request("http://test", {"model": "m"}, "sk-1", retries=1)
        assert result["ok"] is False
        assert result["error"]["type"] == "ProviderConnectionError"
        assert result["trace_id"]
        assert calls["n"] == 2


def test_extract_message_content():
    assert extract_message_content({"choices": [{"message": {"content": " svar "}}]}) == "svar"
    assert extract_message_content({"choices": [{"message": {"content": ""}}]}) is None
    assert extract_message_content({"choices": []}) is None
    assert extract_message_content(None) is None
    assert extract_message_content({"choices": [{"message": {"content": 5}}]}) is None
