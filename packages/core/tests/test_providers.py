"""Tests for the model client.

Shared behaviour (the empty-response check) lives in BaseReviewer and is
tested once via a lightweight stub. Gemini-specific tests cover the request
shape and how each kind of HTTP response is turned into text or an error.
"""

from unittest.mock import MagicMock

import pytest
import requests

from reviewbot_core.errors import EmptyResponseError, GeminiAPIError, UpstreamAPIError
from reviewbot_core.providers.base import BaseReviewer
from reviewbot_core.providers.gemini import GeminiReviewer, extract_text


class _StubReviewer(BaseReviewer):
    def __init__(self, text):
        self._text = text

    def _call_api(self, prompt: str):
        return self._text


def _response(status=200, json_data=None, text="", reason="OK"):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    resp.text = text
    resp.json.return_value = json_data
    return resp


def _candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


# ---------------------------------------------------------------------------
# Shared behaviour — tested once through the stub
# ---------------------------------------------------------------------------


class TestBaseReviewer:
    def test_returns_text(self):
        assert _StubReviewer("Looks good").review("prompt") == "Looks good"

    def test_none_raises_empty_response(self):
        with pytest.raises(EmptyResponseError):
            _StubReviewer(None).review("prompt")

    def test_empty_string_raises_empty_response(self):
        with pytest.raises(EmptyResponseError):
            _StubReviewer("").review("prompt")


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------


class TestGeminiRequest:
    def test_posts_prompt_and_generation_config(self):
        session = MagicMock()
        session.post.return_value = _response(json_data=_candidate("review"))

        GeminiReviewer(api_key="secret", session=session).review("Please review")

        session.post.assert_called_once()
        url = session.post.call_args.args[0]
        assert url == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-1.5-flash:generateContent"
        )
        assert "secret" not in url
        payload = session.post.call_args.kwargs["json"]
        assert payload == {
            "contents": [{"parts": [{"text": "Please review"}]}],
            "generationConfig": {"temperature": 0.3, "topK": 40, "topP": 0.95, "maxOutputTokens": 2048},
        }
        assert session.post.call_args.kwargs["headers"]["Content-Type"] == "application/json"
        assert session.post.call_args.kwargs["headers"]["x-goog-api-key"] == "secret"

    def test_no_timeout_passed(self):
        session = MagicMock()
        session.post.return_value = _response(json_data=_candidate("review"))
        GeminiReviewer(api_key="k", session=session).review("p")
        assert "timeout" not in session.post.call_args.kwargs

    def test_custom_model_in_url(self):
        reviewer = GeminiReviewer(api_key="k", model="gemini-1.5-pro")
        assert "/models/gemini-1.5-pro:generateContent" in reviewer.url

    def test_none_model_uses_default(self):
        assert GeminiReviewer(api_key="k", model=None).model == GeminiReviewer.MODEL

    def test_uses_requests_module_by_default(self, mocker):
        mock_post = mocker.patch("reviewbot_core.providers.gemini.requests.post")
        mock_post.return_value = _response(json_data=_candidate("from requests"))
        assert GeminiReviewer(api_key="k").review("p") == "from requests"


class TestGeminiResponses:
    def _review(self, resp):
        session = MagicMock()
        session.post.return_value = resp
        return GeminiReviewer(api_key="k", session=session).review("p")

    def test_returns_first_candidate_text(self):
        data = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second part"}]}},
                {"content": {"parts": [{"text": "other candidate"}]}},
            ]
        }
        assert self._review(_response(json_data=data)) == "first"

    def test_http_error_carries_status_and_body(self):
        resp = _response(status=403, text='{"error": "forbidden"}', reason="Forbidden")
        with pytest.raises(GeminiAPIError) as exc_info:
            self._review(resp)
        err = exc_info.value
        assert err.status == 403
        assert err.body == '{"error": "forbidden"}'
        assert "403 Forbidden" in str(err)
        assert isinstance(err, UpstreamAPIError)

    def test_error_field_raises_with_message(self):
        resp = _response(json_data={"error": {"code": 400, "message": "API key not valid"}})
        with pytest.raises(GeminiAPIError, match="API key not valid"):
            self._review(resp)

    def test_missing_candidates_raises_empty_response(self):
        with pytest.raises(EmptyResponseError):
            self._review(_response(json_data={"candidates": []}))

    def test_empty_text_raises_empty_response(self):
        with pytest.raises(EmptyResponseError):
            self._review(_response(json_data=_candidate("")))

    def test_invalid_json_raises_api_error(self):
        resp = _response(text="<html>")
        resp.json.side_effect = ValueError("Expecting value")
        with pytest.raises(GeminiAPIError, match="invalid JSON"):
            self._review(resp)

    def test_transport_error_wrapped(self):
        reviewer = GeminiReviewer(api_key="SUPERSECRET123", session=MagicMock())
        reviewer.session.post.side_effect = requests.ConnectionError(
            f"HTTPSConnectionPool: Max retries exceeded with url: {reviewer.url} (connection refused)"
        )
        with pytest.raises(GeminiAPIError, match="connection refused") as exc_info:
            reviewer.review("p")
        assert exc_info.value.status is None
        assert "SUPERSECRET123" not in str(exc_info.value)


class TestExtractText:
    def test_extracts_nested_text(self):
        assert extract_text(_candidate("hi")) == "hi"

    def test_missing_levels_return_none(self):
        assert extract_text({}) is None
        assert extract_text({"candidates": [{}]}) is None
        assert extract_text({"candidates": [{"content": {"parts": []}}]}) is None
        assert extract_text({"candidates": [{"content": {"parts": [{}]}}]}) is None

    def test_non_dict_returns_none(self):
        assert extract_text(None) is None
