from __future__ import annotations

import requests

from reviewbot_core.errors import GeminiAPIError
from reviewbot_core.providers.base import BaseReviewer

_API_ROOT = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiReviewer(BaseReviewer):
    PROVIDER_NAME = "Gemini"
    MODEL = "gemini-1.5-flash"
    # Low temperature keeps reviews of the same diff reasonably stable between
    # runs while leaving room for natural phrasing.
    TEMPERATURE = 0.3
    TOP_K = 40
    TOP_P = 0.95
    MAX_OUTPUT_TOKENS = 2048

    def __init__(self, api_key: str, model: str | None = None, session: requests.Session | None = None):
        self.api_key = api_key
        self.model = model or self.MODEL
        # A plain requests module works as a "session": both expose .post().
        self.session = session if session is not None else requests

    @property
    def url(self) -> str:
        return f"{_API_ROOT}/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.TEMPERATURE,
                "topK": self.TOP_K,
                "topP": self.TOP_P,
                "maxOutputTokens": self.MAX_OUTPUT_TOKENS,
            },
        }

    def _call_api(self, prompt: str) -> str | None:
        try:
            resp = self.session.post(
                self.url,
                headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
                json=self.build_payload(prompt),
            )
        except requests.RequestException as e:
            raise GeminiAPIError(f"Failed to get AI review: {e}") from e

        if not resp.ok:
            raise GeminiAPIError(
                f"Failed to get AI review: Gemini API request failed: "
                f"{resp.status_code} {resp.reason} - {resp.text}",
                status=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise GeminiAPIError(
                f"Failed to get AI review: invalid JSON from Gemini API: {e}",
                status=resp.status_code,
                body=resp.text,
            ) from e

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise GeminiAPIError(
                f"Failed to get AI review: Gemini API error: {message}",
                status=resp.status_code,
                body=resp.text,
            )

        return extract_text(data)


def extract_text(data) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or None if any level is missing."""
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
