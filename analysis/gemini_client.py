"""
Minimal client for the Gemini generateContent REST endpoint.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import GEMINI_CONFIG

logger = logging.getLogger(__name__)


def build_request_payload(prompt: str) -> Dict[str, Any]:
    """One user turn with a single text part."""
    return {
        "contents": [
            {"role": "user", "parts": [{"text": prompt}]},
        ]
    }


def extract_candidate_text(response: Any) -> Optional[str]:
    """
    Concatenate the text parts of the first candidate.

    Returns:
        The text, or None when the response does not have the expected
        shape or holds no text.
    """
    if not isinstance(response, dict):
        return None

    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None

    text = "".join(
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )
    return text if text.strip() else None


class GeminiClient:
    """Sends one prompt per call. No retries, no streaming."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = GEMINI_CONFIG["model"],
        api_base: str = GEMINI_CONFIG["api_base"],
        timeout: int = GEMINI_CONFIG["timeout_seconds"],
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> Dict[str, Any]:
        """
        Call generateContent and return the decoded JSON response.

        Raises:
            ValueError: If no API key is configured
            requests.RequestException: On transport or HTTP errors
        """
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY is not configured")

        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        logger.info(f"[Gemini] POST {self.model}:generateContent ({len(prompt)} prompt chars)")
        response = self.session.post(
            self.url,
            headers=headers,
            json=build_request_payload(prompt),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()
