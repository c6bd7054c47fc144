"""Keyword suggestions from the page's readable text via the Gemini API.

The call is best-effort: every failure mode is turned into a short,
human-readable message list so the analysis response is never blocked by
the language model.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from seo_analyzer.config import settings

logger = logging.getLogger(__name__)

NOT_ENOUGH_CONTENT = "Not enough textual content to generate keyword suggestions."
MISSING_API_KEY = (
    "AI analysis failed: Gemini API key is missing. "
    "Please set GEMINI_API_KEY environment variable."
)
REQUEST_FAILED = (
    "Failed to get keyword suggestions from AI. Check your API key and network connection."
)

_PROMPT = (
    "Extract the most important primary and secondary keywords from the text below. "
    "Include long-tail keywords. Do not include keywords that appear in these "
    "instructions. Answer in the same language as the text. Return only the "
    "keywords, one per line, with no numbering or extra text.\n\n"
    "Content:\n{content}\n"
)


def _first_candidate_text(payload: dict[str, Any]) -> str | None:
    """Return the text of the first candidate part, or ``None``."""
    try:
        return payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


async def suggest_keywords(text: str) -> list[str]:
    """Return keyword suggestions for *text*.

    The text is truncated to ``settings.keyword_content_char_limit``
    characters before it is sent.

    Returns:
        One keyword per element; a single explanatory message when the
        content is too short, the API key is missing or the call fails;
        ``[]`` when the API answers with an unexpected payload.
    """
    content = text[: settings.keyword_content_char_limit]
    if len(content) <= settings.keyword_min_content_chars:
        return [NOT_ENOUGH_CONTENT]

    if not settings.gemini_api_key:
        logger.error("[KEYWORDS] GEMINI_API_KEY is not set.")
        return [MISSING_API_KEY]

    url = f"{settings.gemini_base_url}/models/{settings.gemini_model}:generateContent"
    body = {"contents": [{"role": "user", "parts": [{"text": _PROMPT.format(content=content)}]}]}

    try:
        async with httpx.AsyncClient(timeout=settings.gemini_timeout) as client:
            response = await client.post(
                url,
                params={"key": settings.gemini_api_key},
                json=body,
            )
            response.raise_for_status()
            payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("[KEYWORDS] Gemini request failed: %s", exc)
        return [REQUEST_FAILED]

    raw = _first_candidate_text(payload)
    if raw is None:
        logger.warning("[KEYWORDS] Unexpected Gemini response: %.200s", payload)
        return []

    keywords = [line.strip() for line in raw.splitlines() if line.strip()]
    logger.info("[KEYWORDS] %d suggestion(s).", len(keywords))
    return keywords
