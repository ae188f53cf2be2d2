"""Turn a natural-language research question into arXiv search keywords."""

from __future__ import annotations

import logging
import os

from openai import OpenAI

from anthropic_client import claude_complete

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_TEMPERATURE = "0.1"
SUPPORTED_PROVIDERS: tuple[str, ...] = ("openai", "claude")

LOGGER = logging.getLogger(__name__)

_SYSTEM_PROMPT = """You are a research assistant. Given a research question, extract the most relevant English keywords for searching academic papers on arXiv.

Rules:
1. Output ONLY the keywords, separated by spaces
2. Use 3-6 keywords maximum
3. Use technical/academic terms
4. Keywords must be in English
5. Do not include common words like "how", "what", "why"
6. Focus on the core concepts and methods"""


def extract_keywords(question: str, provider: str = "openai") -> str:
    """Return a space-separated keyword string for question.

    provider is "openai" (default) or "claude"; anything else falls back to
    OpenAI. Raises RuntimeError if the provider is not configured or replies
    with nothing usable.
    """
    if provider not in SUPPORTED_PROVIDERS:
        LOGGER.warning("Unknown keyword provider %r, using openai", provider)
        provider = "openai"

    prompt = f"Question: {question.strip()}\n\nKeywords:"
    if provider == "claude":
        raw = claude_complete(_SYSTEM_PROMPT, prompt, max_tokens=64)
    else:
        raw = _openai_complete(prompt)

    keywords = " ".join(raw.split())
    if not keywords:
        raise RuntimeError(f"{provider} returned no keywords")

    LOGGER.info("Extracted keywords via %s: %r -> %r", provider, question, keywords)
    return keywords


def _openai_complete(prompt: str) -> str:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable is required")

    model = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
    temperature = float(os.getenv("OPENAI_TEMPERATURE", DEFAULT_OPENAI_TEMPERATURE))

    client = OpenAI(api_key=api_key)
    response = client.chat.completions.create(
        model=model,
        temperature=temperature,
        max_completion_tokens=64,
        messages=[
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
    )
    return response.choices[0].message.content or ""
