"""Thin wrapper around the Anthropic Messages API."""

from __future__ import annotations

import logging
import os

import anthropic

LOGGER = logging.getLogger(__name__)

DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5"


def claude_complete(system: str, prompt: str, max_tokens: int = 256) -> str:
    """Send one user prompt with a system instruction and return the reply text.

    Raises RuntimeError when ANTHROPIC_API_KEY is missing or the reply holds
    no text block.
    """
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        raise RuntimeError("ANTHROPIC_API_KEY environment variable is required")

    model = os.getenv("CLAUDE_MODEL", DEFAULT_CLAUDE_MODEL)
    client = anthropic.Anthropic(api_key=api_key)

    LOGGER.debug("Calling Claude model=%s max_tokens=%s", model, max_tokens)
    response = client.messages.create(
        model=model,
        max_tokens=max_tokens,
        system=system,
        messages=[{"role": "user", "content": prompt}],
    )

    for block in response.content:
        text = getattr(block, "text", None)
        if text:
            return text
    raise RuntimeError("Claude returned no text content")
