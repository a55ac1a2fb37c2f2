"""Claude API client wrapper used for regression narratives."""

from __future__ import annotations

import logging
import os
import time
from typing import Optional

import anthropic

logger = logging.getLogger(__name__)


class AIClient:
    """Wrapper around the Anthropic Claude API."""

    def __init__(self, model: str = "claude-opus-4-6", max_tokens: int = 1024):
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise EnvironmentError(
                "ANTHROPIC_API_KEY environment variable is not set. "
                "Set it to enable AI regression summaries."
            )
        self.client = anthropic.Anthropic(api_key=api_key, timeout=120.0)
        self.model = model
        self.max_tokens = max_tokens
        self._call_count = 0

    @property
    def call_count(self) -> int:
        return self._call_count

    def complete(
        self,
        system_prompt: str,
        user_message: str,
        max_tokens: Optional[int] = None,
        temperature: float = 0.3,
    ) -> str:
        """Send a completion request to Claude and return the text response."""
        self._call_count += 1
        tokens = max_tokens or self.max_tokens
        logger.info(
            "Calling AI (call #%d, model=%s, max_tokens=%d)...",
            self._call_count, self.model, tokens,
        )
        logger.debug("AI prompt length: system=%d chars, user=%d chars",
                     len(system_prompt), len(user_message))

        try:
            call_start = time.time()
            response = self.client.messages.create(
                model=self.model,
                max_tokens=tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_message}],
            )
        except anthropic.APIError as e:
            logger.error("Claude API error: %s", e)
            raise

        text = response.content[0].text
        logger.info("AI response received in %.1fs (%d chars)",
                    time.time() - call_start, len(text))
        if response.stop_reason == "max_tokens":
            logger.warning(
                "AI response was truncated at max_tokens=%d; consider raising ai_max_tokens.",
                tokens,
            )
        return text
