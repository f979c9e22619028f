"""Ask the chat model where a chunk sits in its source PDF."""

from __future__ import annotations

import logging
from typing import Optional

from openai import OpenAIError
from pydantic import ValidationError

from chatchw.config import settings
from chatchw.llm.openai_client import OpenAIChatClient
from chatchw.llm.prompts import SYSTEM_PROMPT, build_page_prompt
from chatchw.models.estimate import PageEstimate

logger = logging.getLogger(__name__)

HIGHLIGHT_FALLBACK_CHARS = 30


class PageEstimator:
    """Produces a page estimate and highlight phrase for a chunk."""

    def __init__(
        self,
        client: OpenAIChatClient | None = None,
        document_name: Optional[str] = None,
    ) -> None:
        self.client = client or OpenAIChatClient()
        self.document_name = document_name or settings.default_document

    def fallback(self, chunk_text: str) -> PageEstimate:
        return PageEstimate(page=1, highlight_text=chunk_text[:HIGHLIGHT_FALLBACK_CHARS])

    def estimate(self, chunk_text: str) -> PageEstimate:
        prompt = build_page_prompt(chunk_text, self.document_name)
        try:
            reply = self.client.complete_json(SYSTEM_PROMPT, prompt)
        except OpenAIError as exc:
            logger.error("Page estimate request failed: %s", exc)
            return self.fallback(chunk_text)
        except ValueError as exc:
            logger.error("Failed to parse page estimate reply: %s", exc)
            return self.fallback(chunk_text)

        try:
            return PageEstimate(
                page=reply.get("page") or 1,
                highlight_text=reply.get("highlightText") or chunk_text[:HIGHLIGHT_FALLBACK_CHARS],
            )
        except ValidationError as exc:
            logger.error("Page estimate reply had unusable fields: %s", exc)
            return self.fallback(chunk_text)
