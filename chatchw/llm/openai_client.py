"""Wrapper around the OpenAI Responses API used for page estimates."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

from openai import OpenAI

from chatchw.config import settings

CODE_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class OpenAIChatClient:
    """Holds a configured OpenAI SDK client and a chat model name."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        api_key = api_key or settings.openai_api_key
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not configured in the environment.")
        self.model = model or settings.openai_model_chat
        self.client = OpenAI(api_key=api_key, base_url=base_url or settings.openai_base_url)

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_output_tokens: int = 150,
    ) -> str:
        response = self.client.responses.create(
            model=self.model,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            input=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return self._extract_text(response)

    def complete_json(self, system_prompt: str, user_prompt: str, **kwargs: Any) -> Dict[str, Any]:
        """Run a completion and decode the reply as a JSON object.

        Raises ``ValueError`` when the reply is not a JSON object.
        """
        raw = CODE_FENCE_PATTERN.sub("", self.complete(system_prompt, user_prompt, **kwargs).strip())
        parsed = json.loads(raw)
        if not isinstance(parsed, dict):
            raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
        return parsed

    @staticmethod
    def _extract_text(response) -> str:
        output_text = getattr(response, "output_text", None)
        if isinstance(output_text, str) and output_text.strip():
            return output_text.strip()
        parts: list[str] = []
        for item in getattr(response, "output", None) or []:
            for content in getattr(item, "content", None) or []:
                if getattr(content, "type", None) in {"output_text", "text"}:
                    text = getattr(content, "text", None)
                    if text:
                        parts.append(str(text).strip())
        return "\n".join(parts).strip()
