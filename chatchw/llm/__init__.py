"""LLM integration helpers."""

from .openai_client import OpenAIChatClient
from .page_estimator import PageEstimator

__all__ = ["OpenAIChatClient", "PageEstimator"]
