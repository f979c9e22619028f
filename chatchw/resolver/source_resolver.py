"""Map free-text RAG chunk sources to a document and page."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List, Optional, Tuple
from urllib.parse import quote

from chatchw.models.source import ResolvedLocation, ResolverConfig
from chatchw.resolver.rules import get_resolver_config

logger = logging.getLogger(__name__)

PATH_SEPARATOR_PATTERN = re.compile(r"[/\\]")
PAGE_PATTERN = re.compile(r"page[_\s]?(\d+)|p\.?(\d+)|(\d+)", re.IGNORECASE | re.ASCII)

# Characters encodeURIComponent leaves alone, besides alphanumerics and "_.-~".
URI_COMPONENT_SAFE = "!*'()"

UNKNOWN_SOURCE = "Unknown Source"


def _parse_page(digits: str) -> Optional[int]:
    try:
        page = int(digits)
    except ValueError:
        return None
    return page or None


class SourceResolver:
    """Resolves source strings against ordered phrase and topic rules.

    Resolution is pure: the configuration is read, never written, so one
    instance can be shared freely.
    """

    def __init__(self, config: Optional[ResolverConfig] = None) -> None:
        self.config = config or get_resolver_config()

    def resolve(self, source: Optional[str]) -> ResolvedLocation:
        if not source:
            return ResolvedLocation(document_name="", page=None)

        lowered = source.lower()
        for rule in self.config.phrases:
            if rule.matches(lowered):
                logger.debug("Phrase %r matched; page %s", rule.phrase, rule.page)
                return ResolvedLocation(document_name=self.config.default_document, page=rule.page)

        for topic in self.config.topics:
            if topic.matches(lowered):
                logger.debug("Topic rule %s matched; page %s", topic.name, topic.page)
                return ResolvedLocation(document_name=self.config.default_document, page=topic.page)

        document_name, page = self._parse_path(source)
        return ResolvedLocation(
            document_name=document_name or self.config.default_document,
            page=page or 1,
        )

    def _parse_path(self, source: str) -> Tuple[str, Optional[int]]:
        """Pull a document segment and a trailing page marker out of a path."""
        parts: List[str] = PATH_SEPARATOR_PATTERN.split(source)
        suffix = self.config.document_suffix.lower()
        doc_index = next(
            (idx for idx, part in enumerate(parts) if part.lower().endswith(suffix)),
            None,
        )
        if doc_index is None:
            return "", None

        page: Optional[int] = None
        trailing = "/".join(parts[doc_index + 1 :])
        match = PAGE_PATTERN.search(trailing)
        if match:
            digits = next(group for group in match.groups() if group)
            page = _parse_page(digits)
        return parts[doc_index], page

    def build_viewer_link(self, source: Optional[str]) -> Optional[str]:
        """Relative link that opens the resolved document, or None."""
        location = self.resolve(source)
        if not location.document_name:
            return None
        base = self.config.base_path.rstrip("/")
        url = f"{base}/{quote(location.document_name, safe=URI_COMPONENT_SAFE)}"
        if location.page is not None:
            url += f"#page={location.page}"
        return url

    def display_name(self, source: Optional[str]) -> str:
        location = self.resolve(source)
        if not location.document_name:
            return source or UNKNOWN_SOURCE
        if location.page is not None:
            return f"{location.document_name} (Page {location.page})"
        return location.document_name


@lru_cache(maxsize=1)
def get_default_resolver() -> SourceResolver:
    """Build the settings-backed resolver once per process."""
    return SourceResolver()


def resolve_source(source: Optional[str]) -> ResolvedLocation:
    return get_default_resolver().resolve(source)


def build_viewer_link(source: Optional[str]) -> Optional[str]:
    return get_default_resolver().build_viewer_link(source)


def source_display_name(source: Optional[str]) -> str:
    return get_default_resolver().display_name(source)
