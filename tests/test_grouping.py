"""Tests for grouping chunks by source."""

from chatchw.models.session import RagChunk
from chatchw.resolver.grouping import group_chunks_by_source


def test_groups_keep_first_seen_order(resolver) -> None:
    chunks = [
        RagChunk(source="guides/manual.pdf/page_7", text="first"),
        RagChunk(source="blood in stool", text="second"),
        RagChunk(source="guides/manual.pdf/page_7", text="third"),
    ]
    groups = group_chunks_by_source(chunks, resolver=resolver)

    assert [group.source for group in groups] == ["guides/manual.pdf/page_7", "blood in stool"]
    assert groups[0].chunk_count == 2
    assert [preview.text for preview in groups[0].previews] == ["first", "third"]
    assert groups[0].display_name == "manual.pdf (Page 7)"
    assert groups[0].viewer_link == "/pdfs/manual.pdf#page=7"
    assert groups[1].location.page == 10


def test_missing_source_goes_to_unknown_group(resolver) -> None:
    groups = group_chunks_by_source([RagChunk(text="orphan"), RagChunk(source="", text="blank")], resolver=resolver)

    assert len(groups) == 1
    assert groups[0].source == "Unknown"
    assert groups[0].chunk_count == 2
    assert groups[0].viewer_link == "/pdfs/who-guide.pdf#page=1"


def test_previews_are_truncated(resolver) -> None:
    groups = group_chunks_by_source(
        [RagChunk(source="manual.pdf", text="abcdefghijklmnop")],
        resolver=resolver,
        preview_chars=5,
    )
    preview = groups[0].previews[0]
    assert preview.text == "abcde..."
    assert preview.truncated is True


def test_no_chunks_no_groups(resolver) -> None:
    assert group_chunks_by_source([], resolver=resolver) == []
