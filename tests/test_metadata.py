from __future__ import annotations

import pytest

from docsmith.core.metadata import MetadataBlock, parse_metadata, split_leading_metadata


def test_title_directive_is_stripped_and_body_kept() -> None:
    metadata, body = split_leading_metadata("% My Title\nHello")

    assert metadata == ["My Title"]
    assert body == "Hello"


def test_multiple_directives_preserve_order_and_inner_whitespace() -> None:
    text = "%   Title  with  gaps  \n%Author Name\n% 2024-01-01\n\nBody\n"
    metadata, body = split_leading_metadata(text)

    assert metadata == ["Title  with  gaps  ", "Author Name", "2024-01-01"]
    assert body == "\nBody\n"


def test_body_is_suffix_of_original_text() -> None:
    text = "% Title\r\n% Sub\r\n  indented line\r\n\r\n\tTabbed\r\n"
    metadata, body = split_leading_metadata(text)

    assert metadata == ["Title", "Sub"]
    assert text.endswith(body)
    assert body == "  indented line\r\n\r\n\tTabbed\r\n"


@pytest.mark.parametrize(
    "text",
    ["% only\n", "% a\n% b", "%\n%\n", "% trailing\n% newline\n"],
)
def test_all_directive_lines_yield_empty_body(text: str) -> None:
    _, body = split_leading_metadata(text)
    assert body == ""


@pytest.mark.parametrize(
    "text",
    ["Hello", "# Heading\n\n% not metadata\n", " % indented marker\n", "\n% late\n"],
)
def test_text_without_leading_directive_is_all_body(text: str) -> None:
    metadata, body = split_leading_metadata(text)

    assert metadata == []
    assert body == text


def test_empty_document() -> None:
    assert split_leading_metadata("") == ([], "")


def test_directives_stop_at_first_plain_line() -> None:
    metadata, body = split_leading_metadata("% Title\nText\n% Not a directive\n")

    assert metadata == ["Title"]
    assert body == "Text\n% Not a directive\n"


def test_unicode_line_separators_do_not_end_a_directive() -> None:
    metadata, body = split_leading_metadata("% Title\u2028still title\nBody")

    assert metadata == ["Title\u2028still title"]
    assert body == "Body"


def test_parse_metadata_wraps_block() -> None:
    block, body = parse_metadata("% Title\n% Author\nBody")

    assert isinstance(block, MetadataBlock)
    assert block.title == "Title"
    assert block.extra == ["Author"]
    assert len(block) == 2
    assert body == "Body"


def test_empty_metadata_block_is_falsy() -> None:
    block, _ = parse_metadata("no directives")

    assert not block
    assert block.title is None
    assert block.extra == []
