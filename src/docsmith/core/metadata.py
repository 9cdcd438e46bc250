"""Leading ``%`` directive parsing for standalone documents.

A document may open with a run of directive lines::

    % Title of the page
    % Author Name

    Body text starts here.

The first directive is the page title. Later directives are kept in order for
callers that want them.
"""

from __future__ import annotations

from dataclasses import dataclass, field


DIRECTIVE_MARKER = "%"


@dataclass(slots=True)
class MetadataBlock:
    """Ordered directives collected from the head of a document."""

    directives: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.directives)

    def __len__(self) -> int:
        return len(self.directives)

    @property
    def title(self) -> str | None:
        return self.directives[0] if self.directives else None

    @property
    def extra(self) -> list[str]:
        return self.directives[1:]


def split_leading_metadata(text: str) -> tuple[list[str], str]:
    """Separate leading ``%`` lines from the body of ``text``.

    The body is sliced from the original text at the start of the first
    non-directive line, so its whitespace and line endings are untouched.
    """
    metadata: list[str] = []
    offset = 0
    total = len(text)
    while offset < total:
        newline = text.find("\n", offset)
        line_end = total if newline == -1 else newline
        if not text.startswith(DIRECTIVE_MARKER, offset):
            return metadata, text[offset:]
        content = text[offset + len(DIRECTIVE_MARKER) : line_end]
        if content.endswith("\r"):
            content = content[:-1]
        metadata.append(content.lstrip())
        offset = line_end + 1
    return metadata, ""


def parse_metadata(text: str) -> tuple[MetadataBlock, str]:
    """Return :func:`split_leading_metadata` output wrapped in a block."""
    directives, body = split_leading_metadata(text)
    return MetadataBlock(directives), body


__all__ = ["DIRECTIVE_MARKER", "MetadataBlock", "parse_metadata", "split_leading_metadata"]
