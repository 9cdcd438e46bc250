"""Custom exception hierarchy for the document pipelines."""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar


class RenderOutcome(IntEnum):
    """Terminal states of a render, valued as the process exit code."""

    SUCCESS = 0
    INPUT_UNREADABLE = 1
    INPUT_NOT_TEXT = 2
    FRAGMENT_LOAD_FAILED = 3
    OUTPUT_UNWRITABLE = 4
    MISSING_METADATA = 5
    WRITE_FAILED = 6


class DocsmithError(RuntimeError):
    """Base exception for docsmith failures."""


class DocumentError(DocsmithError):
    """Terminal failure of a pipeline stage, tagged with its outcome."""

    outcome: ClassVar[RenderOutcome] = RenderOutcome.SUCCESS


class InputUnreadableError(DocumentError):
    """Raised when a file cannot be read from disk."""

    outcome = RenderOutcome.INPUT_UNREADABLE


class InputNotTextError(DocumentError):
    """Raised when a file is not valid UTF-8."""

    outcome = RenderOutcome.INPUT_NOT_TEXT


class FragmentLoadError(DocumentError):
    """Raised when an injected HTML fragment cannot be loaded."""

    outcome = RenderOutcome.FRAGMENT_LOAD_FAILED


class OutputUnwritableError(DocumentError):
    """Raised when the output file cannot be opened for writing."""

    outcome = RenderOutcome.OUTPUT_UNWRITABLE


class MissingMetadataError(DocumentError):
    """Raised when the document lacks its leading ``% title`` directive."""

    outcome = RenderOutcome.MISSING_METADATA


class WriteFailedError(DocumentError):
    """Raised when the assembled page cannot be written."""

    outcome = RenderOutcome.WRITE_FAILED


class MarkdownConversionError(DocsmithError):
    """Raised when Markdown cannot be converted into HTML."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "DocsmithError",
    "DocumentError",
    "FragmentLoadError",
    "InputNotTextError",
    "InputUnreadableError",
    "MarkdownConversionError",
    "MissingMetadataError",
    "OutputUnwritableError",
    "RenderOutcome",
    "WriteFailedError",
    "exception_hint",
    "exception_messages",
]
