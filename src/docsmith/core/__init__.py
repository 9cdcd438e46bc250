"""Document loading, metadata parsing, page assembly, and pipelines."""

from __future__ import annotations

from .config import RenderOptions, TestOptions
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import (
    DocsmithError,
    DocumentError,
    FragmentLoadError,
    InputNotTextError,
    InputUnreadableError,
    MarkdownConversionError,
    MissingMetadataError,
    OutputUnwritableError,
    RenderOutcome,
    WriteFailedError,
)
from .loader import FragmentSet, load_fragment_set, load_fragments, load_text
from .metadata import MetadataBlock, parse_metadata, split_leading_metadata
from .page import assemble_page, output_path_for, stylesheet_links
from .pipeline import TestResult, render_document, test_document


__all__ = [
    "DiagnosticEmitter",
    "DocsmithError",
    "DocumentError",
    "FragmentLoadError",
    "FragmentSet",
    "InputNotTextError",
    "InputUnreadableError",
    "LoggingEmitter",
    "MarkdownConversionError",
    "MetadataBlock",
    "MissingMetadataError",
    "NullEmitter",
    "OutputUnwritableError",
    "RenderOptions",
    "RenderOutcome",
    "TestOptions",
    "TestResult",
    "WriteFailedError",
    "assemble_page",
    "load_fragment_set",
    "load_fragments",
    "load_text",
    "output_path_for",
    "parse_metadata",
    "render_document",
    "split_leading_metadata",
    "stylesheet_links",
    "test_document",
]
