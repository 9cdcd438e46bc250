"""Primary public API for docsmith."""

from __future__ import annotations

from docsmith.adapters.examples import ExampleCase, extract_examples
from docsmith.adapters.harness import run_tests
from docsmith.adapters.markdown import MarkdownRenderer, render_body, reset_headers
from docsmith.core import (
    DocsmithError,
    RenderOptions,
    RenderOutcome,
    TestOptions,
    TestResult,
    assemble_page,
    load_fragments,
    load_text,
    render_document,
    split_leading_metadata,
    test_document,
)
from docsmith.version import get_version


__version__ = get_version()

__all__ = [
    "DocsmithError",
    "ExampleCase",
    "MarkdownRenderer",
    "RenderOptions",
    "RenderOutcome",
    "TestOptions",
    "TestResult",
    "__version__",
    "assemble_page",
    "extract_examples",
    "get_version",
    "load_fragments",
    "load_text",
    "render_body",
    "render_document",
    "reset_headers",
    "run_tests",
    "split_leading_metadata",
    "test_document",
]
