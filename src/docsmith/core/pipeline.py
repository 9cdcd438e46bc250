"""Render and test pipelines for standalone Markdown documents.

Both pipelines start by loading the document. Rendering then splits the
leading ``%`` directives from the body, renders the body, and writes the
assembled page. Testing hands the whole text to the example extractor and
delegates execution to the doc-test harness.

Every terminal failure is raised as a :class:`DocumentError` subclass. The
subclass carries its :class:`RenderOutcome`, and that outcome is the exit code
returned to the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING, Protocol

from .config import RenderOptions, TestOptions
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import (
    DocumentError,
    FragmentLoadError,
    MissingMetadataError,
    OutputUnwritableError,
    RenderOutcome,
    WriteFailedError,
)
from .loader import FragmentSet, load_fragment_set, load_text
from .metadata import parse_metadata
from .page import assemble_page, output_path_for, stylesheet_links


if TYPE_CHECKING:
    from docsmith.adapters.examples import ExampleCase


DOCTEST_PROGRAM_NAME = "docsmith-doctest"


class BodyRenderer(Protocol):
    """Markdown renderer consumed by :func:`render_document`."""

    def reset_headers(self) -> None: ...

    def render(self, text: str, *, playground: bool = False) -> str: ...


TestRunner = Callable[[Sequence[str], Sequence["ExampleCase"]], int]


@dataclass(slots=True)
class TestResult:
    """Outcome of the test pipeline and the status reported by the harness."""

    outcome: RenderOutcome
    harness_status: int | None = None

    @property
    def exit_code(self) -> int:
        if self.outcome is not RenderOutcome.SUCCESS or self.harness_status is None:
            return int(self.outcome)
        return self.harness_status


def _load_fragments(options: RenderOptions, emitter: DiagnosticEmitter) -> FragmentSet:
    fragments = load_fragment_set(
        options.in_header,
        options.before_content,
        options.after_content,
        emitter=emitter,
    )
    if fragments is None:
        raise FragmentLoadError("failed to load an injected HTML fragment")
    return fragments


def _open_output(path: Path, emitter: DiagnosticEmitter) -> IO[str]:
    try:
        return path.open("w", encoding="utf-8")
    except OSError as exc:
        message = f"error opening `{path}` for writing: {exc.strerror or exc}"
        emitter.error(message, exc)
        raise OutputUnwritableError(message) from exc


def _render_into(
    handle: IO[str],
    output: Path,
    text: str,
    fragments: FragmentSet,
    options: RenderOptions,
    renderer: BodyRenderer,
    emitter: DiagnosticEmitter,
) -> None:
    metadata, body = parse_metadata(text)
    if not metadata:
        message = "invalid markdown file: expecting initial line with `% ...TITLE...`"
        emitter.error(message)
        raise MissingMetadataError(message)
    title = metadata.title or ""

    renderer.reset_headers()
    body_html = renderer.render(body, playground=options.playground_enabled)

    page = assemble_page(
        title,
        stylesheet_links(options.css),
        fragments.in_header,
        fragments.before_content,
        body_html,
        fragments.after_content,
        options.playground_url,
    )
    try:
        handle.write(page)
        handle.flush()
    except OSError as exc:
        message = f"error writing to `{output}`: {exc.strerror or exc}"
        emitter.error(message, exc)
        raise WriteFailedError(message) from exc

    emitter.event("render_written", {"output": str(output), "title": title})


def render_document(
    input_path: str | Path,
    output_dir: str | Path,
    options: RenderOptions | None = None,
    *,
    renderer: BodyRenderer | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> RenderOutcome:
    """Render ``input_path`` into ``<output_dir>/<stem>.html``.

    Returns :attr:`RenderOutcome.SUCCESS` or the outcome of the first failing
    stage. Errors raised by ``renderer`` propagate unchanged.
    """
    options = options or RenderOptions()
    emitter = emitter or LoggingEmitter()
    if renderer is None:
        from docsmith.adapters.markdown import get_renderer

        renderer = get_renderer()
    output = output_path_for(input_path, output_dir)

    try:
        text = load_text(input_path, emitter=emitter)
        fragments = _load_fragments(options, emitter)
        with _open_output(output, emitter) as handle:
            _render_into(handle, output, text, fragments, options, renderer, emitter)
    except DocumentError as exc:
        return exc.outcome
    return RenderOutcome.SUCCESS


def test_document(
    input_path: str | Path,
    options: TestOptions | None = None,
    *,
    runner: TestRunner | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> TestResult:
    """Extract the examples of ``input_path`` and hand them to the harness.

    Load failures end the pipeline with their outcome. Once the harness runs,
    the outcome is :attr:`RenderOutcome.SUCCESS` and its status is carried
    separately in :attr:`TestResult.harness_status`.
    """
    from docsmith.adapters.examples import ExampleCollector, find_testable_code

    options = options or TestOptions()
    emitter = emitter or LoggingEmitter()
    if runner is None:
        from docsmith.adapters.harness import run_tests

        runner = run_tests

    try:
        text = load_text(input_path, emitter=emitter)
    except DocumentError as exc:
        return TestResult(exc.outcome)

    source_name = str(input_path)
    collector = ExampleCollector(source_name, options.library_paths)
    find_testable_code(text, collector)
    emitter.event("examples_collected", {"source": source_name, "count": len(collector.tests)})

    args = [DOCTEST_PROGRAM_NAME, *options.test_args]
    status = runner(args, collector.tests)
    return TestResult(RenderOutcome.SUCCESS, harness_status=status)


__all__ = [
    "DOCTEST_PROGRAM_NAME",
    "BodyRenderer",
    "TestResult",
    "TestRunner",
    "render_document",
    "test_document",
]
