"""Implementation of the ``docsmith render`` command."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import typer

from docsmith.core.config import RenderOptions
from docsmith.core.pipeline import render_document

from .._options import (
    AfterContentOption,
    BeforeContentOption,
    CssOption,
    DebugOption,
    InHeaderOption,
    InputPathArgument,
    OutputDirOption,
    PlaygroundUrlOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import set_cli_state


DEFAULT_OUTPUT_DIR = Path("doc")


def render(
    ctx: typer.Context,
    input_path: InputPathArgument,
    output: OutputDirOption = DEFAULT_OUTPUT_DIR,
    markdown_css: CssOption = None,
    markdown_in_header: InHeaderOption = None,
    markdown_before_content: BeforeContentOption = None,
    markdown_after_content: AfterContentOption = None,
    markdown_playground_url: PlaygroundUrlOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Render a Markdown document into a standalone HTML page.

    Exit codes: 0 success, 1 input unreadable, 2 input not UTF-8, 3 fragment
    unreadable, 4 output not writable, 5 missing `% Title` line, 6 write failed.
    """
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    try:
        options = RenderOptions(
            css=list(markdown_css or []),
            in_header=list(markdown_in_header or []),
            before_content=list(markdown_before_content or []),
            after_content=list(markdown_after_content or []),
            playground_url=markdown_playground_url,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    outcome = render_document(input_path, output, options, emitter=CliEmitter(state))
    raise typer.Exit(code=int(outcome))


__all__ = ["DEFAULT_OUTPUT_DIR", "render"]
