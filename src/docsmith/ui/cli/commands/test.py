"""Implementation of the ``docsmith test`` command."""

from __future__ import annotations

import shlex

from pydantic import ValidationError
import typer

from docsmith.core.config import TestOptions
from docsmith.core.pipeline import test_document

from .._options import (
    DebugOption,
    InputPathArgument,
    LibraryPathOption,
    TestArgsOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import set_cli_state


def test(
    ctx: typer.Context,
    input_path: InputPathArgument,
    library_path: LibraryPathOption = None,
    test_args: TestArgsOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Run the Python examples of a Markdown document.

    Arguments after `--` go to the doc-test harness unchanged, e.g.
    `docsmith test guide.md -- --format terse intro`. Exit codes: 1 input
    unreadable, 2 input not UTF-8; otherwise the harness status (0 all passed,
    101 failures).
    """
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    harness_args = shlex.split(test_args) if test_args else []
    harness_args.extend(ctx.args)
    try:
        options = TestOptions(
            library_paths=list(library_path or []),
            test_args=harness_args,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    result = test_document(input_path, options, emitter=CliEmitter(state))
    raise typer.Exit(code=result.exit_code)


__all__ = ["test"]
