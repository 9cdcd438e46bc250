"""Typer application wiring for the docsmith CLI."""

from __future__ import annotations

from typing import Annotated

import typer

from docsmith.core.exceptions import exception_hint
from docsmith.ui.cli.commands.render import render
from docsmith.ui.cli.commands.test import test
from docsmith.version import get_version

from .state import debug_enabled, emit_error


app = typer.Typer(
    help="Render standalone Markdown documents to HTML and test their Python examples.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit(code=0)


@app.callback()
def _app_root(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the installed version and exit.",
        ),
    ] = False,
) -> None:
    """Render standalone Markdown documents to HTML and test their Python examples."""


app.command()(render)
app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(test)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        from .state import get_cli_state

        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(exception_hint(exc) or str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
