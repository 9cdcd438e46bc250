"""CLI-side diagnostic emitter for the document pipelines."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from docsmith.core.diagnostics import format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Print pipeline diagnostics on stderr through the Rich console.

    Errors and warnings are always shown. Events are recorded on the CLI state
    and echoed only when ``-v`` is given. With ``--debug``, errors carrying an
    exception are followed by its traceback.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self._state = state or get_cli_state()
        self.debug_enabled = (
            self._state.show_tracebacks if debug_enabled is None else bool(debug_enabled)
        )

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)
        if exc is not None and self.debug_enabled:
            from rich.traceback import Traceback

            trace = Traceback.from_exception(type(exc), exc, exc.__traceback__)
            self._state.err_console.print(trace)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        self._state.record_event(name, data)
        message = format_event_message(name, data) or f"{name}: {data}"
        render_message("info", message)


__all__ = ["CliEmitter"]
