"""CLI command implementations exposed via `docsmith.ui.cli`.

Re-exports the Typer command functions defined in the sibling modules so
they can be imported with dotted paths (e.g. ``docsmith.ui.cli.commands.render``).
"""

from __future__ import annotations

from .render import render
from .test import test


__all__ = ["render", "test"]
