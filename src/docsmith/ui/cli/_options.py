"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
PAGE_PANEL = "Page"
TESTING_PANEL = "Testing"
DIAGNOSTICS_PANEL = "Diagnostics"

InputPathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="Standalone Markdown document opening with a `% Title` line.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

OutputDirOption = Annotated[
    Path,
    typer.Option(
        "--output",
        "-o",
        help="Directory receiving <input stem>.html.",
        file_okay=False,
        rich_help_panel=INPUTS_PANEL,
    ),
]

CssOption = Annotated[
    list[str] | None,
    typer.Option(
        "--markdown-css",
        metavar="URL",
        help="Stylesheet linked from the page head; repeat to add more, later ones win.",
        rich_help_panel=PAGE_PANEL,
    ),
]

InHeaderOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--markdown-in-header",
        metavar="PATH",
        help="File whose contents are injected at the end of <head>.",
        rich_help_panel=PAGE_PANEL,
    ),
]

BeforeContentOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--markdown-before-content",
        metavar="PATH",
        help="File whose contents are injected before the page title.",
        rich_help_panel=PAGE_PANEL,
    ),
]

AfterContentOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--markdown-after-content",
        metavar="PATH",
        help="File whose contents are injected at the end of <body>.",
        rich_help_panel=PAGE_PANEL,
    ),
]

PlaygroundUrlOption = Annotated[
    str | None,
    typer.Option(
        "--markdown-playground-url",
        metavar="URL",
        help="Enable 'Run' links on Python examples, pointing at this playground.",
        rich_help_panel=PAGE_PANEL,
    ),
]

LibraryPathOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--library-path",
        "-L",
        metavar="DIR",
        help="Directory added to PYTHONPATH when examples run.",
        rich_help_panel=TESTING_PANEL,
    ),
]

TestArgsOption = Annotated[
    str | None,
    typer.Option(
        "--test-args",
        metavar="ARGS",
        help="Space-separated arguments for the doc-test harness (e.g. '--format terse').",
        rich_help_panel=TESTING_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
