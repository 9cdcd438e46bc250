"""Doc-test harness executing extracted examples in subprocesses."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
import json
import os
from pathlib import Path
import subprocess
import sys
import tempfile

import click
from rich.console import Console
from rich.text import Text

from docsmith.adapters.examples import ExampleCase


__all__ = [
    "EXIT_FAILED",
    "EXIT_OK",
    "EXIT_USAGE",
    "CaseResult",
    "CaseStatus",
    "HarnessOptions",
    "parse_harness_args",
    "run_case",
    "run_tests",
    "select_cases",
]


EXIT_OK = 0
EXIT_USAGE = 2
EXIT_FAILED = 101

_FORMATS = ("pretty", "terse", "json")
_SCRIPT_NAME = "docsmith_example.py"


class CaseStatus(Enum):
    """Outcome of a single example."""

    OK = "ok"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclass(slots=True)
class CaseResult:
    """Result of running one example."""

    case: ExampleCase
    status: CaseStatus
    output: str = ""


@dataclass(slots=True)
class HarnessOptions:
    """Options parsed from the harness argument vector."""

    filters: tuple[str, ...] = ()
    exact: bool = False
    ignored: bool = False
    include_ignored: bool = False
    list_only: bool = False
    format: str = "pretty"
    test_threads: int | None = None


@click.command(
    context_settings={"help_option_names": ["--help"], "ignore_unknown_options": False}
)
@click.argument("filters", nargs=-1)
@click.option("--exact", is_flag=True, help="Match filters exactly instead of by substring.")
@click.option("--ignored", is_flag=True, help="Run only ignored examples.")
@click.option("--include-ignored", is_flag=True, help="Run ignored examples too.")
@click.option("--list", "list_only", is_flag=True, help="List examples instead of running them.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(_FORMATS),
    default="pretty",
    help="Output format of the report.",
)
@click.option("-q", "--quiet", is_flag=True, help="Shorthand for --format terse.")
@click.option("--test-threads", type=click.IntRange(min=1), default=None)
def _harness_command(
    filters: tuple[str, ...],
    exact: bool,
    ignored: bool,
    include_ignored: bool,
    list_only: bool,
    output_format: str,
    quiet: bool,
    test_threads: int | None,
) -> HarnessOptions:
    return HarnessOptions(
        filters=filters,
        exact=exact,
        ignored=ignored,
        include_ignored=include_ignored,
        list_only=list_only,
        format="terse" if quiet and output_format == "pretty" else output_format,
        test_threads=test_threads,
    )


def parse_harness_args(args: Sequence[str]) -> HarnessOptions:
    """Parse a harness argument vector whose first element is the program name.

    Raises :class:`click.UsageError` on invalid arguments.
    """
    program = args[0] if args else "docsmith-doctest"
    with _harness_command.make_context(program, list(args[1:])) as ctx:
        return _harness_command.callback(**ctx.params)


def select_cases(
    cases: Sequence[ExampleCase], options: HarnessOptions
) -> tuple[list[ExampleCase], int]:
    """Return the cases matching the filters and the number filtered out."""
    if not options.filters:
        return list(cases), 0
    selected: list[ExampleCase] = []
    for case in cases:
        if options.exact:
            matched = case.name in options.filters
        else:
            matched = any(token in case.name for token in options.filters)
        if matched:
            selected.append(case)
    return selected, len(cases) - len(selected)


def _should_run(case: ExampleCase, options: HarnessOptions) -> bool:
    if options.ignored:
        return case.attributes.ignore
    return options.include_ignored or not case.attributes.ignore


def _build_env(case: ExampleCase) -> dict[str, str]:
    env = dict(os.environ)
    paths = [str(Path(path).resolve()) for path in case.library_paths]
    existing = env.get("PYTHONPATH")
    if existing:
        paths.append(existing)
    if paths:
        env["PYTHONPATH"] = os.pathsep.join(paths)
    env.setdefault("PYTHONIOENCODING", "utf-8")
    return env


def run_case(case: ExampleCase) -> CaseResult:
    """Execute one example and classify its outcome."""
    if case.attributes.no_run:
        try:
            compile(case.source, case.name, "exec")
        except (SyntaxError, ValueError) as exc:
            return CaseResult(case, CaseStatus.FAILED, output=f"{type(exc).__name__}: {exc}")
        return CaseResult(case, CaseStatus.OK)

    with tempfile.TemporaryDirectory(prefix="docsmith-doctest-") as workdir:
        script = Path(workdir) / _SCRIPT_NAME
        try:
            script.write_text(case.source, encoding="utf-8")
            completed = subprocess.run(
                [sys.executable, str(script)],
                cwd=workdir,
                env=_build_env(case),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except (OSError, ValueError) as exc:
            return CaseResult(
                case,
                CaseStatus.FAILED,
                output=f"could not launch example: {type(exc).__name__}: {exc}\n",
            )
    output = "".join(part for part in (completed.stdout, completed.stderr) if part)
    failed = completed.returncode != 0
    if case.attributes.should_fail:
        if not failed:
            return CaseResult(
                case,
                CaseStatus.FAILED,
                output=output + "example was expected to fail but exited successfully\n",
            )
        return CaseResult(case, CaseStatus.OK, output=output)
    return CaseResult(case, CaseStatus.FAILED if failed else CaseStatus.OK, output=output)


def _execute(
    cases: Sequence[ExampleCase], options: HarnessOptions
) -> list[CaseResult]:
    indices = [index for index, case in enumerate(cases) if _should_run(case, options)]
    workers = options.test_threads or min(len(indices), os.cpu_count() or 1) or 1
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() keeps document order regardless of completion order.
        outcomes = list(executor.map(run_case, [cases[index] for index in indices]))
    finished = dict(zip(indices, outcomes, strict=True))
    return [
        finished.get(index) or CaseResult(case, CaseStatus.IGNORED)
        for index, case in enumerate(cases)
    ]


def _say(console: Console, message: str | Text = "") -> None:
    if isinstance(message, Text):
        console.print(message, soft_wrap=True)
    else:
        console.print(message, markup=False, highlight=False, soft_wrap=True)


def _report(
    console: Console,
    results: Sequence[CaseResult],
    filtered_out: int,
    output_format: str,
) -> int:
    passed = sum(1 for result in results if result.status is CaseStatus.OK)
    failed = [result for result in results if result.status is CaseStatus.FAILED]
    ignored = sum(1 for result in results if result.status is CaseStatus.IGNORED)
    verdict = "FAILED" if failed else "ok"

    if output_format == "json":
        _say(console, json.dumps({"type": "suite", "event": "started", "test_count": len(results)}))
        for result in results:
            payload: dict[str, object] = {
                "type": "test",
                "event": result.status.value,
                "name": result.case.name,
            }
            if result.status is CaseStatus.FAILED and result.output:
                payload["stdout"] = result.output
            _say(console, json.dumps(payload))
        summary_payload = {
            "type": "suite",
            "event": verdict.lower(),
            "passed": passed,
            "failed": len(failed),
            "ignored": ignored,
            "filtered_out": filtered_out,
        }
        _say(console, json.dumps(summary_payload))
        return EXIT_FAILED if failed else EXIT_OK

    _say(console, f"\nrunning {len(results)} tests")
    styles = {CaseStatus.OK: "green", CaseStatus.FAILED: "red", CaseStatus.IGNORED: "yellow"}
    if output_format == "terse":
        marks = {CaseStatus.OK: ".", CaseStatus.FAILED: "F", CaseStatus.IGNORED: "i"}
        line = Text()
        for result in results:
            line.append(marks[result.status], style=styles[result.status])
        _say(console, line)
    else:
        for result in results:
            line = Text(f"test {result.case.name} ... ")
            line.append(result.status.value, style=styles[result.status])
            _say(console, line)

    if failed:
        _say(console, "\nfailures:\n")
        for result in failed:
            _say(console, f"---- {result.case.name} stdout ----")
            _say(console, result.output.rstrip("\n"))
            _say(console)
        _say(console, "failures:")
        for result in failed:
            _say(console, f"    {result.case.name}")

    summary = Text("\ntest result: ")
    summary.append(verdict, style="red" if failed else "green")
    summary.append(
        f". {passed} passed; {len(failed)} failed; {ignored} ignored; "
        f"{filtered_out} filtered out\n"
    )
    _say(console, summary)
    return EXIT_FAILED if failed else EXIT_OK


def run_tests(
    args: Sequence[str],
    cases: Sequence[ExampleCase],
    *,
    console: Console | None = None,
) -> int:
    """Run ``cases`` as configured by ``args`` and return the exit status.

    Returns ``0`` when nothing failed, ``101`` when an example failed, and ``2``
    when the arguments are invalid.
    """
    console = console or Console()
    try:
        options = parse_harness_args(args)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        _say(console, f"error: {exc.format_message()}")
        return EXIT_USAGE

    selected, filtered_out = select_cases(cases, options)

    if options.list_only:
        for case in selected:
            _say(console, f"{case.name}: test")
        _say(console, f"\n{len(selected)} tests")
        return EXIT_OK

    results = _execute(selected, options)
    return _report(console, results, filtered_out, options.format)
