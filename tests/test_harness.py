from __future__ import annotations

import io
import json
from pathlib import Path

import click
import pytest
from rich.console import Console

from docsmith.adapters.examples import ExampleCase, extract_examples, parse_fence_info
from docsmith.adapters.harness import (
    EXIT_FAILED,
    EXIT_OK,
    EXIT_USAGE,
    CaseStatus,
    HarnessOptions,
    parse_harness_args,
    run_case,
    run_tests,
    select_cases,
)


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


def _case(source: str, info: str = "python", name: str = "doc - top (line 1)") -> ExampleCase:
    return ExampleCase(name=name, source=source, line=1, attributes=parse_fence_info(info))


def test_parse_harness_args_defaults() -> None:
    assert parse_harness_args(["docsmith-doctest"]) == HarnessOptions()


def test_parse_harness_args_flags() -> None:
    options = parse_harness_args(
        ["docsmith-doctest", "--exact", "--format", "json", "--test-threads", "2", "intro"]
    )

    assert options.filters == ("intro",)
    assert options.exact
    assert options.format == "json"
    assert options.test_threads == 2


def test_quiet_is_terse() -> None:
    assert parse_harness_args(["docsmith-doctest", "-q"]).format == "terse"


def test_parse_harness_args_rejects_unknown_option() -> None:
    with pytest.raises(click.UsageError):
        parse_harness_args(["docsmith-doctest", "--bogus"])


def test_select_cases_by_substring_and_exact() -> None:
    cases = [_case("pass", name="doc - Intro (line 3)"), _case("pass", name="doc - Usage (line 9)")]

    selected, filtered = select_cases(cases, HarnessOptions(filters=("Usage",)))
    assert [case.name for case in selected] == ["doc - Usage (line 9)"]
    assert filtered == 1

    selected, filtered = select_cases(cases, HarnessOptions(filters=("Usage",), exact=True))
    assert selected == []
    assert filtered == 2


def test_run_case_passes_and_fails() -> None:
    assert run_case(_case("assert 1 + 1 == 2\n")).status is CaseStatus.OK

    failed = run_case(_case("raise SystemExit('boom')\n"))
    assert failed.status is CaseStatus.FAILED
    assert "boom" in failed.output


def test_should_fail_inverts_outcome() -> None:
    assert run_case(_case("raise ValueError\n", "python,should_fail")).status is CaseStatus.OK
    unexpected = run_case(_case("pass\n", "python,should_fail"))
    assert unexpected.status is CaseStatus.FAILED
    assert "expected to fail" in unexpected.output


def test_no_run_only_compiles() -> None:
    assert run_case(_case("import does_not_exist\n", "no_run")).status is CaseStatus.OK
    assert run_case(_case("def broken(:\n", "no_run")).status is CaseStatus.FAILED


def test_library_paths_reach_pythonpath(tmp_path: Path) -> None:
    (tmp_path / "helper_mod.py").write_text("ANSWER = 42\n", encoding="utf-8")
    case = ExampleCase(
        name="doc - top (line 1)",
        source="import helper_mod\nassert helper_mod.ANSWER == 42\n",
        line=1,
        library_paths=(tmp_path,),
    )

    assert run_case(case).status is CaseStatus.OK


def test_run_tests_reports_in_document_order() -> None:
    document = (
        "# Passing\n\n```python\nassert True\n```\n\n"
        "# Failing\n\n```python\nraise RuntimeError('nope')\n```\n\n"
        "# Skipped\n\n```python,ignore\nraise RuntimeError\n```\n"
    )
    cases = extract_examples(document, source_name="doc.md")
    console, buffer = _console()

    status = run_tests(["docsmith-doctest"], cases, console=console)

    output = buffer.getvalue()
    assert status == EXIT_FAILED
    assert output.index("doc.md - Passing (line 4) ... ok") < output.index(
        "doc.md - Failing (line 10) ... failed"
    )
    assert "doc.md - Skipped (line 16) ... ignored" in output
    assert "nope" in output
    assert "test result: FAILED. 1 passed; 1 failed; 1 ignored; 0 filtered out" in output


def test_run_tests_ok_summary_with_filters() -> None:
    cases = [
        _case("pass\n", name="doc - A (line 1)"),
        _case("raise SystemExit(1)\n", name="doc - B (line 5)"),
    ]
    console, buffer = _console()

    status = run_tests(["docsmith-doctest", "--test-threads", "1", "A"], cases, console=console)

    assert status == EXIT_OK
    assert "test result: ok. 1 passed; 0 failed; 0 ignored; 1 filtered out" in buffer.getvalue()


def test_run_tests_ignored_flags() -> None:
    cases = [_case("pass\n", "python,ignore", name="doc - I (line 1)")]

    console, buffer = _console()
    assert run_tests(["docsmith-doctest", "--ignored"], cases, console=console) == EXIT_OK
    assert "1 passed" in buffer.getvalue()

    console, buffer = _console()
    assert run_tests(["docsmith-doctest", "--include-ignored"], cases, console=console) == EXIT_OK
    assert "1 passed" in buffer.getvalue()


def test_run_tests_json_format() -> None:
    cases = [_case("pass\n", name="doc - J (line 2)")]
    console, buffer = _console()

    status = run_tests(["docsmith-doctest", "--format", "json"], cases, console=console)

    events = [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]
    assert status == EXIT_OK
    assert events[0] == {"type": "suite", "event": "started", "test_count": 1}
    assert events[1] == {"type": "test", "event": "ok", "name": "doc - J (line 2)"}
    assert events[-1]["event"] == "ok"
    assert events[-1]["passed"] == 1


def test_run_tests_list_does_not_execute() -> None:
    cases = [_case("raise SystemExit(1)\n", name="doc - L (line 1)")]
    console, buffer = _console()

    assert run_tests(["docsmith-doctest", "--list"], cases, console=console) == EXIT_OK
    assert "doc - L (line 1): test" in buffer.getvalue()


def test_run_tests_usage_error() -> None:
    console, buffer = _console()

    assert run_tests(["docsmith-doctest", "--format", "xml"], [], console=console) == EXIT_USAGE
    assert "error:" in buffer.getvalue()


def test_run_tests_with_no_cases() -> None:
    console, buffer = _console()

    assert run_tests(["docsmith-doctest"], [], console=console) == EXIT_OK
    assert "running 0 tests" in buffer.getvalue()


def test_example_with_null_byte_fails_without_aborting_the_run() -> None:
    cases = extract_examples("```python\nx = '\x00'\n```\n\n```python\nassert True\n```\n", "doc")
    console, buffer = _console()

    status = run_tests(["docsmith-doctest"], cases, console=console)

    assert status == EXIT_FAILED
    assert "1 passed; 1 failed" in buffer.getvalue()


def test_no_run_example_with_null_byte_fails() -> None:
    assert run_case(_case("x = '\x00'\n", "no_run")).status is CaseStatus.FAILED


def test_large_example_runs_from_a_file() -> None:
    source = "values = [\n" + "    0,\n" * 40_000 + "]\nassert len(values) == 40000\n"

    assert run_case(_case(source)).status is CaseStatus.OK
