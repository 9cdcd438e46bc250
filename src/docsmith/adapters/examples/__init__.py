"""Locate runnable Python examples inside Markdown documents."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
import re


__all__ = [
    "PYTHON_TAGS",
    "CodeBlock",
    "ExampleAttributes",
    "ExampleCase",
    "ExampleCollector",
    "extract_examples",
    "find_testable_code",
    "parse_fence_info",
    "scan_code_blocks",
]


PYTHON_TAGS = frozenset({"python", "py", "python3"})
_FLAG_TAGS = frozenset({"ignore", "no_run", "should_fail"})

_FENCE_OPEN_RE = re.compile(r"^(?P<indent>[ ]{0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_HEADING_RE = re.compile(r"^[ ]{0,3}(?P<level>#{1,6})(?:[ \t]+(?P<text>.*?))?[ \t#]*$")
_SETEXT_RE = re.compile(r"^[ ]{0,3}(?P<rule>=+|-+)[ \t]*$")
_INFO_SPLIT_RE = re.compile(r"[,\s{}]+")


@dataclass(slots=True, frozen=True)
class ExampleAttributes:
    """Flags parsed from a code fence info string."""

    is_python: bool = True
    ignore: bool = False
    no_run: bool = False
    should_fail: bool = False
    tags: tuple[str, ...] = ()

    @property
    def runnable(self) -> bool:
        """Return True for Python examples that execute by default."""
        return self.is_python and not self.ignore and not self.no_run


@dataclass(slots=True, frozen=True)
class CodeBlock:
    """A code block found in a document, with 0-based line bounds."""

    start: int
    end: int
    info: str
    code: str
    fenced: bool = True

    @property
    def line(self) -> int:
        """1-based line of the first code line."""
        return self.start + 2 if self.fenced else self.start + 1


@dataclass(slots=True)
class ExampleCase:
    """An extracted example handed to the doc-test harness."""

    name: str
    source: str
    line: int
    attributes: ExampleAttributes = field(default_factory=ExampleAttributes)
    library_paths: tuple[Path, ...] = ()


def parse_fence_info(info: str) -> ExampleAttributes:
    """Interpret a fence info string such as ``python,no_run``.

    An empty info string, or one made only of known flags, denotes Python.
    Any other tag without a Python tag marks the block as not an example.
    """
    tokens = tuple(token for token in _INFO_SPLIT_RE.split(info.strip().lower()) if token)
    tokens = tuple(token.lstrip(".") for token in tokens if token.lstrip("."))
    seen_python = False
    seen_other = False
    flags: set[str] = set()
    for token in tokens:
        if token in PYTHON_TAGS:
            seen_python = True
        elif token in _FLAG_TAGS:
            flags.add(token)
        else:
            seen_other = True
    return ExampleAttributes(
        is_python=seen_python or not seen_other,
        ignore="ignore" in flags,
        no_run="no_run" in flags,
        should_fail="should_fail" in flags,
        tags=tokens,
    )


def scan_code_blocks(lines: Sequence[str]) -> Iterator[CodeBlock]:
    """Yield fenced and indented code blocks found in ``lines``.

    Fences open with three or more backticks or tildes and close with a run of
    the same character at least as long; an unterminated fence runs to the end
    of the input. Indented blocks need a blank line (or the start of input)
    before them.
    """
    index = 0
    total = len(lines)
    previous_blank = True
    while index < total:
        line = lines[index]
        match = _FENCE_OPEN_RE.match(line)
        if match and _opens_fence(line):
            fence = match.group("fence")
            indent = len(match.group("indent"))
            closing = re.compile(rf"^[ ]{{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t\r]*$")
            body: list[str] = []
            cursor = index + 1
            while cursor < total and not closing.match(lines[cursor]):
                body.append(_strip_indent(lines[cursor], indent))
                cursor += 1
            end = min(cursor, total - 1)
            yield CodeBlock(
                start=index,
                end=end,
                info=match.group("info").strip(),
                code="\n".join(body) + ("\n" if body else ""),
            )
            index = cursor + 1
            previous_blank = True
            continue

        if previous_blank and _is_indented(line):
            body = []
            cursor = index
            while cursor < total and (_is_indented(lines[cursor]) or not lines[cursor].strip()):
                body.append(_dedent_line(lines[cursor]))
                cursor += 1
            while body and not body[-1].strip():
                body.pop()
                cursor -= 1
            if _opens_fence(body[0]):
                # Fence nested in a list item or block quote continuation.
                for nested in scan_code_blocks(body):
                    yield CodeBlock(
                        start=index + nested.start,
                        end=index + nested.end,
                        info=nested.info,
                        code=nested.code,
                        fenced=nested.fenced,
                    )
                index = cursor
                previous_blank = False
                continue
            yield CodeBlock(
                start=index,
                end=cursor - 1,
                info="",
                code="\n".join(body) + "\n",
                fenced=False,
            )
            index = cursor
            previous_blank = False
            continue

        previous_blank = not line.strip()
        index += 1


def _opens_fence(line: str) -> bool:
    match = _FENCE_OPEN_RE.match(line)
    if match is None:
        return False
    # Backtick fences may not carry backticks in their info string.
    return not (match.group("fence")[0] == "`" and "`" in match.group("info"))


def _is_indented(line: str) -> bool:
    return bool(line.strip()) and (line.startswith("    ") or line.startswith("\t"))


def _dedent_line(line: str) -> str:
    if line.startswith("\t"):
        return line[1:]
    if line.startswith("    "):
        return line[4:]
    return line.lstrip(" ")


def _strip_indent(line: str, width: int) -> str:
    removed = 0
    while removed < width and line.startswith(" "):
        line = line[1:]
        removed += 1
    return line


class ExampleCollector:
    """Accumulate examples for one document in document order."""

    def __init__(
        self,
        source_name: str,
        library_paths: Iterable[str | Path] = (),
        *,
        use_headers: bool = True,
    ) -> None:
        self.source_name = source_name
        self.library_paths = tuple(Path(path) for path in library_paths)
        self.use_headers = use_headers
        self.tests: list[ExampleCase] = []
        self.current_header: str | None = None

    def register_header(self, name: str, level: int) -> None:
        """Record the heading that following examples belong to."""
        if not self.use_headers:
            return
        _ = level
        cleaned = " ".join(name.split())
        self.current_header = cleaned or None

    def add_test(self, code: str, attributes: ExampleAttributes, line: int) -> ExampleCase:
        section = self.current_header or "top"
        case = ExampleCase(
            name=f"{self.source_name} - {section} (line {line})",
            source=code,
            line=line,
            attributes=attributes,
            library_paths=self.library_paths,
        )
        self.tests.append(case)
        return case


def find_testable_code(text: str, collector: ExampleCollector) -> None:
    """Feed every Python example in ``text`` to ``collector``."""
    lines = text.split("\n")
    blocks = {block.start: block for block in scan_code_blocks(lines)}
    index = 0
    while index < len(lines):
        block = blocks.get(index)
        if block is not None:
            attributes = parse_fence_info(block.info)
            if attributes.is_python and block.code.strip():
                collector.add_test(block.code, attributes, block.line)
            index = block.end + 1
            continue
        line = lines[index]
        heading = _HEADING_RE.match(line)
        if heading:
            collector.register_header(heading.group("text") or "", len(heading.group("level")))
            index += 1
            continue
        underline = _setext_underline(lines, index, blocks)
        if underline is not None:
            collector.register_header(line.strip(), 1 if underline == "=" else 2)
            index += 2
            continue
        index += 1


def _setext_underline(
    lines: Sequence[str], index: int, blocks: Mapping[int, CodeBlock]
) -> str | None:
    """Return ``=`` or ``-`` when ``lines[index]`` is a setext heading title."""
    if index + 1 >= len(lines) or index + 1 in blocks:
        return None
    line = lines[index]
    if not line.strip() or _is_indented(line) or line.lstrip().startswith(("-", "*", "+", ">")):
        return None
    match = _SETEXT_RE.match(lines[index + 1])
    return match.group("rule")[0] if match else None


def extract_examples(
    text: str,
    source_name: str = "<document>",
    library_paths: Iterable[str | Path] = (),
) -> list[ExampleCase]:
    """Return the Python examples of ``text`` in document order."""
    collector = ExampleCollector(source_name, library_paths)
    find_testable_code(text, collector)
    return collector.tests
