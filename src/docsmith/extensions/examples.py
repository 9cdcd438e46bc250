"""Markdown extension highlighting fenced examples and adding playground links."""

from __future__ import annotations

from html import escape

from markdown import Markdown
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import ClassNotFound, PythonLexer, TextLexer, get_lexer_by_name

from ..adapters.examples import PYTHON_TAGS, ExampleAttributes, parse_fence_info, scan_code_blocks


PLAYGROUND_ATTRIBUTE = "docsmith_playground"


def _select_lexer(attributes: ExampleAttributes):  # noqa: ANN202 - pygments lexers are untyped
    if attributes.is_python:
        return PythonLexer()
    for tag in attributes.tags:
        if tag in PYTHON_TAGS:
            continue
        try:
            return get_lexer_by_name(tag)
        except ClassNotFound:
            continue
    return TextLexer()


class _ExampleFencePreprocessor(Preprocessor):
    """Replace fenced code blocks with highlighted, stashed HTML."""

    def __init__(self, md: Markdown, formatter: HtmlFormatter) -> None:
        super().__init__(md)
        self._formatter = formatter

    def run(self, lines: list[str]) -> list[str]:
        blocks = [block for block in scan_code_blocks(lines) if block.fenced]
        if not blocks:
            return lines

        playground = bool(getattr(self.md, PLAYGROUND_ATTRIBUTE, False))
        result: list[str] = []
        cursor = 0
        for block in blocks:
            result.extend(lines[cursor : block.start])
            attributes = parse_fence_info(block.info)
            html = self._render_block(block.code, attributes, playground=playground)
            placeholder = self.md.htmlStash.store(html)
            opening = lines[block.start]
            indent = opening[: len(opening) - len(opening.lstrip())]
            result.extend(["", indent + placeholder, ""])
            cursor = block.end + 1
        result.extend(lines[cursor:])
        return result

    def _render_block(self, code: str, attributes: ExampleAttributes, *, playground: bool) -> str:
        highlighted = highlight(code, _select_lexer(attributes), self._formatter)
        classes = ["example-wrap"]
        if attributes.is_python:
            classes.append("language-python")
        if attributes.ignore:
            classes.append("ignore")
        if attributes.should_fail:
            classes.append("should-fail")

        if not (playground and attributes.is_python and not attributes.ignore):
            return f'<div class="{" ".join(classes)}">{highlighted}</div>'

        classes.append("playground")
        run_link = '<a class="test-arrow" target="_blank" href="#">Run</a>'
        return (
            f'<div class="{" ".join(classes)}" data-code="{escape(code, quote=True)}">'
            f"{highlighted}{run_link}</div>"
        )


class ExampleFenceExtension(Extension):
    """Register the fenced example preprocessor ahead of the HTML block parser."""

    def __init__(self, **kwargs: object) -> None:
        self.config = {
            "css_class": ["highlight", "CSS class wrapping highlighted code."],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        formatter = HtmlFormatter(cssclass=self.getConfig("css_class"))
        md.registerExtension(self)
        setattr(md, PLAYGROUND_ATTRIBUTE, False)
        md.preprocessors.register(
            _ExampleFencePreprocessor(md, formatter), "docsmith_example_fences", 25
        )

    def reset(self) -> None:
        return


def makeExtension(**kwargs: object) -> ExampleFenceExtension:  # pragma: no cover - API hook  # noqa: N802
    return ExampleFenceExtension(**kwargs)


__all__ = ["PLAYGROUND_ATTRIBUTE", "ExampleFenceExtension", "makeExtension"]
