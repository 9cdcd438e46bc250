"""Markdown body rendering for standalone documents."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from html import escape, unescape
from threading import Lock
from typing import Any

import markdown

from docsmith.core.exceptions import MarkdownConversionError
from docsmith.extensions.examples import PLAYGROUND_ATTRIBUTE


__all__ = [
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "MarkdownConversionError",
    "MarkdownRenderer",
    "build_toc",
    "deduplicate_markdown_extensions",
    "get_renderer",
    "render_body",
    "reset_headers",
]


DEFAULT_MARKDOWN_EXTENSIONS = [
    "docsmith.extensions.examples:ExampleFenceExtension",
    "abbr",
    "admonition",
    "attr_list",
    "def_list",
    "footnotes",
    "tables",
    "toc",
]


DEFAULT_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "toc": {
        "permalink": False,
        "toc_depth": "1-6",
    },
}


def deduplicate_markdown_extensions(values: Iterable[str]) -> list[str]:
    """Remove duplicate extensions while preserving order and case."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


def build_toc(tokens: Sequence[Mapping[str, Any]], prefix: str = "") -> str:
    """Render ``toc_tokens`` as a nested list with hierarchical section numbers."""
    if not tokens:
        return ""
    items: list[str] = []
    for position, token in enumerate(tokens, start=1):
        number = f"{prefix}{position}"
        name = escape(unescape(str(token.get("name", ""))), quote=False)
        anchor = escape(str(token.get("id", "")), quote=True)
        children = build_toc(token.get("children") or (), prefix=f"{number}.")
        items.append(
            f'<li><a href="#{anchor}"><span class="secnum">{number}</span> {name}</a>'
            f"{children}</li>"
        )
    return f"<ul>{''.join(items)}</ul>"


class MarkdownRenderer:
    """Reusable Markdown processor rendering a document body with its TOC."""

    def __init__(self, extensions: Sequence[str] | None = None) -> None:
        active = deduplicate_markdown_extensions(
            extensions if extensions is not None else DEFAULT_MARKDOWN_EXTENSIONS
        )
        extension_configs = {
            name: dict(DEFAULT_EXTENSION_CONFIGS[name])
            for name in active
            if name in DEFAULT_EXTENSION_CONFIGS
        }
        try:
            self._processor = markdown.Markdown(
                extensions=active, extension_configs=extension_configs
            )
        except Exception as exc:  # pragma: no cover - library-controlled
            raise MarkdownConversionError(
                f"Failed to initialize Markdown processor: {exc}"
            ) from exc
        self.extensions = active
        self._lock = Lock()

    def reset_headers(self) -> None:
        """Forget heading ids, footnotes, and TOC state from earlier renders."""
        with self._lock:
            self._processor.reset()

    def render(self, text: str, *, playground: bool = False) -> str:
        """Return the HTML for ``text`` preceded by a numbered table of contents."""
        if not text.strip():
            return ""
        with self._lock:
            setattr(self._processor, PLAYGROUND_ATTRIBUTE, playground)
            try:
                html = self._processor.convert(text)
            except Exception as exc:  # pragma: no cover - library-controlled
                raise MarkdownConversionError(
                    f"Failed to convert Markdown source: {exc}"
                ) from exc
            tokens = getattr(self._processor, "toc_tokens", None) or []

        toc = build_toc(tokens)
        if not toc:
            return html
        return f'<nav id="TOC">{toc}</nav>\n{html}'


_DEFAULT_RENDERER: MarkdownRenderer | None = None
_DEFAULT_RENDERER_GUARD = Lock()


def get_renderer() -> MarkdownRenderer:
    """Return the process-wide renderer, creating it on first use."""
    global _DEFAULT_RENDERER
    with _DEFAULT_RENDERER_GUARD:
        if _DEFAULT_RENDERER is None:
            _DEFAULT_RENDERER = MarkdownRenderer()
        return _DEFAULT_RENDERER


def reset_headers() -> None:
    """Reset heading state on the process-wide renderer."""
    get_renderer().reset_headers()


def render_body(text: str, *, playground: bool = False) -> str:
    """Render ``text`` to HTML with a fresh heading state."""
    renderer = get_renderer()
    renderer.reset_headers()
    return renderer.render(text, playground=playground)
