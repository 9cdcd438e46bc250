from __future__ import annotations

from html import unescape

from bs4 import BeautifulSoup

from docsmith.adapters.markdown import (
    DEFAULT_MARKDOWN_EXTENSIONS,
    MarkdownRenderer,
    build_toc,
    deduplicate_markdown_extensions,
    render_body,
)


def test_render_body_paragraph() -> None:
    assert render_body("Hello") == "<p>Hello</p>"


def test_empty_body_renders_nothing() -> None:
    renderer = MarkdownRenderer()

    assert renderer.render("") == ""
    assert renderer.render("  \n\n") == ""


def test_headings_produce_numbered_toc() -> None:
    html = render_body("# Intro\n\n## Setup\n\n## Usage\n\n# Reference\n")
    soup = BeautifulSoup(html, "html.parser")

    nav = soup.find("nav", id="TOC")
    assert nav is not None
    numbers = [span.get_text() for span in nav.find_all("span", class_="secnum")]
    assert numbers == ["1", "1.1", "1.2", "2"]
    assert nav.find("a")["href"] == "#intro"
    assert soup.find("h1", id="intro") is not None


def test_reset_headers_restarts_anchor_ids() -> None:
    renderer = MarkdownRenderer()

    renderer.reset_headers()
    first = renderer.render("# Same\n\n# Same\n")
    renderer.reset_headers()
    second = renderer.render("# Same\n")

    assert 'id="same"' in first
    assert 'id="same_1"' in first
    assert 'id="same"' in second
    assert "same_1" not in second


def test_reset_headers_restarts_footnotes() -> None:
    renderer = MarkdownRenderer()
    source = "Text[^note].\n\n[^note]: Details.\n"

    renderer.reset_headers()
    renderer.render(source)
    renderer.reset_headers()
    html = renderer.render(source)

    assert 'id="fn:note"' in html
    assert html.count('class="footnote"') == 1


def test_python_fence_is_highlighted_without_playground() -> None:
    html = render_body("```python\nprint('hi')\n```\n")
    soup = BeautifulSoup(html, "html.parser")

    wrapper = soup.find("div", class_="example-wrap")
    assert wrapper is not None
    assert "language-python" in wrapper["class"]
    assert wrapper.find("div", class_="highlight") is not None
    assert "playground" not in wrapper["class"]
    assert soup.find("a", class_="test-arrow") is None
    assert "print" in wrapper.get_text()


def test_playground_adds_run_affordance_to_python_examples() -> None:
    source = "```python\nprint(1 < 2)\n```\n\n```text\nplain\n```\n\n```python,ignore\nskip()\n```\n"
    soup = BeautifulSoup(render_body(source, playground=True), "html.parser")

    wrappers = soup.find_all("div", class_="example-wrap")
    assert len(wrappers) == 3
    runnable, text_block, ignored = wrappers
    assert "playground" in runnable["class"]
    assert unescape(runnable["data-code"]) == "print(1 < 2)\n"
    assert runnable.find("a", class_="test-arrow").get_text() == "Run"
    assert "playground" not in text_block["class"]
    assert "language-python" not in text_block["class"]
    assert "ignore" in ignored["class"]
    assert ignored.find("a", class_="test-arrow") is None


def test_playground_flag_does_not_leak_between_renders() -> None:
    renderer = MarkdownRenderer()
    source = "```python\nx = 1\n```\n"

    with_playground = renderer.render(source, playground=True)
    without_playground = renderer.render(source, playground=False)

    assert "test-arrow" in with_playground
    assert "test-arrow" not in without_playground


def test_fence_content_is_not_parsed_as_markdown() -> None:
    html = render_body("```\n# not a heading\n*still code*\n```\n")

    assert "<h1" not in html
    assert "<em>" not in html
    assert 'id="TOC"' not in html


def test_tables_extension_is_enabled() -> None:
    html = render_body("| a | b |\n|---|---|\n| 1 | 2 |\n")

    assert "<table>" in html


def test_build_toc_escapes_names() -> None:
    toc = build_toc([{"id": "x", "name": "A &amp; B", "children": []}])

    assert toc == '<ul><li><a href="#x"><span class="secnum">1</span> A &amp; B</a></li></ul>'


def test_build_toc_empty() -> None:
    assert build_toc([]) == ""


def test_extension_helpers() -> None:
    assert deduplicate_markdown_extensions(["toc", "TOC", "tables"]) == ["toc", "tables"]
    assert "toc" in DEFAULT_MARKDOWN_EXTENSIONS


def test_fence_nested_in_list_item_is_highlighted_in_place() -> None:
    html = render_body("1. Install it\n\n    ```python\n    x = 1\n    ```\n")
    soup = BeautifulSoup(html, "html.parser")

    item = soup.find("li")
    assert item is not None
    assert item.find("div", class_="example-wrap") is not None
    assert "```" not in html
