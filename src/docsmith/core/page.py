"""Standalone HTML page assembly."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, StrictUndefined


PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="generator" content="docsmith">
    <title>{{ title | e }}</title>

    {{ css }}
    {{ in_header }}
</head>
<body>
    <!--[if lte IE 8]>
    <div class="warning">
        This old browser is unsupported and will most likely display funky
        things.
    </div>
    <![endif]-->

    {{ before_content }}
    <h1 class="title">{{ title | e }}</h1>
    {{ body }}
    <script type="text/javascript">
        window.playgroundUrl = "{{ playground_url }}";
    </script>
    {{ after_content }}
</body>
</html>"""

# Only the title is escaped; every other slot is trusted HTML.
_ENVIRONMENT = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)
_TEMPLATE = _ENVIRONMENT.from_string(PAGE_TEMPLATE)


def stylesheet_links(urls: Iterable[str]) -> str:
    """Render one ``<link>`` line per stylesheet URL, preserving order."""
    return "".join(
        f'<link rel="stylesheet" type="text/css" href="{url}">\n' for url in urls
    )


def assemble_page(
    title: str,
    css_links: str,
    in_header: str,
    before_content: str,
    body_html: str,
    after_content: str,
    playground_url: str | None = None,
) -> str:
    """Instantiate the page template with the given slots."""
    return _TEMPLATE.render(
        title=title,
        css=css_links,
        in_header=in_header,
        before_content=before_content,
        body=body_html,
        after_content=after_content,
        playground_url=playground_url or "",
    )


def output_path_for(input_path: str | Path, output_dir: str | Path) -> Path:
    """Return ``<output_dir>/<input stem>.html``."""
    return Path(output_dir) / f"{Path(input_path).stem}.html"


__all__ = ["PAGE_TEMPLATE", "assemble_page", "output_path_for", "stylesheet_links"]
