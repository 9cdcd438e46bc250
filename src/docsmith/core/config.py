"""Configuration models for the render and test pipelines.

RenderOptions

`css` (`list[str]`)
: Stylesheet URLs linked from the page head, in cascade order.

`in_header` (`list[Path]`)
: Files whose contents are injected at the end of `<head>`.

`before_content` (`list[Path]`)
: Files injected at the start of `<body>`, before the title.

`after_content` (`list[Path]`)
: Files injected at the end of `<body>`.

`playground_url` (`str | None`)
: Base URL of the online code runner. When set, runnable examples receive a
  "Run" affordance and the URL is exposed as `window.playgroundUrl`.

TestOptions

`library_paths` (`list[Path]`)
: Directories prepended to `PYTHONPATH` when examples execute.

`test_args` (`list[str]`)
: Arguments forwarded to the doc-test harness (filters, `--format`, ...).
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class RenderOptions(BaseModel):
    """Options consumed by :func:`docsmith.core.pipeline.render_document`."""

    model_config = ConfigDict(extra="forbid")

    css: list[str] = Field(default_factory=list)
    in_header: list[Path] = Field(default_factory=list)
    before_content: list[Path] = Field(default_factory=list)
    after_content: list[Path] = Field(default_factory=list)
    playground_url: str | None = None

    @property
    def playground_enabled(self) -> bool:
        return self.playground_url is not None


class TestOptions(BaseModel):
    """Options consumed by :func:`docsmith.core.pipeline.test_document`."""

    model_config = ConfigDict(extra="forbid")

    library_paths: list[Path] = Field(default_factory=list)
    test_args: list[str] = Field(default_factory=list)


__all__ = ["RenderOptions", "TestOptions"]
