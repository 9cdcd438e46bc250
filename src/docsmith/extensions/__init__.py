"""Python-Markdown extensions bundled with docsmith."""

from __future__ import annotations

from .examples import ExampleFenceExtension


__all__ = ["ExampleFenceExtension"]
