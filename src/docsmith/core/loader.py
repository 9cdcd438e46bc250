"""Load source documents and injected HTML fragments from disk."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import InputNotTextError, InputUnreadableError


@dataclass(slots=True, frozen=True)
class FragmentSet:
    """HTML snippets spliced verbatim into the page template."""

    in_header: str = ""
    before_content: str = ""
    after_content: str = ""


def load_text(path: str | Path, *, emitter: DiagnosticEmitter | None = None) -> str:
    """Read ``path`` fully and decode it as strict UTF-8.

    Raises :class:`InputUnreadableError` on any I/O failure and
    :class:`InputNotTextError` when the bytes are not valid UTF-8. A diagnostic
    naming the path is emitted before either is raised.
    """
    emitter = emitter or LoggingEmitter()
    source = Path(path)
    try:
        payload = source.read_bytes()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        message = f"error reading `{source}`: {reason}"
        emitter.error(message, exc)
        raise InputUnreadableError(message) from exc

    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        message = f"error reading `{source}`: not UTF-8"
        emitter.error(message, exc)
        raise InputNotTextError(message) from exc


def load_fragments(
    paths: Sequence[str | Path],
    *,
    emitter: DiagnosticEmitter | None = None,
) -> str | None:
    """Concatenate the files in ``paths``, each followed by a newline.

    Returns ``None`` as soon as one file fails to load.
    """
    chunks: list[str] = []
    for path in paths:
        try:
            content = load_text(path, emitter=emitter)
        except (InputUnreadableError, InputNotTextError):
            return None
        chunks.append(content)
        chunks.append("\n")
    return "".join(chunks)


def load_fragment_set(
    in_header: Sequence[str | Path] = (),
    before_content: Sequence[str | Path] = (),
    after_content: Sequence[str | Path] = (),
    *,
    emitter: DiagnosticEmitter | None = None,
) -> FragmentSet | None:
    """Load the three fragment lists, failing as a whole if any one fails."""
    header = load_fragments(in_header, emitter=emitter)
    before = load_fragments(before_content, emitter=emitter)
    after = load_fragments(after_content, emitter=emitter)
    if header is None or before is None or after is None:
        return None
    return FragmentSet(in_header=header, before_content=before, after_content=after)


__all__ = ["FragmentSet", "load_fragment_set", "load_fragments", "load_text"]
