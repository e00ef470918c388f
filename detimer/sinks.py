"""Output sinks for tick and status lines.

- ``StreamSink`` appends lines to a text stream (stdout by default).
- ``FileSink`` keeps only the latest line in a file, rewriting it on each
  write, so overlay software reading the file always sees the current
  value.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from .errors import SinkIOError


class StreamSink:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so pytest's capsys replacement of stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def write(self, line: str) -> None:
        try:
            self.stream.write(line + "\n")
            self.stream.flush()
        except OSError as exc:
            raise SinkIOError(f"falha ao escrever na saída: {exc}") from exc

    def __repr__(self) -> str:
        return f"StreamSink({getattr(self.stream, 'name', self.stream)!r})"


class FileSink:
    """Truncates *path* on construction and on every write."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._replace("")

    @property
    def path(self) -> Path:
        return self._path

    def write(self, line: str) -> None:
        self._replace(line + "\n")

    def _replace(self, content: str) -> None:
        try:
            self._path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise SinkIOError(f"falha ao escrever em {self._path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"FileSink({str(self._path)!r})"


def open_sink(path: str | Path | None) -> StreamSink | FileSink:
    """A ``FileSink`` for *path*, or a stdout ``StreamSink`` when it is None."""
    if path is None:
        return StreamSink()
    return FileSink(path)
