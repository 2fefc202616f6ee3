"""Concrete print sinks."""

from __future__ import annotations

import sys
import webbrowser
from pathlib import Path
from typing import TextIO

from visitsched.printing.base import PrintSink

__all__ = ["FilePrintSink", "StreamPrintSink"]


class FilePrintSink(PrintSink):
    """Write the print document to ``path``; optionally open it in the system browser.

    The browser's own print dialog does the actual printing, so ``trigger`` only hands the file
    over when ``open_browser`` is set.
    """

    def __init__(self, path: str | Path, *, open_browser: bool = False) -> None:
        self.path = Path(path)
        self.open_browser = open_browser
        self._chunks: list[str] = []
        self.closed = False
        self.released = False

    def write(self, document: str) -> None:
        if self.closed:
            raise RuntimeError(f"Print document {self.path} already closed")
        self._chunks.append(document)

    def close(self) -> None:
        if self.closed:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(self._chunks), encoding="utf-8")
        self.closed = True

    def trigger(self) -> None:
        if self.open_browser:
            webbrowser.open(self.path.resolve().as_uri())

    def release(self) -> None:
        self._chunks.clear()
        self.released = True


class StreamPrintSink(PrintSink):
    """Write the print document to a text stream (``sys.stdout`` by default).

    Whoever reads the stream does the printing, so ``trigger`` has nothing to start.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.closed = False

    def write(self, document: str) -> None:
        self.stream.write(document)

    def close(self) -> None:
        self.stream.flush()
        self.closed = True

    def trigger(self) -> None:
        pass
