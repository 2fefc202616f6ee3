"""Print document assembly and the print sink interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from visitsched.core.errors import PrintRejectedError
from visitsched.render.html import has_table

__all__ = [
    "PRINT_REJECTED_MESSAGE",
    "PRINT_STYLESHEET",
    "PrintSink",
    "build_print_document",
    "print_schedule",
]

PRINT_REJECTED_MESSAGE = "Please generate a schedule first!"

PRINT_STYLESHEET = """\
body {
    font-family: Arial, sans-serif;
    margin: 20px;
}
h1, h2 {
    text-align: center;
    color: #333;
}
table {
    width: 100%;
    border-collapse: collapse;
    margin-top: 20px;
}
th, td {
    border: 1px solid #000;
    padding: 8px;
    text-align: left;
}
th {
    background-color: #f2f2f2;
    color: #000;
}
@media print {
    body {
        margin: 0;
    }
}
"""


class PrintSink(ABC):
    """Destination for a finished print document.

    :func:`print_schedule` drives every sink through the same sequence: ``write`` the document,
    ``close`` it, ``trigger`` the print action, then ``release`` the sink.
    """

    @abstractmethod
    def write(self, document: str) -> None:
        """Receive the serialised HTML document."""

    @abstractmethod
    def close(self) -> None:
        """Finalise the document; no further writes follow."""

    @abstractmethod
    def trigger(self) -> None:
        """Start the print action for the finalised document."""

    def release(self) -> None:
        """Free any resources held by the sink."""


def build_print_document(fragment: str) -> str:
    """Wrap a rendered schedule fragment in a standalone, print-styled HTML page."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        "<title>Print Visit Schedule</title>\n"
        f"<style>\n{PRINT_STYLESHEET}</style>\n"
        "</head>\n"
        "<body>\n"
        f"{fragment}\n"
        "</body>\n"
        "</html>\n"
    )


def print_schedule(fragment: str | None, sink: PrintSink) -> str:
    """Send a previously rendered schedule to ``sink``.

    Returns the print document that was written.

    Raises
    ------
    PrintRejectedError
        If ``fragment`` is empty or holds no table. The sink is left untouched.
    """
    if not fragment or not has_table(fragment):
        raise PrintRejectedError(PRINT_REJECTED_MESSAGE)

    document = build_print_document(fragment)
    sink.write(document)
    sink.close()
    try:
        sink.trigger()
    finally:
        sink.release()
    return document
