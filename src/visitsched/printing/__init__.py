"""Print support: document assembly, sink interface and concrete sinks."""

from visitsched.printing.base import (
    PRINT_REJECTED_MESSAGE,
    PRINT_STYLESHEET,
    PrintSink,
    build_print_document,
    print_schedule,
)
from visitsched.printing.factory import get_print_sink
from visitsched.printing.sinks import FilePrintSink, StreamPrintSink

__all__ = [
    "PRINT_REJECTED_MESSAGE",
    "PRINT_STYLESHEET",
    "PrintSink",
    "FilePrintSink",
    "StreamPrintSink",
    "build_print_document",
    "get_print_sink",
    "print_schedule",
]
