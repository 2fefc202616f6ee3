"""Print sink factory."""

from __future__ import annotations

from typing import Any

from visitsched.printing.base import PrintSink


def get_print_sink(kind: str, **kwargs: Any) -> PrintSink:
    """Return the print sink registered under ``kind``.

    Parameters
    ----------
    kind:
        ``"file"`` (requires ``path``; accepts ``open_browser``) or ``"stream"`` (accepts
        ``stream``).

    Raises
    ------
    ValueError
        If ``kind`` is not supported.
    """
    key = kind.lower()
    if key == "file":
        from visitsched.printing.sinks import FilePrintSink

        return FilePrintSink(**kwargs)
    if key == "stream":
        from visitsched.printing.sinks import StreamPrintSink

        return StreamPrintSink(**kwargs)
    raise ValueError(f"Unsupported print sink '{kind}'. Available: file, stream")


__all__ = ["get_print_sink"]
