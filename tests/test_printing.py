import io

import pytest

from visitsched.core.errors import PrintRejectedError
from visitsched.printing import (
    PRINT_REJECTED_MESSAGE,
    FilePrintSink,
    PrintSink,
    StreamPrintSink,
    build_print_document,
    get_print_sink,
    print_schedule,
)
from visitsched.render import render_message, render_schedule_html
from visitsched.schedule import compute_schedule


class RecordingSink(PrintSink):
    def __init__(self):
        self.calls = []
        self.document = None

    def write(self, document):
        self.calls.append("write")
        self.document = document

    def close(self):
        self.calls.append("close")

    def trigger(self):
        self.calls.append("trigger")

    def release(self):
        self.calls.append("release")


@pytest.fixture
def fragment(anchor):
    return render_schedule_html(compute_schedule(anchor), "S-001")


def test_print_document_wraps_fragment(fragment):
    document = build_print_document(fragment)
    assert document.startswith("<!DOCTYPE html>")
    assert "<title>Print Visit Schedule</title>" in document
    assert "border-collapse: collapse;" in document
    assert "@media print" in document
    assert fragment in document


def test_print_sequence(fragment):
    sink = RecordingSink()
    document = print_schedule(fragment, sink)
    assert sink.calls == ["write", "close", "trigger", "release"]
    assert sink.document == document


@pytest.mark.parametrize("content", [None, "", "<p>Please enter both Subject ID</p>"])
def test_print_without_table_is_rejected(content):
    sink = RecordingSink()
    with pytest.raises(PrintRejectedError, match=PRINT_REJECTED_MESSAGE):
        print_schedule(content, sink)
    assert sink.calls == []


def test_rejected_print_leaves_no_file(tmp_path):
    target = tmp_path / "print.html"
    with pytest.raises(PrintRejectedError):
        print_schedule(render_message("nothing yet"), FilePrintSink(target))
    assert not target.exists()


def test_file_sink_writes_document(tmp_path, fragment):
    target = tmp_path / "out" / "print.html"
    sink = FilePrintSink(target)
    document = print_schedule(fragment, sink)
    assert target.read_text(encoding="utf-8") == document
    assert sink.closed
    assert sink.released


def test_file_sink_opens_browser_when_requested(tmp_path, fragment, monkeypatch):
    opened = []
    monkeypatch.setattr("visitsched.printing.sinks.webbrowser.open", opened.append)
    target = tmp_path / "print.html"
    print_schedule(fragment, FilePrintSink(target, open_browser=True))
    assert opened == [target.resolve().as_uri()]


def test_stream_sink(fragment):
    buffer = io.StringIO()
    document = print_schedule(fragment, StreamPrintSink(buffer))
    assert buffer.getvalue() == document


def test_factory(tmp_path):
    assert isinstance(get_print_sink("file", path=tmp_path / "x.html"), FilePrintSink)
    assert isinstance(get_print_sink("Stream"), StreamPrintSink)
    with pytest.raises(ValueError, match="Unsupported print sink"):
        get_print_sink("fax")
