import json
import re
from pathlib import Path

import pandas as pd
from typer.testing import CliRunner

from visitsched.cli.main import app
from visitsched.telemetry import read_jsonl

_ANSI_RE = re.compile(r"\x1B\[[0-9;?]*[ -/]*[@-~]")


def _text(result) -> str:
    return _ANSI_RE.sub("", result.output)


def _generate(*args: str):
    runner = CliRunner()
    return runner.invoke(app, ["generate", *args], prog_name="visitsched")


def test_generate_writes_artifacts(tmp_path: Path) -> None:
    html_path = tmp_path / "schedule.html"
    csv_path = tmp_path / "schedule.csv"
    json_path = tmp_path / "schedule.json"
    print_path = tmp_path / "print.html"
    log_path = tmp_path / "runs.jsonl"

    result = _generate(
        "--start-date",
        "2025-01-01",
        "--subject-id",
        "S-001",
        "--out-html",
        str(html_path),
        "--out-csv",
        str(csv_path),
        "--out-json",
        str(json_path),
        "--print-to",
        str(print_path),
        "--telemetry-log",
        str(log_path),
    )

    assert result.exit_code == 0, _text(result)
    output = _text(result)
    assert "Visit 10" in output
    assert "20-May-2026" in output

    assert "<table>" in html_path.read_text(encoding="utf-8")
    df = pd.read_csv(csv_path)
    assert df["visit_number"].tolist() == list(range(2, 11))
    summary = json.loads(json_path.read_text(encoding="utf-8"))
    assert summary["metadata"]["span_days"] == 504
    assert "<title>Print Visit Schedule</title>" in print_path.read_text(encoding="utf-8")

    record = read_jsonl(log_path)[0]
    assert record["status"] == "ok"
    assert record["metrics"]["visit_count"] == 9
    assert len(record["artifacts"]) == 4
    assert "S-001" not in log_path.read_text(encoding="utf-8")


def test_generate_missing_input_exits(tmp_path: Path) -> None:
    log_path = tmp_path / "runs.jsonl"
    result = _generate("--start-date", "2025-01-01", "--telemetry-log", str(log_path))
    assert result.exit_code == 1
    assert "Please enter both Subject ID" in _text(result)
    assert read_jsonl(log_path)[0]["status"] == "rejected"


def test_generate_date_only_variant() -> None:
    result = _generate("--start-date", "2024-02-29", "--no-require-subject")
    assert result.exit_code == 0, _text(result)
    assert "29-Feb-2024" in _text(result)


def test_generate_with_protocol_file(default_protocol_path: Path) -> None:
    result = _generate(
        "-d", "2025-01-01", "-s", "S-002", "--protocol", str(default_protocol_path)
    )
    assert result.exit_code == 0, _text(result)
    assert "31-Dec-2025" in _text(result)


def test_generate_rejects_bad_protocol(write_yaml) -> None:
    path = write_yaml("protocol:\n  interval_days: 0\n")
    result = _generate("-d", "2025-01-01", "-s", "S-002", "--protocol", str(path))
    assert result.exit_code != 0


def test_print_roundtrip_via_fragment(tmp_path: Path) -> None:
    html_path = tmp_path / "schedule.html"
    out_path = tmp_path / "print.html"
    generated = _generate("-d", "2025-01-01", "-s", "S-001", "--out-html", str(html_path))
    assert generated.exit_code == 0, _text(generated)

    runner = CliRunner()
    result = runner.invoke(
        app, ["print", str(html_path), "--out", str(out_path)], prog_name="visitsched"
    )
    assert result.exit_code == 0, _text(result)
    document = out_path.read_text(encoding="utf-8")
    assert document.startswith("<!DOCTYPE html>")
    assert "Visit Schedule for Subject ID: S-001" in document


def test_print_to_stdout(tmp_path: Path) -> None:
    html_path = tmp_path / "schedule.html"
    _generate("-d", "2025-01-01", "-s", "S-001", "--out-html", str(html_path))
    result = CliRunner().invoke(app, ["print", str(html_path)], prog_name="visitsched")
    assert result.exit_code == 0, _text(result)
    assert "<title>Print Visit Schedule</title>" in result.output


def test_print_without_table_rejected(tmp_path: Path) -> None:
    fragment = tmp_path / "empty.html"
    fragment.write_text("<p>Please enter both Subject ID</p>", encoding="utf-8")
    out_path = tmp_path / "print.html"
    result = CliRunner().invoke(
        app, ["print", str(fragment), "--out", str(out_path)], prog_name="visitsched"
    )
    assert result.exit_code == 1
    assert "Please generate a schedule first!" in _text(result)
    assert not out_path.exists()


def test_protocol_command_shows_gaps() -> None:
    result = CliRunner().invoke(app, ["protocol"], prog_name="visitsched")
    assert result.exit_code == 0, _text(result)
    output = _text(result)
    assert "Gaps (days): 56, 56, 56, 56, 56, 84, 56, 84" in output
    assert "total span 504 days" in output


def test_generate_out_of_range_date_exits(tmp_path: Path) -> None:
    print_path = tmp_path / "print.html"
    result = _generate("-d", "9999-06-01", "-s", "S-001", "--print-to", str(print_path))
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "outside the supported date range" in _text(result)
    assert not print_path.exists()


def test_print_records_telemetry(tmp_path: Path) -> None:
    html_path = tmp_path / "schedule.html"
    empty_path = tmp_path / "empty.html"
    out_path = tmp_path / "print.html"
    log_path = tmp_path / "runs.jsonl"
    _generate("-d", "2025-01-01", "-s", "S-001", "--out-html", str(html_path))
    empty_path.write_text("<p>nothing yet</p>", encoding="utf-8")

    runner = CliRunner()
    ok = runner.invoke(
        app,
        ["print", str(html_path), "--out", str(out_path), "--telemetry-log", str(log_path)],
        prog_name="visitsched",
    )
    rejected = runner.invoke(
        app, ["print", str(empty_path), "--telemetry-log", str(log_path)], prog_name="visitsched"
    )

    assert ok.exit_code == 0, _text(ok)
    assert rejected.exit_code == 1
    first, second = read_jsonl(log_path)
    assert first["command"] == "print"
    assert first["status"] == "ok"
    assert first["artifacts"] == [str(out_path)]
    assert second["status"] == "rejected"
    assert second["error"] == "Please generate a schedule first!"
