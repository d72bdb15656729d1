"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json

import pytest

from isochrones import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def request_file(tmp_path, request_body):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request_body), encoding="utf-8")
    return path


def test_dry_run_prints_summary(request_file, capsys):
    assert cli.main([str(request_file), "--dry-run"]) == 0

    summary = json.loads(capsys.readouterr().out)
    assert summary["calc_method"] == "fastisochrone"
    assert [t["id"] for t in summary["travellers"]] == ["0", "1"]
    assert summary["travellers"][0]["profile"] == "driving-car"
    assert summary["travellers"][0]["ranges"] == [300.0, 600.0]
    assert summary["isochrones"] == [
        {"traveller_id": "0", "empty": True, "features": 0},
        {"traveller_id": "1", "empty": True, "features": 0},
    ]


def test_reads_request_from_stdin(request_body, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(request_body)))
    assert cli.main(["-", "--dry-run"]) == 0
    assert json.loads(capsys.readouterr().out)["id"] is None


def test_invalid_request_reports_error_code(tmp_path, request_body, capsys):
    del request_body["range"]
    path = tmp_path / "request.json"
    path.write_text(json.dumps(request_body), encoding="utf-8")

    assert cli.main([str(path), "--dry-run"]) == 1

    error = json.loads(capsys.readouterr().err)["error"]
    assert error == {"code": 3001, "message": "Parameter 'range' is missing."}


def test_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / "absent.json")]) == 2
    assert "Cannot read request" in capsys.readouterr().err
