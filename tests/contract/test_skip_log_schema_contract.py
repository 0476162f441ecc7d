from __future__ import annotations

import json
from pathlib import Path

from sheet2site.cli import main as cli_main

SCHEMA_KEYS = {"timestamp", "source", "row", "error_type", "message"}
ERROR_TYPES = {"MISSING_FIELDS", "EMPTY_SLUG"}


def test_skip_log_records_follow_schema(temp_workdir: Path, sample_env, capsys):
    assert cli_main([]) == 0
    logs = list((temp_workdir / "logs").glob("skipped-*.log"))
    assert len(logs) == 1
    records = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert len(records) == 2
    for rec in records:
        assert set(rec) == SCHEMA_KEYS
        assert rec["error_type"] in ERROR_TYPES
        assert isinstance(rec["row"], int) and rec["row"] >= 2
        assert rec["timestamp"].endswith("Z")
    assert (records[0]["source"], records[0]["row"]) == ("posts", 3)
    assert (records[1]["source"], records[1]["row"]) == ("services", 4)
    assert f"Skipped rows recorded in: {Path('logs') / logs[0].name}" in capsys.readouterr().out


def test_no_skip_log_without_skips(temp_workdir: Path, clean_env, fake_google, monkeypatch, capsys):
    monkeypatch.setenv("SERVICE_URL", fake_google.add_sheet("s1", "title,description\nA,B\n"))
    monkeypatch.setenv("PROJECT_URL", fake_google.add_sheet("p1", "title,description\nC,D\n"))
    monkeypatch.setenv("CONTACT_URL", fake_google.add_sheet("c1", "field,value\nemail,a@b.c\n"))
    assert cli_main([]) == 0
    assert not (temp_workdir / "logs").exists()
