from __future__ import annotations

import json
import sys

from tools import jieqi_check, lunar_check


def _run(monkeypatch, capsys, mod, *argv):
    monkeypatch.setattr(sys, "argv", [mod.__name__, *argv])
    mod.main()
    return capsys.readouterr().out


def test_lunar_check_json(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, lunar_check, "--start", "2020-05-22", "--end", "2020-05-23", "--json")
    rows = json.loads(out)["rows"]
    assert [r["lunar"]["label"] for r in rows] == ["04/30", "闰04/01"]


def test_lunar_check_text_out_of_table(monkeypatch, capsys):
    out = _run(monkeypatch, capsys, lunar_check, "--date", "1900-01-30")
    assert "out of table" in out


def test_jieqi_check_changes_only(monkeypatch, capsys):
    out = _run(
        monkeypatch, capsys, jieqi_check,
        "--start", "2024-02-01", "--end", "2024-03-10", "--changes-only", "--json",
    )
    rows = json.loads(out)["rows"]
    assert [(r["date"], r["short_name"]) for r in rows] == [
        ("2024-02-01", "丑月"),
        ("2024-02-04", "寅月"),
        ("2024-03-06", "卯月"),
    ]
