"""Tests for result rendering (cli/output.py)."""

from __future__ import annotations

import json
import sys

import pytest

from socket_cli.cli.output import emit_rows, markdown_table, to_json

COLUMNS = (("name", "Name"), ("plan", "Plan"))
ROWS = [{"name": "Alpha", "plan": "team"}, {"name": "B|eta", "plan": None}]


def test_markdown_table_layout() -> None:
    assert markdown_table(COLUMNS, ROWS).splitlines() == [
        "| Name   | Plan |",
        "| ------ | ---- |",
        "| Alpha  | team |",
        "| B\\|eta |      |",
    ]


def test_markdown_nested_values_are_json() -> None:
    table = markdown_table((("tags", "Tags"),), [{"tags": ["a", "b"]}])
    assert '["a", "b"]' in table


def test_to_json_handles_non_serialisable() -> None:
    assert json.loads(to_json({"path": object})) == {"path": str(object)}


class TestEmitRows:
    def test_json_defaults_to_rows(self, capsys: pytest.CaptureFixture[str]) -> None:
        emit_rows("Orgs", COLUMNS, ROWS, as_json=True)
        assert json.loads(capsys.readouterr().out) == ROWS

    def test_json_prefers_raw(self, capsys: pytest.CaptureFixture[str]) -> None:
        emit_rows("Orgs", COLUMNS, ROWS, as_json=True, raw={"organizations": {}})
        assert json.loads(capsys.readouterr().out) == {"organizations": {}}

    def test_markdown_has_title(self, capsys: pytest.CaptureFixture[str]) -> None:
        emit_rows("Orgs", COLUMNS, ROWS, as_markdown=True)
        assert capsys.readouterr().out.startswith("# Orgs\n\n| Name")

    def test_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        emit_rows("Orgs", COLUMNS, ROWS)
        out = capsys.readouterr().out
        assert "Alpha" in out
        assert "Plan" in out

    def test_table_without_rich_falls_back(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setitem(sys.modules, "rich.table", None)
        emit_rows("Orgs", COLUMNS, ROWS)
        assert "| Alpha" in capsys.readouterr().out
