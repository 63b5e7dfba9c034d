from __future__ import annotations

import json
import sys

import pytest

from orginline import cli
from orginline import messages as m


def runCli(monkeypatch, capsys, *args: str) -> str:
    monkeypatch.setattr(sys, "argv", ["orginline", "--print", "plain", *args])
    with m.withMessageState(silent=False):
        cli.main()
    return capsys.readouterr().out


def test_parse_json(monkeypatch, capsys):
    out = runCli(monkeypatch, capsys, "parse", "--json", "--text", "*a* b")
    assert json.loads(out) == [
        {"type": "Emphasis", "kind": "Bold", "children": [{"type": "Plain", "text": "a"}]},
        {"type": "Plain", "text": " b"},
    ]


def test_parse_json_spans(monkeypatch, capsys):
    out = runCli(monkeypatch, capsys, "parse", "--json", "--spans", "--text", "x")
    assert json.loads(out) == [{"type": "Plain", "span": [0, 1], "text": "x"}]


def test_parse_file_shares_a_session(monkeypatch, capsys, tmp_path):
    path = tmp_path / "doc.org"
    path.write_text("[fn::a]\n[fn::b]\n", encoding="utf-8")
    out = runCli(monkeypatch, capsys, "parse", "--json", str(path))
    names = [json.loads(line)[0]["name"] for line in out.splitlines()]
    assert names == ["_anon_1", "_anon_2"]


def test_parse_tree(monkeypatch, capsys):
    out = runCli(monkeypatch, capsys, "parse", "--text", "[[x]]")
    assert "Link" in out
    assert "'x'" in out


def test_text(monkeypatch, capsys):
    out = runCli(monkeypatch, capsys, "text", "--text", "*bold* [[u][label]] \\alpha")
    assert out == "bold label α\n"


def test_entities_lookup(monkeypatch, capsys):
    out = runCli(monkeypatch, capsys, "entities", "alpha")
    assert "unicode" in out
    assert "α" in out


def test_entities_file(monkeypatch, capsys, tmp_path):
    path = tmp_path / "extra.json"
    path.write_text(json.dumps({"smiley": "☺"}), encoding="utf-8")
    out = runCli(monkeypatch, capsys, "text", "--entities", str(path), "--text", "\\smiley")
    assert out == "☺\n"


def test_bad_entities_file_dies(monkeypatch, capsys, tmp_path):
    path = tmp_path / "extra.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        runCli(monkeypatch, capsys, "text", "--entities", str(path), "--text", "x")
    assert exc.value.code == 2


def test_lines_from_text():
    assert cli.linesFromText("a\r\nb\n") == ["a", "b"]
    assert cli.linesFromText("a\n\nb") == ["a", "", "b"]
    assert cli.linesFromText("") == []


def test_test_subcommand(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        runCli(monkeypatch, capsys, "test", "--file", "dispatch")
    assert exc.value.code == 0
