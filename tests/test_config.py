from __future__ import annotations

import argparse
import importlib
import json

import pytest

from orginline.entities import DEFAULT_ENTITIES, EntityDef, entitiesFromJson, lookup
from orginline.inline import ParseConfig, Session, Stream


def test_default_config():
    config = ParseConfig()
    assert config.entities is DEFAULT_ENTITIES
    assert config.maxDepth == 20


def test_from_options(tmp_path):
    path = tmp_path / "e.json"
    path.write_text(json.dumps({"smiley": {"unicode": "☺", "ascii": ":)"}}), encoding="utf-8")
    config = ParseConfig.fromOptions(argparse.Namespace(entities=str(path)))
    assert config.entities["smiley"].ascii == ":)"
    assert config.entities["smiley"].html == "&smiley;"
    assert "alpha" in config.entities
    assert ParseConfig.fromOptions(argparse.Namespace()).entities == dict(DEFAULT_ENTITIES)


def test_entities_from_json():
    table = entitiesFromJson('{"x": "X"}')
    assert table["x"] == EntityDef("x", "\\x", False, "&x;", "x", "x", "X")
    with pytest.raises(ValueError):
        entitiesFromJson("[]")
    with pytest.raises(KeyError):
        entitiesFromJson('{"x": {"html": "&x;"}}')


def test_lookup():
    assert lookup("alpha").unicode == "α"
    assert lookup("nbsp").unicode == "\xa0"
    assert lookup("nosuchentity") is None
    assert lookup("alpha", {}) is None


def test_session_counter():
    session = Session()
    assert [session.nextAnonymousFootnote() for _ in range(3)] == ["_anon_1", "_anon_2", "_anon_3"]
    assert session.footnoteCounter == 3


def test_stream_locations():
    s = Stream("ab\ncd", config=ParseConfig(), session=Session())
    assert s.loc(0) == "1:1"
    assert s.loc(4) == "2:2"
    assert s[5] == ""
    assert s[-1] == ""


def test_sub_streams():
    s = Stream("xx*ab*", config=ParseConfig(), session=Session(), offset=10)
    sub = s.subStream(3, 5, context="test")
    assert sub.slice(0, None) == "ab"
    assert sub.span(0, 2) == (13, 15)
    assert sub.loc(1) == "1:2 of test"
    assert sub.session is s.session
    assert sub.depth == 2


def test_depth_limit():
    config = ParseConfig(maxDepth=2)
    s = Stream("abc", config=config, session=Session())
    sub = s.subStream(0, 2)
    with pytest.raises(RecursionError):
        sub.subStream(0, 1)


@pytest.mark.parametrize(
    "name",
    [
        "orginline",
        "orginline.inline",
        "orginline.inline.main",
        "orginline.inline.nodes",
        "orginline.inline.parser",
        "orginline.inline.preds",
        "orginline.inline.result",
        "orginline.inline.stream",
        "orginline.cli",
        "orginline.test",
    ],
)
def test_modules_import(name):
    assert importlib.import_module(name).__name__ == name
