from __future__ import annotations

import io
import os
import sys

import pytest

from orginline import test as golden

PATHS = golden.testPaths(golden.TestFilter())


def test_golden_files_found():
    assert PATHS
    assert all(golden.testNameForPath(p).endswith(".org") for p in PATHS)


@pytest.mark.parametrize("path", PATHS, ids=golden.testNameForPath)
def test_golden(path):
    output, console = golden.processTest(path)
    assert output == golden.readGolden(golden.replaceExtension(path, ".json"))
    assert console == golden.readGolden(golden.replaceExtension(path, ".console.txt"))


def test_filter():
    paths = golden.testPaths(golden.TestFilter(files=["foot"]))
    assert [os.path.basename(p) for p in paths] == ["footnotes.org"]


def test_run_reports_success():
    assert golden.run(golden.TestFilter(files=["emphasis"]))


def test_rebase_round_trips(tmp_path, monkeypatch):
    (tmp_path / "one.org").write_text("*a* [fn::b]\n[fn::c]\n", encoding="utf-8")
    monkeypatch.setattr(golden, "TEST_DIR", str(tmp_path))
    assert golden.rebase(golden.TestFilter())
    assert (tmp_path / "one.json").read_text(encoding="utf-8").count("\n") == 2
    assert "_anon_2" in (tmp_path / "one.json").read_text(encoding="utf-8")
    assert not (tmp_path / "one.console.txt").exists()
    assert golden.run(golden.TestFilter())
    (tmp_path / "one.json").write_text("[]\n[]\n", encoding="utf-8")
    assert not golden.run(golden.TestFilter())


def test_progress_uses_current_stdout(tmp_path, monkeypatch):
    # The progress bar writes to whatever sys.stdout is when a run starts,
    # not whatever it was when the module was first imported.
    bars = []

    class RecordingBar:
        def __init__(self, items, **kwargs):
            self.items = list(items)
            self.file = kwargs.get("file")
            bars.append(self)

        def __iter__(self):
            return iter(self.items)

        def text(self, _):
            pass

    (tmp_path / "one.org").write_text("*a*\n", encoding="utf-8")
    monkeypatch.setattr(golden, "TEST_DIR", str(tmp_path))
    monkeypatch.setattr(golden, "alive_it", RecordingBar)
    out = io.StringIO()
    monkeypatch.setattr(sys, "stdout", out)
    assert golden.rebase(golden.TestFilter())
    assert golden.run(golden.TestFilter())
    assert [bar.file for bar in bars] == [out, out]
