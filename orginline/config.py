from __future__ import annotations

import os


def scriptPath(*pathSegs: str) -> str:
    # Paths relative to the orginline package directory.
    startPath = os.path.dirname(os.path.realpath(__file__))
    path = os.path.join(startPath, *pathSegs)
    return path


def readSemver() -> str | None:
    try:
        with open(scriptPath("semver.txt"), encoding="utf-8") as fh:
            return fh.read().strip()
    except FileNotFoundError:
        return None
