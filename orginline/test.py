from __future__ import annotations

import dataclasses
import difflib
import io
import json
import os
import sys

from alive_progress import alive_it

from . import config, t
from . import messages as m
from .inline import Session, nodesToJson, parseInline

if t.TYPE_CHECKING:
    import argparse

# Each test is a NAME.org file of input lines, each parsed as its own
# paragraph (all in one Session), next to
# * NAME.json, the expected nodes: one line of JSON per input line
# * NAME.console.txt, the expected messages, if there are any
TEST_DIR = os.path.abspath(os.path.join(config.scriptPath(), "..", "tests", "golden"))
TEST_FILE_EXTENSIONS = (".org",)


@dataclasses.dataclass
class TestFilter:
    files: list[str] | None = None

    @staticmethod
    def fromOptions(options: argparse.Namespace) -> TestFilter:
        return TestFilter(files=options.files)


def testPaths(filters: TestFilter) -> list[str]:
    return sorted(findTestFiles(filters))


def findTestFiles(filters: TestFilter) -> t.Generator[str, None, None]:
    for root, _, filenames in os.walk(TEST_DIR):
        for filename in filenames:
            fullPath = os.path.join(root, filename)
            if not allowedPath(fullPath, filters):
                continue
            yield fullPath


def allowedPath(filePath: str, filters: TestFilter) -> bool:
    fileName = os.path.basename(filePath)
    if os.path.splitext(fileName)[1] not in TEST_FILE_EXTENSIONS:
        return False
    if filters.files:
        if not any(fileSubstring in fileName for fileSubstring in filters.files):
            return False
    return True


# The test name will be the path relative to the tests directory,
# or the path as given if the test is outside of that directory.
def testNameForPath(path: str) -> str:
    if path.startswith(TEST_DIR):
        return path[len(TEST_DIR) + 1 :]
    return path


def run(filters: TestFilter) -> bool:
    paths = testPaths(filters)
    if len(paths) == 0:
        m.p("No tests were found")
        return True
    numPassed = 0
    total = 0
    fails = []
    pathProgress = alive_it(paths, dual_line=True, length=20, file=sys.stdout)
    try:
        for path in pathProgress:
            testName = testNameForPath(path)
            pathProgress.text(testName)
            total += 1
            testOutput, testConsole = processTest(path)
            goldenOutput = readGolden(replaceExtension(path, ".json"))
            goldenConsole = readGolden(replaceExtension(path, ".console.txt"))
            if compare(testOutput, goldenOutput, path=path) and compare(testConsole, goldenConsole, path=path):
                numPassed += 1
            else:
                fails.append(testName)
    except UnicodeEncodeError:
        # On Windows, the alive_it() library throws this error
        # *sometimes*.
        pass
    if numPassed == total:
        m.p(m.printColor("✔ All tests passed.", color="green"))
        return True
    m.p(m.printColor(f"✘ {numPassed}/{total} tests passed.", color="red"))
    m.p(m.printColor("Failed Tests:", color="red"))
    for fail in fails:
        m.p("* " + fail)
    return False


def rebase(filters: TestFilter) -> bool:
    paths = testPaths(filters)
    if len(paths) == 0:
        m.p("No tests were found.")
        return True
    for path in alive_it(paths, dual_line=True, length=20, file=sys.stdout):
        testOutput, testConsole = processTest(path)
        with open(replaceExtension(path, ".json"), "w", encoding="utf-8") as fh:
            fh.write(testOutput)
        consolePath = replaceExtension(path, ".console.txt")
        if testConsole:
            with open(consolePath, "w", encoding="utf-8") as fh:
                fh.write(testConsole)
        elif os.path.exists(consolePath):
            os.remove(consolePath)
    return True


def processTest(path: str) -> tuple[str, str]:
    # Produces the test's serialized nodes and its console output.
    with open(path, encoding="utf-8") as fh:
        lines = fh.read().split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    session = Session()
    outputLines = []
    consoleFh = io.StringIO()
    with m.withMessageState(fh=consoleFh, printMode="plain", printOn="everything", dieOn="nothing", silent=False):
        for line in lines:
            nodes = parseInline(line, session=session)
            outputLines.append(json.dumps(nodesToJson(nodes), ensure_ascii=False) + "\n")
    return "".join(outputLines), consoleFh.getvalue()


def readGolden(path: str) -> str:
    # A missing golden file means "expect nothing".
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    except FileNotFoundError:
        return ""


def compare(suspect: str, golden: str, path: str) -> bool:
    if suspect == golden:
        return True
    m.p(f"FILE: {path}")
    for line in difflib.unified_diff(golden.split("\n"), suspect.split("\n"), fromfile="golden", tofile="suspect"):
        if line[0] == "-":
            m.p(m.printColor(line, color="red"))
        elif line[0] == "+":
            m.p(m.printColor(line, color="green"))
        else:
            m.p(line)
    m.p("")
    return False


def replaceExtension(path: str, newExtension: str) -> str:
    preDot, _ = os.path.splitext(path)
    return preDot + newExtension
