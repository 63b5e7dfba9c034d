from __future__ import annotations

import contextlib
import dataclasses
import io
import json
import sys
from collections import Counter

from . import t

MESSAGE_LEVELS = {
    "everything": 0,
    "message": 1,
    "lint": 2,
    "warning": 3,
    "fatal": 4,
    "nothing": 5,
}

PRINT_MODES = [
    "plain",
    "console",
    "json",
]

HEADINGS = {
    "fatal": ("FATAL ERROR", "red"),
    "lint": ("LINT", "yellow"),
    "warning": ("WARNING", "light cyan"),
}

COLORS = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "light gray": 37,
    "dark gray": 90,
    "light red": 91,
    "light green": 92,
    "light yellow": 93,
    "light blue": 94,
    "light magenta": 95,
    "light cyan": 96,
    "white": 97,
}

STYLES = {
    "normal": 0,
    "bold": 1,
    "dim": 2,
    "underline": 4,
    "invert": 7,
}


@dataclasses.dataclass(frozen=True)
class Message:
    """
    One diagnostic from a parse.

    `lineNum` is wherever the problem was found,
    usually a "line:col" string from Stream.loc(),
    possibly with the name of the footnote or link label it was in.
    """

    category: str
    text: str
    lineNum: str | int | None = None

    def __json__(self) -> t.JSONT:
        return {"lineNum": self.lineNum, "messageType": self.category, "text": self.text}


@dataclasses.dataclass()
class MessagesState:
    # What message category (or higher) to stop processing on
    dieOn: str = "fatal"
    # What message category (or higher) to print
    printOn: str = "everything"
    # Suppress *all* categories, *plus* the final success/fail message
    silent: bool = False
    printMode: str = "console"
    asciiOnly: bool = False
    # None means "whatever sys.stdout is when printing"
    fh: t.TextIO | None = None
    # Every distinct lint/warning/fatal reported so far, printed or not, in order.
    messages: list[Message] = dataclasses.field(default_factory=list)
    seenMessages: set[Message] = dataclasses.field(default_factory=set)

    @property
    def categoryCounts(self) -> Counter[str]:
        return Counter(msg.category for msg in self.messages)

    def record(self, msg: Message) -> bool:
        # Returns whether this is the first time the message was seen.
        if msg in self.seenMessages:
            return False
        self.seenMessages.add(msg)
        self.messages.append(msg)
        return True

    def replace(self, **kwargs: t.Any) -> MessagesState:
        return dataclasses.replace(self, messages=[], seenMessages=set(), **kwargs)

    def shouldDie(self, category: str) -> bool:
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.dieOn]

    def shouldPrint(self, category: str) -> bool:
        if self.silent:
            return False
        if category in ("success", "failure"):
            return True
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.printOn]

    @staticmethod
    def categoryName(categoryNum: int) -> str:
        assert categoryNum >= 0
        if categoryNum >= len(MESSAGE_LEVELS):
            return "nothing"
        return list(MESSAGE_LEVELS.keys())[categoryNum]


state = MessagesState()


def p(msg: str | tuple[str, str], sep: str | None = None, end: str | None = None) -> None:
    # A tuple is (text, ascii fallback).
    if isinstance(msg, tuple):
        msg, ascii = msg
    else:
        ascii = msg.encode("ascii", "replace").decode()
    if state.asciiOnly:
        msg = ascii
    fh = state.fh if state.fh is not None else sys.stdout
    try:
        print(msg, sep=sep, end=end, file=fh)
    except UnicodeEncodeError:
        print(ascii, sep=sep, end=end, file=fh)


def die(msg: str, lineNum: str | int | None = None) -> None:
    report(Message("fatal", msg, lineNum))


def lint(msg: str, lineNum: str | int | None = None) -> None:
    report(Message("lint", msg, lineNum))


def warn(msg: str, lineNum: str | int | None = None) -> None:
    report(Message("warning", msg, lineNum))


def report(msg: Message) -> None:
    if state.record(msg) and state.shouldPrint(msg.category):
        p(formatMessage(msg))
    if state.shouldDie(msg.category):
        errorAndExit()


def success(text: str) -> None:
    if state.shouldPrint("success"):
        p(formatMessage(Message("success", text)))


def failure(text: str) -> None:
    if state.shouldPrint("failure"):
        p(formatMessage(Message("failure", text)))


def printColor(text: str, color: str = "white", *styles: str) -> str:
    if state.printMode != "console":
        return text
    colorNum = COLORS[color.lower()]
    styleNum = ";".join(str(STYLES[style.lower()]) for style in styles)
    return f"\033[{styleNum};{colorNum}m{text}\033[0m"


def formatMessage(msg: Message) -> str | tuple[str, str]:
    if state.printMode == "json":
        # One object per line, so output can be streamed line by line.
        return json.dumps(msg.__json__(), ensure_ascii=False)
    if msg.category == "success":
        return (
            printColor(" ✔ ", "green", "invert") + " " + msg.text,
            printColor("YAY", "green", "invert") + " " + msg.text,
        )
    if msg.category == "failure":
        return (
            printColor(" ✘ ", "red", "invert") + " " + msg.text,
            printColor("ERR", "red", "invert") + " " + msg.text,
        )
    headingText, color = HEADINGS[msg.category]
    if msg.lineNum is not None:
        headingText = f"{headingText} at {msg.lineNum}"
    return printColor(headingText + ":", color, "bold") + " " + msg.text


def errorAndExit() -> None:
    failure("Stopped, due to errors exceeding the allowed error level.")
    sys.exit(2)


@contextlib.contextmanager
def withMessageState(
    fh: t.TextIO | None = None,
    **kwargs: t.Any,
) -> t.Generator[MessagesState, None, None]:
    """
    Swaps in a fresh MessagesState (based on the current one, with `kwargs` applied)
    for the duration of the block.

    The yielded state's `.messages` holds everything reported inside the block,
    which is how callers collect the diagnostics of a parse.
    """
    global state
    oldState = state
    state = oldState.replace(fh=fh, **kwargs)
    try:
        yield state
    finally:
        state = oldState


@contextlib.contextmanager
def messagesSilent() -> t.Generator[MessagesState, None, None]:
    with withMessageState(fh=io.StringIO(), silent=True) as silentState:
        yield silentState
