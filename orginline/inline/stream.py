from __future__ import annotations

import bisect
import dataclasses
import re
from dataclasses import dataclass, field

from .. import t
from ..entities import DEFAULT_ENTITIES, entitiesFromJson
from .result import Err, Ok, ResultT

if t.TYPE_CHECKING:
    import argparse


@dataclass
class ParseConfig:
    entities: t.EntityTableT = field(default_factory=lambda: DEFAULT_ENTITIES)
    # Shown in message locations, like "3:5 of footnote fn:1".
    context: str | None = None
    # How many sub-streams (nested emphasis, labels, definitions...)
    # can be open at once before constructs degrade to plain text.
    maxDepth: int = 20

    @staticmethod
    def fromOptions(options: argparse.Namespace) -> ParseConfig:
        entities = dict(DEFAULT_ENTITIES)
        entitiesPath = getattr(options, "entities", None)
        if entitiesPath:
            with open(entitiesPath, encoding="utf-8") as fh:
                entities.update(entitiesFromJson(fh.read()))
        return ParseConfig(entities=entities)


@dataclass
class Session:
    """
    State that outlives a single parse call.
    Share one Session across the lines/paragraphs of a single document
    so generated footnote names stay unique;
    use separate Sessions for unrelated documents.
    """

    footnoteCounter: int = 0

    def nextAnonymousFootnote(self) -> str:
        self.footnoteCounter += 1
        return f"_anon_{self.footnoteCounter}"


@dataclass
class Stream:
    _chars: str
    _len: int
    _lineBreaks: list[int]
    # Index of this stream's first char in the top-level input,
    # so nodes from sub-streams still get top-level spans.
    offset: int
    config: ParseConfig
    session: Session
    depth: int = 1

    def __init__(
        self,
        chars: str,
        config: ParseConfig,
        session: Session,
        offset: int = 0,
        depth: int = 1,
    ) -> None:
        if depth > config.maxDepth:
            msg = f"Inline parsing nested more than {config.maxDepth} levels deep."
            raise RecursionError(msg)
        self._chars = chars
        self._len = len(chars)
        self._lineBreaks = [i for i, char in enumerate(chars) if char == "\n"]
        self.offset = offset
        self.config = config
        self.session = session
        self.depth = depth

    def subStream(self, start: int, end: int, context: str | None = None) -> Stream:
        # A new stream over self[start:end], sharing config and session.
        # Raises RecursionError past config.maxDepth.
        newConfig = self.config if context is None else dataclasses.replace(self.config, context=context)
        return Stream(
            self.slice(start, end),
            config=newConfig,
            session=self.session,
            offset=self.offset + start,
            depth=self.depth + 1,
        )

    def __getitem__(self, key: int) -> str:
        if key < 0 or key >= self._len:
            return ""
        return self._chars[key]

    def slice(self, start: int | None, stop: int | None) -> str:
        if start is not None and start < 0:
            start = 0
        if stop is not None and stop < 0:
            stop = 0
        return self._chars[start:stop]

    def eof(self, index: int) -> bool:
        return index >= self._len

    def __len__(self) -> int:
        return self._len

    def span(self, start: int, end: int) -> t.SpanT:
        return (self.offset + start, self.offset + end)

    def line(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        return lineIndex + 1

    def col(self, index: int) -> int:
        lineIndex = bisect.bisect_left(self._lineBreaks, index)
        if lineIndex == 0:
            return index + 1
        startOfCol = self._lineBreaks[lineIndex - 1]
        return index - startOfCol

    def loc(self, index: int) -> str:
        rc = f"{self.line(index)}:{self.col(index)}"
        if self.config.context is None:
            return rc
        return f"{rc} of {self.config.context}"

    def startsWith(self, start: int, text: str) -> bool:
        return self._chars.startswith(text, start)

    def skipTo(self, start: int, text: str) -> ResultT[str]:
        # Skip forward until encountering `text`.
        # Produces the text encountered before this point.
        i = self._chars.find(text, start)
        if i == -1:
            return Err(start)
        return Ok(self.slice(start, i), i)

    def skipToSameLine(self, start: int, text: str) -> ResultT[str]:
        # Skips forward, but no further than the end of the current line.
        # Produces the text encounted before this point.
        i = start
        while not self.eof(i) and self[i] not in ("\n", "\r"):
            if self.startsWith(i, text):
                return Ok(self.slice(start, i), i)
            i += 1
        return Err(start)

    def takeWhile(self, start: int, pred: t.Callable[[str], bool]) -> ResultT[str]:
        # Produces the (possibly empty) run of chars matching `pred`.
        i = start
        while not self.eof(i) and pred(self[i]):
            i += 1
        return Ok(self.slice(start, i), i)

    def takeWhile1(self, start: int, pred: t.Callable[[str], bool]) -> ResultT[str]:
        # Same, but fails if the run is empty.
        text, i, _ = self.takeWhile(start, pred)
        if i == start:
            return Err(start)
        return Ok(text, i)

    def matchRe(self, start: int, pattern: re.Pattern) -> ResultT[re.Match]:
        match = pattern.match(self._chars, start)
        if match:
            return Ok(match, match.end())
        else:
            return Err(start)

    def searchRe(self, start: int, pattern: re.Pattern) -> ResultT[re.Match]:
        match = pattern.search(self._chars, start)
        if match:
            return Ok(match, match.end())
        else:
            return Err(start)
