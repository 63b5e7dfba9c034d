from __future__ import annotations

import re
from dataclasses import dataclass

from .. import t
from .. import messages as m
from ..entities import lookup
from ..timestamp import Stamp, StampRange, looksLikeDate, parseDate, parseRepeater, parseTime
from . import preds
from .nodes import (
    Absolute,
    BreakLine,
    Code,
    ComplexUrl,
    Cookie,
    Emphasis,
    EmphasisKind,
    Entity,
    ExportSnippet,
    FileUrl,
    FootnoteReference,
    InlineNode,
    LatexFragment,
    LatexMode,
    Link,
    Macro,
    Percent,
    Plain,
    RadioTarget,
    SearchUrl,
    Subscript,
    Superscript,
    Target,
    Timestamp,
    TimestampKind,
    UrlT,
    Verbatim,
)
from .result import Err, Ok, ResultT, isOk
from .stream import Stream

# Where a plain-text run has to stop so the dispatcher gets another look:
# any character that can open a construct,
# a timestamp keyword at the start of a word,
# or a bare link's protocol at the start of a word.
# (Adding more just breaks Plain runs into smaller pieces,
#  which concatPlains() glues back together; it doesn't affect correctness.)
POSSIBLE_NODE_START_CHARS = "$\\<[{@=~*/_+^\n\r"
PLAIN_END_RE = re.compile(
    "["
    + re.escape(POSSIBLE_NODE_START_CHARS)
    + r"]|(?<!\S)(?:SCHEDULED|DEADLINE|CLOSED|CLOCK):|(?<![A-Za-z])[A-Za-z]+://",
)


def nodesFromStream(s: Stream, grammars: t.AbstractSet[str] | None = None) -> list[InlineNode]:
    # Consumes the whole stream, returning normalized nodes.
    return concatPlains(generateNodes(s, 0, grammars))


def generateNodes(
    s: Stream,
    start: int,
    grammars: t.AbstractSet[str] | None = None,
) -> t.Generator[InlineNode, None, None]:
    # Consumes the stream until eof, yielding nodes as the dispatcher finds them.
    if grammars is None:
        grammars = ALL_GRAMMARS
    i = start
    end = len(s)
    while i < end:
        node, i, _ = parseAnything(s, i, grammars)
        if node is None:
            return
        yield node


def concatPlains(nodes: t.Iterable[InlineNode]) -> list[InlineNode]:
    # Merges each run of adjacent Plain nodes into a single Plain.
    ret: list[InlineNode] = []
    for node in nodes:
        if isinstance(node, Plain) and ret and isinstance(ret[-1], Plain):
            last = ret[-1]
            span = None
            if last.span is not None and node.span is not None:
                span = (last.span[0], node.span[1])
            ret[-1] = Plain(last.text + node.text, span=span)
        else:
            ret.append(node)
    return ret


def parseAnything(s: Stream, start: int, grammars: t.AbstractSet[str]) -> ResultT[InlineNode]:
    """
    Tries each allowed grammar, in INLINE_GRAMMARS order,
    whose start chars match the current character;
    if none of them match, returns a Plain node up to the
    next possible node start.

    Unlike the individual grammars, this never fails
    unless the stream is at eof.
    """
    if s.eof(start):
        return Err(start)
    ch = s[start]
    for grammar in INLINE_GRAMMARS:
        if grammar.name not in grammars or not grammar.startsAt(ch):
            continue
        res = grammar.parse(s, start)
        if isOk(res):
            return res
    return parsePlain(s, start)


def parsePlain(s: Stream, start: int) -> ResultT[InlineNode]:
    # Always consumes at least one character,
    # so the dispatcher is guaranteed to make progress.
    if s.eof(start):
        return Err(start)
    match, _, _ = s.searchRe(start + 1, PLAIN_END_RE)
    end = match.start() if match is not None else len(s)
    return Ok(Plain(s.slice(start, end), span=s.span(start, end)), end)


def parseNested(
    s: Stream,
    start: int,
    end: int,
    grammars: t.AbstractSet[str],
    context: str | None = None,
) -> tuple[InlineNode, ...]:
    # Parses s[start:end] on its own, with a restricted set of grammars.
    try:
        subStream = s.subStream(start, end, context=context)
    except RecursionError as e:
        m.warn(f"{e} Leaving the rest as plain text.", lineNum=s.loc(start))
        return (Plain(s.slice(start, end), span=s.span(start, end)),)
    return tuple(nodesFromStream(subStream, grammars))


def atWordStart(s: Stream, start: int) -> bool:
    return s[start - 1] == "" or preds.isWhitespace(s[start - 1])


########################
# Emphasis
########################


EMPHASIS_KINDS = {kind.value: kind for kind in EmphasisKind}


def parseDelimitedSpan(s: Stream, start: int) -> ResultT[str]:
    """
    Scans a span like *foo* opening with the delimiter at s[start].
    Produces the text between the delimiters.

    No whitespace is allowed just inside either delimiter,
    the span can't cross a line,
    and the closing delimiter must be followed by
    whitespace, eof, or a bit of punctuation.
    """
    delim = s[start]
    contentStart = start + 1
    if s.eof(contentStart) or preds.isWhitespace(s[contentStart]):
        return Err(start)
    i = contentStart
    prev = ""
    while s[i] != delim:
        if s.eof(i) or preds.isLineEnd(s[i]):
            return Err(start)
        prev = s[i]
        i += 1
    if i == contentStart or preds.isWhitespace(prev):
        return Err(start)
    if not preds.isEmphasisFollower(s[i + 1]):
        return Err(start)
    return Ok(s.slice(contentStart, i), i + 1)


def parseEmphasis(s: Stream, start: int) -> ResultT[InlineNode]:
    kind = EMPHASIS_KINDS.get(s[start])
    if kind is None:
        return Err(start)
    text, i, _ = parseDelimitedSpan(s, start)
    if text is None:
        return Err(start)
    children = resolveNestedEmphasis(s, start + 1, i - 1)
    return Ok(Emphasis(kind, children, span=s.span(start, i)), i)


def resolveNestedEmphasis(s: Stream, contentStart: int, contentEnd: int) -> tuple[InlineNode, ...]:
    # The content of an emphasis span can hold more emphasis (and only that).
    # The sub-parse uses parseEmphasis itself, so any depth of nesting
    # is resolved by the time it returns.
    nodes = parseNested(s, contentStart, contentEnd, EMPHASIS_GRAMMARS)
    for node in nodes:
        if not isinstance(node, (Plain, Emphasis)):
            msg = f"Emphasis content at {s.loc(contentStart)} produced a {type(node).__name__} node."
            raise AssertionError(msg)
    # A lone Plain here is just the flat span text, so it can be used as-is.
    return nodes


def parseVerbatim(s: Stream, start: int) -> ResultT[InlineNode]:
    if s[start] != "=":
        return Err(start)
    text, i, _ = parseDelimitedSpan(s, start)
    if text is None:
        return Err(start)
    return Ok(Verbatim(text, span=s.span(start, i)), i)


def parseCode(s: Stream, start: int) -> ResultT[InlineNode]:
    if s[start] != "~":
        return Err(start)
    text, i, _ = parseDelimitedSpan(s, start)
    if text is None:
        return Err(start)
    return Ok(Code(text, span=s.span(start, i)), i)


def parseBreakLine(s: Stream, start: int) -> ResultT[InlineNode]:
    if s.startsWith(start, "\r\n"):
        end = start + 2
    elif preds.isLineEnd(s[start]):
        end = start + 1
    else:
        return Err(start)
    return Ok(BreakLine(span=s.span(start, end)), end)


########################
# Sub/superscripts
########################


def parseScriptBody(s: Stream, start: int, opener: str) -> ResultT[tuple[InlineNode, ...]]:
    # foo_{bar} or foo^{bar}; the body can't contain whitespace.
    if not s.startsWith(start, opener):
        return Err(start)
    bodyStart = start + len(opener)
    body, i, _ = s.takeWhile1(bodyStart, lambda ch: not preds.isWhitespace(ch) and ch != "}")
    if body is None or s[i] != "}":
        return Err(start)
    return Ok(parseNested(s, bodyStart, i, SCRIPT_GRAMMARS), i + 1)


def parseSubscript(s: Stream, start: int) -> ResultT[InlineNode]:
    children, i, _ = parseScriptBody(s, start, "_{")
    if children is None:
        return Err(start)
    return Ok(Subscript(children, span=s.span(start, i)), i)


def parseSuperscript(s: Stream, start: int) -> ResultT[InlineNode]:
    children, i, _ = parseScriptBody(s, start, "^{")
    if children is None:
        return Err(start)
    return Ok(Superscript(children, span=s.span(start, i)), i)


########################
# Entities, LaTeX, targets, snippets
########################


def parseEntity(s: Stream, start: int) -> ResultT[InlineNode]:
    # \alpha
    if s[start] != "\\":
        return Err(start)
    name, i, _ = s.takeWhile1(start + 1, preds.isASCIIAlpha)
    if name is None:
        return Err(start)
    entity = lookup(name, s.config.entities)
    if entity is None:
        m.lint(f"Unknown entity \\{name}, treating it as plain text.", lineNum=s.loc(start))
        return Ok(Plain(name, span=s.span(start, i)), i)
    return Ok(Entity(entity, span=s.span(start, i)), i)


def parseLatexFragment(s: Stream, start: int) -> ResultT[InlineNode]:
    """
    1. $content$, TeX delimiters for inline math.
    2. $$content$$, TeX delimiters for displayed math.
    3. \\( content \\), LaTeX delimiters for inline math.
    4. \\[ content \\], LaTeX delimiters for displayed math.
    """
    if s.startsWith(start, "$$"):
        text, i, _ = s.takeWhile1(start + 2, lambda ch: ch != "$")
        if text is None or not s.startsWith(i, "$$"):
            return Err(start)
        return Ok(LatexFragment(LatexMode.Displayed, text, span=s.span(start, i + 2)), i + 2)
    if s[start] == "$":
        text, i, _ = s.takeWhile1(start + 1, lambda ch: ch != "$")
        if text is None or s[i] != "$":
            return Err(start)
        return Ok(LatexFragment(LatexMode.Inline, text, span=s.span(start, i + 1)), i + 1)
    if s.startsWith(start, "\\("):
        closer, mode = "\\)", LatexMode.Inline
    elif s.startsWith(start, "\\["):
        closer, mode = "\\]", LatexMode.Displayed
    else:
        return Err(start)
    text, i, _ = s.skipTo(start + 2, closer)
    if text is None:
        return Err(start)
    return Ok(LatexFragment(mode, text, span=s.span(start, i + 2)), i + 2)


radioTargetRe = re.compile(r"<<<([^<>\r\n][^>\r\n]*)>>>")
targetRe = re.compile(r"<<([^<>\r\n][^>\r\n]*)>>")


def parseRadioTarget(s: Stream, start: int) -> ResultT[InlineNode]:
    match, i, _ = s.matchRe(start, radioTargetRe)
    if match is None:
        return Err(start)
    return Ok(RadioTarget(match[1], span=s.span(start, i)), i)


def parseTarget(s: Stream, start: int) -> ResultT[InlineNode]:
    match, i, _ = s.matchRe(start, targetRe)
    if match is None:
        return Err(start)
    return Ok(Target(match[1], span=s.span(start, i)), i)


exportSnippetRe = re.compile(r"@@([A-Za-z0-9-]+):([^\r\n]*?)@@")


def parseExportSnippet(s: Stream, start: int) -> ResultT[InlineNode]:
    # @@html:<b>bold</b>@@
    match, i, _ = s.matchRe(start, exportSnippetRe)
    if match is None:
        return Err(start)
    return Ok(ExportSnippet(match[1], match[2], span=s.span(start, i)), i)


########################
# Macros and cookies
########################


macroStartRe = re.compile(r"\{\{\{([^\s(){}]+)")


def parseMacro(s: Stream, start: int) -> ResultT[InlineNode]:
    # {{{name(arg1, arg2)}}}, or {{{name}}} without arguments.
    # Only recognized here; expanding them is someone else's job.
    match, i, _ = s.matchRe(start, macroStartRe)
    if match is None:
        return Err(start)
    name = match[1]
    if s.startsWith(i, "}}}"):
        return Ok(Macro(name, (), span=s.span(start, i + 3)), i + 3)
    if s[i] != "(":
        return Err(start)
    argText, i, _ = s.skipToSameLine(i + 1, ")}}}")
    if argText is None:
        return Err(start)
    if argText.strip() == "":
        arguments: tuple[str, ...] = ()
    else:
        arguments = tuple(arg.strip() for arg in argText.split(","))
    return Ok(Macro(name, arguments, span=s.span(start, i + 4)), i + 4)


cookieAbsoluteRe = re.compile(r"(\d+)/(\d+)")
cookiePercentRe = re.compile(r"(\d+)%")


def parseCookie(s: Stream, start: int) -> ResultT[InlineNode]:
    # [3/10] or [30%].
    # The bracket may hold any mix of digits, / and %;
    # it's a cookie if it *starts* with one of the two forms,
    # so [3/10/5] is still 3/10.
    if s[start] != "[":
        return Err(start)
    body, i, _ = s.takeWhile1(start + 1, preds.isCookieChar)
    if body is None or s[i] != "]":
        return Err(start)
    value: Percent | Absolute
    match = cookieAbsoluteRe.match(body)
    if match:
        value = Absolute(int(match[1]), int(match[2]))
    else:
        match = cookiePercentRe.match(body)
        if match is None:
            return Err(start)
        value = Percent(int(match[1]))
    return Ok(Cookie(value, span=s.span(start, i + 1)), i + 1)


########################
# Links and footnotes
########################


urlSchemeRe = re.compile(r"([A-Za-z][A-Za-z0-9+.-]*):(.*)", re.DOTALL)


def classifyUrl(url: str) -> UrlT:
    if url[0] in "/.":
        return FileUrl(url)
    match = urlSchemeRe.fullmatch(url)
    if match:
        return ComplexUrl(match[1], match[2])
    return SearchUrl(url)


def parseLink(s: Stream, start: int) -> ResultT[InlineNode]:
    # [[url][label]] or [[url]]
    if not s.startsWith(start, "[["):
        return Err(start)
    urlStart = start + 2
    url, urlEnd, _ = s.takeWhile1(urlStart, lambda ch: ch != "]")
    if url is None:
        return Err(start)
    if s.startsWith(urlEnd, "]]"):
        labelStart, labelEnd = urlEnd, urlEnd
        end = urlEnd + 2
    elif s.startsWith(urlEnd, "]["):
        labelStart = urlEnd + 2
        _, labelEnd, _ = s.takeWhile(labelStart, lambda ch: ch != "]")
        if not s.startsWith(labelEnd, "]]"):
            return Err(start)
        end = labelEnd + 2
    else:
        return Err(start)
    if labelStart == labelEnd:
        # No label, so the url doubles as one.
        labelStart, labelEnd = urlStart, urlEnd
    label = parseNested(s, labelStart, labelEnd, LABEL_GRAMMARS, context="link label")
    return Ok(Link(classifyUrl(url), label, span=s.span(start, end)), end)


bareLinkRe = re.compile(r"([A-Za-z]+)://")


def parseBareLink(s: Stream, start: int) -> ResultT[InlineNode]:
    # https://example.com, not inside a longer word
    if preds.isASCIIAlpha(s[start - 1]):
        return Err(start)
    match, i, _ = s.matchRe(start, bareLinkRe)
    if match is None:
        return Err(start)
    rest, end, _ = s.takeWhile1(i, preds.isBareLinkChar)
    if rest is None:
        return Err(start)
    span = s.span(start, end)
    label = (Plain(s.slice(start, end), span=span),)
    return Ok(Link(ComplexUrl(match[1], "//" + rest), label, span=span), end)


def parseBracketBody(s: Stream, start: int) -> ResultT[str]:
    # Scans to the ] matching an already-consumed [,
    # skipping over balanced inner brackets.
    # Produces the text between, ending at the index of the closing ].
    depth = 0
    i = start
    while not s.eof(i) and not preds.isLineEnd(s[i]):
        if s[i] == "[":
            depth += 1
        elif s[i] == "]":
            if depth == 0:
                return Ok(s.slice(start, i), i)
            depth -= 1
        i += 1
    return Err(start)


def parseFootnoteReference(s: Stream, start: int) -> ResultT[InlineNode]:
    # [fn::inline definition], [fn:name], or [fn:name:inline definition]
    if not s.startsWith(start, "[fn:"):
        return Err(start)
    i = start + 4
    if s[i] == ":":
        bodyStart = i + 1
        body, bodyEnd, _ = parseBracketBody(s, bodyStart)
        if not body:
            return Err(start)
        name = s.session.nextAnonymousFootnote()
    else:
        name, i, _ = s.takeWhile1(i, lambda ch: ch not in (":", "]") and not preds.isLineEnd(ch))
        if name is None:
            return Err(start)
        if s[i] == ":":
            i += 1
        bodyStart = i
        body, bodyEnd, _ = parseBracketBody(s, bodyStart)
        if body is None:
            return Err(start)
    definition = None
    if body:
        definition = parseNested(s, bodyStart, bodyEnd, FOOTNOTE_GRAMMARS, context=f"footnote {name}")
    return Ok(FootnoteReference(name, definition, span=s.span(start, bodyEnd + 1)), bodyEnd + 1)


########################
# Timestamps
########################


TIMESTAMP_KEYWORDS = {kind.value: kind for kind in TimestampKind if kind.value.endswith(":")}


def parseTimestamp(s: Stream, start: int) -> ResultT[InlineNode]:
    res = parseTimestampRange(s, start)
    if isOk(res):
        return res
    return parseGeneralTimestamp(s, start)


def parseTimestampKeyword(s: Stream, start: int) -> ResultT[TimestampKind]:
    # Produces the keyword's kind, and the index of the bracket after it.
    # A bare bracket is a plain Date.
    if s[start] in ("<", "["):
        return Ok(TimestampKind.Date, start)
    if not atWordStart(s, start):
        return Err(start)
    for keyword, kind in TIMESTAMP_KEYWORDS.items():
        if s.startsWith(start, keyword):
            _, i, _ = s.takeWhile(start + len(keyword), lambda ch: ch in (" ", "\t"))
            return Ok(kind, i)
    return Err(start)


def parseGeneralTimestamp(s: Stream, start: int) -> ResultT[InlineNode]:
    # DEADLINE: <2008-02-10 Sun +1w>, CLOCK: [2018-09-25 Tue 13:49], <2018-10-16 Tue>, ...
    kind, i, _ = parseTimestampKeyword(s, start)
    if kind is None:
        return Err(start)
    stamp, end, _ = parseStamp(s, i)
    if stamp is None:
        return Err(start)
    return Ok(Timestamp(kind, stamp, span=s.span(start, end)), end)


def parseStamp(s: Stream, start: int) -> ResultT[Stamp]:
    """
    Parses the bracketed part of a timestamp:
    <DATE [DAYNAME] [TIME] [REPEATER]>, or the same in [...] for inactive stamps.
    A lone token after the date is a repeater if it starts with + or .,
    otherwise a time.
    """
    if s[start] == "<":
        closer, active = ">", True
    elif s[start] == "[":
        closer, active = "]", False
    else:
        return Err(start)
    body, i, _ = s.takeWhile(start + 1, lambda ch: ch != closer and not preds.isLineEnd(ch))
    if s[i] != closer:
        return Err(start)
    tokens = body.split()
    if not tokens:
        return Err(start)
    date = parseDate(tokens[0])
    if date is None:
        if looksLikeDate(tokens[0]):
            m.warn(
                f"Invalid date '{tokens[0]}' in timestamp {s.slice(start, i + 1)}, treating it as plain text.",
                lineNum=s.loc(start),
            )
        return Err(start)
    rest = tokens[1:]
    if rest and rest[0].isalpha():
        # Day name; the date already says which day it is.
        rest = rest[1:]
    if len(rest) > 2:
        return Err(start)
    time = None
    repetition = None
    if len(rest) == 1 and rest[0][0] in ("+", "."):
        date, time, repetition = parseRepeater(rest[0], date, None, rest[0][0])
        if repetition is None:
            return Err(start)
    elif rest:
        time = parseTime(rest[0])
        if time is None:
            return Err(start)
        if len(rest) == 2:
            date, time, repetition = parseRepeater(rest[1], date, time, rest[1][0])
            if repetition is None:
                return Err(start)
    return Ok(Stamp(date, time, repetition, active), i + 1)


def stampFromTimestamp(node: InlineNode) -> Stamp | None:
    # Unwraps a single-stamp Timestamp node back into its Stamp.
    # Clock stamps can't be range endpoints.
    if not isinstance(node, Timestamp) or node.kind is TimestampKind.Clock:
        return None
    if isinstance(node.value, Stamp):
        return node.value
    return None


def parseTimestampRange(s: Stream, start: int) -> ResultT[InlineNode]:
    # <2004-08-23 Mon>--<2004-08-26 Thu>
    # CLOCK: [2018-09-25 Tue 13:49]--[2018-09-25 Tue 13:50]
    i = start
    isClock = False
    if atWordStart(s, start) and s.startsWith(start, TimestampKind.Clock.value):
        isClock = True
        _, i, _ = s.takeWhile(start + len(TimestampKind.Clock.value), lambda ch: ch in (" ", "\t"))
    first, i, _ = parseGeneralTimestamp(s, i)
    if first is None or not s.startsWith(i, "--"):
        return Err(start)
    second, end, _ = parseGeneralTimestamp(s, i + 2)
    if second is None:
        return Err(start)
    startStamp = stampFromTimestamp(first)
    stopStamp = stampFromTimestamp(second)
    if startStamp is None or stopStamp is None:
        return Err(start)
    kind = TimestampKind.Clock if isClock else TimestampKind.Range
    return Ok(Timestamp(kind, StampRange(startStamp, stopStamp), span=s.span(start, end)), end)


########################
# Dispatch
########################


@dataclass(frozen=True)
class Grammar:
    name: str
    # Characters the construct can start with;
    # the grammar isn't even tried anywhere else.
    startChars: str
    parse: t.Callable[[Stream, int], ResultT[InlineNode]]
    # Overrides startChars when set.
    startPred: t.Callable[[str], bool] | None = None

    def startsAt(self, ch: str) -> bool:
        if self.startPred is not None:
            return self.startPred(ch)
        return ch != "" and ch in self.startChars


# The order matters wherever two grammars share a start character:
# the first one that succeeds wins.
#  * LaTeX and timestamps come first; they claim $ \ < [
#    which entities, targets, cookies and links also use.
#  * Cookies come before footnotes and links, all starting with [.
#  * Radio targets (<<<x>>>) come before targets (<<x>>).
#  * Line breaks come before emphasis, so a newline never ends up inside a span.
#  * Emphasis comes before sub/superscripts, both starting with _.
INLINE_GRAMMARS: list[Grammar] = [
    Grammar("latex", "$\\", parseLatexFragment),
    Grammar("timestamp", "<[SDC", parseTimestamp),
    Grammar("entity", "\\", parseEntity),
    Grammar("macro", "{", parseMacro),
    Grammar("cookie", "[", parseCookie),
    Grammar("footnote", "[", parseFootnoteReference),
    Grammar("link", "[", parseLink),
    Grammar("bareLink", "", parseBareLink, startPred=preds.isASCIIAlpha),
    Grammar("radioTarget", "<", parseRadioTarget),
    Grammar("target", "<", parseTarget),
    Grammar("exportSnippet", "@", parseExportSnippet),
    Grammar("verbatim", "=", parseVerbatim),
    Grammar("code", "~", parseCode),
    Grammar("breakLine", "\n\r", parseBreakLine),
    Grammar("emphasis", "*/_+", parseEmphasis),
    Grammar("subscript", "_", parseSubscript),
    Grammar("superscript", "^", parseSuperscript),
]

ALL_GRAMMARS: frozenset[str] = frozenset(g.name for g in INLINE_GRAMMARS)
# Inside an emphasis span
EMPHASIS_GRAMMARS: frozenset[str] = frozenset({"emphasis"})
# Inside _{...} and ^{...}
SCRIPT_GRAMMARS: frozenset[str] = frozenset({"emphasis", "entity"})
# Inside a link label
LABEL_GRAMMARS: frozenset[str] = frozenset({"emphasis", "latex", "entity", "code", "subscript", "superscript"})
# Inside an inline footnote definition
FOOTNOTE_GRAMMARS: frozenset[str] = LABEL_GRAMMARS | {"link", "bareLink", "target"}
