from __future__ import annotations

# Character classes used by the inline grammars.
# All take a single character, or "" for out-of-bounds reads
# (Stream returns "" past either end), and answer False for "".

WHITESPACE = " \t\n\r\f\v"

# Characters allowed right after a closing emphasis delimiter,
# besides whitespace and end of input.
EMPHASIS_FOLLOWERS = ".,!?\"')-:;[}"

# Characters that end a bare protocol://link.
BARE_LINK_STOPS = "[]<>{}()*$"


def isWhitespace(ch: str) -> bool:
    return ch != "" and ch in WHITESPACE


def isLineEnd(ch: str) -> bool:
    return ch in ("\n", "\r")


def isDigit(ch: str) -> bool:
    return ch != "" and ch in "0123456789"


def isASCIIAlpha(ch: str) -> bool:
    return ch != "" and ("a" <= ch <= "z" or "A" <= ch <= "Z")


def isCookieChar(ch: str) -> bool:
    return isDigit(ch) or ch in ("/", "%")


def isEmphasisFollower(ch: str) -> bool:
    # "" is end of input, which is always fine.
    return ch == "" or isWhitespace(ch) or ch in EMPHASIS_FOLLOWERS


def isBareLinkChar(ch: str) -> bool:
    return ch != "" and not isWhitespace(ch) and ch not in BARE_LINK_STOPS
