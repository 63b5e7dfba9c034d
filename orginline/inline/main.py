from __future__ import annotations

from .. import t
from .nodes import (
    Emphasis,
    Entity,
    FootnoteReference,
    InlineNode,
    LatexFragment,
    LatexMode,
    Link,
    Plain,
    Subscript,
    Superscript,
    Verbatim,
)
from .parser import concatPlains, nodesFromStream
from .stream import ParseConfig, Session, Stream


def parseInline(
    text: str,
    config: ParseConfig | None = None,
    session: Session | None = None,
) -> list[InlineNode]:
    """
    Parses one line/paragraph of Org text into a normalized list of inline nodes.

    Never fails: anything that isn't recognized markup comes back as Plain text,
    and the top-level spans cover `text` exactly.

    Pass the same `session` for every paragraph of a document,
    so anonymous footnotes get distinct names.
    """
    if config is None:
        config = ParseConfig()
    if session is None:
        session = Session()
    s = Stream(text, config=config, session=session)
    return nodesFromStream(s)


def textFromNodes(nodes: t.Iterable[InlineNode]) -> str:
    return "".join(textFromNode(node) for node in nodes)


def textFromNode(node: InlineNode) -> str:
    # The readable text of a node, with all the markup dropped.
    # Anything without readable text (code, timestamps, macros, cookies...)
    # contributes nothing.
    if isinstance(node, FootnoteReference):
        if node.definition is None:
            return ""
        return textFromNodes(node.definition)
    if isinstance(node, Link):
        return textFromNodes(node.label)
    if isinstance(node, (Emphasis, Subscript, Superscript)):
        return textFromNodes(node.children)
    if isinstance(node, (Plain, Verbatim)):
        return node.text
    if isinstance(node, LatexFragment):
        return node.text if node.mode is LatexMode.Inline else ""
    if isinstance(node, Entity):
        return node.entity.unicode
    return ""
