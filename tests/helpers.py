from __future__ import annotations

from orginline.inline import (
    Emphasis,
    FootnoteReference,
    InlineNode,
    Link,
    Plain,
    Subscript,
    Superscript,
)


def childLists(node: InlineNode) -> list[tuple[InlineNode, ...]]:
    if isinstance(node, (Emphasis, Subscript, Superscript)):
        return [node.children]
    if isinstance(node, Link):
        return [node.label]
    if isinstance(node, FootnoteReference) and node.definition is not None:
        return [node.definition]
    return []


def assertNormalized(nodes: tuple[InlineNode, ...] | list[InlineNode]) -> None:
    for a, b in zip(nodes, nodes[1:]):
        assert not (isinstance(a, Plain) and isinstance(b, Plain)), nodes
    for node in nodes:
        for children in childLists(node):
            assertNormalized(children)


def assertCovers(nodes: list[InlineNode], text: str) -> None:
    index = 0
    for node in nodes:
        assert node.span is not None
        assert node.span[0] == index, (node, index)
        assert node.span[1] > node.span[0]
        index = node.span[1]
    assert index == len(text)
