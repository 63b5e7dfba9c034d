from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from .. import t
from ..entities import EntityDef
from ..timestamp import Stamp, StampRange


class EmphasisKind(Enum):
    Bold = "*"
    Italic = "/"
    Underline = "_"
    StrikeThrough = "+"


class LatexMode(Enum):
    Inline = "inline"
    Displayed = "displayed"


class TimestampKind(Enum):
    Scheduled = "SCHEDULED:"
    Deadline = "DEADLINE:"
    Closed = "CLOSED:"
    Clock = "CLOCK:"
    Date = ""
    Range = "--"


@dataclass(frozen=True)
class InlineNode(metaclass=ABCMeta):
    # Half-open range of the top-level input this node was parsed from.
    # Not part of a node's identity: two nodes with the same content are equal.
    span: t.SpanT | None = field(default=None, compare=False, repr=False, kw_only=True)

    def _jsonHeader(self, withSpans: bool) -> t.JSONT:
        data: t.JSONT = {"type": type(self).__name__}
        if withSpans and self.span is not None:
            data["span"] = list(self.span)
        return data

    @abstractmethod
    def toJson(self, withSpans: bool = False) -> t.JSONT:
        pass

    def __json__(self) -> t.JSONT:
        return self.toJson()


def _spanFromJson(data: t.JSONT) -> t.SpanT | None:
    span = data.get("span")
    if span is None:
        return None
    return (int(span[0]), int(span[1]))


def _freeze(nodes: t.Iterable[InlineNode]) -> tuple[InlineNode, ...]:
    return nodes if isinstance(nodes, tuple) else tuple(nodes)


@dataclass(frozen=True)
class Plain(InlineNode):
    text: str

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "text": self.text}


@dataclass(frozen=True)
class Code(InlineNode):
    text: str

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "text": self.text}


@dataclass(frozen=True)
class Verbatim(InlineNode):
    text: str

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "text": self.text}


@dataclass(frozen=True)
class BreakLine(InlineNode):
    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return self._jsonHeader(withSpans)


@dataclass(frozen=True)
class Emphasis(InlineNode):
    kind: EmphasisKind
    children: tuple[InlineNode, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze(self.children))

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {
            **self._jsonHeader(withSpans),
            "kind": self.kind.name,
            "children": nodesToJson(self.children, withSpans),
        }


@dataclass(frozen=True)
class Subscript(InlineNode):
    children: tuple[InlineNode, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze(self.children))

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "children": nodesToJson(self.children, withSpans)}


@dataclass(frozen=True)
class Superscript(InlineNode):
    children: tuple[InlineNode, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _freeze(self.children))

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "children": nodesToJson(self.children, withSpans)}


@dataclass(frozen=True)
class FileUrl:
    path: str


@dataclass(frozen=True)
class SearchUrl:
    term: str


@dataclass(frozen=True)
class ComplexUrl:
    protocol: str
    link: str


UrlT: t.TypeAlias = "FileUrl | SearchUrl | ComplexUrl"


def urlToJson(url: UrlT) -> t.JSONT:
    if isinstance(url, FileUrl):
        return {"type": "File", "path": url.path}
    elif isinstance(url, SearchUrl):
        return {"type": "Search", "term": url.term}
    elif isinstance(url, ComplexUrl):
        return {"type": "Complex", "protocol": url.protocol, "link": url.link}
    else:
        t.assert_never(url)


def urlFromJson(data: t.JSONT) -> UrlT:
    if data["type"] == "File":
        return FileUrl(data["path"])
    if data["type"] == "Search":
        return SearchUrl(data["term"])
    if data["type"] == "Complex":
        return ComplexUrl(data["protocol"], data["link"])
    msg = f"Unknown url type '{data['type']}'."
    raise ValueError(msg)


@dataclass(frozen=True)
class Link(InlineNode):
    url: UrlT
    label: tuple[InlineNode, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "label", _freeze(self.label))

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {
            **self._jsonHeader(withSpans),
            "url": urlToJson(self.url),
            "label": nodesToJson(self.label, withSpans),
        }


@dataclass(frozen=True)
class Target(InlineNode):
    name: str

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "name": self.name}


@dataclass(frozen=True)
class RadioTarget(InlineNode):
    name: str

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "name": self.name}


@dataclass(frozen=True)
class FootnoteReference(InlineNode):
    name: str
    definition: tuple[InlineNode, ...] | None = None

    def __post_init__(self) -> None:
        if self.definition is not None:
            object.__setattr__(self, "definition", _freeze(self.definition))

    @property
    def anonymous(self) -> bool:
        return self.name.startswith("_anon_")

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {
            **self._jsonHeader(withSpans),
            "name": self.name,
            "definition": None if self.definition is None else nodesToJson(self.definition, withSpans),
        }


@dataclass(frozen=True)
class Percent:
    value: int


@dataclass(frozen=True)
class Absolute:
    current: int
    max: int


@dataclass(frozen=True)
class Cookie(InlineNode):
    value: Percent | Absolute

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        if isinstance(self.value, Percent):
            value = {"type": "Percent", "value": self.value.value}
        else:
            value = {"type": "Absolute", "current": self.value.current, "max": self.value.max}
        return {**self._jsonHeader(withSpans), "value": value}


@dataclass(frozen=True)
class LatexFragment(InlineNode):
    mode: LatexMode
    text: str

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "mode": self.mode.name, "text": self.text}


@dataclass(frozen=True)
class Macro(InlineNode):
    name: str
    arguments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "name": self.name, "arguments": list(self.arguments)}


@dataclass(frozen=True)
class Entity(InlineNode):
    entity: EntityDef

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "entity": self.entity.__json__()}


@dataclass(frozen=True)
class Timestamp(InlineNode):
    kind: TimestampKind
    value: Stamp | StampRange

    @property
    def isRange(self) -> bool:
        return isinstance(self.value, StampRange)

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "kind": self.kind.name, "value": self.value.__json__()}


@dataclass(frozen=True)
class ExportSnippet(InlineNode):
    backend: str
    content: str

    def toJson(self, withSpans: bool = False) -> t.JSONT:
        return {**self._jsonHeader(withSpans), "backend": self.backend, "content": self.content}


def nodeToJson(node: InlineNode, withSpans: bool = False) -> t.JSONT:
    return node.toJson(withSpans)


def nodesToJson(nodes: t.Iterable[InlineNode], withSpans: bool = False) -> list[t.JSONT]:
    return [nodeToJson(node, withSpans) for node in nodes]


def nodesFromJson(data: t.Iterable[t.JSONT]) -> list[InlineNode]:
    return [nodeFromJson(x) for x in data]


def nodeFromJson(data: t.JSONT) -> InlineNode:
    nodeType = data.get("type")
    span = _spanFromJson(data)
    if nodeType == "Plain":
        return Plain(data["text"], span=span)
    if nodeType == "Code":
        return Code(data["text"], span=span)
    if nodeType == "Verbatim":
        return Verbatim(data["text"], span=span)
    if nodeType == "BreakLine":
        return BreakLine(span=span)
    if nodeType == "Emphasis":
        return Emphasis(EmphasisKind[data["kind"]], nodesFromJson(data["children"]), span=span)
    if nodeType == "Subscript":
        return Subscript(nodesFromJson(data["children"]), span=span)
    if nodeType == "Superscript":
        return Superscript(nodesFromJson(data["children"]), span=span)
    if nodeType == "Link":
        return Link(urlFromJson(data["url"]), nodesFromJson(data["label"]), span=span)
    if nodeType == "Target":
        return Target(data["name"], span=span)
    if nodeType == "RadioTarget":
        return RadioTarget(data["name"], span=span)
    if nodeType == "FootnoteReference":
        definition = data.get("definition")
        return FootnoteReference(
            data["name"],
            None if definition is None else nodesFromJson(definition),
            span=span,
        )
    if nodeType == "Cookie":
        value = data["value"]
        if value["type"] == "Percent":
            return Cookie(Percent(value["value"]), span=span)
        return Cookie(Absolute(value["current"], value["max"]), span=span)
    if nodeType == "LatexFragment":
        return LatexFragment(LatexMode[data["mode"]], data["text"], span=span)
    if nodeType == "Macro":
        return Macro(data["name"], data["arguments"], span=span)
    if nodeType == "Entity":
        return Entity(EntityDef.fromJson(data["entity"]), span=span)
    if nodeType == "Timestamp":
        value = data["value"]
        stamp = StampRange.fromJson(value) if "start" in value else Stamp.fromJson(value)
        return Timestamp(TimestampKind[data["kind"]], stamp, span=span)
    if nodeType == "ExportSnippet":
        return ExportSnippet(data["backend"], data["content"], span=span)
    msg = f"Unknown inline node type '{nodeType}'."
    raise ValueError(msg)
