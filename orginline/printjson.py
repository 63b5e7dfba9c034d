from __future__ import annotations

from . import t
from . import messages as m

if t.TYPE_CHECKING:
    from .inline import InlineNode


def printjson(x: t.Any, indent: str | int = 2, level: int = 0) -> str:
    """
    Renders anything with a JSON form (including objects with a __json__() method)
    for reading in a terminal:
    objects get one "key: value" line per key,
    lists of objects are separated by a rule,
    and other lists are printed inline.
    """
    if isinstance(indent, int):
        indent = " " * indent
    ret = formatValue(getjson(x), indent, level)
    if level == 0:
        ret = ret.removeprefix("\n")
    return ret


def printNodes(nodes: t.Iterable[InlineNode], withSpans: bool = False) -> str:
    return printjson([node.toJson(withSpans) for node in nodes])


def getjson(x: t.Any) -> t.Any:
    try:
        return x.__json__()
    except AttributeError:
        return x


def formatValue(x: t.Any, indent: str, level: int) -> str:
    if isinstance(x, dict):
        return formatObject(x, indent, level)
    if isinstance(x, (list, tuple)):
        items = [getjson(v) for v in x]
        if items and all(isinstance(v, dict) for v in items):
            rule = "\n" + (indent * level) + m.printColor("=" * 10, "blue")
            return rule.join(formatObject(v, indent, level) for v in items)
        inner = m.printColor(", ", "blue").join(formatPrimitive(v) for v in items)
        return m.printColor("[", "blue") + inner + m.printColor("]", "blue")
    return formatPrimitive(x)


def formatObject(x: dict[str, t.Any], indent: str, level: int) -> str:
    keyWidth = max((len(k) for k in x), default=0) + 2
    ret = ""
    for k, v in x.items():
        if k == "type":
            # Node, url and cookie variants get their type name highlighted.
            value = m.printColor(str(v), "yellow", "bold")
        else:
            value = formatValue(getjson(v), indent, level + 1)
        ret += "\n" + (indent * level) + m.printColor((k + ": ").ljust(keyWidth), "cyan") + value
    return ret


def formatPrimitive(x: t.Any) -> str:
    x = getjson(x)
    if isinstance(x, bool):
        return "true" if x else "false"
    if isinstance(x, (int, float)):
        return str(x)
    if isinstance(x, str):
        return repr(x)
    if x is None:
        return "null"
    msg = f"Could not print value: {x!r}"
    raise ValueError(msg)
