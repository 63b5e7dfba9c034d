from . import result
from .main import (
    concatPlains,
    nodesFromStream,
    parseInline,
    textFromNode,
    textFromNodes,
)
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
    nodeFromJson,
    nodesFromJson,
    nodesToJson,
    nodeToJson,
)
from .parser import (
    INLINE_GRAMMARS,
    Grammar,
    parseDelimitedSpan,
)
from .stream import (
    ParseConfig,
    Session,
    Stream,
)
