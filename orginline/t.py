# pylint: skip-file
# Types used across orginline, imported everywhere as `t`.
from __future__ import annotations

import sys

# Only these are needed at runtime; everything else is annotation-only.
from typing import TYPE_CHECKING, TypeVar

if sys.version_info >= (3, 11):
    from typing import assert_never
else:
    from typing_extensions import assert_never


if TYPE_CHECKING:
    from typing import (
        AbstractSet,
        Any,
        Callable,
        Generator,
        Iterable,
        Literal,
        Mapping,
        TextIO,
        TypeAlias,
    )

    from typing_extensions import TypeIs

    from .entities import EntityDef

    # The dict form of a node, url, cookie or timestamp record.
    JSONT: TypeAlias = dict[str, Any]

    # Entity name (without the backslash) to its definition.
    EntityTableT: TypeAlias = Mapping[str, EntityDef]

    # Half-open [start, end) offsets into the top-level input.
    SpanT: TypeAlias = tuple[int, int]
