from __future__ import annotations

from .. import t

# Every grammar returns a (value, index, failed) triple.
# On success the index is just past the consumed text;
# on failure it is the untouched start index, so a failed trial
# never consumes input and the dispatcher can simply try the next one.

ValT = t.TypeVar("ValT")
OkT: t.TypeAlias = "tuple[ValT, int, t.Literal[False]]"
ErrT: t.TypeAlias = "tuple[None, int, t.Literal[True]]"
ResultT: t.TypeAlias = "OkT[ValT] | ErrT"


def Ok(val: ValT, index: int) -> OkT[ValT]:
    return (val, index, False)


def Err(index: int) -> ErrT:
    return (None, index, True)


def isOk(res: ResultT[ValT]) -> t.TypeIs[OkT[ValT]]:
    return not res[2]
