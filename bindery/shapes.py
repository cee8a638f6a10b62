"""
Target shapes: how many values a member expects, derived from its declared type only.

- Shape.SWITCH   → bool members (presence-only flags).
- Shape.SCALAR   → str/bytes and every type not recognized below.
- Shape.SEQUENCE → any iterable container (list[int], tuple[str, ...], Iterable[Path], set, ...).

Unknown or unsupported types (Literal, multi-member unions, TypeVars, plain classes) fall
through to SCALAR; that is the documented default branch, not an error path.

Typing helpers
- strip(tp): remove Annotated wrappers.
- unwrap(tp): strip, then reduce Optional[X] / X | None to X.
- is_optional(tp): the declared type admits None.
- element_type(tp): item type of a homogeneous sequence type (Any when unknown).
"""
import collections.abc
import enum
import types
import typing


class Shape(enum.Enum):
    """
    Binding shape of a member.
    """
    SWITCH = "switch"
    SCALAR = "scalar"
    SEQUENCE = "sequence"


def strip(tp, /):
    """
    Remove any Annotated wrapper: Annotated[int, Option()] -> int.
    """
    while typing.get_origin(tp) is typing.Annotated:
        tp = typing.get_args(tp)[0]
    return tp


def _is_union(tp):
    return typing.get_origin(tp) in (typing.Union, types.UnionType)


def is_optional(tp, /):
    """
    True when the declared type is a union that includes None (Optional[X], X | None).
    """
    tp = strip(tp)
    return _is_union(tp) and types.NoneType in typing.get_args(tp)


def unwrap(tp, /):
    """
    Strip Annotated and reduce a two-member Optional to its payload type.

    Unions with more than one non-None member are returned unchanged.
    """
    tp = strip(tp)
    if is_optional(tp):
        payload = [arg for arg in typing.get_args(tp) if arg is not types.NoneType]
        if len(payload) == 1:
            return strip(payload[0])
    return tp


def origin_of(tp, /):
    """
    The runtime class behind a (possibly parametrized) type: list[int] -> list.

    Returns None for typing constructs that have no runtime class (Literal, unions, ...).
    """
    tp = unwrap(tp)
    if _is_union(tp):
        return None
    origin = typing.get_origin(tp) or tp
    return origin if isinstance(origin, type) else None


def element_type(tp, /):
    """
    Item type of a homogeneous sequence type.

    - list[int], Iterable[int], set[int], tuple[int, ...] -> int
    - tuple[int, str], bare list, dict[...]                -> Any
    """
    arguments = typing.get_args(unwrap(tp))
    match arguments:
        case (element,):
            return element
        case (element, tail) if tail is Ellipsis:
            return element
    return typing.Any


def classify(tp, /):
    """
    Map a declared type onto its binding shape.

    Examples
    - classify(bool)           -> Shape.SWITCH
    - classify(str)            -> Shape.SCALAR
    - classify(list[int])      -> Shape.SEQUENCE
    - classify(int)            -> Shape.SCALAR
    - classify(bool | None)    -> Shape.SWITCH
    """
    tp = unwrap(tp)
    if tp is bool:
        return Shape.SWITCH
    if (origin := origin_of(tp)) is None:
        return Shape.SCALAR
    if issubclass(origin, str | bytes):
        return Shape.SCALAR
    if issubclass(origin, collections.abc.Iterable) and not issubclass(origin, enum.Enum):
        return Shape.SEQUENCE
    return Shape.SCALAR


__all__ = (
    "Shape",
    "strip",
    "unwrap",
    "is_optional",
    "origin_of",
    "element_type",
    "classify",
)
