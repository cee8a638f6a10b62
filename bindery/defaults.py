"""
Default value synthesis for target types.

Before any real argument is bound, the binding layer needs a concrete instance of the
target type (and of each member type). synthesize(tp) produces it, branching on mutability:

- mutable types (object, or a class exposing an assignable public member) are built
  through their parameterless construction path: tp().
- immutable types go through the immutable path:
  • a class with bindable members is built through the constructor whose positional
    parameters match, in order, the declared types of those members; each argument is
    synthesized recursively (frozen dataclasses, NamedTuples, hand-written records).
  • str → "".
  • an immutable sequence shape (Iterable[X], Sequence[X], Collection[X], tuple[X, ...])
    → an empty sequence of X.
  • anything else → its zero value (see default_value).

synthesize never answers with “no value”: it returns a concrete default or raises
ConstructionError naming the offending type.
"""
import collections.abc
import enum
import inspect
import types
import typing

from .faults import ConstructionError, FaultCode
from .hierarchy import _frozen, extract
from .shapes import element_type, is_optional, origin_of, strip, unwrap
from .utils import Unset


# abstract containers whose zero value is an instance of a concrete counterpart
_CONCRETE = {
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
    collections.abc.MutableSequence: list,
}

# abstract sequence shapes synthesized as an empty immutable sequence
_SEQUENCES = (
    collections.abc.Iterable,
    collections.abc.Collection,
    collections.abc.Sequence,
    collections.abc.Reversible,
)


def _is_class(tp):
    # list[int] and friends are aliases, not classes
    return typing.get_origin(tp) is None and isinstance(tp, type)


def _name(tp):
    return tp.__qualname__ if _is_class(tp) else repr(tp)


def is_mutable(tp, /):
    """
    Whether instances of tp can be filled in place after construction.

    Rules
    - object is mutable by convention.
    - non-classes (unions, Literal, generic aliases) and tuple subclasses / frozen
      dataclasses are immutable.
    - otherwise tp is mutable when one of its public members is assignable: a property
      with a setter, a public __slots__ entry, or a public annotated attribute on a
      class whose instances carry a __dict__.
    """
    tp = strip(tp)
    if tp is object:
        return True
    if not _is_class(tp) or _frozen(tp):
        return False

    carries_dict = any("__dict__" in vars(base) for base in tp.__mro__)
    for base in tp.__mro__[:-1]:
        namespace = vars(base)
        for name, attribute in namespace.items():
            if not name.startswith("_") and isinstance(attribute, property) and attribute.fset is not None:
                return True
        slots = namespace.get("__slots__", ())
        if any(not slot.startswith("_") for slot in ([slots] if isinstance(slots, str) else slots)):
            return True
        if carries_dict and any(
            not name.startswith("_") and typing.get_origin(strip(annotation)) is not typing.ClassVar
            for name, annotation in inspect.get_annotations(base).items()
        ):
            return True
    return False


def empty_sequence(element, /):
    """
    An empty immutable sequence meant to hold items of type element.
    """
    if element is None or element is Unset:
        raise TypeError("empty_sequence() argument must be an element type")
    return ()


def default_value(tp, /):
    """
    The zero value of a type, produced generically.

    - Optional[X] / X | None / Any / None → None
    - Literal["a", "b"]                     → "a"
    - Enum subclasses                       → first member
    - abstract Mapping/Set/MutableSequence  → empty concrete counterpart
    - everything else                       → tp() (0, False, 0.0, [], {}, ...)

    Raises
    - ConstructionError when none of the above yields an instance.
    """
    if is_optional(tp) or strip(tp) in (typing.Any, None, types.NoneType):
        return None
    tp = unwrap(tp)

    if typing.get_origin(tp) is typing.Literal:
        return typing.get_args(tp)[0]

    if (cls := origin_of(tp)) is None:
        raise ConstructionError(
            f"type {_name(tp)} has no default value",
            type=tp,
            hint="declare the member with a concrete class",
        )
    cls = _CONCRETE.get(cls, cls)

    if issubclass(cls, enum.Enum):
        try:
            return next(iter(cls))
        except StopIteration:
            raise ConstructionError(f"enumeration {_name(cls)} has no members", type=tp) from None

    try:
        return cls()
    except Exception as exception:
        raise ConstructionError(
            f"type {_name(cls)} cannot be constructed without arguments",
            type=tp,
            hint="give the type a parameterless constructor",
        ) from exception


def default_for_immutable(tp, /):
    """
    Default of an immutable type: "", an empty sequence, a tuple of defaults, or its zero value.
    """
    if is_optional(tp):
        return None
    tp = unwrap(tp)
    if tp is str:
        return ""

    origin = typing.get_origin(tp)
    if (origin or tp) in _SEQUENCES:
        return empty_sequence(element_type(tp))
    if origin is tuple:
        arguments = typing.get_args(tp)
        if len(arguments) == 2 and arguments[1] is Ellipsis:
            return empty_sequence(element_type(tp))
        return tuple(synthesize(argument) for argument in arguments)

    return default_value(tp)


def _parameters(cls):
    """
    Names and resolved types of the positional constructor parameters of cls, in order.

    Unannotated parameters resolve to inspect.Parameter.empty (they accept any type);
    string or forward-reference annotations are resolved against the class annotations
    of the same name. Unset when a required keyword-only parameter rules the constructor out.
    """
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError) as exception:
        raise ConstructionError(
            f"constructor of {_name(cls)} cannot be inspected",
            type=cls,
        ) from exception

    hints = Unset
    parameters = []
    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        if parameter.kind is parameter.KEYWORD_ONLY:
            if parameter.default is parameter.empty:
                return Unset
            continue
        annotation = parameter.annotation
        if isinstance(annotation, str | typing.ForwardRef):
            if hints is Unset:
                hints = typing.get_type_hints(cls, include_extras=True)
            annotation = hints.get(parameter.name, parameter.empty)
        parameters.append((parameter.name, strip(annotation)))
    return tuple(parameters)


def _matches(parameters, declared):
    if len(parameters) != len(declared):
        return False
    return all(
        parameter is inspect.Parameter.empty or parameter == unwrap(expected) or parameter == expected
        for (_, parameter), expected in zip(parameters, declared)
    )


def _arrange(parameters, members):
    """
    Member types in the order the constructor expects them, or Unset when none fits.

    Members are tried in extraction order first. When that fails and the constructor
    names exactly the bindable members (inherited dataclass fields come first in
    __init__), they are tried in constructor order.
    """
    if parameters is Unset:
        return Unset
    declared = [member.type for member in members]
    if _matches(parameters, declared):
        return declared
    by_name = {member.name: member.type for member in members}
    if [name for name, _ in parameters] != list(by_name) and {name for name, _ in parameters} == set(by_name):
        declared = [by_name[name] for name, _ in parameters]
        if _matches(parameters, declared):
            return declared
    return Unset


def _construct(cls, members):
    """
    Build cls through the constructor matching the types of its bindable members.
    """
    if (declared := _arrange(_parameters(cls), members)) is Unset:
        raise ConstructionError(
            f"no constructor of {_name(cls)} accepts ({', '.join(_name(member.type) for member in members)})",
            type=cls,
            code=FaultCode.CONSTRUCTOR_MISMATCH,
            hint="declare the constructor parameters in the same order as the bindable members",
        )
    arguments = [synthesize(tp) for tp in declared]
    try:
        return cls(*arguments)
    except Exception as exception:
        raise ConstructionError(
            f"constructor of {_name(cls)} rejected its default arguments",
            type=cls,
        ) from exception


def _fill(instance, members):
    """
    Give every writable bindable member the instance still lacks a synthesized value.
    """
    for member in members:
        if not member.writable or hasattr(instance, member.name):
            continue
        try:
            setattr(instance, member.name, synthesize(member.type))
        except ConstructionError:
            raise
        except Exception as exception:
            raise ConstructionError(
                f"member {member.name!r} of {_name(type(instance))} cannot receive its default",
                type=type(instance),
                member=member,
            ) from exception
    return instance


def synthesize(tp, /):
    """
    A safe, concrete default for tp.

    Examples
    - synthesize(str)                -> ""
    - synthesize(int)                -> 0
    - synthesize(Iterable[int])      -> ()
    - synthesize(Options)            -> Options()           # mutable class
    - synthesize(Point)              -> Point(0, 0)         # frozen, (x: int, y: int)

    Mutable instances are built with tp(); bindable members left without a value
    (annotated but never assigned) then receive their own synthesized default.

    Immutable classes are built positionally from their bindable members in extraction
    order (most-derived class first). When the constructor lists them differently, as a
    frozen dataclass inheriting fields does, its own parameter names decide the order.

    Raises
    - ConstructionError when the required construction path is missing or throws.
    """
    if is_optional(tp):
        return None
    tp = strip(tp)

    if is_mutable(tp):
        try:
            instance = tp()
        except Exception as exception:
            raise ConstructionError(
                f"mutable type {_name(tp)} cannot be constructed without arguments",
                type=tp,
                hint="give every bindable member a default value",
            ) from exception
        return _fill(instance, extract(tp)) if _is_class(tp) else instance

    if _is_class(tp) and (members := extract(tp)):
        return _construct(tp, members)
    return default_for_immutable(tp)


__all__ = (
    "is_mutable",
    "empty_sequence",
    "default_value",
    "default_for_immutable",
    "synthesize",
)
