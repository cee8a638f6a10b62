"""
Bindery utilities (small helpers shared by markers, hierarchy and binding).

Overview
- UnsetType / Unset
  • Singleton sentinel for “not provided”, distinct from None (None is a legitimate default).
  • Falsey, printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Materialize Unset into a concrete default; None/0/""/[] pass through untouched.

- rename(callable, name) / @rename("name")
  • Give generated callables (property getters, reprs) a stable __name__/__qualname__.

- mirror("attr")
  • Read-only property over a private backing field (self._attr), returning fresh
    container copies so marker metadata cannot be mutated through the public API.

- pluralize(text)
  • Best-effort English pluralization, used to derive default marker groups.

- kebabize(name)
  • snake_case / CamelCase member names into kebab-case option names.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> pluralize("value")
    'values'
    >>> kebabize("max_retries")
    'max-retries'
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for a value that was not provided.

    Marker metadata such as 'default' may legitimately be None, so the API needs a
    way to tell “omitted” apart from “given as None”. The single instance, Unset,
    is that marker.

    Characteristics
    - Falsey: bool(Unset) is False, yet Unset is neither None nor 0.
    - repr(Unset) -> "Unset".
    - Singleton: UnsetType() always yields the same instance.
    - Sealed: subclassing raises TypeError.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    Falsey values like None, 0, "" or () are preserved; only the sentinel is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or return a decorator doing so.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name)           -> decorator

    Raises
    - TypeError on wrong arity, a non-callable target, a non-string name, or a
      callable whose names cannot be updated (some built-ins).
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _detach(object):
    """
    Recursively copy containers: sequences become lists, mappings dicts, sets sets.
    Strings and scalars are returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str | bytes):
        return list(map(_detach, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_detach, object.values())))
    elif isinstance(object, Set):
        return set(map(_detach, object))
    return object


def mirror(name, /):
    """
    Define a read-only property reading self._{name}.

    Container values are handed out as detached copies (see _detach), so callers
    may freely mutate what they receive without touching the marker.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(text, /):
    """
    Best-effort English pluralizer for labels; only the last word of a phrase changes.

    Covers the regular s/sh/ch/x/z, consonant+y and f/fe rules, a few irregulars,
    and keeps the casing of the pluralized word.

    Examples
    - pluralize("value")         -> "values"
    - pluralize("option")        -> "options"
    - pluralize("command alias") -> "command aliases"
    - pluralize("Entry")         -> "Entries"
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")

    if not (match := re.search(r'(\S+)(\s*)$', text)):
        return text

    head, last, trail = text[:match.start(1)], match.group(1), match.group(2)
    lower = last.lower()

    irregulars = {
        "person": "people",
        "child": "children",
        "index": "indices",
        "matrix": "matrices",
        "datum": "data",
        "criterion": "criteria",
        "analysis": "analyses",
    }
    if lower in {"series", "species", "information", "metadata"}:
        plural = lower
    elif lower in irregulars:
        plural = irregulars[lower]
    elif lower.endswith(("s", "sh", "ch", "x", "z")):
        plural = lower + "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        plural = lower[:-1] + "ies"
    elif lower.endswith("fe") and len(lower) > 2:
        plural = lower[:-2] + "ves"
    elif lower.endswith("f") and len(lower) > 1:
        plural = lower[:-1] + "ves"
    else:
        plural = lower + "s"

    if last.isupper():
        plural = plural.upper()
    elif last[:1].isupper():
        plural = plural[:1].upper() + plural[1:]

    return head + plural + trail


@functools.cache
def kebabize(name, /):
    """
    Turn a Python member name into a kebab-case option word.

    Leading/trailing underscores are dropped, inner underscores become hyphens and
    CamelCase humps are split.

    Examples
    - kebabize("max_retries") -> "max-retries"
    - kebabize("Verbose")     -> "verbose"
    - kebabize("OutputDir")   -> "output-dir"
    """
    if not isinstance(name, str):
        raise TypeError("kebabize() argument must be a string")
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name.strip("_"))
    return re.sub(r"_+", "-", name).lower()


Unset = UnsetType()
"""
The “not provided” sentinel.

Use it as a parameter default when None is a meaningful user value, then
materialize with coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "kebabize",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
