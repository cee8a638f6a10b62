r"""
Bindery markers: the annotations that make a member bindable.

Overview
- Markers
  • Value: positional operand marker (optionally pinned to an index).
  • Option: named option marker with zero or more aliases (e.g., -v/--verbose).
  Markers are attached through typing.Annotated, either on a class attribute or on the
  return annotation of a property getter:

      class Options:
          name: Annotated[str, Value(0)] = ""
          verbose: Annotated[bool, Option("-v", "--verbose")] = False

- Introspection & representation
  • MarkerType metaclass exposes the fields listed in __introspectable__ as read-only
    properties and provides stable __repr__/__rich_repr__.
  • marker_of(annotation) fetches the marker carried by an annotation, or Unset.

Metadata (sanitized on construction)
- Shared (all markers)
  • metavar: Unset | str (label in help), non-empty when provided.
  • default: any value, None included; Unset when omitted.
  • required: bool; a required marker cannot also carry a default.
  • group: Unset | str (defaults to the pluralized typename), non-empty when provided.
  • descr: Unset | str | Text (short help), non-empty when provided.
  • hidden / deprecated: bool.
- Value only
  • index: Unset | int (>= 0).
- Option only
  • names: str aliases validated as shell-style option names; duplicates rejected.
    An Option without names takes "--<kebab-member-name>" at extraction time.
  • separator: Unset | single non-blank character splitting multi-values upstream.

Validation highlights
- Names must match r"--?[^\W\d_](-?[^\W_]+)*".
- group/descr/metavar strings are trimmed; empty strings are rejected.
"""
import functools
import operator
import re
import typing

from rich.text import Text

from .utils import *


class MarkerType(type):
    """
    Metaclass that turns marker classes into introspectable metadata holders.

    Responsibilities
    - Derive __typename__ from the class name ("Value" -> "value").
    - Publish every name in __introspectable__ as a read-only property mirroring the
      private "_<name>" field written during construction.
    - Provide a compact __repr__ and a __rich_repr__ for pretty printers.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options,
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - option(names=('-v', '--verbose'), metavar=None, ...)
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the metadata shared by every marker.

    - metavar: Unset or a non-empty string after trimming; Unset becomes None.
    - group: Unset or a non-empty string; Unset becomes the pluralized typename
      ("values", "options").
    - descr: Unset, a non-empty string or a rich Text; Unset becomes None.
    - required/default: a required marker must not carry a default.

    Mutates metadata in place; raises TypeError/ValueError on bad input.
    """
    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)

    if not isinstance(group := metadata["group"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'group' must be a string")
    elif isinstance(group, str) and not (group := group.strip()):
        raise ValueError(f"{cls.__typename__} 'group' cannot be empty")
    metadata["group"] = coalesce(group, pluralize(cls.__typename__.replace("-", " ")))

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if metadata["required"] and metadata["default"] is not Unset:
        raise TypeError(f"required {cls.__typename__} cannot have a 'default'")


def _sanitize_positional_metadata(cls, metadata, /):
    """
    Internal: validate the index of a Value marker (Unset or an int >= 0).
    """
    if not isinstance(index := metadata["index"], int | Unset) or isinstance(index, bool):
        raise TypeError(f"{cls.__typename__} 'index' must be an integer")
    if isinstance(index, int) and index < 0:
        raise ValueError(f"{cls.__typename__} 'index' must be a non-negative integer")
    metadata["index"] = coalesce(index)


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate and normalize the names and separator of an Option marker.

    - names: each a non-empty string matching r"--?[^\W\d_](-?[^\W_]+)*", no duplicates;
      kept in declaration order (the first name is the primary one).
    - separator: Unset or exactly one non-whitespace character; Unset becomes None.
    """
    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif not re.fullmatch(r"--?[^\W\d_](-?[^\W_]+)*", name):
            raise ValueError(f"{cls.__typename__} names must be valid shell-style option names (unicodes are allowed)")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)
    metadata["names"] = tuple(names)

    if not isinstance(separator := metadata["separator"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'separator' must be a string")
    elif isinstance(separator, str) and (len(separator) != 1 or separator.isspace()):
        raise ValueError(f"{cls.__typename__} 'separator' must be a single non-blank character")
    metadata["separator"] = coalesce(separator)


class Marker(metaclass=MarkerType):
    """
    Common base of Value and Option; never attached directly.
    """

    __introspectable__ = ()

    def _publish(self, metadata, /):
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


class Value(Marker):
    """
    Positional operand marker.

    Marks a member that receives a positional (non-option) argument. Upstream layers
    order operands by 'index' when given, otherwise by extraction order.

    Properties
    - index, metavar, default, required, group, descr, hidden, deprecated (read-only).
    """

    __introspectable__ = (
        "index",
        "metavar",
        "default",
        "required",
        "group",
        "descr",
        "hidden",
        "deprecated",
    )

    def __new__(
            cls,
            index=Unset,
            /,
            metavar=Unset,
            default=Unset,
            required=False,
            group=Unset,
            descr=Unset,
            *,
            hidden=False,
            deprecated=False
    ):
        metadata = {
            "index": index,
            "metavar": metavar,
            "default": default,
            "required": bool(required),
            "group": group,
            "descr": descr,
            "hidden": bool(hidden),
            "deprecated": bool(deprecated),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_positional_metadata(cls, metadata)
        return super().__new__(cls)._publish(metadata)

    def __value__(self):
        """
        Introspection hook: identify this marker as a Value.
        """
        return self


class Option(Marker):
    """
    Named option marker.

    Marks a member that receives the value of a named option (or, for bool members,
    the presence of a switch).

    Highlights
    - Aliases via 'names' ("-v", "--verbose"); the first one is primary.
    - No names: the member name is kebabized into "--<name>" (see hierarchy.Member.names).
    - 'separator' tells tokenizers how to split a single token into multiple values.

    Properties
    - names, metavar, default, required, separator, group, descr, hidden, deprecated.
    """

    __introspectable__ = (
        "names",
        "metavar",
        "default",
        "required",
        "separator",
        "group",
        "descr",
        "hidden",
        "deprecated",
    )

    def __new__(
            cls,
            *names,
            metavar=Unset,
            default=Unset,
            required=False,
            separator=Unset,
            group=Unset,
            descr=Unset,
            hidden=False,
            deprecated=False
    ):
        metadata = {
            "names": names,
            "metavar": metavar,
            "default": default,
            "required": bool(required),
            "separator": separator,
            "group": group,
            "descr": descr,
            "hidden": bool(hidden),
            "deprecated": bool(deprecated),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        return super().__new__(cls)._publish(metadata)

    def __option__(self):
        """
        Introspection hook: identify this marker as an Option.
        """
        return self


def marker_of(annotation, /):
    """
    Return the first Marker carried by an Annotated annotation, or Unset.

    Nested Annotated forms are flattened by typing itself, so a single scan of
    __metadata__ is enough. Non-Annotated annotations never carry a marker.
    """
    if typing.get_origin(annotation) is not typing.Annotated:
        return Unset
    for metadata in annotation.__metadata__:
        if isinstance(metadata, Marker):
            return metadata
    return Unset


__all__ = (
    "Marker",
    "Value",
    "Option",
    "marker_of",
)
