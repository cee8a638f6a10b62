"""
Bindable member discovery.

What this module provides
- flatten(cls): the class, its capability sets, then recursively its primary ancestor.
- members(cls): the public annotated attributes and properties declared by one class.
- extract(cls, selector): one projected entry per distinct marked member name across
  the flattened hierarchy, most-derived declaration first.

Vocabulary
- ancestor: the primary base, cls.__bases__[0]; object has none.
- capability sets: classes reachable only through the secondary bases of a class
  (mixins, protocols), i.e. in cls.__mro__ but not in the ancestor's MRO.

Declaring members
    class Options:
        name: Annotated[str, Value(0)] = ""
        verbose: Annotated[bool, Option("-v")] = False

        @property
        def level(self) -> Annotated[int, Option()]: ...

Extraction reads type metadata only and never touches instances; member tables are
cached per class, so repeated extraction on the same type is cheap and thread-safe.
"""
import dataclasses
import functools
import inspect
import typing

from .markers import Option, marker_of
from .shapes import classify, strip
from .utils import Unset, coalesce, kebabize


class Member(typing.NamedTuple):
    """
    A named, typed attribute slot declared by a target class.

    Fields
    - name: attribute name on instances.
    - type: declared type with Annotated stripped.
    - marker: the Value/Option marker, or Unset for unmarked members.
    - owner: the class that declares the member.
    - source: "attribute" (class annotation) or "property".
    - writable: the member can be assigned after construction.
    """
    name: str
    type: typing.Any
    marker: typing.Any
    owner: type
    source: str
    writable: bool

    @property
    def bindable(self):
        return self.marker is not Unset

    @property
    def shape(self):
        return classify(self.type)

    @property
    def names(self):
        """
        Option aliases; "--<kebab-name>" when the Option declares none; () otherwise.
        """
        if not isinstance(self.marker, Option):
            return ()
        return tuple(self.marker.names) or ("--" + kebabize(self.name),)


def ancestor(cls, /):
    """
    The primary base of a class, or None for object.
    """
    return cls.__bases__[0] if cls.__bases__ else None


def capabilities(cls, /):
    """
    Classes brought in by the secondary bases of cls, in MRO order.
    """
    inherited = set(getattr(ancestor(cls), "__mro__", ()))
    return tuple(base for base in cls.__mro__[1:] if base not in inherited)


def flatten(cls, /):
    """
    Yield cls, its capability sets, then the flattened chain of its ancestor.

    Yields nothing for None. Capability sets of ancestors surface when the recursion
    reaches them; a class may therefore appear more than once, which extract() absorbs.
    """
    if cls is None:
        return
    if not isinstance(cls, type):
        raise TypeError("flatten() argument must be a class or None")
    yield cls
    yield from capabilities(cls)
    yield from flatten(ancestor(cls))


def _frozen(cls):
    """
    Instances of cls reject attribute assignment (NamedTuple/tuple, frozen dataclass).
    """
    if issubclass(cls, tuple):
        return True
    return dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen


def _annotations(cls):
    """
    Own annotations of cls, with string and forward-reference values resolved.
    """
    annotations = inspect.get_annotations(cls)
    if any(isinstance(annotation, str | typing.ForwardRef) for annotation in annotations.values()):
        hints = typing.get_type_hints(cls, include_extras=True)
        annotations = {name: hints.get(name, annotation) for name, annotation in annotations.items()}
    return annotations


@functools.cache
def members(cls, /):
    """
    Public members declared by cls itself (inherited ones are not repeated).

    Order: annotated attributes in declaration order, then annotated properties in
    namespace order. ClassVar annotations and underscore-prefixed names are skipped.
    A property whose name is also annotated on the class is reported once, as the property.
    """
    namespace = vars(cls)
    frozen = _frozen(cls)
    found = {}

    for name, annotation in _annotations(cls).items():
        if name.startswith("_") or typing.get_origin(strip(annotation)) is typing.ClassVar:
            continue
        if isinstance(namespace.get(name), property):
            continue
        found[name] = Member(name, strip(annotation), marker_of(annotation), cls, "attribute", not frozen)

    for name, attribute in namespace.items():
        if name.startswith("_") or not isinstance(attribute, property) or attribute.fget is None:
            continue
        annotation = inspect.get_annotations(attribute.fget, eval_str=True).get("return", typing.Any)
        found[name] = Member(name, strip(annotation), marker_of(annotation), cls, "property", attribute.fset is not None)

    return tuple(found.values())


@functools.cache
def _specifications(cls):
    specifications = {}
    for owner in flatten(cls):
        for member in members(owner):
            if member.bindable and member.name not in specifications:
                specifications[member.name] = member
    return tuple(specifications.values())


def extract(cls, selector=Unset, /):
    """
    Project the bindable members of cls, one per distinct name.

    Parameters
    - cls: the target class.
    - selector: callable Member -> T (identity when omitted).

    Returns
    - list[T] in first-encountered order over flatten(cls); for a shadowed name the
      most-derived marked declaration wins.
    """
    if not isinstance(cls, type):
        raise TypeError("extract() first argument must be a class")
    selector = coalesce(selector, lambda member: member)
    if not callable(selector):
        raise TypeError("extract() second argument must be callable")
    return [selector(member) for member in _specifications(cls)]


__all__ = (
    "Member",
    "ancestor",
    "capabilities",
    "flatten",
    "members",
    "extract",
)
