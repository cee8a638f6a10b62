"""
Writing resolved values onto target instances.

- SpecificationProperty: a bindable member paired with its marker and (once resolved) its value.
- set_property(instance, member, value): assign one member, wrapping any failure in AssignmentError.
- set_properties(instance, specs, predicate, selector): assign every spec accepted by predicate,
  in the order of specs, with the value computed by selector.

Batch assignment is not atomic: when a later assignment fails, earlier ones stay applied.
Callers needing all-or-nothing semantics should resolve every value first and bind onto a
freshly synthesized instance.

Instances are caller-owned and are not locked; bind a given instance from one thread at a time.
"""
import typing
import warnings

from .faults import AssignmentError, DeprecatedMemberWarning
from .utils import Unset


class SpecificationProperty(typing.NamedTuple):
    """
    A bindable member together with its marker and its resolved value (Unset until resolved).
    """
    specification: typing.Any
    member: typing.Any
    value: typing.Any = Unset

    @classmethod
    def create(cls, member, value=Unset, /):
        return cls(member.marker, member, value)

    def resolve(self, value, /):
        """
        a copy of this property carrying value.
        """
        return self._replace(value=value)


def set_property(instance, member, value, /):
    """
    Assign value to member on instance and return instance.

    Parameters
    - instance: the target object.
    - member: a hierarchy.Member (or a plain attribute name).
    - value: the resolved value.

    Raises
    - AssignmentError for any failure of the underlying write (read-only property,
      frozen instance, a setter raising, ...). The original exception is the __cause__.

    Warns
    - DeprecatedMemberWarning when the member's marker is deprecated, once the write
      succeeded; a failed write raises AssignmentError without warning.
    """
    name = getattr(member, "name", member)
    if not isinstance(name, str):
        raise TypeError("set_property() member must be a member or an attribute name")

    try:
        setattr(instance, name, value)
    except Exception as exception:
        raise AssignmentError(
            "cannot set value to target instance",
            instance=instance,
            member=member,
            value=value,
            hint=f"make {name!r} assignable on {type(instance).__qualname__}",
        ) from exception

    if getattr(getattr(member, "marker", Unset), "deprecated", False):
        warnings.warn(
            DeprecatedMemberWarning(
                f"member {name!r} is deprecated",
                instance=instance,
                member=member,
                hint="check the documentation for its replacement",
            ),
            stacklevel=2,
        )
    return instance


def set_properties(instance, specs, predicate, selector, /):
    """
    Assign every spec accepted by predicate, in order, and return instance.

    Parameters
    - specs: iterable of SpecificationProperty (anything with a 'member').
    - predicate: callable spec -> bool.
    - selector: callable spec -> value to assign.

    A predicate rejecting everything leaves instance untouched.
    """
    for spec in filter(predicate, specs):
        set_property(instance, spec.member, selector(spec))
    return instance


__all__ = (
    "SpecificationProperty",
    "set_property",
    "set_properties",
)
