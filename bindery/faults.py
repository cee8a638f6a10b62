"""
Bindery faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every binding issue, grouped by domain.
- BindingException: base error carrying a message plus read-only options, able to
  render itself through rich.
  • AssignmentError: a resolved value could not be written onto a target member.
  • ConstructionError: a default instance of a target type could not be built.
- BindingWarning / DeprecatedMemberWarning: non-fatal notices emitted through warnings.
- report(): print any fault to the stderr console.

Propagation
- Faults are raised synchronously to the immediate caller; nothing here retries or
  swallows. Assignment and construction failures are distinct kinds on purpose, so a
  caller can tell “cannot default this type” from “cannot write this value”.

Host configuration (read from __main__, all optional)
- __codes__: mapping FaultCode -> label, overriding the numeric ids in headers.
- __styles__: mapping style-name -> rich style, overriding the palette below.
- __prog__: program name shown in headers (defaults to "bindery").
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes raised while binding (stable identifiers).

    grouping
    - assignment errors (1310x)
      • ASSIGNMENT_FAILED
    - construction errors (1311x)
      • CONSTRUCTION_FAILED, CONSTRUCTOR_MISMATCH
    - warnings (141xx)
      • DEPRECATED_MEMBER
    """
    # --- assignment errors (1310x) ---
    ASSIGNMENT_FAILED    = 13101

    # --- construction errors (1311x) ---
    CONSTRUCTION_FAILED  = 13111
    CONSTRUCTOR_MISMATCH = 13112

    # --- warnings (141xx) ---
    DEPRECATED_MEMBER    = 14112

    def normalize(self):
        """
        return the host label for this code, or the numeric value as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    Build the rich renderable shared by exceptions and warnings.

    Layout
    - header: "[ prog — code | title ]"
    - body: message, then " → hint" when a hint is present
    - fancy=True wraps both in a Panel titled by the header.
    """
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    header = Text.assemble(
        "[ ",
        text(getattr(main, "__prog__", "bindery"), "prog-name"),
        " — ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(fault.title.title(), "title"),
        " ]",
    )
    message = text(fault.message, "message")
    renders = [message]
    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fault.options.get("fancy", False):
        return Panel(Group(*renders), title=header, title_align="left")
    return Group(header, *renders)


class BindingException(Exception):
    """
    Base of every binding error.

    Attributes
    - message: str, one sentence describing the failure.
    - options: read-only mapping of context (member, type, hint, fancy, colorful, ...).
    - code / title: class-level identification used by the renderer.
    """
    code = FaultCode.ASSIGNMENT_FAILED
    title = "binding failed"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, self.title))
        self.message = coalesce(message, self.title)
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })


class AssignmentError(BindingException):
    """
    A value could not be written onto a member of a target instance.

    Whatever the underlying failure was (read-only member, frozen instance, a setter
    raising), it is available as __cause__; its kind never leaks to the caller.
    """
    code = FaultCode.ASSIGNMENT_FAILED
    title = "cannot set value"


class ConstructionError(BindingException):
    """
    A default instance of a target type could not be constructed.
    """
    code = FaultCode.CONSTRUCTION_FAILED
    title = "cannot construct default"

    def __init__(self, message=Unset, /, **options):
        super().__init__(message, **options)
        self.code = options.get("code", type(self).code)


class BindingWarning(Warning):
    """
    Base of every binding warning; same shape and rendering as BindingException.
    """
    code = FaultCode.DEPRECATED_MEMBER
    title = "binding warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, self.title))
        self.message = coalesce(message, self.title)
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })


class DeprecatedMemberWarning(BindingWarning):
    code = FaultCode.DEPRECATED_MEMBER
    title = "deprecated member"


def report(fault, /, *, console=console):
    """
    print a fault (exception or warning) to the given rich console (stderr by default).
    """
    if not isinstance(fault, BindingException | BindingWarning):
        raise TypeError("report() argument must be a binding exception or warning")
    console.print(fault)


__all__ = (
    "FaultCode",
    "BindingException",
    "AssignmentError",
    "ConstructionError",
    "BindingWarning",
    "DeprecatedMemberWarning",
    "report",
)
