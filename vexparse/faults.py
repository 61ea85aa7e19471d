"""
vexparse faults (status codes, errors and warnings) and rendering.

Scope
- Status: canonical, stable numeric identifiers for the outcome of every
  mutating operation (OK, ALLOCATION_FAILURE, INVALID_VALUE, UNKNOWN_ARGUMENT).
- VexException / VexWarning: base types that carry a message + options and
  know how to render themselves in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Integration
- The descriptor registry and the parser raise fault exceptions internally.
- The Vex context catches them at its public boundary, records the live status
  and message, and keeps the fault around so callers can surface it later with
  Vex.trigger(): in non-shell mode the fault is raised, in shell mode it is
  rendered on stderr via rich and the process exits.
"""
import copy
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class Status(IntEnum):
    """
    terminal result of a mutating operation (stable identifiers).

    - OK: the last operation succeeded.
    - ALLOCATION_FAILURE: the allocation strategy refused storage; no message.
    - INVALID_VALUE: malformed caller input (descriptor shape, duplicates, type mismatch).
    - UNKNOWN_ARGUMENT: the command line references an option never registered.

    normalize() lets a host remap codes to its own labels through a __codes__
    mapping in __main__; without one the numeric value is returned as a string.
    """
    OK                 = 0
    ALLOCATION_FAILURE = 1
    INVALID_VALUE      = 2
    UNKNOWN_ARGUMENT   = 3

    def normalize(self):
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _palette(defaults, /):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class _Renderable:
    """
    shared rendering for faults: "[ prog — code | title ]", message, hint.
    """
    __status__ = Status.OK
    __defaults__ = {}

    @property
    def status(self):
        return type(self).__status__

    @property
    def title(self):
        return self.options.get("title", "")

    @property
    def hint(self):
        return self.options.get("hint", "")

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        main = __import__("__main__")
        styles = _palette(type(self).__defaults__)
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "vexparse")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.status.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler("title")),
            " ]"
        )
        message = text(str(self), styler("message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class VexException(_Renderable, Exception):
    __defaults__ = {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan status code
        "title": "bold #FF4DA6",  # pinky title
        "message": "#C8C8D0",  # soft gray message
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class AllocationError(VexException):
    __status__ = Status.ALLOCATION_FAILURE


class InvalidValueError(VexException):
    __status__ = Status.INVALID_VALUE


class UnknownArgumentError(VexException):
    __status__ = Status.UNKNOWN_ARGUMENT


class VexWarning(_Renderable, Warning):
    __defaults__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",  # amber code for warnings
        "title": "bold #FFC2E0",
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))
        console.print(self)


class IgnoredValueWarning(VexWarning): ...


_FAULTS = {
    Status.ALLOCATION_FAILURE: AllocationError,
    Status.INVALID_VALUE: InvalidValueError,
    Status.UNKNOWN_ARGUMENT: UnknownArgumentError,
}


def fault(status, message=Unset, /, **options):
    """
    build the fault exception matching a status code.

    raises
    - ValueError for Status.OK, which has no fault.
    """
    try:
        return _FAULTS[Status(status)](message, **options)
    except KeyError:
        raise ValueError(f"status {Status(status).name} has no fault") from None


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(...) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise errors are
      raised and warnings are emitted through the warnings module.

    typical options
    - prog, shell, fancy, colorful, title, hint.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "Status",
    "VexException",
    "AllocationError",
    "InvalidValueError",
    "UnknownArgumentError",
    "VexWarning",
    "IgnoredValueWarning",
    "fault",
    "trigger",
)
