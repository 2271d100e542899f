"""
Sextant faults (parse errors and control-flow signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  the parsing pipeline can surface. Codes are grouped by domain to keep copy
  consistent and make logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself through rich in a friendly, lowercased, actionable way.
- ParseError: every fault raised by the option grammar. The orchestrator turns
  any ParseError into a failure result; it never escapes parse().
- HelpRequested: not a fault; the short-circuit raised when a help spelling is seen.
- getdoc(): optional description lookup for a code from the host application.

Integration
- The grammar raises ParseError subclasses with (code, title, hint, token, ...) options.
- The binder reports unsatisfied positionals with MissingCardinalsError.
- Results keep the originating fault so the execution layer may render it.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - switches (options/flags) (1111x/1112x)
      • UNKNOWN_SWITCH, FLAG_ASSIGNMENT, OPTION_VALUE_REQUIRED,
        UNCASTABLE_VALUE, INVALID_CHOICE
    - positionals (cardinals) (1112x)
      • MISSING_CARDINALS
    """
    # --- switch/flag/option errors (11xxx) ---
    UNKNOWN_SWITCH              = 11112
    FLAG_ASSIGNMENT             = 11113
    OPTION_VALUE_REQUIRED       = 11117
    UNCASTABLE_VALUE            = 11123
    INVALID_CHOICE              = 11124

    # --- positional/cardinal errors (11xxx) ---
    MISSING_CARDINALS           = 11125

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _styles(defaults, /):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class CommandException(Exception):
    """
    base fault: a message plus read-only keyword options.

    recognized options
    - code (FaultCode), title (str), hint (str): shown by __rich__.
    - prog (str): program name in the header.
    - colorful (bool, default True), fancy (bool, default False): rendering switches.
    - anything else (token, option, value, ...) is context for callers and tests.
    """

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError(f"{type(self).__name__}() message must be a string")
        super().__init__(*(message,) if message is not Unset else ())
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        styles = _styles({
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })
        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(self.options.get("prog", "error"), "prog-name"),
            " — ",
            text(self.options["code"].normalize() if "code" in self.options else "-", "code"),
            " | ",
            text(str(self.options.get("title", "error")).title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseError(CommandException):
    """Raised by the option grammar for any unknown or malformed option input."""


class UnknownSwitchError(ParseError): ...
class FlagAssignmentError(ParseError): ...
class OptionValueRequiredError(ParseError): ...
class UncastableValueError(ParseError): ...
class InvalidChoiceError(ParseError): ...

class MissingCardinalsError(CommandException): ...


class HelpRequested(Exception):
    """
    control-flow signal: a help spelling was found among the option tokens.

    it is not a fault and carries the spelling that triggered it.
    """

    def __init__(self, token):
        super().__init__(token)
        self.token = token


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


def enrich(fault, /, **options):
    """
    return a copy of fault with extra options merged in (existing keys are overridden).
    """
    if not isinstance(fault, CommandException):
        raise TypeError("enrich() argument must be a command exception")
    return copy.replace(fault, **options)


__all__ = (
    "CommandException",
    "ParseError",
    "UnknownSwitchError",
    "FlagAssignmentError",
    "OptionValueRequiredError",
    "UncastableValueError",
    "InvalidChoiceError",
    "MissingCardinalsError",
    "HelpRequested",
    "FaultCode",
    "getdoc",
    "enrich",
)
