"""
Sextant parse results: a closed sum type with exactly three variants.

- Help()             a help spelling was given; nothing else was validated.
- Success(arguments) the parameter mapping, including the reserved "args"
                     entry holding {"unused": [...], "meta": meta}.
- Failure(error)     a ready-to-print message (and, optionally, the fault
                     that caused it).

Consumers can either pattern-match:

    match parse(signature, argv, "prog"):
        case Help():
            ...
        case Failure(error):
            ...
        case Success(arguments):
            ...

or check the uniform accessors every variant carries: result.help first,
then result.error, then result.arguments.
"""
from typing import final

from rich.console import Group
from rich.pretty import Pretty
from rich.text import Text

from .faults import CommandException, _styles


class Result:
    """
    Base of the three result variants; it cannot be instantiated nor extended
    outside of this module.
    """

    __slots__ = ()

    help = False
    error = None

    def __new__(cls, *args, **kwargs):
        if cls is Result:
            raise TypeError("type 'Result' cannot be instantiated directly, use Help/Success/Failure")
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        if cls.__module__ != __name__:
            raise TypeError("type 'Result' is not an acceptable base type")
        super().__init_subclass__(**options)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__.lower()} result is immutable")

    @property
    def arguments(self):
        return {}


@final
class Help(Result):
    __slots__ = ()
    __match_args__ = ()

    help = True

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return type(other) is Help

    def __hash__(self):
        return hash(Help)

    def __repr__(self):
        return "help()"

    def __rich__(self):
        return Text("help requested", _styles({"help": "bold #00E5FF"})["help"])


@final
class Success(Result):
    __slots__ = ("_arguments",)
    __match_args__ = ("arguments",)

    def __init__(self, arguments, /):
        if not isinstance(arguments, dict):
            raise TypeError("Success() argument must be a dict")
        object.__setattr__(self, "_arguments", arguments)

    @property
    def arguments(self):
        return self._arguments

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return type(other) is Success and other._arguments == self._arguments

    __hash__ = None

    def __repr__(self):
        return "success(%r)" % (self._arguments,)

    def __rich__(self):
        return Pretty(self._arguments)


@final
class Failure(Result):
    __slots__ = ("_error", "_fault")
    __match_args__ = ("error",)

    def __init__(self, error, /, fault=None):
        if not isinstance(error, str):
            raise TypeError("Failure() argument must be a string")
        if fault is not None and not isinstance(fault, CommandException):
            raise TypeError("Failure() 'fault' must be a command exception")
        object.__setattr__(self, "_error", error)
        object.__setattr__(self, "_fault", fault)

    @property
    def error(self):
        return self._error

    @property
    def fault(self):
        """
        The fault behind this failure, when there was one.
        """
        return self._fault

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return type(other) is Failure and other._error == self._error

    def __hash__(self):
        return hash((Failure, self._error))

    def __repr__(self):
        return "failure(%r)" % self._error

    def __rich__(self):
        styles = _styles({"error-message": "bold #FF4DA6"})
        message = Text(self._error, styles["error-message"])
        if self._fault is None:
            return message
        return Group(message, self._fault)


__all__ = (
    "Result",
    "Help",
    "Success",
    "Failure",
)
