r"""
Sextant argument specifications.

Overview
- Specs
  • Cardinal: positional argument (required, optional, or variadic tail).
  • Option: named option with a derived long spelling and optional aliases
    (e.g., --greeting/-g), either value-bearing or a presence-only flag.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__, exposes the
    fields declared in __introspectable__ via read-only properties, seals the
    concrete spec classes against subclassing and freezes instances once built.

Metadata (sanitized on construction)
- Shared
  • name: identifier used as the key of the bound value.
  • default: any value, or Unset when none is declared.
  • metavar: Unset | str (label in usage lines; defaults to NAME upper-cased).
  • descr: Unset | str | Text (short help), non-empty when provided.
- Cardinal only
  • required / variadic: bool.
- Option only
  • aliases: Iterable[str] validated as shell-style names; duplicates rejected.
  • type: Callable converter (``list`` means comma-separated values).
  • choices: Iterable (duplicates rejected unless a Set).
  • flag: bool (presence-only; negatable as --no-<long>).

Quick example:
    >>> from sextant.arguments import Cardinal, Option
    >>> Cardinal("name")
    cardinal(name='name', required=True, variadic=False, default=Unset, metavar='NAME', descr=None)
    >>> sorted(Option("greeting", "-g", default="hello").names)
    ['--greeting', '-g']
"""
import builtins
import functools
import operator
import re
from collections.abc import Iterable, Set

from rich.text import Text

from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns specs into frozen, introspectable descriptions.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Seal final spec classes against subclassing and freeze their instances
      once construction returns.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, /, final=False, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__setattr__")
        def __setattr__(self, name, value):
            if getattr(self, "_frozen", False):
                raise AttributeError(f"{type(self).__typename__} is immutable")
            object.__setattr__(self, name, value)
        self.__setattr__ = __setattr__

        if final:
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self

    def __call__(cls, *args, **kwargs):
        self = super().__call__(*args, **kwargs)
        self._frozen = True
        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate shared argument metadata (name/metavar/descr).

    Raises
    - TypeError: when a field has the wrong type.
    - ValueError: when a string field is empty after trimming or a name is not an identifier.

    Notes
    - This function mutates the provided metadata dict in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name.isidentifier():
        raise ValueError(f"{cls.__typename__} 'name' must be a valid identifier")

    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar, name.upper())

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate option spellings and derive the long one.

    - the long spelling is "--" + dasherize(name); the name must start with an
      ASCII letter so that the spelling is recognizable on the command line.
    - aliases must match r"--?[A-Za-z](-?[A-Za-z0-9]+)*" and be unique.
    - a single-dash, single-letter alias is the short spelling.
    """
    if not re.fullmatch(r"[A-Za-z]\w*", metadata["name"]):
        raise ValueError(f"{cls.__typename__} 'name' must start with a letter")

    long = "--" + dasherize(metadata["name"])
    names = {long}
    short = None

    if isinstance(metadata["aliases"], str) or not isinstance(metadata["aliases"], Iterable):
        raise TypeError(f"{cls.__typename__} aliases must be strings")

    for alias in metadata["aliases"]:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} aliases must be strings")
        elif not (alias := alias.strip()):
            raise ValueError(f"{cls.__typename__} aliases cannot be empty-strings")
        elif not re.fullmatch(r"--?[A-Za-z](-?[A-Za-z0-9]+)*", alias):
            raise ValueError(f"{cls.__typename__} aliases must be valid shell-style option names")
        elif alias in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        if re.fullmatch(r"-[A-Za-z0-9]", alias):
            if short is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one short alias")
            short = alias
        names.add(alias)

    metadata["long"] = long
    metadata["short"] = short
    metadata["names"] = frozenset(names)
    del metadata["aliases"]


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate the converter and choices of an option.

    - type: must be callable; flags do not accept a converter other than the default.
    - choices: must be iterable. If not a Set, duplicates are rejected and
      the collection is normalized to a tuple; sets become frozensets.
    """
    if not callable(metadata["type"]):
        raise TypeError(f"{cls.__typename__} 'type' must be callable")

    if isinstance(choices := metadata["choices"], str) or not isinstance(choices, Iterable):
        raise TypeError(f"{cls.__typename__} 'choices' must be iterable")
    if isinstance(choices, Set):
        choices = frozenset(choices)
    else:
        sanitized = []
        for choice in choices:
            if choice in sanitized:
                raise ValueError(f"{cls.__typename__} 'choices' cannot contain duplicates")
            sanitized.append(choice)
        choices = tuple(sanitized)
    metadata["choices"] = choices

    if metadata["flag"]:
        if metadata["type"] is not str:
            raise TypeError(f"flag {cls.__typename__} cannot specify a 'type'")
        if metadata["choices"]:
            raise TypeError(f"flag {cls.__typename__} cannot specify 'choices'")


class Cardinal(metaclass=ArgumentType, final=True):
    """
    Positional argument specification.

    A Cardinal binds to the positional token at its index in the signature,
    unless it is variadic, in which case it binds to the whole remaining tail.
    Instances are immutable; the fields listed in __introspectable__ are
    exposed as read-only attributes.
    """

    __introspectable__ = (
        "name",
        "required",
        "variadic",
        "default",
        "metavar",
        "descr",
    )

    def __init__(
            self,
            name,
            /,
            required=True,
            variadic=False,
            default=Unset,
            metavar=Unset,
            descr=Unset,
    ):
        """
        Parameters
        - name: str
          Identifier under which the bound value is stored.
        - required: bool
          Whether resolution fails when no token is bound.
        - variadic: bool
          Consume every remaining positional token as a list.
        - default: Any
          Caller-level default, used when no token is bound; Unset for none.
        - metavar: Unset | str
          Display name in usage lines; NAME upper-cased when Unset.
        - descr: Unset | str | Text
          Short description. If Unset, becomes None.
        """
        metadata = {
            "name": name,
            "required": bool(required),
            "variadic": bool(variadic),
            "default": default,
            "metavar": metavar,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class Option(metaclass=ArgumentType, final=True):
    """
    Named option specification.

    An Option is spelled on the command line by its long name ("--" plus the
    dasherized name) or by any alias. Value-bearing options take the next token
    or an inline "=value"; flags are presence-only booleans that can be negated
    with "--no-<long>". Instances are immutable.
    """

    __introspectable__ = (
        "name",
        "long",
        "short",
        "names",
        "type",
        "default",
        "choices",
        "flag",
        "metavar",
        "descr",
    )

    def __init__(
            self,
            name,
            /,
            *aliases,
            type=str,
            default=Unset,
            choices=(),
            flag=False,
            metavar=Unset,
            descr=Unset,
    ):
        """
        Parameters
        - name: str
          Identifier under which the resolved value is stored; also gives the
          long spelling (``dry_run`` -> ``--dry-run``).
        - aliases: str
          Extra spellings such as "-g" or "--salutation".
        - type: Callable
          Converter applied to a supplied value; ``list`` splits on commas.
        - default: Any
          Value used when the option is not supplied; Unset for none.
        - choices: Iterable
          Allowed (converted) values.
        - flag: bool
          Presence-only boolean option (takes no value).
        - metavar: Unset | str
          Display name of the value; NAME upper-cased when Unset.
        - descr: Unset | str | Text
          Short description. If Unset, becomes None.
        """
        metadata = {
            "name": name,
            "aliases": aliases,
            "type": type,
            "default": default,
            "choices": choices,
            "flag": bool(flag),
            "metavar": metavar,
            "descr": descr,
        }
        _sanitize_metadata(cls := builtins.type(self), metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def negation(self):
        """
        The negated long spelling of a flag ("--no-<long>"), or None for value options.
        """
        return "--no-" + self._long[2:] if self._flag else None

    def convert(self, value, /):
        """
        Convert a raw command-line value with the declared type.

        ``list`` splits on commas (like ``a,b,c``); any other type is called
        with the raw string. Whatever the converter raises propagates to the caller.
        """
        if self._type is list:
            return value.split(",")
        return self._type(value)


__all__ = (
    # Classes (specifications)
    "Cardinal",
    "Option",
)

del ArgumentType
