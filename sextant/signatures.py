"""
Sextant command signatures.

A Signature is the declared shape of one command: its positional cardinals
(in declaration order), its named options, and the names of its subcommands.
It is supplied by whatever registry owns the command tree and is only ever
read by the parsing pipeline.

Ordering and uniqueness rules (checked on construction)
- required cardinals come first, then optional ones, then at most one variadic,
  which must be the last cardinal.
- cardinal and option names are unique within a signature; "args" is reserved
  for the parsed-parameters passthrough mapping.
- every option spelling (long, aliases, and the "--no-" negation of flags) is
  unique, and "-h"/"--help" are reserved for the help request.

Derived views
- required: the required cardinals, in order.
- defaults: name -> declared default for every cardinal and option with one.
- grammar: the option grammar, built once and reused by every parse.
"""
import functools
from collections.abc import Iterable
from types import MappingProxyType

from .arguments import Cardinal, Option
from .grammar import HELP, OptionGrammar
from .utils import *

RESERVED = "args"


class Signature:
    """
    Immutable description of a command's options, positionals and subcommands.
    """

    name = mirror("name")
    cardinals = mirror("cardinals")
    options = mirror("options")
    subcommands = mirror("subcommands")

    def __init__(self, cardinals=(), options=(), subcommands=(), name=Unset):
        if not isinstance(name, str | Unset):
            raise TypeError("signature 'name' must be a string")
        for field, value in (("cardinals", cardinals), ("options", options), ("subcommands", subcommands)):
            if isinstance(value, str) or not isinstance(value, Iterable):
                raise TypeError(f"signature {field!r} must be an iterable")

        cardinals = tuple(cardinals)
        options = tuple(options)
        subcommands = frozenset(subcommands)

        if not all(isinstance(cardinal, Cardinal) for cardinal in cardinals):
            raise TypeError("signature 'cardinals' must contain only cardinals")
        if not all(isinstance(option, Option) for option in options):
            raise TypeError("signature 'options' must contain only options")
        if not all(isinstance(subcommand, str) and subcommand for subcommand in subcommands):
            raise TypeError("signature 'subcommands' must contain only non-empty strings")

        _check_order(cardinals)
        _check_names(cardinals, options)

        object.__setattr__(self, "_name", coalesce(name))
        object.__setattr__(self, "_cardinals", cardinals)
        object.__setattr__(self, "_options", options)
        object.__setattr__(self, "_subcommands", subcommands)

    def __setattr__(self, name, value):
        raise AttributeError("signature is immutable")

    def __repr__(self):
        return "signature(name=%r, cardinals=%r, options=%r, subcommands=%r)" % (
            self._name,
            self._cardinals,
            self._options,
            sorted(self._subcommands),
        )

    @property
    def required(self):
        return tuple(cardinal for cardinal in self._cardinals if cardinal.required)

    @property
    def variadic(self):
        """
        The trailing variadic cardinal, or None.
        """
        if self._cardinals and self._cardinals[-1].variadic:
            return self._cardinals[-1]
        return None

    @property
    def defaults(self):
        """
        Read-only mapping of every declared default, cardinals first, options on top.
        """
        return MappingProxyType({
            argument.name: argument.default
            for argument in self._cardinals + self._options
            if argument.default is not Unset
        })

    @functools.cached_property
    def grammar(self):
        return OptionGrammar(self._options)


def _check_order(cardinals, /):
    # required → optional → variadic
    rank = 0
    for index, cardinal in enumerate(cardinals):
        if cardinal.variadic and index != len(cardinals) - 1:
            raise ValueError(f"variadic cardinal {cardinal.name!r} must be the last one")
        current = 2 if cardinal.variadic else 0 if cardinal.required else 1
        if current < rank:
            raise ValueError(f"required cardinal {cardinal.name!r} cannot follow an optional one")
        rank = current


def _check_names(cardinals, options, /):
    names = set()
    for argument in cardinals + options:
        if argument.name == RESERVED:
            raise ValueError(f"{argument.name!r} is reserved and cannot be used as a name")
        if argument.name in names:
            raise ValueError(f"duplicated argument name {argument.name!r}")
        names.add(argument.name)

    spellings = set()
    for option in options:
        for spelling in option.names | ({option.negation} if option.flag else set()):
            if spelling in HELP:
                raise ValueError(f"option spelling {spelling!r} is reserved for help")
            if spelling in spellings:
                raise ValueError(f"duplicated option spelling {spelling!r}")
            spellings.add(spelling)


__all__ = (
    "Signature",
)
