"""
Sextant positional binder: bind positional tokens onto a signature's cardinals.

Rules
- the Nth cardinal takes the Nth positional token;
- a trailing variadic cardinal takes the whole remaining tail as a list,
  empty when the tokens end right at its position, absent when they end before;
- tokens beyond every declared cardinal are kept, verbatim and in order, as
  the "unused" passthrough;
- the binding is satisfied when every required cardinal got a value (an empty
  tail counts for a required variadic).

Absent positionals never appear in the bound values, so a default declared
elsewhere is not overwritten by "nothing".
"""
import logging
from typing import NamedTuple

from .utils import *

logger = logging.getLogger(__name__)


class Binding(NamedTuple):
    """
    Outcome of a positional binding.

    - values: name -> bound token (or list of tokens for a variadic cardinal).
    - bound: tokens bound to the required cardinals, in order, absent ones left out.
    - unused: tokens no cardinal consumed.
    - missing: the required cardinals that got nothing.
    """
    values: dict
    bound: list
    unused: list
    missing: tuple

    @property
    def satisfied(self):
        return not self.missing


def bind(signature, tokens, /):
    """
    Bind positional tokens onto the cardinals of signature.
    """
    tokens = list(tokens)
    values = {}
    bound = []
    missing = []
    consumed = 0

    for index, cardinal in enumerate(signature.cardinals):
        if cardinal.variadic:
            value = tokens[index:] if index <= len(tokens) else Unset
            consumed = len(tokens)
            present = value is not Unset
        else:
            value = tokens[index] if index < len(tokens) else Unset
            consumed = min(index + 1, len(tokens))
            present = value is not Unset

        if present:
            values[cardinal.name] = value
        if cardinal.required:
            if present:
                bound.append(value)
            else:
                missing.append(cardinal)

    unused = tokens[consumed:]
    logger.debug("bound %r, %d unused token(s), %d missing", list(values), len(unused), len(missing))
    return Binding(values, bound, unused, tuple(missing))


def usage(signature, prog, /):
    """
    Build the usage suffix appended to missing-argument messages.

        \\nUsage: "PROG REQ1 REQ2" or \\nUsage: "PROG REQ1 | PROG SUBCOMMAND"
    """
    line = '\nUsage: "%s %s' % (prog, " ".join(cardinal.metavar for cardinal in signature.required))
    if signature.subcommands:
        line += " | %s SUBCOMMAND" % prog
    return line + '"'


__all__ = (
    "Binding",
    "bind",
    "usage",
)
