"""
Sextant parser: resolve raw command-line tokens against a signature.

parse() runs the whole pipeline and always returns a Result:

    tokens ──classify──▶ option-bearing ──grammar──▶ options (+ defaults)
                     └─▶ positional ─────bind─────▶ cardinals (+ unused)

- a help spelling anywhere among the option-bearing tokens gives Help();
- an unknown or malformed option gives a Failure echoing the original tokens;
- missing required positionals give a Failure with a usage line;
- otherwise Success carries every parameter plus args.unused/args.meta.

Example
    >>> from sextant import Cardinal, Option, Signature, parse
    >>> greet = Signature([Cardinal("name")], [Option("greeting", default="hello")])
    >>> parse(greet, ["--greeting", "hi", "Alice"], "greet").arguments
    {'greeting': 'hi', 'name': 'Alice', 'args': {'unused': [], 'meta': None}}
    >>> print(parse(greet, [], "greet").error)
    ERROR: "greet" was called with no arguments
    Usage: "greet NAME"
"""
import json
import logging
import os.path
import shlex
import sys
from collections.abc import Iterable

from .binding import bind, usage
from .faults import *
from .results import Help, Success, Failure
from .signatures import RESERVED, Signature
from .tokens import classify
from .utils import *

logger = logging.getLogger(__name__)


def program(prog=Unset, /):
    """
    Return prog, or the host's __main__.__prog__, or the basename of sys.argv[0].
    """
    if prog is not Unset:
        if not isinstance(prog, str):
            raise TypeError("program name must be a string")
        return prog
    fallback = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "prog"
    return getattr(__import__("__main__"), "__prog__", fallback)


def parse(signature, arguments, prog=Unset, meta=None):
    """
    Resolve arguments against signature and return Help, Success or Failure.

    Parameters
    - signature: Signature
      The declared options, cardinals and subcommands of the command.
    - arguments: Iterable[str] | str
      The raw tokens; a single string is split the way a POSIX shell would.
      The caller's object is never modified.
    - prog: str
      Program name used in messages (see program() for the fallback).
    - meta: Any
      Opaque caller data passed through as args["meta"].
    """
    if not isinstance(signature, Signature):
        raise TypeError("parse() first argument must be a signature")
    prog = program(prog)

    if isinstance(arguments, str):
        original = arguments
        try:
            tokens = shlex.split(arguments)
        except ValueError as error:
            logger.debug("cannot split %r: %s", arguments, error)
            return Failure('ERROR: "%s" was called with arguments "%s"' % (prog, original))
    elif isinstance(arguments, Iterable):
        tokens = list(arguments)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() arguments must be strings")
        original = " ".join(tokens)
    else:
        raise TypeError("parse() second argument must be a string or an iterable of strings")

    try:
        options, positionals = classify(tokens)
        parameters = dict(signature.defaults) | signature.grammar.parse(options)
        binding = bind(signature, positionals)
    except HelpRequested:
        logger.debug("%s: help requested", prog)
        return Help()
    except ParseError as fault:
        logger.debug("%s: %s", prog, fault)
        return Failure(
            'ERROR: "%s" was called with arguments "%s"' % (prog, original),
            fault=enrich(fault, prog=prog, arguments=tuple(tokens))
        )

    if not binding.satisfied:
        return _missing(signature, prog, binding)

    parameters |= binding.values
    parameters[RESERVED] = {"unused": binding.unused, "meta": meta}
    return Success(parameters)


def _missing(signature, prog, binding):
    suffix = usage(signature, prog)
    if binding.bound:
        error = 'ERROR: "%s" was called with arguments %s%s' % (
            prog,
            json.dumps(binding.bound, ensure_ascii=False),
            suffix,
        )
    else:
        error = 'ERROR: "%s" was called with no arguments%s' % (prog, suffix)

    first = binding.missing[0]
    position = signature.cardinals.index(first) + 1
    logger.debug("%s: missing %s", prog, [cardinal.name for cardinal in binding.missing])
    return Failure(error, fault=MissingCardinalsError(
        "missing %s from %s position" % (" ".join(cardinal.metavar for cardinal in binding.missing), ordinal(position)),
        title="missing arguments",
        code=FaultCode.MISSING_CARDINALS,
        prog=prog,
        missing=binding.missing,
        hint="usage: " + suffix.strip().removeprefix("Usage: ").strip('"'),
        docs=getdoc(FaultCode.MISSING_CARDINALS)
    ))


__all__ = (
    "parse",
    "program",
)
