"""
Sextant token classifier: split raw tokens into option-bearing and positional streams.

The split is a lexical heuristic, not a grammar. A token is option-bearing when
it starts with one or two dashes followed by letters (optionally followed by
"="), or when the token right before it looks like that (it is then taken as
that option's value). Everything else is positional.

The pattern is anchored at the start of the token: a dash inside a word does
not make it option-like, so "my-file" or "a-b" stay positional.

The classifier never looks at the signature, so it cannot tell a declared
option from an unknown one, nor a flag from a value option:

    >>> classify(["--greeting", "hi", "Alice"])
    (('--greeting', 'hi'), ('Alice',))
    >>> classify(["--verbose", "Alice"])
    (('--verbose', 'Alice'), ())
    >>> classify(["-x", "report.txt"])
    (('-x', 'report.txt'), ())
"""
import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

PATTERN = re.compile(r"--?[a-zA-Z]+=?")


def optionlike(token, /):
    """
    Return True when token reads like an option name ("-x", "--name", "--name=value").
    """
    return PATTERN.match(token) is not None


def classify(tokens, /):
    """
    Split tokens into (option-bearing, positional) tuples, order preserved in both.
    """
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("classify() argument must be an iterable of strings")
    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("classify() argument must be an iterable of strings")

    marks = tuple(map(optionlike, tokens))
    options = []
    positionals = []
    for index, token in enumerate(tokens):
        if marks[index] or (index != 0 and marks[index - 1]):
            options.append(token)
        else:
            positionals.append(token)

    logger.debug("classified %d option-bearing and %d positional tokens", len(options), len(positionals))
    return tuple(options), tuple(positionals)


__all__ = (
    "classify",
    "optionlike",
)
