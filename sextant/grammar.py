"""
Sextant option grammar: resolve option-bearing tokens against declared options.

What it does
- Builds a lookup table from every accepted spelling (long, aliases, and the
  "--no-" negation of flags) to its Option.
- Raises HelpRequested as soon as "-h" or "--help" is found anywhere in the
  tokens, before any other token is looked at.
- Walks the remaining tokens left to right:
  • "--name=value" / "-x=value": inline value (flags refuse it).
  • "--name value": a value option takes the next token, whatever it looks like.
  • "-xVALUE": a value option's short spelling followed by its value.
  • "--": stops option processing.
  • anything that does not start with a dash is a stray token (a value the
    classifier attached to an option that did not take one) and is dropped.
- Converts values with the option type, checks choices, and fills the
  declared defaults of every option that was not supplied.

Every user input error raises a ParseError subclass; nothing else escapes.
"""
import difflib
import logging
from types import MappingProxyType

from .faults import *
from .utils import *

logger = logging.getLogger(__name__)

HELP = frozenset({"-h", "--help"})


class OptionGrammar:
    """
    Immutable option lookup built from a sequence of Option specs.

    The grammar is stateless: parse() can be called any number of times, from
    any number of threads, and always gives the same answer for the same tokens.
    """

    def __init__(self, options, /):
        table = {}
        for option in options:
            for spelling in option.names:
                table[spelling] = (option, False)
            if option.flag:
                table[option.negation] = (option, True)
        self._options = tuple(options)
        self._table = MappingProxyType(table)

    def __repr__(self):
        return "option-grammar(%s)" % ", ".join(sorted(self._table))

    @property
    def spellings(self):
        return frozenset(self._table) | HELP

    def parse(self, tokens, /):
        """
        Resolve option-bearing tokens into a name -> value mapping.

        Raises
        - HelpRequested: a help spelling appears anywhere in tokens.
        - ParseError: an unknown option, a flag with a value, a value option
          without a value, an uncastable value, or a value outside the choices.
        """
        tokens = tuple(tokens)

        for token in tokens:
            if token in HELP:
                logger.debug("help requested by %r", token)
                raise HelpRequested(token)

        values = {}
        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1

            if token == "--":
                logger.debug("option processing stopped, ignoring %r", tokens[index:])
                break
            if not token.startswith("-") or token == "-":
                logger.debug("dropping stray option token %r", token)
                continue

            option, negated, value = self._lookup(token)

            if option.flag:
                if value is not None:
                    raise FlagAssignmentError(
                        "flag %r cannot have a value" % token.partition("=")[0],
                        title="flag cannot take a value",
                        code=FaultCode.FLAG_ASSIGNMENT,
                        token=token,
                        option=option,
                        hint="remove everything from '=' (for example: %s)" % token.partition("=")[0],
                        docs=getdoc(FaultCode.FLAG_ASSIGNMENT)
                    )
                values[option.name] = not negated
                continue

            if value is None:
                if index >= len(tokens):
                    raise OptionValueRequiredError(
                        "option %r requires a value" % token,
                        title="missing option value",
                        code=FaultCode.OPTION_VALUE_REQUIRED,
                        token=token,
                        option=option,
                        hint="pass a value after a space or '=' (for example: %s=<%s>)" % (option.long, option.metavar),
                        docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED)
                    )
                value = tokens[index]
                index += 1

            values[option.name] = self._convert(option, token, value)

        for option in self._options:
            if option.name not in values and option.default is not Unset:
                values[option.name] = option.default

        return values

    def _lookup(self, token):
        """
        Split a dash-led token into (option, negated, inline value or None).
        """
        name, separator, value = token.partition("=")
        try:
            option, negated = self._table[name]
        except KeyError:
            pass
        else:
            return option, negated, value if separator else None

        # -gVALUE: attached value of a short, value-bearing option
        if not token.startswith("--") and len(token) > 2:
            try:
                option, negated = self._table[token[:2]]
            except KeyError:
                pass
            else:
                if not option.flag:
                    return option, negated, token[2:]

        suggestions = difflib.get_close_matches(name, self._table.keys(), 5)
        try:
            hint = "did you mean %r? run with --help to see all options" % suggestions[0]
        except IndexError:
            hint = "run with --help to see all available options"
        raise UnknownSwitchError(
            "unknown option %r" % name,
            title="unknown option",
            code=FaultCode.UNKNOWN_SWITCH,
            token=token,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_SWITCH)
        )

    @staticmethod
    def _convert(option, token, value):
        try:
            converted = option.convert(value)
        except Exception:
            raise UncastableValueError(
                "invalid value %r for option %r" % (value, option.long),
                title="invalid option value",
                code=FaultCode.UNCASTABLE_VALUE,
                token=token,
                option=option,
                value=value,
                hint="%r expects a value of type %s" % (option.long, getattr(option.type, "__name__", option.type)),
                docs=getdoc(FaultCode.UNCASTABLE_VALUE)
            ) from None

        if option.choices:
            for item in converted if option.type is list else (converted,):
                if item not in option.choices:
                    raise InvalidChoiceError(
                        "invalid choice %r for option %r" % (item, option.long),
                        title="invalid choice",
                        code=FaultCode.INVALID_CHOICE,
                        token=token,
                        option=option,
                        value=item,
                        hint="choose from %s" % ", ".join(_listing(option.choices)),
                        docs=getdoc(FaultCode.INVALID_CHOICE)
                    )
        return converted


def _listing(choices, /):
    if isinstance(choices, frozenset):
        return sorted(map(repr, choices))
    return list(map(repr, choices))


def resolve(signature, tokens, /):
    """
    Resolve option-bearing tokens against a signature's options (defaults filled in).
    """
    return signature.grammar.parse(tokens)


__all__ = (
    "HELP",
    "OptionGrammar",
    "resolve",
)
