import sys

from rich.pretty import pprint

from sextant import *

greet = Signature(
    [Cardinal("name"), Cardinal("others", required=False, variadic=True)],
    [
        Option("greeting", "-g", default="hello"),
        Option("times", "-t", type=int, default=1),
        Option("shout", flag=True),
    ],
)


if __name__ == '__main__':
    pprint(parse(greet, sys.argv[1:], "greet"))
