"""
Parser (orchestrator) behavioral tests.

Scope
- Success shape (options, positionals, args.unused/args.meta).
- Failure messages (no arguments, some arguments, unknown/malformed options).
- Help priority, determinism, defensive copying, string prompts, program name.
"""
import decimal
import enum
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from sextant import Cardinal, Option, Signature, parse, program
from sextant import Help, Success, Failure
from sextant.faults import MissingCardinalsError, UnknownSwitchError, FaultCode


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


class TestGreetScenario(TestCase):

    def setUp(self):
        self.signature = Signature([Cardinal("name")], [Option("greeting", default="hello")])

    def testSuccess(self):
        meta = object()
        result = parse(self.signature, ["--greeting", "hi", "Alice"], "prog", meta)
        self.assertIsInstance(result, Success)
        self.assertEqual(result.arguments, {
            "name": "Alice",
            "greeting": "hi",
            "args": {"unused": [], "meta": meta},
        })
        self.assertFalse(result.help)
        self.assertIsNone(result.error)

    def testDefaultUsedWhenOptionAbsent(self):
        result = parse(self.signature, ["Alice"], "prog")
        self.assertEqual(result.arguments["greeting"], "hello")

    def testNoArguments(self):
        result = parse(self.signature, [], "prog")
        self.assertIsInstance(result, Failure)
        self.assertEqual(result.error, 'ERROR: "prog" was called with no arguments\nUsage: "prog NAME"')
        self.assertFalse(result.help)
        self.assertEqual(result.arguments, {})

    def testOptionsOnlyCountsAsNoArguments(self):
        result = parse(self.signature, ["--greeting", "hi"], "prog")
        self.assertEqual(result.error, 'ERROR: "prog" was called with no arguments\nUsage: "prog NAME"')

    def testMissingFaultIsAttached(self):
        fault = parse(self.signature, [], "prog").fault
        self.assertIsInstance(fault, MissingCardinalsError)
        self.assertIs(fault.options["code"], FaultCode.MISSING_CARDINALS)
        self.assertEqual(fault.options["hint"], "usage: prog NAME")
        self.assertEqual(str(fault), "missing NAME from first position")


class TestFailures(TestCase):

    def testSomeArgumentsMissing(self):
        s = Signature([Cardinal("src"), Cardinal("dst"), Cardinal("mode")])
        result = parse(s, ["a", "b"], "cp")
        self.assertEqual(result.error, 'ERROR: "cp" was called with arguments ["a", "b"]\nUsage: "cp SRC DST MODE"')

    def testSubcommandsInUsage(self):
        s = Signature([Cardinal("name")], subcommands=["add", "remove"])
        result = parse(s, [], "tool")
        self.assertEqual(
            result.error,
            'ERROR: "tool" was called with no arguments\nUsage: "tool NAME | tool SUBCOMMAND"'
        )

    def testUnknownOptionEchoesOriginalTokens(self):
        s = Signature([Cardinal("name")])
        result = parse(s, ["--bogus", "Alice", "Bob"], "prog")
        self.assertEqual(result.error, 'ERROR: "prog" was called with arguments "--bogus Alice Bob"')
        self.assertIsInstance(result.fault, UnknownSwitchError)
        self.assertEqual(result.fault.options["prog"], "prog")
        self.assertEqual(result.fault.options["arguments"], ("--bogus", "Alice", "Bob"))

    def testMalformedOptionsBecomeFailures(self):
        s = Signature(options=[Option("count", type=int), Option("verbose", flag=True)])
        for tokens in (["--count"], ["--count", "x"], ["--verbose=yes"]):
            with self.subTest(tokens=tokens):
                result = parse(s, tokens, "prog")
                self.assertIsInstance(result, Failure)
                self.assertEqual(result.error, 'ERROR: "prog" was called with arguments "%s"' % " ".join(tokens))

    def testConverterErrorsBecomeFailures(self):
        s = Signature([Cardinal("name")], [
            Option("amount", type=decimal.Decimal),
            Option("color", type=Color.__getitem__),
        ])
        for tokens in (["--amount", "abc", "Alice"], ["--color", "blue", "Alice"]):
            with self.subTest(tokens=tokens):
                result = parse(s, tokens, "prog")
                self.assertIsInstance(result, Failure)
                self.assertEqual(result.error, 'ERROR: "prog" was called with arguments "%s"' % " ".join(tokens))
                self.assertIs(result.fault.options["code"], FaultCode.UNCASTABLE_VALUE)
        result = parse(s, ["--amount", "1.50", "--color", "RED", "Alice"], "prog")
        self.assertEqual(result.arguments["amount"], decimal.Decimal("1.50"))
        self.assertIs(result.arguments["color"], Color.RED)

    def testFlagSwallowsPositional(self):
        s = Signature([Cardinal("name")], [Option("verbose", flag=True)])
        result = parse(s, ["--verbose", "Alice"], "prog")
        self.assertEqual(result.error, 'ERROR: "prog" was called with no arguments\nUsage: "prog NAME"')


class TestHelp(TestCase):

    def testHelpWins(self):
        s = Signature([Cardinal("name")], [Option("count", type=int)])
        for tokens in (["-h"], ["--help"], ["--bogus", "-h"], ["--count", "x", "--help"], ["Alice", "--help"]):
            with self.subTest(tokens=tokens):
                result = parse(s, tokens, "prog")
                self.assertIsInstance(result, Help)
                self.assertTrue(result.help)
                self.assertIsNone(result.error)


class TestBinding(TestCase):

    def testUnusedPassthrough(self):
        s = Signature([Cardinal("name")])
        result = parse(s, ["a", "b", "c"], "prog")
        self.assertEqual(result.arguments["args"]["unused"], ["b", "c"])

    def testVariadicCapture(self):
        s = Signature([Cardinal("cmd"), Cardinal("rest", required=False, variadic=True)])
        result = parse(s, ["run", "x", "y"], "prog")
        self.assertEqual(result.arguments["rest"], ["x", "y"])
        self.assertEqual(result.arguments["args"]["unused"], [])

    def testRequiredVariadicWithEmptyTail(self):
        s = Signature([Cardinal("cmd"), Cardinal("files", variadic=True)])
        result = parse(s, ["run"], "prog")
        self.assertIsInstance(result, Success)
        self.assertEqual(result.arguments["files"], [])
        result = parse(s, [], "prog")
        self.assertEqual(result.error, 'ERROR: "prog" was called with no arguments\nUsage: "prog CMD FILES"')

    def testPositionalDefault(self):
        s = Signature([Cardinal("target", required=False, default="world")])
        self.assertEqual(parse(s, [], "prog").arguments["target"], "world")
        self.assertEqual(parse(s, ["moon"], "prog").arguments["target"], "moon")

    def testOptionalAbsentPositionalIsLeftOut(self):
        s = Signature([Cardinal("name"), Cardinal("mode", required=False)])
        self.assertNotIn("mode", parse(s, ["a"], "prog").arguments)

    def testPositionalsOverOptions(self):
        s = Signature([Cardinal("name")], [Option("count", type=int, default=1), Option("verbose", flag=True)])
        result = parse(s, ["Alice", "--count", "2", "--no-verbose"], "prog")
        self.assertEqual(result.arguments, {
            "count": 2,
            "verbose": False,
            "name": "Alice",
            "args": {"unused": [], "meta": None},
        })


class TestInvocation(TestCase):

    def setUp(self):
        self.signature = Signature([Cardinal("name")], [Option("greeting", "-g", default="hello")])

    def testDeterminism(self):
        tokens = ["-g", "hi", "Alice", "extra"]
        self.assertEqual(parse(self.signature, tokens, "prog"), parse(self.signature, tokens, "prog"))
        self.assertEqual(parse(self.signature, [], "prog"), parse(self.signature, [], "prog"))

    def testInputIsNotModified(self):
        tokens = ["-g", "hi", "Alice"]
        parse(self.signature, tokens, "prog")
        self.assertEqual(tokens, ["-g", "hi", "Alice"])

    def testAcceptsGenerators(self):
        result = parse(self.signature, (token for token in ["Alice"]), "prog")
        self.assertEqual(result.arguments["name"], "Alice")

    def testStringPromptIsShellSplit(self):
        result = parse(self.signature, "--greeting 'good day' Alice", "prog")
        self.assertEqual(result.arguments["greeting"], "good day")
        self.assertEqual(result.arguments["name"], "Alice")

    def testUnbalancedQuotesFail(self):
        result = parse(self.signature, "--greeting 'good day", "prog")
        self.assertEqual(result.error, 'ERROR: "prog" was called with arguments "--greeting \'good day"')

    def testProgrammerErrorsRaise(self):
        with self.assertRaises(TypeError):
            parse(object(), [], "prog")
        with self.assertRaises(TypeError):
            parse(self.signature, 3, "prog")
        with self.assertRaises(TypeError):
            parse(self.signature, [1], "prog")
        with self.assertRaises(TypeError):
            parse(self.signature, [], 3)

    def testProgramFallbacks(self):
        self.assertEqual(program("tool"), "tool")
        main = sys.modules["__main__"]
        with patch.object(main, "__prog__", "hosted", create=True):
            self.assertEqual(program(), "hosted")
            self.assertIn('"hosted"', parse(self.signature, []).error)
        with patch.object(sys, "argv", ["/usr/bin/greet"]):
            if not hasattr(main, "__prog__"):
                self.assertEqual(program(), "greet")


if __name__ == "__main__":
    unittest.main()
