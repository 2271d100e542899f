"""
Positional binder tests (index binding, variadic tail, unused passthrough, usage line).
"""
import unittest
from unittest import TestCase

from sextant import Cardinal, Signature
from sextant.binding import bind, usage


class TestBind(TestCase):

    def testBindsByIndex(self):
        s = Signature([Cardinal("src"), Cardinal("dst")])
        binding = bind(s, ["a", "b"])
        self.assertEqual(binding.values, {"src": "a", "dst": "b"})
        self.assertEqual(binding.bound, ["a", "b"])
        self.assertEqual(binding.unused, [])
        self.assertTrue(binding.satisfied)

    def testMissingRequired(self):
        s = Signature([Cardinal("src"), Cardinal("dst")])
        binding = bind(s, ["a"])
        self.assertFalse(binding.satisfied)
        self.assertEqual(binding.bound, ["a"])
        self.assertEqual([c.name for c in binding.missing], ["dst"])
        self.assertEqual(binding.values, {"src": "a"})

    def testAbsentOptionalIsStripped(self):
        s = Signature([Cardinal("src"), Cardinal("mode", required=False, default="copy")])
        binding = bind(s, ["a"])
        self.assertTrue(binding.satisfied)
        self.assertEqual(binding.values, {"src": "a"})

    def testUnusedBeyondDeclaredArity(self):
        s = Signature([Cardinal("name"), Cardinal("extra", required=False)])
        binding = bind(s, ["a", "b", "c", "d"])
        self.assertEqual(binding.values, {"name": "a", "extra": "b"})
        self.assertEqual(binding.unused, ["c", "d"])

    def testEverythingUnusedWithoutCardinals(self):
        self.assertEqual(bind(Signature(), ["a", "b"]).unused, ["a", "b"])

    def testVariadicTakesTail(self):
        s = Signature([Cardinal("cmd"), Cardinal("rest", required=False, variadic=True)])
        for extra in ([], ["x"], ["x", "y", "z"]):
            with self.subTest(extra=extra):
                binding = bind(s, ["run", *extra])
                self.assertEqual(binding.values, {"cmd": "run", "rest": extra})
                self.assertEqual(binding.unused, [])

    def testRequiredVariadicAcceptsEmptyTail(self):
        s = Signature([Cardinal("cmd"), Cardinal("files", variadic=True)])
        binding = bind(s, ["run"])
        self.assertTrue(binding.satisfied)
        self.assertEqual(binding.values, {"cmd": "run", "files": []})
        self.assertEqual(binding.bound, ["run", []])
        binding = bind(s, ["run", "a", "b"])
        self.assertEqual(binding.bound, ["run", ["a", "b"]])

    def testVariadicPastTheTokensIsAbsent(self):
        s = Signature([Cardinal("cmd"), Cardinal("files", variadic=True)])
        binding = bind(s, [])
        self.assertFalse(binding.satisfied)
        self.assertEqual(binding.values, {})
        self.assertEqual([cardinal.name for cardinal in binding.missing], ["cmd", "files"])
        optional = Signature([Cardinal("cmd", required=False), Cardinal("rest", required=False, variadic=True)])
        self.assertEqual(bind(optional, []).values, {})

    def testTokensAreNotModified(self):
        tokens = ("a", "b")
        bind(Signature([Cardinal("name")]), tokens)
        self.assertEqual(tokens, ("a", "b"))


class TestUsage(TestCase):

    def testUsageListsRequiredMetavars(self):
        s = Signature([Cardinal("src"), Cardinal("dst", metavar="TARGET"), Cardinal("mode", required=False)])
        self.assertEqual(usage(s, "cp"), '\nUsage: "cp SRC TARGET"')

    def testUsageWithSubcommands(self):
        s = Signature([Cardinal("name")], subcommands=["add"])
        self.assertEqual(usage(s, "tool"), '\nUsage: "tool NAME | tool SUBCOMMAND"')


if __name__ == "__main__":
    unittest.main()
