"""
Context behavioral tests (lifecycle, status model, readers, help and version).

Scope
- Validate construction defaults and missing-metadata handling.
- Validate the live status/message after every mutating operation.
- Validate help text layout, caching and regeneration after registration.
- Validate teardown: ownership release, use-after-close and the context manager.
- Validate fault surfacing through trigger() in library and shell modes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from vexparse import ArgType, TrackingAllocator, Vex
from vexparse.faults import InvalidValueError, Status, UnknownArgumentError

_HELP = (
    "Usage: prog [-h/--help] [-v/--version]\n"
    "\n"
    "Description:\n"
    "A test program\n"
    "\n"
    "Arguments:\n"
    " -h, --help     Print this help message\n"
    " -v, --version  Print the version string\n"
)


class TestConstruction(TestCase):
    """Construction and default descriptors."""

    def testDefaultsAreRegistered(self):
        with Vex("prog", "1.0.0", "A test program") as vex:
            self.assertIs(vex.status, Status.OK)
            self.assertEqual([descriptor.names for descriptor in vex.descriptors], [
                ("-h", "--help"),
                ("-v", "--version"),
            ])
            self.assertEqual(vex.count, 0)

    def testMissingMetadataSkipsDefaults(self):
        for arguments in (("prog", "1.0.0"), ("prog", None, "description"), ()):
            with self.subTest(arguments=arguments), Vex(*arguments) as vex:
                self.assertIs(vex.status, Status.ALLOCATION_FAILURE)
                self.assertIsNone(vex.message)
                self.assertEqual(len(vex.descriptors), 0)

    def testMetadataMustBeStrings(self):
        with self.assertRaises(TypeError):
            Vex(1, "1.0.0", "description")

    def testRefusedStorageSkipsDefaults(self):
        with Vex("prog", "1.0.0", "A test program", allocator=TrackingAllocator(limit=2)) as vex:
            self.assertIs(vex.status, Status.ALLOCATION_FAILURE)
            self.assertEqual(len(vex.descriptors), 0)

    def testInstancesAreIndependent(self):
        with Vex("one", "1", "first") as one, Vex("two", "2", "second") as two:
            one.add("x", "extra")
            one.parse(["one", "-x"])
            self.assertEqual(len(two.descriptors), 2)
            self.assertEqual(two.count, 0)


class TestStatus(TestCase):
    """The live status model."""

    def setUp(self):
        self.vex = Vex("prog", "1.0.0", "A test program")

    def tearDown(self):
        self.vex.close()

    def testRejectedAddRecordsStatus(self):
        self.assertFalse(self.vex.add("h", "hello"))
        self.assertIs(self.vex.status, Status.INVALID_VALUE)
        self.assertEqual(self.vex.message, "duplicate argument: -h")
        self.assertIsInstance(self.vex.fault, InvalidValueError)
        self.assertEqual(len(self.vex.descriptors), 2)

    def testGroupingFlagIsRejected(self):
        self.assertFalse(self.vex.add("q", "quiet", ArgType.FLAG, -1))
        self.assertIs(self.vex.status, Status.INVALID_VALUE)
        self.assertEqual(self.vex.message, "invalid maximum value count for a flag: -1")
        self.assertNotIn("quiet", self.vex.registry)

    def testNonAsciiShortNameIsRejected(self):
        self.assertFalse(self.vex.add("é", "accent"))
        self.assertIs(self.vex.status, Status.INVALID_VALUE)
        self.assertEqual(self.vex.message, "invalid short name: é")

    def testUnknownOptionRecordsStatus(self):
        self.assertFalse(self.vex.parse(["prog", "--nope"]))
        self.assertIs(self.vex.status, Status.UNKNOWN_ARGUMENT)
        self.assertIsInstance(self.vex.fault, UnknownArgumentError)

    def testSuccessResetsStatus(self):
        self.vex.add()
        self.assertEqual(self.vex.message, "no argument name given")
        self.assertTrue(self.vex.add("x", "extra", ArgType.INTEGER, 2, "Extra"))
        self.assertIs(self.vex.status, Status.OK)
        self.assertIsNone(self.vex.message)

    def testTriggerRaisesInLibraryMode(self):
        self.vex.parse(["prog", "--nope"])
        with self.assertRaises(UnknownArgumentError) as context:
            self.vex.trigger()
        self.assertEqual(context.exception.options["prog"], "prog")

    def testTriggerIsNoopWhenOk(self):
        self.vex.parse(["prog", "-h"])
        self.assertIsNone(self.vex.trigger())

    def testTriggerExitsInShellMode(self):
        stream = io.StringIO()
        with Vex("prog", "1.0.0", "A test program", shell=True) as vex:
            vex.parse(["prog", "-x"])
            with mock.patch("vexparse.faults.console", Console(file=stream)):
                with self.assertRaises(SystemExit) as context:
                    vex.trigger()
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unknown option '-x' at first position", stream.getvalue())


class TestReaders(TestCase):
    """Token readers."""

    def setUp(self):
        self.vex = Vex("prog", "1.0.0", "A test program")
        self.vex.add("i", "input", ArgType.STRING, -1, "Input files")
        self.vex.add("q", "quiet")
        self.vex.parse(["prog", "-q", "-i", "a", "b"])

    def tearDown(self):
        self.vex.close()

    def testCountAndGet(self):
        self.assertEqual(self.vex.count, 2)
        self.assertEqual(len(self.vex), 2)
        self.assertEqual(self.vex.get(1).payloads, ["a", "b"])
        self.assertIsNone(self.vex.get(2))
        self.assertIsNone(self.vex.get(-1))

    def testFound(self):
        self.assertTrue(self.vex.found("q"))
        self.assertTrue(self.vex.found("input"))
        self.assertFalse(self.vex.found("help"))

    def testIteration(self):
        self.assertEqual([token.short_name for token in self.vex], ["q", "i"])
        self.assertEqual([token.short_name for token in reversed(self.vex)], ["i", "q"])
        self.assertIs(self.vex[-1], self.vex.get(1))


class TestHelp(TestCase):
    """Help and version text."""

    def setUp(self):
        self.vex = Vex("prog", "1.2.3", "A test program")

    def tearDown(self):
        self.vex.close()

    def testLayout(self):
        self.assertEqual(self.vex.get_help(), _HELP)

    def testCached(self):
        self.assertIs(self.vex.help, self.vex.help)

    def testRegeneratedAfterAdd(self):
        before = self.vex.help
        self.vex.add("i", "input", ArgType.STRING, -1, "Input files")
        self.vex.add(long_name="dry-run")
        after = self.vex.help
        self.assertNotEqual(before, after)
        self.assertTrue(after.startswith("Usage: prog [-h/--help] [-v/--version] [-i/--input] ... [--dry-run]\n"))
        self.assertIn(" -i, --input    Input files\n", after)
        self.assertIn(" --dry-run\n", after)

    def testRefusedHelpStorage(self):
        allocator = TrackingAllocator()
        with Vex("prog", "1.2.3", "A test program", allocator=allocator) as vex:
            allocator.limit = allocator.acquired
            self.assertIsNone(vex.get_help())
            self.assertIs(vex.status, Status.ALLOCATION_FAILURE)
            allocator.limit = None

    def testVersion(self):
        self.assertEqual(self.vex.version, "1.2.3")

    def testPrintHelp(self):
        stream = io.StringIO()
        self.vex.print_help(file=stream)
        self.assertIn("Usage: prog [-h/--help] [-v/--version]", stream.getvalue())
        self.assertIn("Print the version string", stream.getvalue())

    def testPrintVersion(self):
        stream = io.StringIO()
        self.vex.print_version(file=stream)
        self.assertEqual(stream.getvalue().strip(), "prog 1.2.3")


class TestTeardown(TestCase):
    """close() and the context manager."""

    def testEverythingIsReleased(self):
        allocator = TrackingAllocator()
        vex = Vex("prog", "1.0.0", "A test program", allocator=allocator)
        vex.add("i", "input", ArgType.STRING, -1, "Input files")
        vex.parse(["prog", "-i", "a", "b", "c", "1"])
        vex.get_help()
        self.assertGreater(allocator.live, 0)
        vex.close()
        self.assertEqual(allocator.live, 0)
        self.assertEqual(allocator.acquired, allocator.released)

    def testUseAfterCloseRaises(self):
        vex = Vex("prog", "1.0.0", "A test program")
        vex.close()
        self.assertTrue(vex.closed)
        for operation in (
                lambda: vex.add("x"),
                lambda: vex.parse(["prog"]),
                lambda: vex.get(0),
                lambda: vex.found("h"),
                vex.get_help,
                vex.close,
        ):
            with self.assertRaises(ValueError):
                operation()

    def testContextManagerCloses(self):
        with Vex("prog", "1.0.0", "A test program") as vex:
            pass
        self.assertTrue(vex.closed)

    def testExplicitCloseInsideBlock(self):
        with Vex("prog", "1.0.0", "A test program") as vex:
            vex.close()
        self.assertTrue(vex.closed)


if __name__ == "__main__":
    unittest.main()
