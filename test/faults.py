"""
Faults module behavioral tests (status codes, construction, rendering, triggering).

Scope
- Validate the stable Status numbering and host remapping through __codes__.
- Validate fault() construction and copy.replace() option merging.
- Validate rich rendering of header, message and hint.
- Validate trigger() for errors and warnings in library and shell modes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from vexparse.faults import (
    AllocationError,
    IgnoredValueWarning,
    InvalidValueError,
    Status,
    UnknownArgumentError,
    fault,
    trigger,
)
from vexparse.utils import Unset


def _render(object):
    stream = io.StringIO()
    Console(file=stream, width=120).print(object)
    return stream.getvalue()


class TestStatus(TestCase):
    """Status identifiers."""

    def testNumbering(self):
        self.assertEqual(
            [int(status) for status in Status],
            [0, 1, 2, 3],
        )
        self.assertEqual(Status.UNKNOWN_ARGUMENT.name, "UNKNOWN_ARGUMENT")

    def testNormalizeDefaultsToValue(self):
        self.assertEqual(Status.INVALID_VALUE.normalize(), "2")

    def testNormalizeUsesHostCodes(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {Status.INVALID_VALUE: "E2"}, create=True):
            self.assertEqual(Status.INVALID_VALUE.normalize(), "E2")


class TestFaultConstruction(TestCase):
    """fault() and copy.replace()."""

    def testFaultMatchesStatus(self):
        self.assertIsInstance(fault(Status.ALLOCATION_FAILURE), AllocationError)
        self.assertIsInstance(fault(2, "bad"), InvalidValueError)
        self.assertIsInstance(fault(Status.UNKNOWN_ARGUMENT, "x"), UnknownArgumentError)

    def testConstructionWithAndWithoutMessage(self):
        for type in (AllocationError, InvalidValueError, UnknownArgumentError, IgnoredValueWarning):
            with self.subTest(type=type.__name__):
                self.assertIs(type().message, Unset)
                self.assertEqual(type("detail", hint="h").message, "detail")

    def testOkHasNoFault(self):
        with self.assertRaises(ValueError):
            fault(Status.OK)

    def testStatusFollowsClass(self):
        self.assertIs(InvalidValueError("bad").status, Status.INVALID_VALUE)

    def testReplaceMergesOptions(self):
        original = UnknownArgumentError("unknown option '-x'", title="unknown option")
        replaced = copy.replace(original, prog="tool")
        self.assertEqual(replaced.message, original.message)
        self.assertEqual(dict(replaced.options), {"title": "unknown option", "prog": "tool"})
        self.assertNotIn("prog", original.options)

    def testStringForm(self):
        self.assertEqual(str(InvalidValueError("bad value")), "bad value")
        self.assertEqual(str(AllocationError()), "")


class TestRendering(TestCase):
    """rich rendering."""

    def testHeaderMessageAndHint(self):
        output = _render(UnknownArgumentError(
            "unknown option '-x' at first position",
            prog="tool",
            title="unknown option",
            hint="try 'tool --help' to see all available options",
            colorful=False,
        ))
        self.assertIn("[ tool — 3 | Unknown Option ]", output)
        self.assertIn("unknown option '-x' at first position", output)
        self.assertIn(" → try 'tool --help'", output)

    def testFancyUsesPanel(self):
        output = _render(InvalidValueError("bad", prog="tool", title="bad value", fancy=True, colorful=False))
        self.assertIn("╭", output)
        self.assertIn("bad", output)


class TestTrigger(TestCase):
    """trigger() behavior."""

    def testErrorIsRaised(self):
        with self.assertRaises(InvalidValueError) as context:
            trigger(InvalidValueError("bad"), prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")

    def testErrorExitsInShellMode(self):
        stream = io.StringIO()
        with mock.patch("vexparse.faults.console", Console(file=stream)):
            with self.assertRaises(SystemExit):
                trigger(InvalidValueError("bad"), shell=True, colorful=False)
        self.assertIn("bad", stream.getvalue())

    def testWarningIsWarned(self):
        with self.assertWarns(IgnoredValueWarning):
            trigger(IgnoredValueWarning("ignored"))

    def testWarningIsPrintedInShellMode(self):
        stream = io.StringIO()
        with mock.patch("vexparse.faults.console", Console(file=stream)):
            trigger(IgnoredValueWarning("ignored"), shell=True, colorful=False)
        self.assertIn("ignored", stream.getvalue())

    def testNonFaultIsRejected(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


if __name__ == "__main__":
    unittest.main()
