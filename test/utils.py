"""
Tests for the internal helpers.

This module verifies semantic guarantees of the utilities shared across layers:
- The Unset sentinel (singleton identity, falsy semantics, finality).
- coalesce() replacing only Unset.
- mirror() exposing defensive copies through ReflectiveType.
- ordinal() labels used in position-first messages.
"""
import unittest
from unittest import TestCase

from vexparse.utils import ReflectiveType, Unset, UnsetType, coalesce, mirror, ordinal, rename


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        """
        Unset is falsy but distinct from other falsy values.
        """
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        """
        Unset takes part in PEP 604 unions on either side.
        """
        self.assertTrue(isinstance("text", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, Unset | str))

    def testFinal(self) -> None:
        """
        The type refuses subclassing.
        """
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # noqa: F841
                pass


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), rename(), mirror() and ordinal().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testRename(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testMirrorCopiesContainers(self) -> None:
        class Record:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        record = Record()
        record.items.append(3)
        self.assertEqual(record.items, [1, 2])
        with self.assertRaises(AttributeError):
            record.items = []

    def testReflectiveRepr(self) -> None:
        """
        ReflectiveType derives a hyphenated type name and a field-based repr.
        """
        class SampleRecord(metaclass=ReflectiveType):
            __introspectable__ = ("name",)

            def __init__(self):
                self._name = "x"

        self.assertEqual(SampleRecord.__typename__, "sample-record")
        self.assertEqual(repr(SampleRecord()), "sample-record(name='x')")

    def testOrdinal(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(112), "112th")


if __name__ == "__main__":
    unittest.main()
