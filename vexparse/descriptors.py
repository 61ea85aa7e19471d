r"""
vexparse option descriptors and the descriptor registry.

Overview
- Descriptor: immutable definition of one recognizable option.
  • short_name: single ASCII letter used as "-c" (optional).
  • long_name: identifier used as "--name" / "--name=value" (optional).
  • arg_type: ArgType.FLAG | INTEGER | FLOAT | STRING.
  • max_count: bare values groupable under one occurrence (negative = unbounded,
    zero = nothing beyond an attached or "=" value).
  • description: help text.
- Registry: append-only, validated collection of descriptors with unique names.

Validation (in order)
- short_name, when given, must be one ASCII letter.
- at least one of short_name/long_name must be given.
- long_name must not start with '-' nor contain '=' or whitespace.
- arg_type must be a value-bearing type or FLAG; max_count must be an integer,
  and 0 for a FLAG.
- registry only: neither name may collide with an existing descriptor.

Every violation raises InvalidValueError; a storage refusal from the allocation
strategy raises AllocationError. A rejected descriptor leaves the registry unchanged.

Quick example:
    >>> registry = Registry()
    >>> registry.add(Descriptor("i", "input", ArgType.STRING, -1, "Input files"))
    >>> registry.find("input").short_name
    'i'
"""
import re

from .allocators import Allocator
from .faults import AllocationError, InvalidValueError
from .logger import logger
from .utils import ReflectiveType, Unset, coalesce
from .values import ArgType


def _sanitize_names(metadata, /):
    """
    Internal: validate and normalize short_name/long_name.

    Empty strings are treated as absent names and normalized to None.
    """
    short = metadata["short_name"]
    if short is not None and not isinstance(short, str):
        raise InvalidValueError(
            "invalid short name: %r" % (short,),
            title="invalid short name",
            hint="short names are a single letter, for example 'i' for -i",
        )
    if short and not (len(short) == 1 and short.isascii() and short.isalpha()):
        raise InvalidValueError(
            "invalid short name: %s" % short,
            title="invalid short name",
            hint="short names are a single letter, for example 'i' for -i",
        )

    long = metadata["long_name"]
    if long is not None and not isinstance(long, str):
        raise InvalidValueError(
            "invalid long name: %r" % (long,),
            title="invalid long name",
            hint="long names are strings, for example 'input' for --input",
        )

    if not short and not long:
        raise InvalidValueError(
            "no argument name given",
            title="missing name",
            hint="give a short name, a long name, or both",
        )

    if long and not re.fullmatch(r"[^\s=-][^\s=]*", long):
        raise InvalidValueError(
            "invalid long name: %s" % long,
            title="invalid long name",
            hint="drop the leading dashes and avoid '=' or spaces (for example: 'input')",
        )

    metadata["short_name"] = short or None
    metadata["long_name"] = long or None


def _sanitize_shape(metadata, /):
    """
    Internal: validate arg_type, max_count and description.
    """
    try:
        arg_type = ArgType(metadata["arg_type"])
    except ValueError:
        arg_type = ArgType.UNKNOWN
    if isinstance(metadata["arg_type"], bool) or arg_type is ArgType.UNKNOWN:
        raise InvalidValueError(
            "invalid argument type: %r" % (metadata["arg_type"],),
            title="invalid argument type",
            hint="use one of %s" % ", ".join(type.label for type in ArgType if type is not ArgType.UNKNOWN),
        )
    metadata["arg_type"] = arg_type

    if isinstance(max_count := metadata["max_count"], bool) or not isinstance(max_count, int):
        raise InvalidValueError(
            "invalid maximum value count: %r" % (max_count,),
            title="invalid maximum value count",
            hint="use a negative number for unbounded, 0 for none, or a positive limit",
        )
    if arg_type is ArgType.FLAG and max_count:
        raise InvalidValueError(
            "invalid maximum value count for a flag: %d" % max_count,
            title="invalid maximum value count",
            hint="flags take no values; leave the maximum value count at 0",
        )

    if not isinstance(description := metadata["description"], str | None):
        raise InvalidValueError(
            "invalid description: %r" % (description,),
            title="invalid description",
            hint="descriptions are plain strings",
        )


class Descriptor(metaclass=ReflectiveType):
    """
    Immutable definition of one recognizable option.

    The names listed in __introspectable__ are exposed as read-only properties
    mirroring the sanitized constructor arguments.
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "arg_type",
        "max_count",
        "description",
    )

    def __init__(
            self,
            short_name=None,
            long_name=None,
            arg_type=ArgType.FLAG,
            max_count=0,
            description=None,
    ):
        metadata = {
            "short_name": short_name,
            "long_name": long_name,
            "arg_type": arg_type,
            "max_count": max_count,
            "description": description,
        }
        _sanitize_names(metadata)
        _sanitize_shape(metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def flag(self):
        return self._arg_type is ArgType.FLAG

    @property
    def names(self):
        """user-facing spellings, short first: ("-i", "--input")."""
        return tuple(filter(None, (
            self._short_name and "-" + self._short_name,
            self._long_name and "--" + self._long_name,
        )))

    def accepts(self, count, /):
        """
        whether a token of this descriptor holding count values can take another bare value.
        """
        return not self.flag and (self._max_count < 0 or count < self._max_count)

    def attachable(self, count, /):
        """
        whether a token holding count values can take an attached ("-ivalue") value.

        an attached value is always allowed on a fresh token, max_count == 0 included.
        """
        return not self.flag and (self._max_count < 0 or count < max(self._max_count, 1))


class Registry:
    """
    Append-only, validated collection of descriptors.

    - order: iteration yields descriptors in registration order.
    - lookup: find(name) resolves a single character as a short name and
      anything longer as a long name.
    - ownership: each stored descriptor is acquired from the allocation
      strategy and released by close().
    """

    def __init__(self, allocator=Unset):
        self._allocator = coalesce(allocator, Allocator())
        self._descriptors = []
        self._shorts = {}
        self._longs = {}

    def add(self, descriptor, /):
        if not isinstance(descriptor, Descriptor):
            raise TypeError("add() argument must be a descriptor")

        if (short := descriptor.short_name) and short in self._shorts:
            raise InvalidValueError(
                "duplicate argument: -%s" % short,
                title="duplicate argument",
                hint="pick another short name; -%s is already registered" % short,
            )
        if (long := descriptor.long_name) and long in self._longs:
            raise InvalidValueError(
                "duplicate argument: --%s" % long,
                title="duplicate argument",
                hint="pick another long name; --%s is already registered" % long,
            )

        try:
            self._allocator.acquire(descriptor)
        except MemoryError:
            raise AllocationError() from None

        self._descriptors.append(descriptor)
        if short:
            self._shorts[short] = descriptor
        if long:
            self._longs[long] = descriptor
        logger.debug("Registered %s as %s.", "/".join(descriptor.names), descriptor.arg_type.label)

    def short(self, char, /):
        return self._shorts.get(char)

    def long(self, name, /):
        return self._longs.get(name)

    def find(self, name, /):
        """
        resolve a bare name: one character → short name, longer → long name.
        """
        if not isinstance(name, str) or not name:
            return None
        return self.short(name) if len(name) == 1 else self.long(name)

    def longs(self):
        return list(self._longs)

    def close(self):
        for descriptor in self._descriptors:
            self._allocator.release(descriptor)
        self._descriptors.clear()
        self._shorts.clear()
        self._longs.clear()

    def __len__(self):
        return len(self._descriptors)

    def __iter__(self):
        return iter(tuple(self._descriptors))

    def __getitem__(self, index, /):
        return self._descriptors[index]

    def __contains__(self, name, /):
        return self.find(name) is not None


__all__ = (
    "Descriptor",
    "Registry",
)
