"""
vexparse values: argument types, tagged values and text coercion.

Overview
- ArgType: the closed set of argument types. The numeric values are stable and
  shared with the status/fault layers for messages.
- Value: tagged variant carried by tokens. Each subclass binds one ArgType tag and
  validates its payload on construction:
  • Integer(int)   → ArgType.INTEGER (signed 64-bit range)
  • Float(float)   → ArgType.FLOAT
  • String(str)    → ArgType.STRING
- infer(text): classify an untyped bare argument (INTEGER, FLOAT or STRING).
- coerce(text, type): turn text into a Value of the requested type.

Coercion rules
- INTEGER/FLOAT parse the longest leading numeric prefix, like C atoi/atof:
  leading whitespace and a sign are accepted, trailing text is ignored, and text
  without any numeric prefix yields zero. FLOAT also reads hexadecimal
  prefixes ("0x1.8p1"). Coercion never fails.
- STRING keeps the text verbatim.

Quick example:
    >>> coerce("1024kb", ArgType.INTEGER)
    integer(1024)
    >>> infer("3.14"), infer("42"), infer("file.txt")
    (<ArgType.FLOAT: 3>, <ArgType.INTEGER: 2>, <ArgType.STRING: 4>)
"""
import re
from enum import IntEnum


class ArgType(IntEnum):
    """
    argument types understood by descriptors, tokens and values.

    - UNKNOWN: no type yet (inference start state); never carried by a value.
    - FLAG: presence-only; tokens of this type never carry values.
    - INTEGER / FLOAT / STRING: value-bearing types.
    """
    UNKNOWN = 0
    FLAG    = 1
    INTEGER = 2
    FLOAT   = 3
    STRING  = 4

    @property
    def label(self):
        """lowercase name used in messages and help output."""
        return self.name.lower()


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

_DIGITS = frozenset("0123456789")

_INTEGER = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)
_FLOAT = re.compile(
    r"\s*([+-]?(?:"
    r"(?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?"
    r"|inf(?:inity)?|nan))",
    re.ASCII | re.IGNORECASE,
)


class Value:
    """
    Base of the tagged value variants.

    Subclasses set __tag__ (the ArgType they carry) and __payload__ (the accepted
    Python type). Instances are immutable, hashable and compare equal only to
    values of the same variant holding an equal payload.
    """
    __slots__ = ("_payload",)
    __tag__ = ArgType.UNKNOWN
    __payload__ = object

    def __init__(self, payload, /):
        if type(self) is Value:
            raise TypeError("type 'Value' cannot be instantiated directly")
        if isinstance(payload, bool) or not isinstance(payload, self.__payload__):
            raise TypeError(f"{type(self).__name__.lower()} value must be a {self.__payload__.__name__}")
        object.__setattr__(self, "_payload", payload)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__.lower()} value is immutable")

    @property
    def payload(self):
        return self._payload

    @property
    def type(self):
        return self.__tag__

    def __eq__(self, other, /):
        if not isinstance(other, Value):
            return NotImplemented
        return type(self) is type(other) and self._payload == other._payload

    def __hash__(self):
        return hash((self.__tag__, self._payload))

    def __repr__(self):
        return f"{type(self).__name__.lower()}({self._payload!r})"

    def __rich_repr__(self):
        yield self._payload


class Integer(Value):
    __slots__ = ()
    __tag__ = ArgType.INTEGER
    __payload__ = int

    def __init__(self, payload, /):
        super().__init__(payload)
        if not INT64_MIN <= payload <= INT64_MAX:
            raise ValueError("integer value must fit in a signed 64-bit range")


class Float(Value):
    __slots__ = ()
    __tag__ = ArgType.FLOAT
    __payload__ = float


class String(Value):
    __slots__ = ()
    __tag__ = ArgType.STRING
    __payload__ = str


_VARIANTS = {
    ArgType.INTEGER: Integer,
    ArgType.FLOAT: Float,
    ArgType.STRING: String,
}


def variant(type, /):
    """
    Return the Value subclass carrying the given ArgType.

    Raises
    - TypeError: for FLAG and UNKNOWN, which carry no values.
    """
    try:
        return _VARIANTS[ArgType(type)]
    except (KeyError, ValueError):
        raise TypeError(f"no value variant for argument type {type!r}") from None


def atoi(text, /):
    """
    Permissive integer parsing: longest leading [sign]digits prefix, else 0.

    The result is clamped to the signed 64-bit range.
    """
    if not (match := _INTEGER.match(text)):
        return 0
    return max(INT64_MIN, min(INT64_MAX, int(match[1])))


def atof(text, /):
    """
    Permissive float parsing: longest leading decimal/exponent, hexadecimal
    ("0x1.8p1") or inf/nan prefix, else 0.0.
    """
    if not (match := _FLOAT.match(text)):
        return 0.0
    if match["hex"]:
        try:
            return float.fromhex(match[1])
        except OverflowError:
            return float("-inf" if match[1].startswith("-") else "inf")
    return float(match[1])


def infer(text, /):
    """
    Infer the type of an untyped bare argument by scanning every character.

    - only digits → INTEGER
    - digits and '.' (at least one dot) → FLOAT
    - any other character → STRING (short-circuits the scan)
    - empty text → STRING
    """
    type = ArgType.UNKNOWN
    for char in text:
        if char in _DIGITS:
            if type is not ArgType.FLOAT:
                type = ArgType.INTEGER
        elif char == ".":
            type = ArgType.FLOAT
        else:
            return ArgType.STRING
    return type if type is not ArgType.UNKNOWN else ArgType.STRING


def coerce(text, type, /):
    """
    Convert text into a Value of the given type. Never fails for valid types.
    """
    if not isinstance(text, str):
        raise TypeError("coerce() first argument must be a string")
    match variant(type).__tag__:
        case ArgType.INTEGER:
            return Integer(atoi(text))
        case ArgType.FLOAT:
            return Float(atof(text))
        case _:
            return String(text)


__all__ = (
    "ArgType",
    "Value",
    "Integer",
    "Float",
    "String",
    "variant",
    "infer",
    "coerce",
)
