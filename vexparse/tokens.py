"""
vexparse tokens and the token buffer.

- Token: one realized occurrence of an option, or one run of standalone bare
  values, found during a single parse.
  • descriptor: the matched Descriptor, or None for a standalone value.
  • type: the descriptor's ArgType, or the inferred type of a standalone value.
  • values: ordered Value objects; every value carries the token's type and a
    FLAG token never carries any (enforced on append with TypeError).
- TokenBuffer: ordered store written by the parser and read by everyone else.
  • count / len(), get(index) (None outside [0, count)), found(name),
    forward and reverse iteration.
  • every token and value stored is acquired from the allocation strategy and
    released again by clear().
"""
from .allocators import Allocator
from .faults import AllocationError
from .utils import ReflectiveType, Unset, coalesce
from .values import ArgType, Value


class Token(metaclass=ReflectiveType):
    """
    One occurrence of an option, or a standalone value run.

    Properties
    - descriptor, type and values (a copy) are read-only.
    - short_name / long_name mirror the descriptor names (None when standalone).
    """

    __introspectable__ = (
        "short_name",
        "long_name",
        "type",
        "values",
    )

    def __init__(self, descriptor=None, /, type=Unset):
        if descriptor is None:
            if (type := ArgType(coalesce(type, ArgType.UNKNOWN))) in (ArgType.UNKNOWN, ArgType.FLAG):
                raise TypeError("standalone token must carry a value-bearing type")
            self._short_name = self._long_name = None
        else:
            if type is not Unset and ArgType(type) is not descriptor.arg_type:
                raise TypeError("token type must match its descriptor")
            type = descriptor.arg_type
            self._short_name = descriptor.short_name
            self._long_name = descriptor.long_name
        self._descriptor = descriptor
        self._type = type
        self._values = []

    @property
    def descriptor(self):
        return self._descriptor

    @property
    def standalone(self):
        return self._descriptor is None

    @property
    def count(self):
        return len(self._values)

    @property
    def value(self):
        """the first value's payload, or None when the token holds no values."""
        return self._values[0].payload if self._values else None

    @property
    def payloads(self):
        return [value.payload for value in self._values]

    def append(self, value, /):
        if not isinstance(value, Value):
            raise TypeError("token values must be Value instances")
        if self._type is ArgType.FLAG:
            raise TypeError("flag tokens cannot carry values")
        if value.type is not self._type:
            raise TypeError(f"{value.type.label} value cannot join a {self._type.label} token")
        self._values.append(value)

    def accepts(self, count=Unset, /):
        """
        whether one more bare value can be grouped under this token.

        standalone tokens are unbounded; option tokens defer to their descriptor.
        """
        count = coalesce(count, len(self._values))
        if self._descriptor is None:
            return True
        return self._descriptor.accepts(count)

    def matches(self, name, /):
        """one character → compare with short_name, longer → compare with long_name."""
        if not isinstance(name, str) or not name:
            return False
        if len(name) == 1:
            return name == self._short_name
        return name == self._long_name


class TokenBuffer:
    """
    Ordered, append-only (per parse) store of tokens.
    """

    def __init__(self, allocator=Unset):
        self._allocator = coalesce(allocator, Allocator())
        self._tokens = []

    def _acquire(self, object, /):
        try:
            return self._allocator.acquire(object)
        except MemoryError:
            raise AllocationError() from None

    def open(self, descriptor=None, /, type=Unset):
        """create, store and return a new token."""
        token = self._acquire(Token(descriptor, type=type))
        self._tokens.append(token)
        return token

    def put(self, token, value, /):
        """append a value to a stored token."""
        token.append(value)
        try:
            self._acquire(value)
        except AllocationError:
            token._values.pop()
            raise

    def clear(self):
        for token in self._tokens:
            for value in token._values:
                self._allocator.release(value)
            self._allocator.release(token)
        self._tokens.clear()

    @property
    def count(self):
        return len(self._tokens)

    def get(self, index, /):
        """token at index, or None outside [0, count)."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._tokens):
            return None
        return self._tokens[index]

    def found(self, name, /):
        return any(token.matches(name) for token in self._tokens)

    def __len__(self):
        return len(self._tokens)

    def __iter__(self):
        return iter(tuple(self._tokens))

    def __reversed__(self):
        return reversed(tuple(self._tokens))

    def __getitem__(self, index, /):
        return self._tokens[index]


__all__ = (
    "Token",
    "TokenBuffer",
)
