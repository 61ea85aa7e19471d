"""
vexparse allocation strategies.

Every object a Vex context takes ownership of (its name/version/description
strings, each registered descriptor, each parsed token and each token value,
the cached help text) is acquired from the context's allocator when it is
stored and released back to it when it is dropped: a token buffer clear, or
the context teardown.

- Allocator: the default strategy. acquire() hands the object back unchanged
  and release() does nothing; Python's own memory management does the rest.
- TrackingAllocator: counts live objects, refuses double releases and can be
  given a limit after which acquire() raises MemoryError. Used to instrument
  leak checks and to inject allocation failures.

A strategy signals exhaustion by raising MemoryError from acquire(); the
context turns that into Status.ALLOCATION_FAILURE.
"""
from collections import Counter


class Allocator:
    """
    default allocation strategy (pass-through).
    """

    def acquire(self, object, /):
        return object

    def release(self, object, /):
        return None


class TrackingAllocator(Allocator):
    """
    instrumented allocation strategy.

    attributes
    - live: number of objects acquired and not yet released.
    - acquired / released: running totals.
    - limit: maximum number of successful acquisitions (None = unlimited).

    errors
    - MemoryError from acquire() once limit acquisitions were granted.
    - RuntimeError from release() for an object that is not live (double free).
    """

    def __init__(self, limit=None):
        if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
            raise ValueError("allocator limit must be a non-negative integer")
        self.limit = limit
        self.acquired = 0
        self.released = 0
        self._counts = Counter()
        self._objects = {}

    @property
    def live(self):
        return sum(self._counts.values())

    def acquire(self, object, /):
        if self.limit is not None and self.acquired >= self.limit:
            raise MemoryError("allocation limit of %d reached" % self.limit)
        self.acquired += 1
        self._counts[key := id(object)] += 1
        # keep a reference so the identity stays valid while live
        self._objects[key] = object
        return object

    def release(self, object, /):
        if self._counts[key := id(object)] <= 0:
            del self._counts[key]
            raise RuntimeError(f"release of an object that is not live: {object!r}")
        self.released += 1
        self._counts[key] -= 1
        if not self._counts[key]:
            del self._counts[key]
            del self._objects[key]


__all__ = (
    "Allocator",
    "TrackingAllocator",
)
