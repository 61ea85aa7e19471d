"""
vexparse context: the Vex object applications build, fill and query.

What this module provides
- Vex: owns a descriptor Registry and a TokenBuffer, runs the parser, tracks the
  live status, and renders help/version text.

Lifecycle
- construction: name, version and description are required; a missing one leaves
  the context in Status.ALLOCATION_FAILURE without the default descriptors.
  Otherwise -h/--help and -v/--version are registered up front.
- registration: add(...) validates and appends one descriptor; the cached help
  text is dropped and regenerated lazily.
- parsing: parse(argv) rebuilds the token buffer from scratch on every call.
- reading: count/get/found, iteration (forward and reversed) and indexing.
- teardown: close() releases everything through the allocation strategy; the
  context is unusable afterwards. Vex is also a context manager.

Status model
- add(), parse() and get_help() never raise for user-level failures: they
  return a success signal and record status/message. The matching fault
  exception is kept in .fault; trigger() raises it (shell=False) or renders it
  on stderr and exits (shell=True).

Concurrency
- A Vex instance is not safe for concurrent parse() calls: parse() clears and
  rewrites the shared buffer. Distinct instances are independent.

Quick start
    from vexparse import Vex, ArgType

    with Vex("copy", "1.0.0", "Copy files around.") as vex:
        vex.add("i", "input", ArgType.STRING, -1, "Input files")
        vex.add("n", "count", ArgType.INTEGER, 1, "Number of copies")
        if not vex.parse(["copy", "-i", "a.txt", "b.txt", "--count=2"]):
            vex.trigger()
        for token in vex:
            print(token.long_name, token.payloads)
"""
import sys

from rich.console import Console
from rich.panel import Panel

from .allocators import Allocator
from .descriptors import Descriptor, Registry
from .faults import AllocationError, Status, VexException, trigger
from .help import compose_help, compose_version
from .logger import logger
from .parser import parse
from .tokens import TokenBuffer
from .utils import Unset, coalesce
from .values import ArgType

_DEFAULTS = (
    ("h", "help", ArgType.FLAG, 0, "Print this help message"),
    ("v", "version", ArgType.FLAG, 0, "Print the version string"),
)


class Vex:
    """
    Command-line parsing context.

    Parameters
    - name / version / description: str (required) program metadata.
    - allocator: allocation strategy (see vexparse.allocators); defaults to Allocator().
    - shell: surface faults by printing and exiting instead of raising.
    - colorful: style rich output.
    - fancy: wrap rich output in panels.
    """

    def __init__(
            self,
            name=Unset,
            version=Unset,
            description=Unset,
            *,
            allocator=Unset,
            shell=False,
            colorful=True,
            fancy=False,
    ):
        self._allocator = coalesce(allocator, Allocator())
        self._registry = Registry(self._allocator)
        self._buffer = TokenBuffer(self._allocator)
        self._strings = []
        self._help = None
        self._fault = None
        self._closed = False
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)

        metadata = {"name": name, "version": version, "description": description}
        for key, value in metadata.items():
            if value is not Unset and value is not None and not isinstance(value, str):
                raise TypeError(f"vex {key} must be a string")

        self._name = coalesce(name, None)
        self._version = coalesce(version, None)
        self._description = coalesce(description, None)

        if None in (self._name, self._version, self._description):
            logger.debug("Missing program metadata; context left without defaults.")
            self._fail(AllocationError())
            return

        try:
            for value in (self._name, self._version, self._description):
                self._strings.append(self._allocator.acquire(value))
        except MemoryError:
            self._fail(AllocationError())
            return

        for arguments in _DEFAULTS:
            if not self.add(*arguments):
                return

    def _check(self):
        if self._closed:
            raise ValueError("operation on closed context")

    def _fail(self, fault, /):
        self._fault = fault
        logger.debug("Status %s: %s", fault.status.name, fault)
        return False

    def _succeed(self):
        self._fault = None
        return True

    @property
    def name(self):
        return self._name

    @property
    def description(self):
        return self._description

    @property
    def status(self):
        """live Status of the last mutating operation."""
        return Status.OK if self._fault is None else self._fault.status

    @property
    def message(self):
        """single-line detail for the live status, or None (always None for allocation failures)."""
        if self._fault is None or self._fault.message is Unset:
            return None
        return self._fault.message

    @property
    def fault(self):
        return self._fault

    @property
    def registry(self):
        return self._registry

    @property
    def descriptors(self):
        return tuple(self._registry)

    def add(self, short_name=None, long_name=None, arg_type=ArgType.FLAG, max_count=0, description=None):
        """
        register one descriptor; returns False and records the status on failure.
        """
        self._check()
        try:
            self._registry.add(Descriptor(short_name, long_name, arg_type, max_count, description))
        except VexException as fault:
            return self._fail(fault)
        self._invalidate()
        return self._succeed()

    def parse(self, argv=Unset):
        """
        rebuild the token buffer from argv (defaults to sys.argv); argv[0] is skipped.
        """
        self._check()
        argv = coalesce(argv, sys.argv)
        try:
            parse(
                self._registry,
                self._buffer,
                argv,
                prog=self._name,
                shell=self.shell,
                colorful=self.colorful,
                fancy=self.fancy,
            )
        except VexException as fault:
            return self._fail(fault)
        return self._succeed()

    @property
    def count(self):
        self._check()
        return self._buffer.count

    @property
    def tokens(self):
        self._check()
        return tuple(self._buffer)

    def get(self, index, /):
        """token at index, or None outside [0, count)."""
        self._check()
        return self._buffer.get(index)

    def found(self, name, /):
        """presence of a parsed option by short (one character) or long name."""
        self._check()
        return self._buffer.found(name)

    def __len__(self):
        return self.count

    def __iter__(self):
        self._check()
        return iter(self._buffer)

    def __reversed__(self):
        self._check()
        return reversed(self._buffer)

    def __getitem__(self, index, /):
        self._check()
        return self._buffer[index]

    def _invalidate(self):
        if self._help is not None:
            self._allocator.release(self._help)
            self._help = None

    def get_help(self):
        """
        cached plain help text; None (and ALLOCATION_FAILURE) when storage is refused.
        """
        self._check()
        if self._help is None:
            if self._name is None:
                return None
            text = compose_help(self._name, self._description, self._registry).plain
            try:
                self._help = self._allocator.acquire(text)
            except MemoryError:
                self._fail(AllocationError())
                return None
        return self._help

    def get_version(self):
        self._check()
        return self._version

    help = property(get_help)
    version = property(get_version)

    def print_help(self, *, file=Unset):
        self._check()
        console = Console(file=coalesce(file, None), no_color=not self.colorful)
        text = compose_help(coalesce(self._name, ""), self._description, self._registry, colorful=self.colorful)
        text.rstrip()
        if self.fancy:
            console.print(Panel(text, title=self._name, title_align="left"))
        else:
            console.print(text)

    def print_version(self, *, file=Unset):
        self._check()
        console = Console(file=coalesce(file, None), no_color=not self.colorful)
        console.print(compose_version(coalesce(self._name, ""), coalesce(self._version, ""), colorful=self.colorful))

    def trigger(self, **options):
        """
        surface the live fault: raise it, or (shell mode) render it and exit.

        no-op when the live status is OK.
        """
        if self._fault is None:
            return
        trigger(self._fault, **{
            "prog": self._name,
            "shell": self.shell,
            "colorful": self.colorful,
            "fancy": self.fancy,
        } | options)

    def close(self):
        """
        release every owned object; the context cannot be used afterwards.
        """
        self._check()
        self._buffer.clear()
        self._registry.close()
        self._invalidate()
        for value in self._strings:
            self._allocator.release(value)
        self._strings.clear()
        self._closed = True
        logger.debug("Context %r closed.", self._name)

    @property
    def closed(self):
        return self._closed

    def __enter__(self):
        self._check()
        return self

    def __exit__(self, *unused):
        if not self._closed:
            self.close()

    def __repr__(self):
        return f"vex(name={self._name!r}, version={self._version!r}, status={self.status.name})"


__all__ = (
    "Vex",
)
