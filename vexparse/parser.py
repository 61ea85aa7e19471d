"""
vexparse parsing engine: a single left-to-right pass over an argument vector.

Dispatch per argument (argument 0, the program name, is skipped; None entries
are ignored):

1. terminator   "--"            consumed; option interpretation stops for the rest.
2. long option  "--name[=val]"  exact match on registered long names. A match
                                opens a token and makes it the grouping target;
                                "=val" is coerced into its first value (ignored,
                                with a warning, for flags).
3. cluster      "-abc"          each registered short character opens a token.
                                An unknown character resolves, in order, to:
                                • an attached value for the grouping target when it is
                                  an option token still allowed a value: the rest of
                                  the cluster is coerced and appended, scanning stops;
                                • otherwise an unknown-argument fault.
4. bare         anything else   (or any argument after "--"): type is inferred, then
                                the value is grouped under the grouping target when
                                option parsing is on and the target still has room. A
                                type mismatch against an option target with room is an
                                invalid-value fault. Otherwise the value opens a
                                standalone token which becomes the target for the
                                following bare values of its type.

Every option argument resets the grouping target before it is scanned. The scan
state lives in a _State owned by one parse() call; the token buffer is cleared
first and refilled, and the first fault aborts the pass, leaving the tokens
appended so far in place.
"""
import difflib

from .faults import IgnoredValueWarning, InvalidValueError, UnknownArgumentError, trigger
from .logger import logger
from .utils import ordinal
from .values import coerce, infer


class _State:
    """
    per-call scan state.

    - index: 1-based position of the argument being scanned.
    - options: False once the terminator was seen.
    - target: the grouping target token (its descriptor, if any, is target.descriptor).
    """
    __slots__ = ("index", "options", "target")

    def __init__(self):
        self.index = 0
        self.options = True
        self.target = None


def _hint(prog, /, suggestions=()):
    route = "'%s --help'" % prog if prog else "--help"
    try:
        return "did you mean %r? you can also run %s to see all options" % (suggestions[0], route)
    except IndexError:
        return "try %s to see all available options" % route


def _long(registry, buffer, state, argument, /, **options):
    name, separator, text = argument[2:].partition("=")

    if (descriptor := registry.long(name)) is None:
        suggestions = ["--" + match for match in difflib.get_close_matches(name, registry.longs(), 5)]
        raise UnknownArgumentError(
            "unknown option %r at %s position" % ("--" + name, ordinal(state.index)),
            title="unknown option",
            hint=_hint(options.get("prog"), suggestions),
            argument=argument,
            index=state.index,
            suggestions=suggestions,
        )

    token = buffer.open(descriptor)
    state.target = token

    if not separator:
        return
    if descriptor.flag:
        trigger(IgnoredValueWarning(
            "flag %r at %s position ignores its inline value" % ("--" + name, ordinal(state.index)),
            title="flag cannot take a value",
            hint="remove everything from '=' (for example: --%s)" % name,
            argument=argument,
            index=state.index,
        ), **options)
        return
    buffer.put(token, coerce(text, descriptor.arg_type))


def _cluster(registry, buffer, state, argument, /, **options):
    for position, char in enumerate(argument[1:], start=1):
        if (descriptor := registry.short(char)) is not None:
            state.target = buffer.open(descriptor)
            continue

        target = state.target
        if target is not None and not target.standalone and target.descriptor.attachable(target.count):
            logger.debug("Attached %r to -%s.", argument[position:], target.short_name)
            buffer.put(target, coerce(argument[position:], target.type))
            return

        raise UnknownArgumentError(
            "unknown option '-%s' at %s position" % (char, ordinal(state.index)),
            title="unknown option",
            hint=_hint(options.get("prog")),
            argument=argument,
            index=state.index,
        )


def _bare(registry, buffer, state, argument, /, **options):
    type = infer(argument)
    target = state.target

    if state.options and target is not None and target.accepts():
        if target.type is type:
            buffer.put(target, coerce(argument, type))
            return
        if not target.standalone:
            name = target.long_name and "--" + target.long_name or "-" + target.short_name
            raise InvalidValueError(
                "unexpected %s value %r for option %r at %s position" % (
                    type.label, argument, name, ordinal(state.index)
                ),
                title="unexpected value",
                hint="%s takes %s values" % (name, target.type.label),
                argument=argument,
                index=state.index,
            )

    token = buffer.open(type=type)
    buffer.put(token, coerce(argument, type))
    state.target = token


def parse(registry, buffer, arguments, /, **options):
    """
    rebuild buffer from arguments against registry.

    parameters
    - registry: Registry of known descriptors.
    - buffer: TokenBuffer; cleared before scanning.
    - arguments: iterable of str | None, argument 0 being the program name.
    - options: rendering options forwarded to warnings (prog, shell, colorful, fancy).

    raises
    - UnknownArgumentError, InvalidValueError, AllocationError on the first fault.
    - TypeError when arguments is a plain string or holds non-string entries.
    """
    if isinstance(arguments, str | bytes):
        raise TypeError("parse() arguments must be a sequence of strings, not a string")
    arguments = list(arguments)

    buffer.clear()
    state = _State()

    for state.index, argument in enumerate(arguments[1:], start=1):
        if argument is None:
            continue
        if not isinstance(argument, str):
            raise TypeError("parse() arguments must be strings")

        if argument == "--":
            state.options = False
            logger.debug("Terminator at %s position; option parsing disabled.", ordinal(state.index))
            continue

        if state.options and argument.startswith("-") and argument != "-":
            state.target = None
            if argument.startswith("--"):
                _long(registry, buffer, state, argument, **options)
            else:
                _cluster(registry, buffer, state, argument, **options)
        else:
            _bare(registry, buffer, state, argument, **options)

    logger.debug("Parsed %d argument(s) into %d token(s).", max(len(arguments) - 1, 0), len(buffer))


__all__ = (
    "parse",
)
