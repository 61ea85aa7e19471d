"""
vexparse help and version rendering.

Both renderers build a rich Text so the same layout serves two consumers:
- Vex.get_help() caches the plain form (Text.plain) until the next registration.
- Vex.print_help() / Vex.print_version() print the styled form, optionally in a panel.

Layout
    Usage: prog [-h/--help] [-v/--version] [-i/--input] ...

    Description:
    <description>

    Arguments:
     -h, --help     Print this help message
     -v, --version  Print the version string
     -i, --input    Input files

A "..." follows a value-bearing descriptor whose max_count is not zero.

Palette keys
- usage-label, program-name, option-name, flag-name, ellipsis
- section-label, description-section, argument-description
- program-version, panel-title
Define a mapping named __styles__ in __main__ to override any entry; with
colorful=False styling is dropped entirely.
"""
from collections import defaultdict

from rich.text import Text

_STYLES = {
    "usage-label": "bold #00E6FF",  # cyan signature info
    "program-name": "bold #FF4D94",  # magenta-pink brand pop
    "option-name": "bold #00E6FF",
    "flag-name": "bold #22C55E",  # green for flags
    "ellipsis": "bold italic #FFD600",  # amber for value runs
    "section-label": "bold #FFFFFF",
    "description-section": "italic #A3A3A3",
    "argument-description": "#9CA3AF",
    "program-version": "bold #00E6FF",
    "panel-title": "bold #FF4D94",
}


def _styler(colorful, /):
    styles = defaultdict(str, _STYLES | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _label(descriptor, /):
    return " " + ", ".join(descriptor.names)


def compose_help(name, description, registry, /, *, colorful=False):
    """
    build the help Text for a program name, description and registry.
    """
    styler = _styler(colorful)
    text = Text()

    text.append("Usage", styler("usage-label")).append(": ")
    text.append(name, styler("program-name"))
    for descriptor in registry:
        style = styler("flag-name" if descriptor.flag else "option-name")
        text.append(" [").append("/".join(descriptor.names), style).append("]")
        if not descriptor.flag and descriptor.max_count != 0:
            text.append(" ").append("...", styler("ellipsis"))
    text.append("\n\n")

    if description:
        text.append("Description", styler("section-label")).append(":\n")
        text.append(description, styler("description-section")).append("\n\n")

    text.append("Arguments", styler("section-label")).append(":\n")
    width = max((len(_label(descriptor)) for descriptor in registry), default=0) + 2
    for descriptor in registry:
        style = styler("flag-name" if descriptor.flag else "option-name")
        text.append(_label(descriptor), style)
        if descriptor.description:
            text.append(" " * (width - len(_label(descriptor))))
            text.append(descriptor.description, styler("argument-description"))
        text.append("\n")

    return text


def compose_version(name, version, /, *, colorful=False):
    """
    build the version Text: "<name> <version>".
    """
    styler = _styler(colorful)
    return Text.assemble((name, styler("program-name")), " ", (version, styler("program-version")))


__all__ = (
    "compose_help",
    "compose_version",
)
