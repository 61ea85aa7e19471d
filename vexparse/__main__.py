"""
`python -m vexparse [args...]`: tokenize a command line and pretty-print the result.

Registered options (besides -h/--help and -v/--version):
- -i/--input   STRING, unbounded
- -n/--count   INTEGER, one value
- -s/--scale   FLOAT, one value
- -q/--quiet   FLAG

Faults are rendered on stderr (shell mode) and exit with status 1.
"""
import sys

from rich.pretty import pprint

from . import __version__
from .context import Vex
from .logger import setup_logging
from .values import ArgType


def main(argv=None):
    setup_logging()
    argv = sys.argv if argv is None else argv

    with Vex("vexparse", __version__, "Tokenize a command line and print the parsed tokens.", shell=True) as vex:
        vex.add("i", "input", ArgType.STRING, -1, "Input files")
        vex.add("n", "count", ArgType.INTEGER, 1, "Repeat count")
        vex.add("s", "scale", ArgType.FLOAT, 1, "Scale factor")
        vex.add("q", "quiet", ArgType.FLAG, 0, "Print nothing")

        if not vex.parse(argv):
            vex.trigger()
        if vex.found("help"):
            vex.print_help()
            return 0
        if vex.found("version"):
            vex.print_version()
            return 0
        if not vex.found("quiet"):
            pprint(vex.tokens, expand_all=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
