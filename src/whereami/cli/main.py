#!/usr/bin/env python3
"""
WHEREAMI CLI - Programmer's Orientation Tool
--------------------------------------------
Usage: whereami <SOURCEFILENAME> <LINE>

Prints the breadcrumb of enclosing contexts for LINE of a source file,
or a one-line summary of every line when LINE is 0.

Requested output goes to stdout; diagnostics and errors go to stderr.
"""

import argparse
import logging
import re
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from whereami.core.config import VERSION
from whereami.core.engine import WhereamiEngine
from whereami.core.errors import UsageError, WhereamiError

# Requested output and diagnostics never share a stream
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

HELP_FLAGS = ("--help", "/?", "/help")
OPTION_FLAGS = ("--version", "-q", "--quiet")
LINE_NUMBER = re.compile(r'[0-9]+')


class UsageParser(argparse.ArgumentParser):
    """Routes argparse failures through UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def parse_line_number(value: str) -> int:
    if not LINE_NUMBER.fullmatch(value):
        raise argparse.ArgumentTypeError(
            f"expected a line number as the second command-line argument but got: {value}")
    return int(value)


class WhereamiCLI:
    """
    CLI wrapper that translates the command line into one engine run.
    """

    def __init__(self):
        self.parser = UsageParser(
            prog="whereami",
            description="whereami - programmer's orientation tool",
            usage="%(prog)s <SOURCEFILENAME> <LINE>",
            epilog="LINE...line number for which to print whereami information, 0 means print all",
            add_help=False,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("path", metavar="SOURCEFILENAME", help="Source file to inspect")
        self.parser.add_argument("line", metavar="LINE", type=parse_line_number,
                                 help="1-based line number, or 0 for every line")
        self.parser.add_argument("--version", action="version", version=f"whereami v{VERSION}")
        self.parser.add_argument("-q", "--quiet", action="store_true",
                                 help="Suppress non-fatal diagnostics")

    @property
    def usage(self) -> str:
        return f"Usage: {self.parser.prog} <SOURCEFILENAME> <LINE>\n\n{self.parser.epilog}"

    def _configure_logging(self, quiet: bool):
        logging.basicConfig(format="%(message)s")
        logging.getLogger("whereami").setLevel(logging.ERROR if quiet else logging.WARNING)

    def _order_args(self, argv: List[str]) -> List[str]:
        """Moves known flags first so that any other argument, even one starting
        with a dash, is taken as a positional."""
        flags = [arg for arg in argv if arg in OPTION_FLAGS]
        positionals = [arg for arg in argv if arg not in OPTION_FLAGS]
        return flags + ["--"] + positionals

    def run(self, argv: List[str]) -> int:
        """Primary routing entry point. Returns the process exit code."""
        if any(arg in HELP_FLAGS for arg in argv):
            console.out(self.usage)
            return 0

        args = self.parser.parse_args(self._order_args(argv))
        self._configure_logging(args.quiet)

        engine = WhereamiEngine()
        for line in engine.describe(args.path, args.line):
            console.out(line)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point; the only place fatal errors are reported."""
    cli = WhereamiCLI()
    try:
        return cli.run(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        err_console.print(f"[bold red]error:[/bold red] {escape(str(e))}", soft_wrap=True)
        err_console.out(cli.usage)
        return e.exit_code
    except WhereamiError as e:
        err_console.print(f"[bold red]error:[/bold red] {escape(str(e))}", soft_wrap=True)
        return e.exit_code
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
