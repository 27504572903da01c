"""
Command line entry point for the jj compiler.

Author: xwest
"""

import argparse
import logging
import sys
from typing import List, Optional

from .assembler import AssemblerConfig, transpile_files, wrap_html
from .lexer.errors import TranspileError

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jjc",
        description="Compile jj source files into one JavaScript program",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    jjc lib.jj main.jj                     # Print the program, main.jj runs
    jjc --html -o index.html main.jj       # Write a page that runs the program
    jjc --entry main.jj main.jj helpers.js # Pick the entry unit explicitly
        """
    )

    parser.add_argument('files', nargs='+', metavar='FILE',
                        help='jj sources (or .js files to include verbatim); '
                             'the last one is the entry module')
    parser.add_argument('--html', action='store_true',
                        help='Wrap the program in an HTML page')
    parser.add_argument('-o', '--output', metavar='FILE',
                        help='Write the output to FILE instead of stdout')
    parser.add_argument('--entry', metavar='URI',
                        help='Uri of the module to run (default: last file)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log compilation progress to stderr')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the compiler; returns the process exit status."""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = AssemblerConfig(entry_uri=args.entry)
    try:
        program = transpile_files(args.files, config)
    except TranspileError as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"jjc: {e}", file=sys.stderr)
        return 1

    if args.html:
        program = wrap_html(program)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(program)
        logger.debug("wrote %s", args.output)
    else:
        sys.stdout.write(program)
    return 0


if __name__ == "__main__":
    sys.exit(main())
