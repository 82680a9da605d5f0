"""
tokel command line interface.
Expands files, inline commands or stdin, and provides a REPL.
"""

import argparse
import sys
from typing import List, Optional

import tokel
from .errors import ErrorReporter, TokelError
from .log import LOG_LEVEL_ENV, LOG_LEVELS, default_level, setup_logging


def expand_source(source_code: str, filename: str) -> int:
    """Expand source text, printing the result or a diagnostic."""
    try:
        print(tokel.expand(source_code, filename))
        return 0
    except TokelError as error:
        reporter = ErrorReporter(source_code)
        reporter.report(error)
        reporter.print_errors()
        return 1


def run_file(filename: str) -> int:
    """Expand a source file ('-' reads stdin)."""
    if filename == '-':
        return expand_source(sys.stdin.read(), "<stdin>")
    try:
        source_code = tokel.read_source(filename)
    except OSError as error:
        print(f"Error reading file '{filename}': {error}", file=sys.stderr)
        return 1
    return expand_source(source_code, filename)


def repl():
    """Run the tokel REPL: each line is expanded on its own."""
    print("tokel REPL")
    print(f"Version {tokel.__version__}")
    print("Type 'exit' or 'quit' to leave, 'help' for help.\n")

    while True:
        try:
            line = input("tokel> ")
        except KeyboardInterrupt:
            print("\nKeyboardInterrupt")
            break
        except EOFError:
            print("\nGoodbye!")
            break

        if line.strip().lower() in ['exit', 'quit']:
            print("Goodbye!")
            break

        if line.strip().lower() == 'help':
            print_help()
            continue

        if line.strip() == '':
            continue

        expand_source(line, "<repl>")


def print_help():
    """Print REPL help."""
    transforms = " ".join(tokel.RECOGNIZED_TRANSFORMS)
    print(f"""
tokel REPL Help:
- Type any token stream; every [< ... >] region in it is expanded
- Use 'exit' or 'quit' to leave the REPL
- Press Ctrl+C or Ctrl+D to exit

Transforms: {transforms}

Example usage:
  tokel> struct [< my_type:case{{pascal}} >];
  struct MyType ;
  tokel> [< (hello [world]):ungroup:stringify >]
  r#"hello [world]"#
""")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokel",
        description="Expand inline token transformations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   # Start REPL
  %(prog)s input.rs                          # Expand a file
  %(prog)s -c "[< hello:case{upper} >]"      # Expand a command
  cat input.rs | %(prog)s -                  # Expand stdin
        """
    )

    parser.add_argument(
        'file',
        nargs='?',
        help="source file to expand ('-' for stdin)"
    )

    parser.add_argument(
        '-c', '--command',
        help='expand a single command'
    )

    parser.add_argument(
        '--log-level',
        default=default_level(),
        choices=LOG_LEVELS,
        type=str.upper,
        help=f'logging level (default: ${LOG_LEVEL_ENV} or WARNING)'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'tokel {tokel.__version__}'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the tokel CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.command is not None:
        return expand_source(args.command, "<command>")

    if args.file:
        return run_file(args.file)

    repl()
    return 0


if __name__ == '__main__':
    sys.exit(main())
