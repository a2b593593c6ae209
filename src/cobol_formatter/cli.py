"""
Command-Line Interface for the COBOL Formatter.

This module provides the command-line interface for the formatting tool.

Usage:
    cobol-format PROGRAM.cbl                      # formatted source on stdout
    cobol-format PROGRAM.cbl -o FORMATTED.cbl
    cobol-format PROGRAM.cbl --in-place --align-clauses
    cobol-format PROGRAM.cbl --check
    cat PROGRAM.cbl | cobol-format -
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from cobol_formatter import __version__
from cobol_formatter.config import Config, create_default_config, merge_configs
from cobol_formatter.exceptions import FormatterError
from cobol_formatter.logging_config import setup_logging
from cobol_formatter.main import format_document, format_file, verify_output, write_atomically
from cobol_formatter.warnings_log import WarningsLog

STDIN_MARKER = "-"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cobol-format",
        description="Reindent fixed-format COBOL source without changing its tokens.",
        epilog="For more information, see the project documentation.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Input/Output
    parser.add_argument(
        "input",
        help="COBOL source file, or - to read standard input",
        metavar="FILE",
    )

    destination = parser.add_mutually_exclusive_group()
    destination.add_argument(
        "-o", "--output",
        type=Path,
        help="Write the formatted source to this file",
        metavar="FILE",
    )

    destination.add_argument(
        "-i", "--in-place",
        action="store_true",
        help="Rewrite the input file",
    )

    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Configuration file (JSON)",
        metavar="FILE",
    )

    # Formatting options
    parser.add_argument(
        "--indent",
        type=int,
        default=3,
        help="Spaces per nesting level (default: 3)",
        metavar="N",
    )

    parser.add_argument(
        "--align-clauses",
        action="store_true",
        help="Align PIC and VALUE clauses per nesting depth",
    )

    parser.add_argument(
        "--blank-after-exit",
        action="store_true",
        help="Insert an empty line after EXIT. statements",
    )

    parser.add_argument(
        "--evaluate-indent-aware",
        action="store_true",
        help="Accepted for editor compatibility; currently has no effect",
    )

    # Run modes
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if the file would be reformatted; write nothing",
    )

    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify that formatting preserved every token before writing",
    )

    # Output options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress normal output",
    )

    parser.add_argument(
        "--encoding",
        default="latin-1",
        help="File encoding (default: latin-1)",
    )

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def args_to_config(args: argparse.Namespace) -> Config:
    """Convert parsed arguments to Config object."""
    config = replace(
        create_default_config(),
        indent_spaces=args.indent,
        align_descriptive_clauses=args.align_clauses,
        blank_line_after_exit=args.blank_after_exit,
        evaluate_indent_aware=args.evaluate_indent_aware,
        check=args.check,
        verify=args.verify,
        verbose=args.verbose,
        quiet=args.quiet,
        encoding=args.encoding,
        log_level="DEBUG" if args.verbose else "INFO",
    )

    # Command-line args override file config
    if args.config and args.config.exists():
        file_config = Config.load_from_file(args.config)
        config = merge_configs(file_config, config)

    return config


def run_stdin(config: Config, output: Optional[Path] = None) -> int:
    """
    Format standard input to standard output, or to an output file.

    Returns:
        Exit code (0 for success, 1 for errors or pending changes in check mode)
    """
    original = sys.stdin.read()
    warnings_log = WarningsLog()
    edit = format_document(original, config, warnings_log)
    if config.verify:
        verify_output(original, edit.new_text, "<stdin>")

    if config.check:
        changed = edit.new_text != original
        if changed and not config.quiet:
            print("<stdin> would be reformatted", file=sys.stderr)
        return 1 if changed else 0

    if output is not None:
        write_atomically(output, edit.new_text, config.encoding)
    else:
        sys.stdout.write(edit.new_text)
    return 0


def run_file(config: Config, source: Path, output: Optional[Path], in_place: bool) -> int:
    """
    Format one file.

    Returns:
        Exit code (0 for success, 1 for errors or pending changes in check mode)
    """
    if not source.is_file():
        print(f"Error: input file does not exist: {source}", file=sys.stderr)
        return 1

    to_stdout = output is None and not in_place and not config.check
    file_config = replace(config, check=True) if to_stdout else config
    result = format_file(source, file_config, output)

    if config.check:
        if result.changed and not config.quiet:
            print(f"{source} would be reformatted", file=sys.stderr)
        return 1 if result.changed else 0

    if to_stdout:
        sys.stdout.write(result.formatted_text)
    elif not config.quiet:
        status = "reformatted" if result.changed else "unchanged"
        print(
            f"{result.output_path or source}: {status} "
            f"({result.total_lines} lines, {result.processing_time:.2f}s)",
            file=sys.stderr,
        )
    return 0


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parsed = parse_args(args)
    config = args_to_config(parsed)

    # Validate configuration
    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 1

    setup_logging(level=config.log_level, verbose=config.verbose, quiet=config.quiet)

    try:
        if parsed.input == STDIN_MARKER:
            if parsed.in_place:
                print("Error: --in-place cannot be used with standard input", file=sys.stderr)
                return 1
            return run_stdin(config, parsed.output)
        return run_file(config, Path(parsed.input), parsed.output, parsed.in_place)
    except (FormatterError, OSError) as e:
        if config.verbose:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: failed to format {parsed.input}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
