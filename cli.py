#!/usr/bin/env python3
"""
YANG Assembler CLI

Builds a resolved schema model from YANG sources under test plus the
library directories that satisfy their imports, and reports which units
of the model are under test.
"""

import argparse
import logging
import sys
from pathlib import Path

from assembler.builder import build_context
from assembler.errors import AssemblerError
from config import AssemblyConfig, load_config
from exporters import to_mermaid, to_ascii, to_json


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="yangassemble",
        description="Assemble a resolved YANG schema model and report the modules under test.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  yangassemble models/a.yang models/b.yang       # Test two modules, libs from their directory
  yangassemble a.yang -p deps -r                 # Also search ./deps recursively
  yangassemble a.yang -F a:extras                # Only feature 'extras' of module 'a' enabled
  yangassemble -p out -a -f json                 # Re-validate every file in ./out
  yangassemble -c assembly.yaml -o report.txt    # Settings from a YAML file
        """,
    )

    # Positional arguments
    parser.add_argument(
        "files",
        nargs="*",
        default=[],
        help="YANG files under test",
    )

    # Source options
    parser.add_argument(
        "-p", "--path",
        action="append",
        default=[],
        metavar="DIR",
        help="Library directory to search for imported modules (repeatable)",
    )

    parser.add_argument(
        "-r", "--recursive",
        action="store_true",
        help="Search library directories recursively",
    )

    parser.add_argument(
        "-F", "--features",
        nargs="+",
        default=[],
        metavar="MODULE:FEATURE",
        help="Supported features; when given, every other feature is disabled",
    )

    parser.add_argument(
        "-a", "--parse-all",
        action="store_true",
        help="Fully validate every library file, not only the ones imported",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="YAML configuration file; command-line values are added to it",
    )

    parser.add_argument(
        "--strict-extensions",
        action="store_true",
        help="Fail on listed files that do not end in .yang instead of ignoring them",
    )

    parser.add_argument(
        "--require-tested",
        action="store_true",
        help="Fail if a listed file does not produce a module in the model",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["ascii", "mermaid", "json"],
        default="ascii",
        help="Output format (default: ascii)",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--orientation",
        choices=["LR", "TD", "TB", "RL", "BT"],
        default="LR",
        help="Mermaid flowchart orientation (default: LR)",
    )

    parser.add_argument(
        "--group-by-role",
        action="store_true",
        help="Group tested and supporting modules in Mermaid output",
    )

    parser.add_argument(
        "--show-all",
        action="store_true",
        help="Include modules not under test as tree roots in ASCII output",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output)",
    )

    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v flags."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    try:
        config = load_config(parsed.config) if parsed.config else AssemblyConfig()
        config = config.merged(
            lib_dirs=parsed.path,
            test_files=parsed.files,
            features=parsed.features,
            recursive=parsed.recursive,
            use_all_files=parsed.parse_all,
            strict_extensions=parsed.strict_extensions,
            require_tested_match=parsed.require_tested,
        )

        if not config.lib_dirs and not config.test_files:
            print("Error: no YANG files or library directories given", file=sys.stderr)
            return 1

        result = build_context(
            lib_dirs=config.lib_dirs,
            test_files=config.test_files,
            features=config.feature_set(),
            recursive=config.recursive,
            use_all_files=config.use_all_files,
            strict_extensions=config.strict_extensions,
            require_tested_match=config.require_tested_match,
        )
    except AssemblerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    tested = result.tested_names

    # Generate output
    if parsed.format == "mermaid":
        output = to_mermaid(
            model=result.model,
            tested=tested,
            orientation=parsed.orientation,
            group_by_role=parsed.group_by_role,
        )
    elif parsed.format == "json":
        output = to_json(
            model=result.model,
            tested=tested,
            base=Path.cwd(),
        )
    else:  # ascii (default)
        output = to_ascii(
            model=result.model,
            tested=tested,
            style=parsed.ascii_style,
            show_all=parsed.show_all,
        )

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
