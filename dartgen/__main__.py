"""
__main__.py — CLI entry point for zig-dartgen.

Usage:
    python -m dartgen path/to/main.zig [-o bindings.dart] [--prefix rr]

This is the single command that does everything:
  1. Scans the Zig source for `export fn rr_*` declarations
  2. Maps Zig types to Dart FFI types
  3. Generates the Dart binding module
  4. Runs `dart format` on it (unless --no-format)

The module goes to stdout, or to the file named by -o.  Progress goes to
stderr.

Exit codes: 0 success, 1 unreadable input, 2 unsupported type,
3 formatter failure, 4 missing or malformed bootstrap function,
5 output file not writable.
"""

import argparse
import sys
from pathlib import Path

from .codegen import CodeGenerator, write_output
from .errors import BindgenError
from .formatter import DartFormatter, Formatter
from .ir import DEFAULT_CLASS_NAME, DEFAULT_PREFIX, BindgenConfig
from .ir_printer import print_ir
from .parser import dump_signatures_json, parse_source
from .type_mapper import map_functions


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zig-dartgen",
        description="Generate Dart FFI bindings from exported Zig functions.",
    )
    parser.add_argument(
        "source",
        type=Path,
        nargs="?",
        default=Path("src/main.zig"),
        help="Path to the Zig source file (default: src/main.zig)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the Dart module here instead of stdout",
    )
    parser.add_argument(
        "--prefix",
        default=DEFAULT_PREFIX,
        help=f"Namespace prefix of exported functions (default: {DEFAULT_PREFIX})",
    )
    parser.add_argument(
        "--class-name",
        default=DEFAULT_CLASS_NAME,
        help=f"Name of the generated state class (default: {DEFAULT_CLASS_NAME})",
    )
    parser.add_argument(
        "--bootstrap",
        default=None,
        help="Function called from the constructor (default: <prefix>_start)",
    )
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Skip running `dart format` on the output",
    )
    parser.add_argument(
        "--dart",
        default="dart",
        help="dart executable used for formatting (default: dart)",
    )
    parser.add_argument(
        "--emit-ir",
        action="store_true",
        help="Print the extracted signatures and their Dart mappings",
    )
    parser.add_argument(
        "--dump-json",
        type=Path,
        default=None,
        help="Write the extracted signatures as JSON to this path (after type mapping succeeds)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser


def run(args: argparse.Namespace, formatter: Formatter) -> str:
    """Run the pipeline and return the (formatted) Dart module."""

    def progress(message: str):
        if not args.quiet:
            print(message, file=sys.stderr)

    source: Path = args.source
    config = BindgenConfig(
        prefix=args.prefix,
        class_name=args.class_name,
        bootstrap=args.bootstrap,
        source_name=source.name,
    )

    # Step 1: SCAN
    progress(f"[1/4] Scanning {source.name} ...")
    signatures = parse_source(source, config.prefix)
    progress(f"\tFound {len(signatures)} exported function(s)")

    # Step 2: MAP
    progress("[2/4] Mapping types ...")
    mapped = map_functions(signatures, config)
    progress(f"\tMapped {len(mapped)} function(s)")

    if args.dump_json is not None:
        json_path = dump_signatures_json(signatures, args.dump_json)
        progress(f"\tSignatures written to {json_path}")

    if args.emit_ir:
        print(print_ir(config, signatures, mapped), file=sys.stderr)

    # Step 3: CODEGEN
    progress("[3/4] Generating Dart bindings ...")
    code = CodeGenerator(mapped, config).generate_dart()

    # Step 4: FORMAT
    if args.no_format:
        progress("[4/4] Formatting skipped")
    else:
        progress(f"[4/4] Formatting with {formatter.name} ...")
        code = formatter.format(code)

    return code


def main(argv: list[str] | None = None, formatter: Formatter | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if formatter is None:
        formatter = Formatter() if args.no_format else DartFormatter(args.dart)

    try:
        code = run(args, formatter)
        if args.output is not None:
            out_path = write_output(code, args.output)
            if not args.quiet:
                print(f"\tDart bindings → {out_path}", file=sys.stderr)
        else:
            sys.stdout.write(code)
    except BindgenError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
