"""
Main entry point: discover files, scan them, report feature support.
"""

import sys
import os
import argparse
from typing import List, Optional

from dotenv import load_dotenv

from core import __version__
from core.context import ScanContext
from core.utils import debug, error
from registry import build_keyword_index, load_registry
from pipeline import run_scan
from reporter import _C, report_fatal, report_features, report_no_files
from cli.helpers import validate_environment, collect_source_files
from cli.debug import check_parser_impl, dump_ast_impl, list_keywords
from cli.summ import run_summ

COMMANDS = ("help", "summ")


def _scan(
    ctx: ScanContext,
    input_path: str,
    ignore: Optional[List[str]],
    manifest: Optional[str],
    registry_path: Optional[str],
) -> int:
    ctx.echo(f"{_C.BOLD}{_C.CYAN}🌐 Running Web Feature Baseline Scan...\n{_C.RESET}")

    registry = load_registry(registry_path)
    index = build_keyword_index(registry)
    debug(f"Keyword index: {len(index)} keyword(s) from {len(registry)} feature(s)")

    base_dir, source_files = collect_source_files(input_path, ignore=ignore, manifest=manifest)
    ctx.scanned_files = source_files

    if not source_files:
        return report_no_files(ctx)

    ctx.echo(f"{_C.BOLD}📂 Scanning {len(source_files)} file(s):{_C.RESET}")
    for source_file in source_files:
        ctx.echo(f"  - {source_file}")

    run_scan(ctx, source_files, index, base_dir=base_dir)

    return report_features(ctx, registry)


def main(
    input_path: str = ".",
    ignore: Optional[List[str]] = None,
    manifest: Optional[str] = None,
    registry_path: Optional[str] = None,
    output_dir: str = ".",
    check_parser: bool = False,
    dump_ast: bool = False,
    ctx: Optional[ScanContext] = None,
) -> int:
    """
    Main entry point for a scan.

    Returns: exit status (0 = all detected features supported or nothing
    detected, 1 = some feature unsupported or fatal error)
    """
    if check_parser or dump_ast:
        try:
            base_dir, source_files = collect_source_files(input_path, ignore=ignore, manifest=manifest)
        except OSError as e:
            error(f"Failed to collect source files: {e}")
            return 1
        if dump_ast:
            dump_ast_impl(source_files, base_dir)
        return check_parser_impl(source_files, base_dir) if check_parser else 0

    ctx = ctx or ScanContext(output_dir)
    try:
        return _scan(ctx, input_path, ignore, manifest, registry_path)
    except Exception as e:
        return report_fatal(ctx, e)


def cli(argv: Optional[List[str]] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="scano",
        description="Detect modern web platform features in JS/CSS/HTML and check their browser support",
        epilog="Commands:\n  scano help                  Show help\n  scano summ <report.json>    Upload a scan report for summarization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input_path", nargs="?", help="File or directory to scan (default: current directory)")
    parser.add_argument("command_arg", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument(
        "-i",
        "--ignore",
        action="append",
        metavar="PATTERNS",
        help="Paths or globs to ignore, comma-separated (can be specified multiple times)",
    )
    parser.add_argument("-f", "--file", metavar="MANIFEST", help="Scan only the files listed in MANIFEST")
    parser.add_argument("--registry", metavar="PATH", help="Feature registry JSON (default: $SCANO_REGISTRY or bundled)")
    parser.add_argument(
        "-O",
        "--output-dir",
        metavar="DIR",
        default=os.environ.get("SCANO_OUTPUT_DIR", "."),
        help="Directory for the report and log files",
    )
    parser.add_argument(
        "-cp", "--check-parser", action="store_true", help="Check parser: validate all script files parse correctly"
    )
    parser.add_argument("-da", "--dump-ast", action="store_true", help="Dump tree-sitter AST of script files")
    parser.add_argument("--list-keywords", action="store_true", help="List the keyword index and exit")
    parser.add_argument("-v", "--version", action="store_true", help="Show version")
    args = parser.parse_args(argv)

    if args.version:
        print(f"scano version {__version__}")
        return 0

    if args.input_path == "help":
        parser.print_help()
        return 0

    if args.input_path == "summ":
        if not args.command_arg:
            error("Please provide a JSON file to send.")
            return 1
        validate_environment(require_summ=True)
        return run_summ(args.command_arg)

    if args.input_path and args.input_path not in COMMANDS and not os.path.exists(args.input_path):
        error(f'Unrecognized command or path "{args.input_path}".')
        print('Run "scano help" to see available options.')
        return 1

    validate_environment()

    if args.list_keywords:
        list_keywords(build_keyword_index(load_registry(args.registry)))
        return 0

    return main(
        args.input_path or ".",
        ignore=args.ignore,
        manifest=args.file,
        registry_path=args.registry,
        output_dir=args.output_dir,
        check_parser=args.check_parser,
        dump_ast=args.dump_ast,
    )


if __name__ == "__main__":
    sys.exit(cli())
