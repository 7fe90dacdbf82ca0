"""
Debug and development CLI commands: AST dump, parser check, keyword listing.
"""

import os
from typing import List, Optional

from core.utils import error
from detect.script import SCRIPT_EXTENSIONS, describe_parse_error, find_error_nodes, parse_script_source
from pipeline import read_source
from registry.keywords import KeywordIndex


def _script_files(source_files: List[str]) -> List[str]:
    return [f for f in source_files if os.path.splitext(f)[1].lower() in SCRIPT_EXTENSIONS]


def _disk_path(path: str, base_dir: Optional[str]) -> str:
    return os.path.join(base_dir, path) if base_dir else path


def dump_ast_tree(root, max_depth: int = 10) -> None:
    """Print the tree-sitter AST structure for debugging."""

    def print_node(node, depth: int = 0):
        if depth > max_depth:
            return

        indent = "  " * depth
        text = node.text.decode("utf8", errors="replace") if node.text is not None else ""

        if len(text) > 60:
            text = text[:60] + "..."
        text = text.replace("\n", "\\n")

        row, column = node.start_point[0] + 1, node.start_point[1] + 1
        print(f"{indent}{node.type} [{row}:{column}] {repr(text)}")

        for child in node.children:
            print_node(child, depth + 1)

    print_node(root)


def dump_ast_impl(source_files: List[str], base_dir: Optional[str] = None) -> None:
    """Dump AST for all script files."""
    for source_file in _script_files(source_files):
        root = parse_script_source(read_source(_disk_path(source_file, base_dir)))
        print(f"\n=== AST for {source_file} ===")
        dump_ast_tree(root)
        print("=== End AST ===\n")


def check_parser_errors(input_file: str, root) -> bool:
    """Check for parser errors in AST. Returns True if errors found."""
    errors: list = []
    find_error_nodes(root, errors)
    if errors:
        error(f"PARSER ERRORS FOUND in {input_file}: {len(errors)} ERROR node(s)")
        for err_node in errors:
            error(f"  {describe_parse_error(err_node)}")
        return True
    return False


def check_parser_impl(source_files: List[str], base_dir: Optional[str] = None) -> int:
    """Validate all script files parse correctly (no ERROR nodes)."""
    print("Parser check mode: Validating parse trees...")
    has_errors = False
    for source_file in _script_files(source_files):
        try:
            source_code = read_source(_disk_path(source_file, base_dir))
        except OSError as e:
            error(f"Failed to read {source_file}: {e}")
            has_errors = True
            continue
        if check_parser_errors(source_file, parse_script_source(source_code)):
            has_errors = True
    if has_errors:
        error("Parser validation FAILED: ERROR nodes found in AST")
        return 1
    else:
        print("✓ Parser validation PASSED: No ERROR nodes found")
        return 0


def list_keywords(index: KeywordIndex) -> None:
    print(f"Indexed keywords ({len(index)}):\n")
    for keyword, feature_id in sorted(index.items()):
        print(f"  {keyword} -> {feature_id}")
