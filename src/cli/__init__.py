"""
CLI utilities: environment validation, file collection, debug commands, summ.
"""

from cli.helpers import (
    DEFAULT_IGNORES,
    validate_environment,
    collect_source_files,
    normalize_ignore_patterns,
    read_manifest,
)
from cli.debug import (
    dump_ast_tree,
    dump_ast_impl,
    check_parser_impl,
    list_keywords,
)
from cli.summ import run_summ

__all__ = [
    "DEFAULT_IGNORES",
    "validate_environment",
    "collect_source_files",
    "normalize_ignore_patterns",
    "read_manifest",
    "dump_ast_tree",
    "dump_ast_impl",
    "check_parser_impl",
    "list_keywords",
    "run_summ",
]
