"""
Script feature detection over the tree-sitter JavaScript syntax tree.

A single pre-order traversal applies every matcher in SCRIPT_MATCHERS to
each node. A matcher is a pure function (node, index) returning either None
or a (feature_id, keyword) hit; the traversal turns hits into records.
"""

from typing import Callable, List, Optional, Tuple

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from core.context import DetectionRecord, ScanResult, dedupe_records
from core.utils import debug
from registry.keywords import (
    DYNAMIC_IMPORT,
    NULLISH_COALESCING,
    OPTIONAL_CHAINING,
    TOP_LEVEL_AWAIT,
    KeywordIndex,
)

JS_LANGUAGE = Language(tree_sitter_javascript.language())

SCRIPT_EXTENSIONS = (".js", ".mjs", ".cjs")

# Node kinds that may carry an optional_chain child: a?.b, a?.(), a?.[i]
_CHAINABLE = ("member_expression", "call_expression", "subscript_expression")

# Identifier kinds read as references; { structuredClone } is a shorthand value
_REFERENCE_KINDS = ("identifier", "shorthand_property_identifier")

# Parent kind -> field that holds a binding name rather than a reference
_BINDING_FIELDS = {
    "variable_declarator": "name",
    "function_declaration": "name",
    "function_expression": "name",
    "function": "name",
    "generator_function_declaration": "name",
    "generator_function": "name",
    "class_declaration": "name",
    "class": "name",
    "arrow_function": "parameter",
    "assignment_expression": "left",
    "augmented_assignment_expression": "left",
    "assignment_pattern": "left",
    "pair_pattern": "value",
    "catch_clause": "parameter",
}

# Parent kinds whose identifier children are all bindings
_BINDING_PARENTS = (
    "formal_parameters",
    "array_pattern",
    "object_pattern",
    "rest_pattern",
    "import_clause",
    "import_specifier",
    "namespace_import",
    "export_specifier",
)

Hit = Tuple[Optional[str], str]
Matcher = Callable[[Node, KeywordIndex], Optional[Hit]]


def parse_script_source(source_code: str) -> Node:
    """Parse JavaScript (module code, latest syntax) and return the root node."""
    parser = Parser(JS_LANGUAGE)
    tree = parser.parse(bytes(source_code, "utf8"))
    return tree.root_node


def _text(node: Node) -> str:
    return node.text.decode("utf8", errors="replace") if node.text is not None else ""


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def find_error_nodes(node: Node, errors: list, depth: int = 0, max_depth: int = 200) -> None:
    """Collect ERROR and MISSING nodes from the parse tree."""
    if depth > max_depth:
        return
    if node.type == "ERROR" or node.is_missing:
        errors.append(node)
    for child in node.children:
        find_error_nodes(child, errors, depth + 1, max_depth)


def describe_parse_error(node: Node) -> str:
    row, column = node.start_point[0] + 1, node.start_point[1] + 1
    if node.is_missing:
        return f"Missing '{node.type}' ({row}:{column})"
    text = _text(node)
    if len(text) > 40:
        text = text[:40] + "..."
    return f"Unexpected token {text!r} ({row}:{column})"


# Matchers


def is_binding(node: Node) -> bool:
    """True when the identifier declares or assigns a name instead of reading one."""
    parent = node.parent
    if parent is None:
        return False
    if parent.type in _BINDING_PARENTS:
        return True
    if parent.type == "for_in_statement":
        # for (const x of xs) declares x; for (x of xs) reads it
        return parent.child_by_field_name("kind") is not None and parent.child_by_field_name("left") == node
    field = _BINDING_FIELDS.get(parent.type)
    return field is not None and parent.child_by_field_name(field) == node


def match_identifier(node: Node, index: KeywordIndex) -> Optional[Hit]:
    if node.type not in _REFERENCE_KINDS or is_binding(node):
        return None
    name = _text(node).lower()
    if name in index:
        return index[name], name
    return None


def match_navigator_bluetooth(node: Node, index: KeywordIndex) -> Optional[Hit]:
    if node.type != "member_expression" or "navigator.bluetooth" not in index:
        return None
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None or prop is None:
        return None
    if obj.type == "identifier" and _text(obj) == "navigator" and prop.type == "property_identifier" and _text(prop) == "bluetooth":
        return index["navigator.bluetooth"], "navigator.bluetooth"
    return None


def match_optional_chaining(node: Node, index: KeywordIndex) -> Optional[Hit]:
    if node.type not in _CHAINABLE:
        return None
    if any(child.type == "optional_chain" for child in node.children):
        return index.get(OPTIONAL_CHAINING), OPTIONAL_CHAINING
    return None


def match_nullish_coalescing(node: Node, index: KeywordIndex) -> Optional[Hit]:
    if node.type != "binary_expression":
        return None
    operator = node.child_by_field_name("operator")
    if operator is not None and operator.type == "??":
        return index.get(NULLISH_COALESCING), "??"
    return None


def match_await(node: Node, index: KeywordIndex) -> Optional[Hit]:
    # Any await maps to top-level await, whatever its enclosing scope
    if node.type == "await_expression":
        return index.get(TOP_LEVEL_AWAIT), "await"
    return None


def match_dynamic_import(node: Node, index: KeywordIndex) -> Optional[Hit]:
    if node.type != "call_expression":
        return None
    function = node.child_by_field_name("function")
    if function is not None and function.type == "import":
        return index.get(DYNAMIC_IMPORT), "import()"
    return None


SCRIPT_MATCHERS: Tuple[Matcher, ...] = (
    match_identifier,
    match_navigator_bluetooth,
    match_optional_chaining,
    match_nullish_coalescing,
    match_await,
    match_dynamic_import,
)


def collect_matches(
    root: Node,
    index: KeywordIndex,
    file_path: str,
    matchers: Tuple[Matcher, ...] = SCRIPT_MATCHERS,
) -> List[DetectionRecord]:
    """Walk the tree in source order, applying all matchers at every node."""
    records: List[DetectionRecord] = []
    stack = [root]
    while stack:
        node = stack.pop()
        for matcher in matchers:
            hit = matcher(node, index)
            if hit is not None:
                feature_id, keyword = hit
                records.append(DetectionRecord(feature_id, keyword, file_path, _line(node)))
        stack.extend(reversed(node.children))
    return records


def detect_script_features(file_path: str, content: str, index: KeywordIndex) -> ScanResult:
    """
    Detect platform features in a script file.

    A source that does not parse cleanly yields no records and a diagnostic
    describing the first syntax error.
    """
    root = parse_script_source(content)

    if root.has_error:
        errors: list = []
        find_error_nodes(root, errors)
        message = describe_parse_error(errors[0]) if errors else "Syntax error"
        return ScanResult(file_path, error=message)

    records = dedupe_records(collect_matches(root, index, file_path))
    debug(f"{file_path}: {len(records)} script detection(s)")
    return ScanResult(file_path, records=records)
