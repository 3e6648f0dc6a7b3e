"""Base utility functions for Java AST traversal.

Thin helpers over tree-sitter nodes shared by the parser and the
documentation extractor.
"""

from collections.abc import Iterator

from tree_sitter import Node

_DEFAULT_ENCODING = "utf-8"

# tree-sitter-java emits block_comment/line_comment; older grammars used comment
COMMENT_TYPES = frozenset({"block_comment", "line_comment", "comment"})

DOC_COMMENT_START = "/**"

TYPE_DECLARATION_TYPES = frozenset(
    {
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "annotation_type_declaration",
    }
)


def get_node_text(node: Node, source: bytes) -> str:
    """Get the text content of an AST node.

    Args:
        node: Tree-sitter node
        source: Source bytes the node was parsed from

    Returns:
        Text content of the node

    """
    return source[node.start_byte : node.end_byte].decode(
        _DEFAULT_ENCODING, errors="replace"
    )


def normalise_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return " ".join(text.split())


def find_child_by_type(node: Node, child_type: str) -> Node | None:
    """Find the first direct child of a specific type.

    Args:
        node: Parent node to search in
        child_type: Type of child node to find

    Returns:
        First matching child node or None

    """
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def find_children_by_type(node: Node, child_type: str) -> list[Node]:
    """Find all direct children of a specific type."""
    return [child for child in node.children if child.type == child_type]


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield a node and all of its descendants in depth-first pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def is_comment(node: Node) -> bool:
    """Check if a node is a comment."""
    return node.type in COMMENT_TYPES


def get_doc_comment(node: Node, source: bytes) -> str | None:
    """Find the documentation block attached to a declaration.

    Looks backwards through the comments directly preceding the node and
    returns the nearest one opening with ``/**``.

    Args:
        node: Declaration node
        source: Source bytes

    Returns:
        Raw comment text including delimiters, or None

    """
    sibling = node.prev_sibling
    while sibling is not None and is_comment(sibling):
        text = get_node_text(sibling, source)
        if text.startswith(DOC_COMMENT_START) and text != "/**/":
            return text
        sibling = sibling.prev_sibling
    return None


def get_type_body(node: Node) -> Node | None:
    """Return the member-holding body of a type declaration.

    Enum members other than constants live in a nested
    ``enum_body_declarations`` node.
    """
    body = node.child_by_field_name("body")
    if body is not None and body.type == "enum_body":
        return find_child_by_type(body, "enum_body_declarations")
    return body
