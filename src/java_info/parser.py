"""Java source parser using tree-sitter."""

import logging
from dataclasses import dataclass

import tree_sitter_java
from tree_sitter import Language, Node, Parser, Tree

from java_info.java.base import (
    TYPE_DECLARATION_TYPES,
    get_node_text,
    iter_descendants,
)

logger = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tree_sitter_java.language())

_DEFAULT_ENCODING = "utf-8"


def _get_parser() -> Parser:
    """Get a tree-sitter Parser configured for Java.

    Parsers hold per-parse state, so each parse gets its own instance.
    """
    parser = Parser()
    parser.language = JAVA_LANGUAGE
    return parser


@dataclass(frozen=True)
class ParsedDeclaration:
    """A type declaration together with the source it was parsed from.

    Attributes:
        node: The class/interface/enum/record declaration node
        source: Bytes of the whole compilation unit
        tree: Owning syntax tree, kept alive alongside the node

    """

    node: Node
    source: bytes
    tree: Tree

    @property
    def text(self) -> str:
        """Source text of the declaration."""
        return get_node_text(self.node, self.source)

    @property
    def kind(self) -> str:
        """Node type of the declaration (``class_declaration``, ...)."""
        return self.node.type


class JavaSourceParser:
    """Parses Java compilation units and finds type declarations in them."""

    def parse(self, source: str | bytes) -> Tree:
        """Parse a compilation unit.

        Args:
            source: Source text or bytes

        Returns:
            Syntax tree (error-tolerant)

        """
        if isinstance(source, str):
            source = source.encode(_DEFAULT_ENCODING)
        return _get_parser().parse(source)

    def parse_declaration(
        self, source: str | bytes, simple_name: str
    ) -> ParsedDeclaration | None:
        """Find the first type declaration with a given simple name.

        Top-level and nested declarations are both considered, in source
        order.

        Args:
            source: Compilation unit text or bytes
            simple_name: Simple name of the class, interface, enum or record

        Returns:
            The parsed declaration, or None if no declaration matches

        """
        if isinstance(source, str):
            source = source.encode(_DEFAULT_ENCODING)

        tree = self.parse(source)
        if tree.root_node.has_error:
            logger.warning(
                f"Syntax errors while parsing source for {simple_name}; "
                "searching the partial tree"
            )

        for node in iter_descendants(tree.root_node):
            if node.type not in TYPE_DECLARATION_TYPES:
                continue
            name_node = node.child_by_field_name("name")
            if name_node is not None and get_node_text(name_node, source) == simple_name:
                return ParsedDeclaration(node=node, source=source, tree=tree)

        logger.warning(f"No type declaration named {simple_name} found in source")
        return None
