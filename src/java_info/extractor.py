"""Documentation extraction from parsed Java type declarations."""

import logging

from tree_sitter import Node

from java_info.java.base import (
    find_child_by_type,
    find_children_by_type,
    get_doc_comment,
    get_node_text,
    get_type_body,
    normalise_whitespace,
)
from java_info.java.javadoc import Javadoc, format_description, parse_javadoc
from java_info.models import ClassDescriptor, MethodDescriptor
from java_info.parser import ParsedDeclaration

logger = logging.getLogger(__name__)

_METHOD_TYPE = "method_declaration"
_INTERFACE_BODY_TYPES = frozenset({"interface_body", "annotation_type_body"})

# Declaration text lists modifiers in this order regardless of source order
_MODIFIER_ORDER = (
    "public",
    "protected",
    "private",
    "static",
    "abstract",
    "final",
    "native",
    "synchronized",
    "default",
)


def method_modifiers(node: Node) -> set[str]:
    """Return the keyword modifiers of a method (annotations excluded)."""
    modifiers = find_child_by_type(node, "modifiers")
    if modifiers is None:
        return set()
    return {child.type for child in modifiers.children if child.type in _MODIFIER_ORDER}


def is_public_method(node: Node, body: Node) -> bool:
    """Check whether a method declared in ``body`` is public.

    Interface members are implicitly public unless declared private.
    """
    modifiers = method_modifiers(node)
    if "public" in modifiers:
        return True
    return body.type in _INTERFACE_BODY_TYPES and "private" not in modifiers


def declared_methods(declaration: ParsedDeclaration) -> list[Node]:
    """Every method declared directly in a type, in declaration order."""
    body = get_type_body(declaration.node)
    if body is None:
        return []
    return find_children_by_type(body, _METHOD_TYPE)


def public_methods(declaration: ParsedDeclaration) -> list[Node]:
    """Public methods declared directly in a type, in declaration order."""
    body = get_type_body(declaration.node)
    if body is None:
        return []
    return [
        method
        for method in find_children_by_type(body, _METHOD_TYPE)
        if is_public_method(method, body)
    ]


def method_name(node: Node, source: bytes) -> str:
    """Extract a method's name."""
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return "<anonymous>"
    return get_node_text(name_node, source)


def render_declaration(node: Node, source: bytes) -> str:
    """Render a method's declaration text.

    Modifiers appear in canonical order, annotations are omitted and
    whitespace is collapsed: ``public static <T> List<T> of(T... items)``.

    Args:
        node: Method declaration node
        source: Source bytes

    Returns:
        Declaration text without body

    """
    modifiers = method_modifiers(node)
    parts = [modifier for modifier in _MODIFIER_ORDER if modifier in modifiers]

    type_parameters = _child(node, "type_parameters")
    if type_parameters is not None:
        parts.append(get_node_text(type_parameters, source))

    return_type = node.child_by_field_name("type")
    if return_type is not None:
        parts.append(get_node_text(return_type, source))

    parts.append(method_name(node, source) + _render_parameters(node, source))

    dimensions = _child(node, "dimensions")
    if dimensions is not None:
        parts[-1] += get_node_text(dimensions, source)

    throws = find_child_by_type(node, "throws")
    if throws is not None:
        parts.append(get_node_text(throws, source))

    return normalise_whitespace(" ".join(parts))


def _child(node: Node, name: str) -> Node | None:
    """Child by field name, falling back to the first child of that type."""
    child = node.child_by_field_name(name)
    if child is None:
        child = find_child_by_type(node, name)
    return child


def _render_parameters(node: Node, source: bytes) -> str:
    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        return "()"
    rendered = [
        normalise_whitespace(get_node_text(child, source))
        for child in parameters.named_children
        if child.type in ("formal_parameter", "spread_parameter", "receiver_parameter")
    ]
    return f"({', '.join(rendered)})"


class DocumentationExtractor:
    """Builds class and method descriptors from a parsed declaration.

    Descriptions keep inline tag markup (``{@code x}``); only HTML is
    stripped. Formatting for display happens later.
    """

    def extract(self, declaration: ParsedDeclaration, class_name: str) -> ClassDescriptor:
        """Extract documentation for a type declaration.

        Args:
            declaration: Parsed type declaration
            class_name: Fully-qualified name to record on the descriptor

        Returns:
            Class descriptor with one method descriptor per public method

        """
        source = declaration.source
        comment = get_doc_comment(declaration.node, source)
        description = (
            format_description(parse_javadoc(comment).description)
            if comment is not None
            else None
        )

        methods = [
            self._extract_method(node, source) for node in public_methods(declaration)
        ]
        logger.debug(f"Extracted {len(methods)} public methods from {class_name}")

        return ClassDescriptor(name=class_name, description=description, methods=methods)

    def _extract_method(self, node: Node, source: bytes) -> MethodDescriptor:
        name = method_name(node, source)
        declaration = render_declaration(node, source)

        comment = get_doc_comment(node, source)
        if comment is None:
            return MethodDescriptor(name=name, declaration=declaration)

        javadoc = parse_javadoc(comment)
        return MethodDescriptor(
            name=name,
            declaration=declaration,
            description=format_description(javadoc.description),
            params=self._get_params(javadoc),
            returns=self._get_returns(javadoc),
        )

    def _get_params(self, javadoc: Javadoc) -> dict[str, str]:
        """Map documented parameter names to formatted text."""
        params: dict[str, str] = {}
        for tag in javadoc.tags_named("param"):
            if tag.name and tag.name not in params:
                params[tag.name] = format_description(tag.content)
        return params

    def _get_returns(self, javadoc: Javadoc) -> str | None:
        """Formatted text of the first ``@return`` tag, if any."""
        tags = javadoc.tags_named("return")
        if not tags:
            return None
        return format_description(tags[0].content)
