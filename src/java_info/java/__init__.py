"""Java source helpers: tree-sitter node utilities and Javadoc parsing."""

from java_info.java.javadoc import (
    Javadoc,
    JavadocBlockTag,
    format_description,
    parse_javadoc,
    strip_html,
)

__all__ = [
    "Javadoc",
    "JavadocBlockTag",
    "format_description",
    "parse_javadoc",
    "strip_html",
]
