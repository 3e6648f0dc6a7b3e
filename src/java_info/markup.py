"""Text helpers for presenting extracted documentation and source."""

import re
import textwrap

_JAVADOC_BLOCK = re.compile(r"/\*\*[\s\S]*?\*/")
_CODE_TAG = re.compile(r"\{@code ([^}]+)\}")
_LINK_TAG = re.compile(r"\{@link ([^}]+)\}")

_ELLIPSIS = "..."


def clean_markup(text: str) -> str:
    """Collapse ``{@code X}`` and ``{@link X}`` inline tags to ``X``."""
    text = _CODE_TAG.sub(r"\1", text)
    return _LINK_TAG.sub(r"\1", text)


def truncate(text: str, max_length: int) -> str:
    """Cut text to ``max_length`` characters, ending with ``...`` when cut."""
    if len(text) <= max_length:
        return text
    return text[: max(max_length - len(_ELLIPSIS), 0)] + _ELLIPSIS


def strip_javadoc_comments(source: str) -> str:
    """Remove every ``/** ... */`` block from source text."""
    return _JAVADOC_BLOCK.sub("", source)


def normalise_indentation(text: str, first_line_prefix: str = "") -> str:
    """Remove the common leading indentation of a source fragment.

    Args:
        text: Fragment whose first line was cut at its starting column
        first_line_prefix: Whitespace that preceded the fragment on its
            first line in the original file

    Returns:
        Dedented fragment

    """
    if first_line_prefix.strip():
        first_line_prefix = ""
    return textwrap.dedent(first_line_prefix + text)
