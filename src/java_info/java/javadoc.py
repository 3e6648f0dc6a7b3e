"""Javadoc comment parsing.

A documentation block is split into a free-text description followed by
block tags (``@param name text``, ``@return text``, ...). The description is
further split into text snippets and inline tags (``{@code x}``); snippets
have their HTML stripped, inline tags are kept verbatim.
"""

import re
import warnings
from dataclasses import dataclass

from bs4 import BeautifulSoup

_BLOCK_TAG_LINE = re.compile(r"^@([A-Za-z][\w.-]*)(?:\s+|$)")

# Tags whose first word is a name rather than part of the content
_NAMED_TAGS = frozenset({"param", "throws", "exception", "serialField"})

# Elements rendered on their own line/paragraph; padded so words do not fuse
_BLOCK_ELEMENTS = [
    "p",
    "br",
    "li",
    "ul",
    "ol",
    "dl",
    "dt",
    "dd",
    "pre",
    "div",
    "table",
    "tr",
    "td",
    "th",
    "blockquote",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
]


@dataclass(frozen=True)
class JavadocBlockTag:
    """A block tag such as ``@param`` or ``@return``.

    Attributes:
        tag_name: Tag without the ``@`` (``param``, ``return``, ...)
        name: Leading name for named tags (parameter or exception name)
        content: Remaining raw text, markup preserved

    """

    tag_name: str
    name: str | None
    content: str


@dataclass(frozen=True)
class Javadoc:
    """A parsed documentation block."""

    description: str
    block_tags: tuple[JavadocBlockTag, ...] = ()

    def tags_named(self, tag_name: str) -> list[JavadocBlockTag]:
        """Return every block tag with the given name, in order."""
        return [tag for tag in self.block_tags if tag.tag_name == tag_name]


def _clean_lines(comment: str) -> list[str]:
    """Strip comment delimiters and leading asterisks from every line."""
    body = comment.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]

    lines: list[str] = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped.lstrip("*").strip()
        lines.append(stripped)

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _make_block_tag(tag_name: str, text: str) -> JavadocBlockTag:
    text = text.strip()
    if tag_name in _NAMED_TAGS:
        if not text:
            return JavadocBlockTag(tag_name=tag_name, name=None, content="")
        name, *rest = re.split(r"\s+", text, maxsplit=1)
        content = rest[0] if rest else ""
        return JavadocBlockTag(tag_name=tag_name, name=name, content=content.strip())
    return JavadocBlockTag(tag_name=tag_name, name=None, content=text)


def parse_javadoc(comment: str) -> Javadoc:
    """Parse a raw ``/** ... */`` comment.

    Args:
        comment: Comment text including delimiters

    Returns:
        Parsed description and block tags

    """
    description_lines: list[str] = []
    tags: list[JavadocBlockTag] = []
    current_tag: str | None = None
    current_lines: list[str] = []

    for line in _clean_lines(comment):
        match = _BLOCK_TAG_LINE.match(line)
        if match:
            if current_tag is not None:
                tags.append(_make_block_tag(current_tag, "\n".join(current_lines)))
            current_tag = match.group(1)
            current_lines = [line[match.end() :]]
        elif current_tag is not None:
            current_lines.append(line)
        else:
            description_lines.append(line)

    if current_tag is not None:
        tags.append(_make_block_tag(current_tag, "\n".join(current_lines)))

    return Javadoc(
        description="\n".join(description_lines).strip(), block_tags=tuple(tags)
    )


def split_description(text: str) -> list[tuple[str, bool]]:
    """Split description text into snippets and inline tags.

    Args:
        text: Raw description or tag content

    Returns:
        ``(text, is_inline_tag)`` pairs in order. Inline tags keep their
        braces; nested braces inside a tag are balanced.

    """
    elements: list[tuple[str, bool]] = []
    position = 0
    length = len(text)

    while position < length:
        start = text.find("{@", position)
        if start == -1:
            elements.append((text[position:], False))
            break
        if start > position:
            elements.append((text[position:start], False))

        depth = 0
        end = start
        while end < length:
            if text[end] == "{":
                depth += 1
            elif text[end] == "}":
                depth -= 1
                if depth == 0:
                    break
            end += 1

        if end >= length:
            # Unterminated inline tag: treat the rest as text
            elements.append((text[start:], False))
            break
        elements.append((text[start : end + 1], True))
        position = end + 1

    return [(element, inline) for element, inline in elements if element]


def strip_html(text: str) -> str:
    """Remove HTML markup, returning only the text content."""
    if "<" not in text and "&" not in text:
        return text

    with warnings.catch_warnings():
        # Short snippets can look like file names or URLs to BeautifulSoup
        warnings.simplefilter("ignore")
        soup = BeautifulSoup(text, "html.parser")
        for element in soup.find_all(_BLOCK_ELEMENTS):
            element.insert_before(" ")
            element.insert_after(" ")
        return soup.get_text()


def format_description(text: str) -> str:
    """Format raw description text for extraction.

    Every element is whitespace-normalised; text snippets additionally have
    their HTML stripped. Non-empty elements are joined with single spaces.
    Inline tag markup such as ``{@code x}`` is preserved.
    """
    parts: list[str] = []
    for element, is_inline_tag in split_description(text):
        rendered = element if is_inline_tag else strip_html(element)
        rendered = " ".join(rendered.split())
        if rendered:
            parts.append(rendered)
    return " ".join(parts)
