"""
Documentation comment tokenizer.

Splits the body of a ``/** ... */`` block into a free-form description and an
ordered list of ``@tag`` fields, parsing embedded ``{...}`` type expressions
with ``jsdoc.type_parser``.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from jsdoc.type_nodes import NameExpression, OptionalType, TypeNode
from jsdoc.type_parser import TypeExpressionSyntaxError, parse_type

logger = logging.getLogger(__name__)

_TAG_START_RE = re.compile(r"^[ \t]*@([A-Za-z]+)", re.MULTILINE)
_UNWRAP_RE = re.compile(r"^[ \t]*\*?[ \t]?", re.MULTILINE)
_PARAM_NAME_RE = re.compile(r"\s*(\[[^\]]*\]|[^\s]+)")
_BARE_NAME_RE = re.compile(r"\s*([A-Za-z_$][\w$.]*)")

# Tags whose body may start with a ``{type}``.
TYPED_TAGS = {
    "param",
    "return",
    "type",
    "enum",
    "typedef",
    "extends",
    "implements",
    "const",
    "define",
    "private",
    "protected",
    "this",
    "throws",
}

# Tags that accept a bare type name without braces.
BARE_NAME_TAGS = {"extends", "implements"}

TAG_SYNONYMS = {
    "returns": "return",
    "augments": "extends",
}


@dataclass
class Tag:
    """A single ``@tag`` field of a documentation comment.

    Attributes:
        title: Tag name without ``@``.
        type: Parsed type expression, or None when absent or unparsable.
        name: Parameter name for ``@param`` tags.
        description: Remaining free text, or None.
    """

    title: str
    type: Optional[TypeNode] = None
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class DocComment:
    """Parsed documentation comment."""

    description: str = ""
    tags: List[Tag] = field(default_factory=list)

    def find(self, title: str) -> Optional[Tag]:
        for tag in self.tags:
            if tag.title == title:
                return tag
        return None

    def has(self, *titles: str) -> bool:
        return any(tag.title in titles for tag in self.tags)


def is_doc_block(kind: str, value: str) -> bool:
    """Check if a comment is a ``/** ... */`` documentation block.

    Args:
        kind: ``"Block"`` or ``"Line"``.
        value: Comment text without the ``/*`` and ``*/`` delimiters.
    """
    return kind == "Block" and value[:1] == "*"


def unwrap_comment(value: str) -> str:
    """Strip the leading ``*`` decoration from every line of a block body."""
    return _UNWRAP_RE.sub("", value).strip()


def _read_braced(text: str) -> Tuple[Optional[str], str]:
    """Read a brace-balanced ``{...}`` prefix.

    Returns:
        A tuple of (inner text or None, remaining text).
    """
    stripped = text.lstrip()
    if not stripped.startswith("{"):
        return None, text
    depth = 0
    for idx, char in enumerate(stripped):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return stripped[1:idx], stripped[idx + 1:]
    logger.warning("Unbalanced braces in tag body: %r", text)
    return stripped[1:], ""


def _parse_tag_type(title: str, type_text: str) -> Optional[TypeNode]:
    try:
        return parse_type(type_text)
    except TypeExpressionSyntaxError as exc:
        logger.warning("Cannot parse type of @%s {%s}: %s", title, type_text, exc)
        return None


def _clean_description(text: str) -> Optional[str]:
    cleaned = text.strip()
    return cleaned or None


def _parse_param_name(body: str, param_type: Optional[TypeNode]) -> Tuple[Optional[str], Optional[TypeNode], str]:
    match = _PARAM_NAME_RE.match(body)
    if not match:
        return None, param_type, body
    raw_name = match.group(1)
    rest = body[match.end():]
    if raw_name.startswith("[") and raw_name.endswith("]"):
        raw_name = raw_name[1:-1].split("=", 1)[0].strip()
        if param_type is not None and not isinstance(param_type, OptionalType):
            param_type = OptionalType(param_type)
    return raw_name, param_type, rest


def _parse_tag(title: str, body: str) -> Tag:
    tag = Tag(title=title)

    if title in TYPED_TAGS:
        type_text, remainder = _read_braced(body)
        if type_text is not None:
            tag.type = _parse_tag_type(title, type_text)
            body = remainder
        elif title in BARE_NAME_TAGS:
            match = _BARE_NAME_RE.match(body)
            if match:
                tag.type = NameExpression(match.group(1))
                body = body[match.end():]
        elif title == "enum":
            tag.type = NameExpression("number")

    if title == "param":
        tag.name, tag.type, body = _parse_param_name(body, tag.type)

    tag.description = _clean_description(body)
    return tag


def parse_comment(
    value: str,
    tags: Optional[Iterable[str]] = None,
    unwrap: bool = True,
) -> DocComment:
    """Parse a documentation comment body into description and tags.

    Args:
        value: Comment text between ``/*`` and ``*/``.
        tags: If given, only tags with these titles are kept.
        unwrap: Whether to strip ``*`` line decoration first.

    Returns:
        The parsed DocComment. Tags keep their source order.

    Example:
        >>> doc = parse_comment("* Adds.\\n * @param {number} a\\n * @return {number}\\n ")
        >>> [t.title for t in doc.tags]
        ['param', 'return']
    """
    text = unwrap_comment(value) if unwrap else value.strip()
    allowed = set(tags) if tags is not None else None

    starts = list(_TAG_START_RE.finditer(text))
    description = text[: starts[0].start()] if starts else text
    doc = DocComment(description=description.strip())

    for idx, match in enumerate(starts):
        end = starts[idx + 1].start() if idx + 1 < len(starts) else len(text)
        title = TAG_SYNONYMS.get(match.group(1), match.group(1))
        if allowed is not None and title not in allowed:
            continue
        doc.tags.append(_parse_tag(title, text[match.end():end]))

    return doc
