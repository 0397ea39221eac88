"""
Call signature assembly from documentation tags.

Combines ``@param`` and ``@return`` tags into a TypeScript call signature,
e.g. ``(a: string, b?: number): boolean``.
"""

from typing import List, Optional, Sequence, Tuple

from jsdoc.comment_parser import Tag
from translation.config import VOID_TYPE
from translation.type_translator import argument_name, arguments_string, to_ts_type


def _parameters(tags: Sequence[Tag]) -> List[Tuple[str, str]]:
    return [
        (argument_name(tag.name or f"arg{index}", tag.type), to_ts_type(tag.type))
        for index, tag in enumerate(t for t in tags if t.title == "param")
    ]


def _return_type(tags: Sequence[Tag]) -> Optional[str]:
    returns = None
    for tag in tags:
        if tag.title == "return":
            returns = to_ts_type(tag.type)
    return returns


def function_signature(tags: Sequence[Tag]) -> str:
    """Build ``(params): result`` from param/return tags; result defaults to ``void``."""
    args = arguments_string(_parameters(tags))
    return f"{args}: {_return_type(tags) or VOID_TYPE}"


def constructor_signature(tags: Sequence[Tag]) -> str:
    """Build ``(params)`` for a constructor. Return and template tags are ignored."""
    return arguments_string(_parameters(tags))


def template_names(tags: Sequence[Tag]) -> List[str]:
    """Names declared by the first ``@template`` tag, e.g. ``"K, V"`` -> ``["K", "V"]``."""
    for tag in tags:
        if tag.title == "template":
            lines = (tag.description or "").splitlines()
            text = lines[0] if lines else ""
            return [name.strip() for name in text.split(",") if name.strip()]
    return []


def parent_types(tags: Sequence[Tag]) -> List[str]:
    """Translated ``@extends`` types in declaration order."""
    return [to_ts_type(tag.type) for tag in tags if tag.title == "extends"]
