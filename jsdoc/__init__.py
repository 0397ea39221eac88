"""
Closure documentation comments.

Tokenizes ``/** ... */`` blocks into tagged fields and parses the embedded
Closure type expressions into a closed node tree.
"""

from jsdoc.comment_parser import DocComment, Tag, is_doc_block, parse_comment, unwrap_comment
from jsdoc.type_parser import TypeExpressionSyntaxError, parse_type

__all__ = [
    "DocComment",
    "Tag",
    "TypeExpressionSyntaxError",
    "is_doc_block",
    "parse_comment",
    "parse_type",
    "unwrap_comment",
]
