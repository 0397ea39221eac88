"""
Unit tests for names.py

Tests flattening assignment targets into qualified names.
"""

import unittest

from translation.errors import UnsupportedStatementError
from translation.names import (
    is_allowed_root,
    is_ignored,
    member_expression_names,
    rename_reserved_segments,
    resolve_full_name,
    sanitize_identifier,
)
from translation.syntax import (
    AssignmentExpression,
    CallExpression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    Literal,
    MemberExpression,
    ThisExpression,
    UnsupportedExpression,
    UnsupportedStatement,
    VariableDeclaration,
)


def member(*parts: str):
    expression = Identifier(parts[0])
    for part in parts[1:]:
        expression = MemberExpression(expression, Identifier(part))
    return expression


class TestMemberExpressionNames(unittest.TestCase):
    """Test member_expression_names."""

    def test_identifier(self):
        self.assertEqual(member_expression_names(Identifier("goog")), ["goog"])

    def test_chain(self):
        self.assertEqual(
            member_expression_names(member("goog", "ui", "Component", "prototype", "render")),
            ["goog", "ui", "Component", "prototype", "render"],
        )

    def test_this_contributes_nothing(self):
        expression = MemberExpression(ThisExpression(), Identifier("x"))
        self.assertEqual(member_expression_names(expression), ["x"])

    def test_computed_access(self):
        expression = MemberExpression(member("goog", "a"), Literal("b", "'b'"), computed=True)
        self.assertIsNone(member_expression_names(expression))

    def test_call_in_chain(self):
        expression = MemberExpression(CallExpression(member("goog", "a")), Identifier("b"))
        self.assertIsNone(member_expression_names(expression))


class TestResolveFullName(unittest.TestCase):
    """Test resolve_full_name over statement kinds."""

    def test_assignment(self):
        statement = ExpressionStatement(
            AssignmentExpression(member("goog", "a", "x"), Literal(1, "1"))
        )
        self.assertEqual(resolve_full_name(statement), ["goog", "a", "x"])

    def test_bare_member_expression(self):
        statement = ExpressionStatement(member("goog", "a", "Pair"))
        self.assertEqual(resolve_full_name(statement), ["goog", "a", "Pair"])

    def test_call_has_no_name(self):
        statement = ExpressionStatement(
            CallExpression(member("goog", "provide"), (Literal("goog.a", "'goog.a'"),))
        )
        self.assertIsNone(resolve_full_name(statement))

    def test_function_and_var_declarations_have_no_name(self):
        self.assertIsNone(resolve_full_name(FunctionDeclaration("helper")))
        self.assertIsNone(resolve_full_name(VariableDeclaration(("x",))))

    def test_unsupported_expression(self):
        statement = ExpressionStatement(UnsupportedExpression("binary_expression"))
        with self.assertRaises(UnsupportedStatementError):
            resolve_full_name(statement)

    def test_unsupported_statement(self):
        with self.assertRaises(UnsupportedStatementError) as ctx:
            resolve_full_name(UnsupportedStatement("for_statement"))
        self.assertIn("for_statement", str(ctx.exception))


class TestFilters(unittest.TestCase):
    """Test root allow-list and ignore list."""

    def test_allowed_roots(self):
        self.assertTrue(is_allowed_root(["goog", "a"]))
        self.assertTrue(is_allowed_root(["proto2", "Message"]))
        self.assertFalse(is_allowed_root(["window", "foo"]))
        self.assertFalse(is_allowed_root([]))

    def test_custom_roots(self):
        self.assertTrue(is_allowed_root(["app", "x"], roots={"app"}))

    def test_ignored(self):
        self.assertTrue(is_ignored(["goog", "debug", "LogManager"]))
        self.assertFalse(is_ignored(["goog", "debug", "Logger"]))


class TestReservedWords(unittest.TestCase):
    """Test reserved-word sanitizing."""

    def test_sanitize(self):
        self.assertEqual(sanitize_identifier("class"), "class_")
        self.assertEqual(sanitize_identifier("klass"), "klass")

    def test_rename_segments(self):
        self.assertEqual(rename_reserved_segments("goog.dom.class"), "goog.dom.class_")


if __name__ == "__main__":
    unittest.main()
