"""
Unit tests for type_parser.py

Tests parsing of Closure type expressions into type nodes.
"""

import unittest

from jsdoc.type_nodes import (
    AllLiteral,
    ArrayType,
    FieldType,
    FunctionType,
    NameExpression,
    NonNullableType,
    NullableLiteral,
    NullableType,
    NullLiteral,
    OptionalType,
    RecordType,
    RestType,
    TypeApplication,
    UndefinedLiteral,
    UnionType,
    VoidLiteral,
)
from jsdoc.type_parser import TypeExpressionSyntaxError, parse_type


class TestLexing(unittest.TestCase):
    """Test how names and markers are split."""

    def test_dotted_name_is_one_name(self):
        self.assertEqual(parse_type("goog.structs.Map"), NameExpression("goog.structs.Map"))

    def test_application_marker_after_dotted_name(self):
        node = parse_type("goog.structs.Map.<string, number>")
        self.assertEqual(node.expression, NameExpression("goog.structs.Map"))
        self.assertEqual(len(node.applications), 2)

    def test_nested_closing_angles(self):
        node = parse_type("Array.<Array.<string>>")
        self.assertEqual(
            node.applications[0],
            TypeApplication(NameExpression("Array"), (NameExpression("string"),)),
        )

    def test_keyword_prefix_is_a_name(self):
        self.assertEqual(parse_type("functionLike"), NameExpression("functionLike"))


class TestNamesAndLiterals(unittest.TestCase):
    """Test names and literal types."""

    def test_name(self):
        self.assertEqual(parse_type("string"), NameExpression("string"))

    def test_surrounding_whitespace_is_ignored(self):
        self.assertEqual(parse_type("  number "), NameExpression("number"))

    def test_all_literal(self):
        self.assertEqual(parse_type("*"), AllLiteral())

    def test_unknown_literal(self):
        self.assertEqual(parse_type("?"), NullableLiteral())

    def test_null_undefined_void(self):
        self.assertEqual(parse_type("null"), NullLiteral())
        self.assertEqual(parse_type("undefined"), UndefinedLiteral())
        self.assertEqual(parse_type("void"), VoidLiteral())


class TestModifiers(unittest.TestCase):
    """Test nullability, optional and rest modifiers."""

    def test_prefix_nullable(self):
        self.assertEqual(
            parse_type("?string"), NullableType(NameExpression("string"), prefix=True)
        )

    def test_postfix_nullable(self):
        self.assertEqual(
            parse_type("string?"), NullableType(NameExpression("string"), prefix=False)
        )

    def test_prefix_non_nullable(self):
        self.assertEqual(
            parse_type("!Object"), NonNullableType(NameExpression("Object"), prefix=True)
        )

    def test_optional(self):
        self.assertEqual(parse_type("number="), OptionalType(NameExpression("number")))

    def test_rest(self):
        self.assertEqual(parse_type("...number"), RestType(NameExpression("number")))

    def test_bare_rest(self):
        self.assertEqual(parse_type("..."), RestType(None))

    def test_optional_union(self):
        self.assertEqual(
            parse_type("number|string="),
            OptionalType(UnionType((NameExpression("number"), NameExpression("string")))),
        )

    def test_rest_union(self):
        self.assertEqual(
            parse_type("...number|string"),
            RestType(UnionType((NameExpression("number"), NameExpression("string")))),
        )

    def test_nullable_array_suffix(self):
        self.assertEqual(
            parse_type("?string[]"),
            NullableType(
                TypeApplication(NameExpression("Array"), (NameExpression("string"),)),
                prefix=True,
            ),
        )

    def test_unknown_in_union(self):
        self.assertEqual(
            parse_type("?|string"),
            UnionType((NullableLiteral(), NameExpression("string"))),
        )

    def test_postfix_non_nullable(self):
        self.assertEqual(
            parse_type("Object!"), NonNullableType(NameExpression("Object"), prefix=False)
        )


class TestCompoundTypes(unittest.TestCase):
    """Test unions, applications, functions and records."""

    def test_union(self):
        self.assertEqual(
            parse_type("number|string"),
            UnionType((NameExpression("number"), NameExpression("string"))),
        )

    def test_parenthesized_union(self):
        self.assertEqual(
            parse_type("(number|string)"),
            UnionType((NameExpression("number"), NameExpression("string"))),
        )

    def test_dotted_application(self):
        self.assertEqual(
            parse_type("Array.<string>"),
            TypeApplication(NameExpression("Array"), (NameExpression("string"),)),
        )

    def test_bare_angle_application(self):
        self.assertEqual(parse_type("Array<string>"), parse_type("Array.<string>"))

    def test_two_argument_application_with_unknown(self):
        self.assertEqual(
            parse_type("Object.<string, ?>"),
            TypeApplication(
                NameExpression("Object"), (NameExpression("string"), NullableLiteral())
            ),
        )

    def test_array_suffix(self):
        self.assertEqual(
            parse_type("string[]"),
            TypeApplication(NameExpression("Array"), (NameExpression("string"),)),
        )

    def test_function_type(self):
        self.assertEqual(
            parse_type("function(string, number=): boolean"),
            FunctionType(
                params=(NameExpression("string"), OptionalType(NameExpression("number"))),
                result=NameExpression("boolean"),
            ),
        )

    def test_function_this_and_rest(self):
        node = parse_type("function(this:Element, ...*)")
        self.assertEqual(node.this_type, NameExpression("Element"))
        self.assertEqual(node.params, (RestType(AllLiteral()),))
        self.assertIsNone(node.result)

    def test_function_new(self):
        node = parse_type("function(new:goog.Disposable)")
        self.assertEqual(node.new_type, NameExpression("goog.Disposable"))
        self.assertEqual(node.params, ())

    def test_record(self):
        self.assertEqual(
            parse_type("{a: number, b}"),
            RecordType((FieldType("a", NameExpression("number")), FieldType("b", None))),
        )

    def test_record_string_key(self):
        node = parse_type("{'x-y': string}")
        self.assertEqual(node.fields[0].key, "x-y")

    def test_nested_union_in_application(self):
        node = parse_type("Array.<number|string>")
        self.assertIsInstance(node.applications[0], UnionType)

    def test_single_member_group_is_union(self):
        self.assertEqual(parse_type("(number)"), UnionType((NameExpression("number"),)))

    def test_array_literal(self):
        self.assertEqual(
            parse_type("[number, string]"),
            ArrayType((NameExpression("number"), NameExpression("string"))),
        )

    def test_function_result_binds_tighter_than_union(self):
        node = parse_type("function(string): number|boolean")
        self.assertIsInstance(node, UnionType)
        self.assertIsInstance(node.elements[0], FunctionType)
        self.assertEqual(node.elements[0].result, NameExpression("number"))

    def test_function_bare_rest_param(self):
        node = parse_type("function(string, ...)")
        self.assertEqual(node.params, (NameExpression("string"), RestType(None)))

    def test_record_optional_field(self):
        node = parse_type("{a: number=}")
        self.assertEqual(node.fields[0].value, OptionalType(NameExpression("number")))

    def test_record_number_key(self):
        node = parse_type("{0: string}")
        self.assertEqual(node.fields[0].key, "0")


class TestSyntaxErrors(unittest.TestCase):
    """Test malformed expressions."""

    def test_empty(self):
        with self.assertRaises(TypeExpressionSyntaxError):
            parse_type("   ")

    def test_unclosed_application(self):
        with self.assertRaises(TypeExpressionSyntaxError):
            parse_type("Array.<string")

    def test_trailing_token(self):
        with self.assertRaises(TypeExpressionSyntaxError) as ctx:
            parse_type("number)")
        self.assertEqual(ctx.exception.position, 6)

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_type("{a:")

    def test_unexpected_character_position(self):
        with self.assertRaises(TypeExpressionSyntaxError) as ctx:
            parse_type("number#")
        self.assertEqual(ctx.exception.position, 6)
        self.assertEqual(ctx.exception.text, "number#")

    def test_end_of_input_position(self):
        with self.assertRaises(TypeExpressionSyntaxError) as ctx:
            parse_type("Array.<string")
        self.assertEqual(ctx.exception.position, len("Array.<string"))

    def test_dotted_record_key(self):
        with self.assertRaises(TypeExpressionSyntaxError) as ctx:
            parse_type("{a.b: number}")
        self.assertEqual(ctx.exception.position, 1)

    def test_unknown_parameter_label(self):
        with self.assertRaises(TypeExpressionSyntaxError) as ctx:
            parse_type("function(that:Element)")
        self.assertEqual(ctx.exception.position, 9)

    def test_unsupported_array_suffix_content(self):
        with self.assertRaises(TypeExpressionSyntaxError):
            parse_type("number[string]")


if __name__ == "__main__":
    unittest.main()
