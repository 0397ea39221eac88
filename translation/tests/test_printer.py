"""
Unit tests for printer.py

Tests rendering of the declaration model into .d.ts text.
"""

import unittest

from translation.models import (
    ClassEntry,
    DeclarationModel,
    EnumEntry,
    FunctionEntry,
    TypeAliasEntry,
    VariableEntry,
)
from translation.printer import render_declarations, render_namespace, render_provide


class TestRenderNamespace(unittest.TestCase):
    """Test rendering a single namespace block."""

    def test_members_in_kind_order(self):
        model = DeclarationModel()
        ns = model.namespace("goog.a")
        ns.functions.append(FunctionEntry("f", "(x: number): void"))
        ns.enums.append(EnumEntry("E", "number", keys=["A", "B"]))
        ns.type_aliases.append(TypeAliasEntry("T", "string"))
        ns.variables.append(VariableEntry("v", "boolean"))

        self.assertEqual(
            render_namespace("goog.a", ns),
            "declare module goog.a {\n"
            "    var v: boolean;\n"
            "    type T = string;\n"
            "    enum E { A, B }\n"
            "    function f(x: number): void;\n"
            "}",
        )

    def test_enum_alias(self):
        ns = DeclarationModel().namespace("goog.b")
        ns.enums.append(EnumEntry("Color", "string", alias_of="goog.a.Color"))
        self.assertIn("    import Color = goog.a.Color;", render_namespace("goog.b", ns))

    def test_generic_function(self):
        ns = DeclarationModel().namespace("goog.array")
        ns.functions.append(FunctionEntry("peek", "(arr: Array<T>): T", templates=["T"]))
        self.assertIn("    function peek<T>(arr: Array<T>): T;", render_namespace("goog.array", ns))

    def test_reserved_namespace_segment(self):
        ns = DeclarationModel().namespace("goog.dom.class")
        ns.functions.append(FunctionEntry("add", "(): void"))
        self.assertTrue(render_namespace("goog.dom.class", ns).startswith("declare module goog.dom.class_ {"))


class TestRenderClasses(unittest.TestCase):
    """Test class and interface rendering."""

    def test_class(self):
        ns = DeclarationModel().namespace("goog.ui")
        widget = ClassEntry(
            "Widget",
            "class",
            constructor="(name: string)",
            parents=["goog.Disposable", "goog.Other"],
            templates=["T"],
        )
        widget.properties.append(VariableEntry("count", "number", is_static=True))
        widget.properties.append(VariableEntry("label", "string"))
        widget.methods.append(FunctionEntry("create", "(): goog.ui.Widget", is_static=True))
        widget.methods.append(FunctionEntry("map", "(f: (arg0: T) => U): U", templates=["U"]))
        ns.add_class(widget)

        self.assertEqual(
            render_namespace("goog.ui", ns),
            "declare module goog.ui {\n"
            "    class Widget<T> extends goog.Disposable {\n"
            "        constructor(name: string);\n"
            "        static count: number;\n"
            "        label: string;\n"
            "        static create(): goog.ui.Widget;\n"
            "        map<U>(f: (arg0: T) => U): U;\n"
            "    }\n"
            "}",
        )

    def test_interface_extends_all_parents(self):
        ns = DeclarationModel().namespace("goog.a")
        ns.add_class(ClassEntry("I", "interface", parents=["goog.a.A", "goog.a.B"]))
        self.assertEqual(
            render_namespace("goog.a", ns),
            "declare module goog.a {\n"
            "    interface I extends goog.a.A, goog.a.B {\n"
            "    }\n"
            "}",
        )


class TestComments(unittest.TestCase):
    """Test documentation comment re-emission."""

    def setUp(self):
        self.ns = DeclarationModel().namespace("goog.a")
        self.ns.variables.append(
            VariableEntry("x", "number", comment="*\n * The x.\n * @type {number}\n ")
        )

    def test_comment_emitted(self):
        self.assertEqual(
            render_namespace("goog.a", self.ns),
            "declare module goog.a {\n"
            "    /**\n"
            "     * The x.\n"
            "     * @type {number}\n"
            "     */\n"
            "    var x: number;\n"
            "}",
        )

    def test_comment_suppressed(self):
        self.assertNotIn("/**", render_namespace("goog.a", self.ns, emit_comments=False))


class TestRenderDeclarations(unittest.TestCase):
    """Test whole-module rendering."""

    def test_provide_banner(self):
        self.assertEqual(
            render_provide("goog.ui.Widget"),
            "declare module 'goog:goog.ui.Widget' {\n"
            "    import Widget = goog.ui.Widget;\n"
            "    export = Widget;\n"
            "}",
        )

    def test_provides_keep_order_and_duplicates(self):
        text = render_declarations(DeclarationModel(), ["goog.b", "goog.a", "goog.b"])
        banners = [line for line in text.splitlines() if line.startswith("declare module 'goog:")]
        self.assertEqual(
            banners,
            [
                "declare module 'goog:goog.b' {",
                "declare module 'goog:goog.a' {",
                "declare module 'goog:goog.b' {",
            ],
        )

    def test_empty_namespaces_omitted(self):
        model = DeclarationModel()
        model.namespace("goog.empty")
        model.namespace("goog.a").variables.append(VariableEntry("x", "number"))
        text = render_declarations(model, [])
        self.assertNotIn("goog.empty", text)
        self.assertTrue(text.endswith("}\n"))

    def test_nothing_to_render(self):
        self.assertEqual(render_declarations(DeclarationModel(), []), "")

    def test_blocks_separated_by_blank_line(self):
        model = DeclarationModel()
        model.namespace("goog.a").variables.append(VariableEntry("x", "number"))
        self.assertEqual(
            render_declarations(model, ["goog.a"]),
            "declare module goog.a {\n"
            "    var x: number;\n"
            "}\n"
            "\n"
            "declare module 'goog:goog.a' {\n"
            "    import a = goog.a;\n"
            "    export = a;\n"
            "}\n",
        )


if __name__ == "__main__":
    unittest.main()
