"""
Tests for the fixture-dialect parser and AST transformer.
"""

import pytest

from nsresolve.frontend.parser import ParseError
from nsresolve.shared.nodes import (
    AttributeDeclaration,
    EmptyDeclaration,
    NamespaceDefinition,
    NodeType,
    QualifiedName,
    TranslationUnit,
    UsingDirective,
)


class TestDeclarations:
    def test_empty_source(self, parser):
        ast = parser.parse("", "empty.cpp")
        assert isinstance(ast, TranslationUnit)
        assert ast.declarations == []

    def test_namespace_definition(self, parser):
        ast = parser.parse("namespace A { namespace B {} }", "t.cpp")
        (a,) = ast.declarations
        assert isinstance(a, NamespaceDefinition)
        assert a.name == "A"
        assert not a.segments[0].inline
        (b,) = a.body
        assert b.name == "B"
        assert b.body == []

    def test_inline_namespace(self, parser):
        ast = parser.parse("inline namespace V {}", "t.cpp")
        assert ast.declarations[0].segments[0].inline

    def test_nested_namespace_definition(self, parser):
        ast = parser.parse("namespace A::inline B::C {}", "t.cpp")
        ns = ast.declarations[0]
        assert [(s.name, s.inline) for s in ns.segments] == [("A", False), ("B", True), ("C", False)]
        assert ns.name == "A::B::C"

    def test_using_directive(self, parser):
        ast = parser.parse("using namespace ::A::B;", "t.cpp")
        (directive,) = ast.declarations
        assert isinstance(directive, UsingDirective)
        assert directive.node_type is NodeType.USING_DIRECTIVE
        assert directive.target.segments == ["A", "B"]
        assert directive.target.is_global
        assert str(directive.target) == "::A::B"

    def test_empty_declarations(self, parser):
        ast = parser.parse(";;", "t.cpp")
        assert [type(d) for d in ast.declarations] == [EmptyDeclaration, EmptyDeclaration]

    def test_comments_are_skipped(self, parser):
        source = "// line comment\n/* block\n comment */ namespace A { /* inside */ }\n"
        ast = parser.parse(source, "t.cpp")
        assert [d.name for d in ast.declarations] == ["A"]


class TestAttributes:
    def test_tag_on_namespace(self, parser):
        ast = parser.parse("namespace [[rustycpp::tagDecl(1)]] A {}", "t.cpp")
        (attr,) = ast.declarations[0].attributes
        assert attr.namespace == "rustycpp"
        assert attr.name == "tagDecl"
        assert attr.full_name == "rustycpp::tagDecl"
        assert [a.value for a in attr.arguments] == [1]

    def test_check_attribute_arguments(self, parser):
        ast = parser.parse(
            "[[rustycpp::checkSymbolMatchTag(false, ::A::B), rustycpp::checkSymbolMatchTag(2, B)]];",
            "t.cpp",
        )
        (decl,) = ast.declarations
        assert isinstance(decl, AttributeDeclaration)
        first, second = decl.attributes
        assert first.arguments[0].value is False
        name = first.arguments[1].value
        assert isinstance(name, QualifiedName)
        assert str(name) == "::A::B"
        assert second.arguments[0].value == 2
        assert str(second.arguments[1].value) == "B"

    def test_true_argument(self, parser):
        ast = parser.parse("[[rustycpp::checkSymbolMatchTag(true, A)]];", "t.cpp")
        assert ast.declarations[0].attributes[0].arguments[0].value is True

    def test_several_specifiers_are_flattened(self, parser):
        ast = parser.parse("[[a]] [[b, c::d]];", "t.cpp")
        attrs = ast.declarations[0].attributes
        assert [a.full_name for a in attrs] == ["a", "b", "c::d"]
        assert all(a.arguments == [] for a in attrs)

    def test_attributes_on_using_directive(self, parser):
        ast = parser.parse("[[deprecated]] using namespace A;", "t.cpp")
        directive = ast.declarations[0]
        assert [a.name for a in directive.attributes] == ["deprecated"]

    def test_argument_location_points_at_expectation(self, parser):
        ast = parser.parse("\n  [[rustycpp::checkSymbolMatchTag(7, A)]];", "loc.cpp")
        loc = ast.declarations[0].attributes[0].arguments[0].location
        assert (loc.file, loc.line, loc.column) == ("loc.cpp", 2, 35)


class TestLocations:
    def test_node_locations(self, parser):
        ast = parser.parse("namespace A {\n  using namespace B;\n}", "loc.cpp")
        ns = ast.declarations[0]
        assert (ns.location.line, ns.location.column) == (1, 1)
        directive = ns.body[0]
        assert (directive.location.line, directive.location.column) == (2, 3)
        assert directive.target.location.column == 19


class TestParseErrors:
    @pytest.mark.parametrize("source", [
        "namespace {}",
        "namespace A {",
        "using namespace ;",
        "using A;",
        "[[rustycpp::tagDecl(1)]] namespace A {}",
        "namespace A { int x; }",
    ])
    def test_rejected(self, parser, source):
        with pytest.raises(ParseError):
            parser.parse(source, "bad.cpp")

    def test_error_location(self, parser):
        with pytest.raises(ParseError) as exc_info:
            parser.parse("namespace A {\n  namespace ;\n}", "bad.cpp")
        err = exc_info.value
        assert err.source_file == "bad.cpp"
        assert err.location.file == "bad.cpp"
        assert err.location.line == 2

    def test_unexpected_character(self, parser):
        with pytest.raises(ParseError) as exc_info:
            parser.parse("namespace A { @ }", "bad.cpp")
        assert "unexpected character" in exc_info.value.message
        assert exc_info.value.location.column == 15
