"""
AST for the fixture dialect (a C++ subset: namespaces, using-directives and
attribute declarations).

Visitor Pattern Support:
- Every node has accept() for polymorphic dispatch to visit_<kind>()
- Nodes are plain data; name binding happens in passes/name_resolution.py
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, TypeVar, Union

from .events import ReferenceExpression
from .source_location import SourceLocation
from ..utils.config import CHECKER_ATTRIBUTE_NAMESPACE, SCOPE_SEPARATOR

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor

T = TypeVar('T')


class NodeType(Enum):
    """AST node types"""
    TRANSLATION_UNIT = "translation_unit"
    NAMESPACE_DEF = "namespace_def"
    USING_DIRECTIVE = "using_directive"
    ATTRIBUTE_DECL = "attribute_decl"
    EMPTY_DECL = "empty_decl"


class ASTNode:
    """
    Base class for all AST nodes.

    __slots__ keeps nodes small and catches attribute typos early.
    """
    __slots__ = ('node_type', 'location')

    def __init__(self, node_type: NodeType, location: SourceLocation):
        self.node_type = node_type
        self.location = location

    def accept(self, visitor: ASTVisitor[T]) -> T:
        raise NotImplementedError(f"{type(self).__name__} must implement accept()")


# -----------------------------------------------------------------------------
# Names and attributes (not declarations themselves)
# -----------------------------------------------------------------------------


class QualifiedName:
    """`A`, `A::B` or `::A::B` as written in the source."""
    __slots__ = ('segments', 'is_global', 'location')

    def __init__(self, segments: List[str], is_global: bool, location: SourceLocation):
        self.segments = segments
        self.is_global = is_global
        self.location = location

    def to_reference(self) -> ReferenceExpression:
        return ReferenceExpression.of(self.segments, self.is_global)

    def __str__(self) -> str:
        prefix = SCOPE_SEPARATOR if self.is_global else ""
        return prefix + SCOPE_SEPARATOR.join(self.segments)

    def __repr__(self) -> str:
        return f"QualifiedName({str(self)!r})"


AttributeValue = Union[int, bool, QualifiedName]


class AttributeArgument:
    """One argument of an attribute: an integer, true/false, or a name."""
    __slots__ = ('value', 'location')

    def __init__(self, value: AttributeValue, location: SourceLocation):
        self.value = value
        self.location = location

    def __repr__(self) -> str:
        return f"AttributeArgument({self.value!r})"


class Attribute:
    """`[[namespace::name(args)]]` entry."""
    __slots__ = ('namespace', 'name', 'arguments', 'location')

    def __init__(
        self,
        namespace: Optional[str],
        name: str,
        arguments: List[AttributeArgument],
        location: SourceLocation,
    ):
        self.namespace = namespace
        self.name = name
        self.arguments = arguments
        self.location = location

    def is_checker(self, name: str) -> bool:
        return self.namespace == CHECKER_ATTRIBUTE_NAMESPACE and self.name == name

    @property
    def full_name(self) -> str:
        return f"{self.namespace}{SCOPE_SEPARATOR}{self.name}" if self.namespace else self.name

    def __repr__(self) -> str:
        return f"Attribute({self.full_name!r}, {self.arguments!r})"


class NamespaceSegment:
    """One name of a (possibly nested) namespace definition: `A` or `inline B`."""
    __slots__ = ('name', 'inline', 'location')

    def __init__(self, name: str, inline: bool, location: SourceLocation):
        self.name = name
        self.inline = inline
        self.location = location

    def __repr__(self) -> str:
        return f"NamespaceSegment({self.name!r}, inline={self.inline})"


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------


class TranslationUnit(ASTNode):
    __slots__ = ('declarations',)

    def __init__(self, declarations: List[ASTNode], location: SourceLocation):
        super().__init__(NodeType.TRANSLATION_UNIT, location)
        self.declarations = declarations

    def accept(self, visitor: ASTVisitor[T]) -> T:
        return visitor.visit_translation_unit(self)


class NamespaceDefinition(ASTNode):
    """
    `inline? namespace [[attrs]] A::inline B { body }`.

    segments has one entry per name; attributes (and therefore the tag) belong
    to the innermost one.
    """
    __slots__ = ('segments', 'attributes', 'body')

    def __init__(
        self,
        segments: List[NamespaceSegment],
        attributes: List[Attribute],
        body: List[ASTNode],
        location: SourceLocation,
    ):
        super().__init__(NodeType.NAMESPACE_DEF, location)
        self.segments = segments
        self.attributes = attributes
        self.body = body

    @property
    def name(self) -> str:
        return SCOPE_SEPARATOR.join(s.name for s in self.segments)

    def accept(self, visitor: ASTVisitor[T]) -> T:
        return visitor.visit_namespace_definition(self)


class UsingDirective(ASTNode):
    """`using namespace A::B;`"""
    __slots__ = ('target', 'attributes')

    def __init__(self, target: QualifiedName, attributes: List[Attribute], location: SourceLocation):
        super().__init__(NodeType.USING_DIRECTIVE, location)
        self.target = target
        self.attributes = attributes

    def accept(self, visitor: ASTVisitor[T]) -> T:
        return visitor.visit_using_directive(self)


class AttributeDeclaration(ASTNode):
    """`[[...]];` (where the checker attributes live)."""
    __slots__ = ('attributes',)

    def __init__(self, attributes: List[Attribute], location: SourceLocation):
        super().__init__(NodeType.ATTRIBUTE_DECL, location)
        self.attributes = attributes

    def accept(self, visitor: ASTVisitor[T]) -> T:
        return visitor.visit_attribute_declaration(self)


class EmptyDeclaration(ASTNode):
    __slots__ = ()

    def __init__(self, location: SourceLocation):
        super().__init__(NodeType.EMPTY_DECL, location)

    def accept(self, visitor: ASTVisitor[T]) -> T:
        return visitor.visit_empty_declaration(self)
