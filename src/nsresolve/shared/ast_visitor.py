"""
AST Visitor Pattern

Design:
- Abstract base class with visit_* methods for each declaration kind
- DeclarationWalker gives a default traversal so passes only override
  the node kinds they care about
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, List, Optional, TypeVar

if TYPE_CHECKING:
    from .nodes import (
        ASTNode,
        AttributeDeclaration,
        EmptyDeclaration,
        NamespaceDefinition,
        TranslationUnit,
        UsingDirective,
    )

T = TypeVar('T')


class ASTVisitor(ABC, Generic[T]):
    """
    Abstract base class for AST visitors.

    Example:
        class Counter(ASTVisitor[int]):
            def visit_translation_unit(self, node) -> int:
                return sum(d.accept(self) for d in node.declarations)
            ...
    """

    @abstractmethod
    def visit_translation_unit(self, node: 'TranslationUnit') -> T:
        pass

    @abstractmethod
    def visit_namespace_definition(self, node: 'NamespaceDefinition') -> T:
        pass

    @abstractmethod
    def visit_using_directive(self, node: 'UsingDirective') -> T:
        pass

    @abstractmethod
    def visit_attribute_declaration(self, node: 'AttributeDeclaration') -> T:
        pass

    @abstractmethod
    def visit_empty_declaration(self, node: 'EmptyDeclaration') -> T:
        pass


class DeclarationWalker(ASTVisitor[None]):
    """
    Source-order traversal that does nothing by itself.

    Namespace bodies are visited between enter_namespace() and
    exit_namespace(), so a subclass can keep its own scope stack.
    """

    def walk(self, declarations: List['ASTNode']) -> None:
        for decl in declarations:
            decl.accept(self)

    def visit_translation_unit(self, node: 'TranslationUnit') -> None:
        self.walk(node.declarations)

    def visit_namespace_definition(self, node: 'NamespaceDefinition') -> None:
        token = self.enter_namespace(node)
        try:
            self.walk(node.body)
        finally:
            self.exit_namespace(node, token)

    def enter_namespace(self, node: 'NamespaceDefinition') -> Optional[object]:
        return None

    def exit_namespace(self, node: 'NamespaceDefinition', token: Optional[object]) -> None:
        pass

    def visit_using_directive(self, node: 'UsingDirective') -> None:
        pass

    def visit_attribute_declaration(self, node: 'AttributeDeclaration') -> None:
        pass

    def visit_empty_declaration(self, node: 'EmptyDeclaration') -> None:
        pass
