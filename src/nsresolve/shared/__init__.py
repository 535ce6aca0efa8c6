"""
Shared components: scope tree, boundary types, AST, diagnostics.
"""

from .scope_id import ScopeId
from .source_location import SourceLocation
from .errors import (
    Error, ErrorCode, ErrorReporter,
    NsResolveError, NsResolveImplementationError, ResolverContractError,
    MalformedReferenceError, EventOrderError, UnknownScopeError,
)
from .scope import ScopeKind, ScopeNode, ScopeTree
from .events import (
    ReferenceExpression, ResolutionResult, ResolutionSource, ImportDirective,
    ScopeDeclared, ImportIssued, ReferenceQuery,
)
from .nodes import (
    ASTNode, NodeType, TranslationUnit, NamespaceDefinition, NamespaceSegment,
    UsingDirective, AttributeDeclaration, EmptyDeclaration,
    Attribute, AttributeArgument, QualifiedName,
)
from .ast_visitor import ASTVisitor, DeclarationWalker
