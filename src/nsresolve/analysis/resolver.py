"""
Resolver

Rust Pattern: rustc_resolve::Resolver::resolve_path

Search order for `resolve(expr, query_scope, query_position)`:

1. Rooted (`::A::B`): from the outermost scope.
2. Relative (`A::B`): from each scope of the enclosing chain, innermost first.
   The first chain scope that yields a fully visible route wins; an inner
   match shadows an outer one, it is never an ambiguity.
3. Both kinds: from each active imported scope, in issuance order. A
   `using namespace` therefore widens rooted lookups as well as relative ones.
4. Otherwise unresolved.

A route is accepted only if every node on it (intermediate, final, and any
inline namespace crossed) is visible at the query position. A node declared
later than the query behaves as if it did not exist.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..shared.errors import MalformedReferenceError
from ..shared.events import ReferenceExpression, ResolutionResult, ResolutionSource
from ..shared.scope import ScopeNode, ScopeTree
from .registry import DeclarationRegistry
from .visibility import VisibilityIndex

logger = logging.getLogger(__name__)


class Resolver:
    """
    Stateless reader over the scope tree, registry and visibility index.

    Unresolved names are a normal result; only a malformed expression raises.
    """

    def __init__(self, tree: ScopeTree, registry: DeclarationRegistry, visibility: VisibilityIndex):
        self.tree = tree
        self.registry = registry
        self.visibility = visibility

    def resolve(self, expr: ReferenceExpression, query_scope: ScopeNode, query_position: Any) -> ResolutionResult:
        if not isinstance(expr, ReferenceExpression) or not expr.segments:
            raise MalformedReferenceError(f"not a reference expression: {expr!r}")

        chain = list(query_scope.chain())
        result = self._resolve_direct(expr, chain, query_position)
        if result is None:
            result = self._resolve_through_imports(expr, chain, query_position)
        if result is None:
            logger.debug(f"{expr} in {query_scope.qualified_name} at {query_position!r}: unresolved")
            return ResolutionResult.unresolved()
        logger.debug(f"{expr} in {query_scope.qualified_name} at {query_position!r}: {result}")
        return result

    def _resolve_direct(
        self, expr: ReferenceExpression, chain: List[ScopeNode], query_position: Any
    ) -> Optional[ResolutionResult]:
        if expr.is_global:
            node = self._resolve_visible(self.tree.root, expr.segments, query_position)
            if node is not None:
                return ResolutionResult.resolved(node, ResolutionSource.GLOBAL, self.tree.root)
            return None
        for scope in chain:
            node = self._resolve_visible(scope, expr.segments, query_position)
            if node is not None:
                return ResolutionResult.resolved(node, ResolutionSource.ENCLOSING, scope)
        return None

    def _resolve_through_imports(
        self, expr: ReferenceExpression, chain: List[ScopeNode], query_position: Any
    ) -> Optional[ResolutionResult]:
        for imported in self.visibility.active_imports(chain, query_position):
            node = self._resolve_visible(imported, expr.segments, query_position)
            if node is not None:
                return ResolutionResult.resolved(node, ResolutionSource.IMPORT, imported)
        return None

    def _resolve_visible(self, start: ScopeNode, segments: Sequence[str], query_position: Any) -> Optional[ScopeNode]:
        route = self.registry.resolve_route(
            start, segments, lambda node: self.visibility.is_visible(node, query_position)
        )
        if not route:
            return None
        return route[-1]
