"""
Visibility Index

Textual-order gating. A declaration is visible to a query only when it was
declared strictly before the query; an import directive is active only when it
was issued strictly before the query from a scope enclosing the query.

Positions are compared with `<` only, so any totally ordered position type
works (the front end uses a monotonically increasing int counter).
"""

import logging
from typing import Any, Dict, Iterable, List, Set, Tuple

from ..shared.events import ImportDirective
from ..shared.scope import ScopeNode
from ..shared.scope_id import ScopeId

logger = logging.getLogger(__name__)


class VisibilityIndex:
    """Position comparisons plus the per-scope list of issued import directives."""

    def __init__(self) -> None:
        self._imports: Dict[ScopeId, List[ImportDirective]] = {}

    @staticmethod
    def is_visible(node: ScopeNode, query_position: Any) -> bool:
        """True iff `node` was first declared strictly before `query_position`."""
        if node.position is None:
            return node.is_root
        return node.position < query_position

    def record_import(self, directive: ImportDirective) -> None:
        self._imports.setdefault(directive.scope.scope_id, []).append(directive)
        if directive.is_inert:
            logger.debug(
                f"inert import of {directive.target_path} in {directive.scope.qualified_name} "
                f"at {directive.position!r}"
            )
        else:
            logger.debug(
                f"import of {directive.target.qualified_name} in {directive.scope.qualified_name} "
                f"at {directive.position!r}"
            )

    def imports_in(self, scope: ScopeNode) -> List[ImportDirective]:
        """Directives issued directly inside `scope`, in issuance order (inert ones included)."""
        return list(self._imports.get(scope.scope_id, ()))

    def active_imports(self, scope_chain: Iterable[ScopeNode], query_position: Any) -> List[ScopeNode]:
        """
        Distinct imported scopes active at `query_position` for a query whose
        enclosing chain (innermost first) is `scope_chain`.

        Ordered by issuance position, ties broken by target path; a target
        imported more than once appears once, at its first issuance.
        """
        active: List[ImportDirective] = []
        for scope in scope_chain:
            for directive in self._imports.get(scope.scope_id, ()):
                if not directive.position < query_position:
                    break
                if not directive.is_inert:
                    active.append(directive)

        active.sort(key=lambda d: (d.position, d.target.path))
        seen: Set[Tuple[str, ...]] = set()
        targets: List[ScopeNode] = []
        for directive in active:
            key = directive.target.path
            if key in seen:
                continue
            seen.add(key)
            targets.append(directive.target)
        return targets
