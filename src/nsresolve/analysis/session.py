"""
Resolution Session: the in-process boundary of the resolver core.

One session per source tree. The host streams ScopeDeclared / ImportIssued /
ReferenceQuery events in strict position order; each ReferenceQuery is
answered immediately against the state accumulated so far.

Single producer. Once the producer stops, any number of readers may call
resolve_at() concurrently; reading while events are still being applied is not
supported.
"""

import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Type

from ..shared.errors import EventOrderError, NsResolveImplementationError
from ..shared.events import (
    ImportDirective,
    ImportIssued,
    ReferenceExpression,
    ReferenceQuery,
    ResolutionResult,
    ScopeDeclared,
)
from ..shared.scope import ScopeNode, ScopeTree, validate_segment
from ..shared.scope_id import ScopeId
from ..shared.source_location import SourceLocation
from .registry import DeclarationRegistry
from .resolver import Resolver
from .visibility import VisibilityIndex

logger = logging.getLogger(__name__)


class ResolutionSession:
    """
    Owns the Scope Tree, Declaration Registry, Visibility Index and Resolver
    for one source tree and enforces strictly increasing event positions.
    """

    def __init__(self) -> None:
        self.tree = ScopeTree()
        self.registry = DeclarationRegistry(self.tree)
        self.visibility = VisibilityIndex()
        self.resolver = Resolver(self.tree, self.registry, self.visibility)
        self.imports: List[ImportDirective] = []
        self._last_position: Any = None
        self._handlers: Dict[Type[Any], Callable[[Any], Any]] = {
            ScopeDeclared: self._on_scope_declared,
            ImportIssued: self._on_import_issued,
            ReferenceQuery: self._on_reference_query,
        }

    @property
    def root(self) -> ScopeNode:
        return self.tree.root

    @property
    def root_id(self) -> ScopeId:
        return self.tree.root.scope_id

    @property
    def last_position(self) -> Any:
        return self._last_position

    def _advance(self, position: Any) -> None:
        if position is None:
            raise EventOrderError(position, self._last_position)
        if self._last_position is not None and not self._last_position < position:
            raise EventOrderError(position, self._last_position)
        self._last_position = position

    # -------------------------------------------------------------------------
    # Producer API
    # -------------------------------------------------------------------------

    def declare_scope(
        self,
        segment: str,
        enclosing: ScopeId,
        tag: Optional[Hashable],
        position: Any,
        inline: bool = False,
        location: Optional[SourceLocation] = None,
    ) -> ScopeNode:
        parent = self.tree.get(enclosing)
        validate_segment(segment)
        self._advance(position)
        return self.tree.declare_scope(segment, parent, tag, position, inline=inline, location=location)

    def issue_import(self, target: ReferenceExpression, enclosing: ScopeId, position: Any) -> ImportDirective:
        """
        Record `using namespace target;` issued in `enclosing`.

        The target is resolved here, at the directive's own position; if it
        does not resolve the directive is recorded as inert.
        """
        scope = self.tree.get(enclosing)
        self._advance(position)
        resolved = self.resolver.resolve(target, scope, position)
        directive = ImportDirective(
            target_path=target,
            target=resolved.node,
            scope=scope,
            position=position,
        )
        self.visibility.record_import(directive)
        self.imports.append(directive)
        return directive

    def query(self, expression: ReferenceExpression, enclosing: ScopeId, position: Any) -> ResolutionResult:
        scope = self.tree.get(enclosing)
        self._advance(position)
        return self.resolver.resolve(expression, scope, position)

    def apply(self, event: Any) -> Any:
        """Apply one event; returns the ScopeNode, ImportDirective or ResolutionResult it produced."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise NsResolveImplementationError(f"unsupported event type {type(event).__name__}")
        return handler(event)

    def run(self, events: Iterable[Any]) -> List[ResolutionResult]:
        """Apply every event; return the results of the ReferenceQuery events, in order."""
        results: List[ResolutionResult] = []
        for event in events:
            outcome = self.apply(event)
            if isinstance(event, ReferenceQuery):
                results.append(outcome)
        return results

    # -------------------------------------------------------------------------
    # Reader API
    # -------------------------------------------------------------------------

    def resolve_at(self, expression: ReferenceExpression, enclosing: ScopeId, position: Any) -> ResolutionResult:
        """Pure read at an arbitrary position; does not advance the event clock."""
        return self.resolver.resolve(expression, self.tree.get(enclosing), position)

    # -------------------------------------------------------------------------
    # Event handlers
    # -------------------------------------------------------------------------

    def _on_scope_declared(self, event: ScopeDeclared) -> ScopeNode:
        return self.declare_scope(event.segment, event.enclosing, event.tag, event.position, inline=event.inline)

    def _on_import_issued(self, event: ImportIssued) -> ImportDirective:
        return self.issue_import(event.target, event.enclosing, event.position)

    def _on_reference_query(self, event: ReferenceQuery) -> ResolutionResult:
        return self.query(event.expression, event.enclosing, event.position)
