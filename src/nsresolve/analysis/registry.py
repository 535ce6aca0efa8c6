"""
Declaration Registry

Path traversal over the scope tree. Positions are opaque here: callers that
care about source order pass a `visible` predicate, and nodes it rejects are
treated as if they were never declared.

Rust Pattern: rustc_resolve::module::PathResolution
"""

import logging
from typing import Callable, Hashable, List, Optional, Sequence

from ..shared.scope import ScopeNode, ScopeTree

logger = logging.getLogger(__name__)

Visible = Callable[[ScopeNode], bool]


def _always(node: ScopeNode) -> bool:
    return True


class DeclarationRegistry:
    """
    Answers "is this path declared, and with what identity" by walking child
    links from a starting node.

    Inline namespaces are transparent: when a scope has no (visible) direct
    child named `segment`, its visible inline children are searched (in
    declaration order, depth first). The inline namespaces crossed that way
    are part of the route.
    """

    def __init__(self, tree: ScopeTree):
        self.tree = tree

    def lookup_child(self, node: ScopeNode, segment: str, visible: Visible = _always) -> Optional[List[ScopeNode]]:
        """Route from `node` (exclusive) to its member `segment`, or None."""
        direct = node.child(segment)
        if direct is not None and visible(direct):
            return [direct]
        for inline in node.inline_children:
            if not visible(inline):
                continue
            route = self.lookup_child(inline, segment, visible)
            if route is not None:
                return [inline] + route
        return None

    def resolve_route(
        self, start: ScopeNode, segments: Sequence[str], visible: Visible = _always
    ) -> Optional[List[ScopeNode]]:
        """Every node traversed resolving `segments` from `start` (exclusive), or None."""
        route: List[ScopeNode] = []
        current = start
        for segment in segments:
            step = self.lookup_child(current, segment, visible)
            if step is None:
                return None
            route.extend(step)
            current = step[-1]
        return route

    def resolve_path(self, start: ScopeNode, segments: Sequence[str], visible: Visible = _always) -> Optional[ScopeNode]:
        """Node reached by `segments` from `start`, or None at the first missing segment."""
        route = self.resolve_route(start, segments, visible)
        if route is None:
            return None
        return route[-1] if route else start

    def is_declared(self, path: Sequence[str]) -> bool:
        """True if the root-anchored `path` names a declared scope."""
        return self.resolve_path(self.tree.root, path) is not None

    def tag_of(self, path: Sequence[str]) -> Optional[Hashable]:
        """Tag of the scope at root-anchored `path` (None if undeclared or untagged)."""
        node = self.resolve_path(self.tree.root, path)
        return node.tag if node is not None else None
