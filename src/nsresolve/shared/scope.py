"""
Scope Tree: persistent tree of nested, reopenable namespaces.

Each node owns its children keyed by name segment. declare_scope() is a
declare-or-fetch keyed by (parent, segment): the first declaration assigns the
tag and position, later declarations of the same path return the same node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple

import logging

from .errors import MalformedReferenceError, UnknownScopeError
from .scope_id import ScopeId, ScopeIdAllocator
from .source_location import SourceLocation
from ..utils.config import SCOPE_SEPARATOR

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Scope kind
# -----------------------------------------------------------------------------


class ScopeKind(Enum):
    ROOT = "root"
    NAMESPACE = "namespace"


def validate_segment(segment: Any) -> str:
    """Raise MalformedReferenceError unless segment is a single non-empty name."""
    if not isinstance(segment, str) or not segment or SCOPE_SEPARATOR in segment:
        raise MalformedReferenceError(f"invalid name segment {segment!r}")
    return segment


# -----------------------------------------------------------------------------
# ScopeNode
# -----------------------------------------------------------------------------


@dataclass(eq=False)
class ScopeNode:
    """
    One named scope. Identity is the node object itself (and its scope_id);
    the path is derived from the parent links.

    position is the first-declaration position; None only for the root, which
    is visible from everywhere.
    """

    name: Optional[str]
    scope_id: ScopeId
    kind: ScopeKind
    parent: Optional[ScopeNode] = field(default=None, repr=False)
    tag: Optional[Hashable] = None
    position: Any = None
    inline: bool = False
    location: Optional[SourceLocation] = field(default=None, repr=False)
    reopen_count: int = 0
    _children: Dict[str, ScopeNode] = field(default_factory=dict, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def path(self) -> Tuple[str, ...]:
        """Segments from the root down to this node (root: ())."""
        parts: List[str] = []
        node: Optional[ScopeNode] = self
        while node is not None and node.name is not None:
            parts.append(node.name)
            node = node.parent
        return tuple(reversed(parts))

    @property
    def qualified_name(self) -> str:
        return SCOPE_SEPARATOR + SCOPE_SEPARATOR.join(self.path)

    @property
    def depth(self) -> int:
        return len(self.path)

    def child(self, segment: str) -> Optional[ScopeNode]:
        """Direct child by exact segment."""
        return self._children.get(segment)

    @property
    def children(self) -> List[ScopeNode]:
        """Children in first-declaration order."""
        return list(self._children.values())

    @property
    def inline_children(self) -> List[ScopeNode]:
        return [c for c in self._children.values() if c.inline]

    def chain(self) -> Iterator[ScopeNode]:
        """This scope, then each enclosing scope up to the root (innermost first)."""
        node: Optional[ScopeNode] = self
        while node is not None:
            yield node
            node = node.parent

    def encloses(self, other: ScopeNode) -> bool:
        """True if other is this scope or nested (at any depth) inside it."""
        return any(n is self for n in other.chain())

    def __str__(self) -> str:
        return self.qualified_name


# -----------------------------------------------------------------------------
# ScopeTree
# -----------------------------------------------------------------------------


class ScopeTree:
    """
    Owner of the root ScopeNode and of the ScopeId → node table for one session.
    """

    def __init__(self) -> None:
        self._ids = ScopeIdAllocator()
        self.root = ScopeNode(name=None, scope_id=self._ids.allocate(), kind=ScopeKind.ROOT)
        self._by_id: Dict[ScopeId, ScopeNode] = {self.root.scope_id: self.root}

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, scope_id: ScopeId) -> ScopeNode:
        """Node for scope_id; UnknownScopeError if this tree never allocated it."""
        node = self._by_id.get(scope_id)
        if node is None:
            raise UnknownScopeError(scope_id)
        return node

    def owns(self, node: ScopeNode) -> bool:
        return self._by_id.get(node.scope_id) is node

    def declare_scope(
        self,
        segment: str,
        enclosing: ScopeNode,
        tag: Optional[Hashable],
        position: Any,
        inline: bool = False,
        location: Optional[SourceLocation] = None,
    ) -> ScopeNode:
        """
        Declare (or reopen) `segment` under `enclosing`.

        Reopening returns the existing node untouched: tag, position, inline
        flag and location of the first declaration always win.
        """
        validate_segment(segment)
        if not self.owns(enclosing):
            raise UnknownScopeError(enclosing.scope_id)

        existing = enclosing.child(segment)
        if existing is not None:
            existing.reopen_count += 1
            if tag is not None and tag != existing.tag:
                logger.debug(
                    f"reopening {existing.qualified_name}: ignoring tag {tag!r}, keeping {existing.tag!r}"
                )
            else:
                logger.debug(f"reopening {existing.qualified_name} (#{existing.reopen_count})")
            return existing

        node = ScopeNode(
            name=segment,
            scope_id=self._ids.allocate(),
            kind=ScopeKind.NAMESPACE,
            parent=enclosing,
            tag=tag,
            position=position,
            inline=inline,
            location=location,
        )
        enclosing._children[segment] = node
        self._by_id[node.scope_id] = node
        logger.debug(f"declared {node.qualified_name} id={node.scope_id} tag={tag!r} at {position!r}")
        return node

    def walk(self) -> Iterator[ScopeNode]:
        """Pre-order traversal in first-declaration order, root first."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))
