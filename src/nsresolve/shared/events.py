"""
Resolver boundary types.

Input events (ScopeDeclared, ImportIssued, ReferenceQuery) arrive from the host
in strict source-position order; each ReferenceQuery yields one
ResolutionResult.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Hashable, Optional, Sequence, Tuple

from .errors import MalformedReferenceError
from .scope import validate_segment
from .scope_id import ScopeId
from ..utils.config import SCOPE_SEPARATOR

if TYPE_CHECKING:
    from .scope import ScopeNode


@dataclass(frozen=True)
class ReferenceExpression:
    """
    A name path such as `B`, `A::B` or `::A::B`.

    segments is never empty; constructing one without segments is a caller bug
    and fails immediately.
    """
    segments: Tuple[str, ...]
    is_global: bool = False

    def __post_init__(self) -> None:
        if not self.segments:
            raise MalformedReferenceError("reference expression has no segments")
        object.__setattr__(self, "segments", tuple(validate_segment(s) for s in self.segments))

    @classmethod
    def parse(cls, text: str) -> ReferenceExpression:
        """Parse `A::B` / `::A::B` (whitespace around separators is ignored)."""
        stripped = text.strip()
        is_global = stripped.startswith(SCOPE_SEPARATOR)
        if is_global:
            stripped = stripped[len(SCOPE_SEPARATOR):]
        if not stripped:
            raise MalformedReferenceError(f"reference expression {text!r} has no segments")
        return cls(tuple(s.strip() for s in stripped.split(SCOPE_SEPARATOR)), is_global)

    @classmethod
    def of(cls, segments: Sequence[str], is_global: bool = False) -> ReferenceExpression:
        return cls(tuple(segments), is_global)

    def __str__(self) -> str:
        prefix = SCOPE_SEPARATOR if self.is_global else ""
        return prefix + SCOPE_SEPARATOR.join(self.segments)


class ResolutionSource(Enum):
    """Which search step produced a resolution."""
    GLOBAL = "global"        # rooted lookup from the outermost scope
    ENCLOSING = "enclosing"  # relative lookup through the enclosing scope chain
    IMPORT = "import"        # lookup starting at an imported scope


@dataclass(frozen=True)
class ResolutionResult:
    """Resolved node (with its tag) or unresolved."""
    node: Optional[ScopeNode] = None
    source: Optional[ResolutionSource] = None
    start: Optional[ScopeNode] = None

    @classmethod
    def resolved(cls, node: ScopeNode, source: ResolutionSource, start: ScopeNode) -> ResolutionResult:
        return cls(node=node, source=source, start=start)

    @classmethod
    def unresolved(cls) -> ResolutionResult:
        return cls()

    @property
    def is_resolved(self) -> bool:
        return self.node is not None

    @property
    def tag(self) -> Optional[Hashable]:
        return self.node.tag if self.node is not None else None

    def __bool__(self) -> bool:
        return self.is_resolved

    def __str__(self) -> str:
        if self.node is None:
            return "<unresolved>"
        return f"{self.node.qualified_name} (tag={self.node.tag!r}, via {self.source.value})"


@dataclass(frozen=True, eq=False)
class ImportDirective:
    """
    `using namespace <target_path>;` issued inside `scope` at `position`.

    target is None when the path did not resolve at issuance; such a directive
    is inert and never becomes active.
    """
    target_path: ReferenceExpression
    target: Optional[ScopeNode]
    scope: ScopeNode
    position: Any

    @property
    def is_inert(self) -> bool:
        return self.target is None


# -----------------------------------------------------------------------------
# Input events
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ScopeDeclared:
    segment: str
    enclosing: ScopeId
    tag: Optional[Hashable]
    position: Any
    inline: bool = False


@dataclass(frozen=True)
class ImportIssued:
    target: ReferenceExpression
    enclosing: ScopeId
    position: Any


@dataclass(frozen=True)
class ReferenceQuery:
    expression: ReferenceExpression
    enclosing: ScopeId
    position: Any
