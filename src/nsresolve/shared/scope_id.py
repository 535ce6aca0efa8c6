"""
ScopeId System

Rust Pattern: rustc_hir::def_id::DefId

Design:
- ScopeId = (session, index). Every namespace node gets one when it is first
  declared; reopening never allocates a new id.
- Index 0 of every session is the root (global) scope.
- Events from the host name their enclosing scope by ScopeId, never by a
  flattened "A::B" string.
"""

from dataclasses import dataclass
from itertools import count
import logging

logger = logging.getLogger(__name__)

ROOT_INDEX = 0

_session_counter = count()


@dataclass(frozen=True)
class ScopeId:
    """
    Scope identifier (Rust pattern: rustc_hir::def_id::DefId).

    - session: resolution session number (distinct trees never share ids)
    - index: sequential index within the session, root = 0
    - Immutable (frozen dataclass), hashable, deterministic allocation order
    """
    session: int
    index: int

    def __str__(self) -> str:
        return f"{self.session}:{self.index}"

    @property
    def is_root(self) -> bool:
        return self.index == ROOT_INDEX


class ScopeIdAllocator:
    """
    Sequential ScopeId allocator for one session.

    Guarantee: every allocated index is strictly greater than the previous one,
    so allocation order equals first-declaration order.
    """

    def __init__(self) -> None:
        self.session = next(_session_counter)
        self._next_index = ROOT_INDEX

    def allocate(self) -> ScopeId:
        idx = self._next_index
        self._next_index = idx + 1
        assert self._next_index > idx
        return ScopeId(session=self.session, index=idx)
