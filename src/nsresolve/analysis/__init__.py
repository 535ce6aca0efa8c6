"""
Resolver core: declaration registry, visibility index, resolver and the
event-stream session that owns them.
"""

from .registry import DeclarationRegistry
from .visibility import VisibilityIndex
from .resolver import Resolver
from .session import ResolutionSession

__all__ = ['DeclarationRegistry', 'VisibilityIndex', 'Resolver', 'ResolutionSession']
