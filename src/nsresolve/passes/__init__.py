"""
Pass system: NameResolutionPass feeds the resolver, SymbolTagCheckPass checks
the fixture's expectations.
"""

from .base import SemaCtxt, BasePass, PassManager
from .name_resolution import NameResolutionPass, QueryOutcome
from .tag_check import SymbolTagCheckPass

__all__ = ['SemaCtxt', 'BasePass', 'PassManager', 'NameResolutionPass', 'QueryOutcome', 'SymbolTagCheckPass']
