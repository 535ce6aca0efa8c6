"""
nsresolve - declaration-order-sensitive name resolution for nested,
reopenable namespaces with `using namespace` directives.
"""

from .analysis.session import ResolutionSession
from .shared.events import ReferenceExpression, ResolutionResult, ResolutionSource

__version__ = "0.1.0"

__all__ = ['ResolutionSession', 'ReferenceExpression', 'ResolutionResult', 'ResolutionSource']
