"""
Fixture AST Transformers
========================

Lark parse tree → AST nodes for the fixture dialect.
"""

from .base import FixtureTransformer

__all__ = [
    'FixtureTransformer',
]
