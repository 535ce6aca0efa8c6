"""
Front end: fixture-dialect parser (Lark) and AST transformer.
"""

from .parser import Parser, ParseError

__all__ = ['Parser', 'ParseError']
