"""
Parser

Rust Pattern: rustc_parse
"""

from typing import Optional
from pathlib import Path
from lark import Lark
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, VisitError
import logging

from ..shared.errors import NsResolveError
from ..shared.nodes import TranslationUnit
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE
from .transformers.base import FixtureTransformer

logger = logging.getLogger("nsresolve.frontend.parser")


class ParseError(NsResolveError):
    """Parse error with source location"""

    def __init__(self, message: str, source_file: str, location: Optional[SourceLocation] = None):
        super().__init__(message, location)
        self.source_file = source_file


class Parser:
    """
    Parser (Rust naming: rustc_parse).

    Takes fixture source text, returns a TranslationUnit. Uses a cached Lark
    LALR parser with position propagation so every node carries a location.
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "grammar.lark"
        # Use Lark native caching for performance
        self.parser = Lark.open(
            grammar_path,
            start='translation_unit',
            parser='lalr',               # Required for caching
            cache=cache_file,
            propagate_positions=True,
            maybe_placeholders=False,
        )
        self.transformer = FixtureTransformer()

    def parse(self, source: str, source_file: str = "<input>.cpp") -> TranslationUnit:
        """
        Parse source code to AST.

        Raises ParseError (with a location when Lark reports one).
        """
        self.transformer.current_file = source_file
        try:
            tree = self.parser.parse(source)
        except UnexpectedInput as e:
            raise ParseError(_describe(e), source_file, _location_of(e, source, source_file)) from e

        try:
            ast = self.transformer.transform(tree)
        except VisitError as e:
            # Transformer bugs surface as the original exception
            raise e.orig_exc from e
        logger.debug(f"parsed {source_file}: {len(ast.declarations)} top-level declaration(s)")
        return ast


def _describe(error: UnexpectedInput) -> str:
    if isinstance(error, UnexpectedCharacters):
        return f"unexpected character {error.char!r}"
    if isinstance(error, UnexpectedEOF):
        return "unexpected end of input"
    token = getattr(error, 'token', None)
    if token is not None:
        if token.type == '$END':
            return "unexpected end of input"
        expected = sorted(getattr(error, 'expected', ()) or ())
        hint = f", expected one of {', '.join(expected)}" if expected else ""
        return f"unexpected token {str(token)!r}{hint}"
    return "syntax error"


def _location_of(error: UnexpectedInput, source: str, source_file: str) -> SourceLocation:
    line = getattr(error, 'line', None)
    column = getattr(error, 'column', None)
    if not isinstance(line, int) or line < 1:
        # End of input: point just past the last character
        lines = source.split("\n")
        line = len(lines)
        column = len(lines[-1]) + 1
    return SourceLocation(file=source_file, line=line, column=column if isinstance(column, int) and column > 0 else 1)
