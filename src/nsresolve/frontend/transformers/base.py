"""
Fixture AST Transformer
Converts the Lark parse tree of the fixture dialect to AST nodes
"""

from lark import Transformer, v_args
from lark.lexer import Token
from typing import Any, List, Optional, Tuple, Union
from typing_extensions import TypeAlias
import logging

from ...shared.errors import NsResolveImplementationError
from ...shared.nodes import (
    ASTNode,
    Attribute,
    AttributeArgument,
    AttributeDeclaration,
    EmptyDeclaration,
    NamespaceDefinition,
    NamespaceSegment,
    QualifiedName,
    TranslationUnit,
    UsingDirective,
)
from ...shared.source_location import SourceLocation

# Lark Meta object contains location information
LarkMeta: TypeAlias = Any
AttributeToken: TypeAlias = Tuple[Optional[str], str]
DeclarationList: TypeAlias = List[ASTNode]
NamespaceChild: TypeAlias = Union[Token, List[Attribute], List[NamespaceSegment], DeclarationList]

logger: logging.Logger = logging.getLogger(__name__)


@v_args(inline=True, meta=True)
class FixtureTransformer(Transformer):
    """
    Fixture-dialect AST transformer.

    Rules that only group things (namespace_path, namespace_body, attributes,
    attribute_arguments) return plain lists; declarations return AST nodes.
    """

    def __init__(self) -> None:
        super().__init__()
        self.current_file: str = ""  # Must be set by parser before use

    def __default__(self, data, children, meta):
        # Every grammar rule has a handler; reaching this is a grammar/transformer mismatch
        raise NsResolveImplementationError(f"Missing transformer method for grammar rule '{data}'")

    def _extract_location(self, meta: LarkMeta) -> SourceLocation:
        """Extract location from Lark meta object"""
        if not self.current_file:
            raise NsResolveImplementationError(
                "Parser bug: current_file not set. Parser must set current_file before transforming."
            )
        if meta is None or getattr(meta, 'empty', True):
            return SourceLocation(file=self.current_file, line=1, column=1)
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            start=meta.start_pos,
            end=meta.end_pos,
            end_line=meta.end_line,
            end_column=meta.end_column,
        )

    def _token_location(self, token: Token) -> SourceLocation:
        return SourceLocation(
            file=self.current_file,
            line=token.line,
            column=token.column,
            start=token.start_pos,
            end=token.end_pos,
            end_line=token.end_line,
            end_column=token.end_column,
        )

    # =========================================================================
    # DECLARATIONS
    # =========================================================================

    def translation_unit(self, meta: LarkMeta, *declarations: ASTNode) -> TranslationUnit:
        return TranslationUnit(declarations=list(declarations), location=self._extract_location(meta))

    def namespace_definition(self, meta: LarkMeta, *children: NamespaceChild) -> NamespaceDefinition:
        """
        INLINE? attributes? namespace_path namespace_body

        A leading `inline` applies to the first name, the attributes to the
        last one.
        """
        rest = list(children)
        leading_inline = False
        if isinstance(rest[0], Token) and rest[0].type == 'INLINE':
            leading_inline = True
            rest.pop(0)
        body: DeclarationList = rest.pop()
        segments: List[NamespaceSegment] = rest.pop()
        attributes: List[Attribute] = rest.pop() if rest else []

        if leading_inline:
            segments[0].inline = True
        return NamespaceDefinition(
            segments=segments,
            attributes=attributes,
            body=body,
            location=self._extract_location(meta),
        )

    def namespace_path(self, meta: LarkMeta, first: Token, *rest: Union[Token, NamespaceSegment]) -> List[NamespaceSegment]:
        segments = [NamespaceSegment(str(first), False, self._token_location(first))]
        segments.extend(s for s in rest if isinstance(s, NamespaceSegment))
        return segments

    def namespace_segment(self, meta: LarkMeta, *tokens: Token) -> NamespaceSegment:
        name = tokens[-1]
        inline = len(tokens) > 1 and tokens[0].type == 'INLINE'
        return NamespaceSegment(str(name), inline, self._extract_location(meta))

    def namespace_body(self, meta: LarkMeta, *declarations: ASTNode) -> DeclarationList:
        return list(declarations)

    def using_directive(self, meta: LarkMeta, *children: Union[List[Attribute], QualifiedName]) -> UsingDirective:
        target = children[-1]
        attributes = children[0] if len(children) > 1 else []
        return UsingDirective(target=target, attributes=attributes, location=self._extract_location(meta))

    def attribute_declaration(self, meta: LarkMeta, attributes: List[Attribute]) -> AttributeDeclaration:
        return AttributeDeclaration(attributes=attributes, location=self._extract_location(meta))

    def empty_declaration(self, meta: LarkMeta) -> EmptyDeclaration:
        return EmptyDeclaration(location=self._extract_location(meta))

    # =========================================================================
    # ATTRIBUTES
    # =========================================================================

    def attributes(self, meta: LarkMeta, *specifiers: List[Attribute]) -> List[Attribute]:
        flattened: List[Attribute] = []
        for spec in specifiers:
            flattened.extend(spec)
        return flattened

    def attribute_specifier(self, meta: LarkMeta, *attributes: Attribute) -> List[Attribute]:
        return list(attributes)

    def attribute(
        self,
        meta: LarkMeta,
        token: AttributeToken,
        arguments: Optional[List[AttributeArgument]] = None,
    ) -> Attribute:
        namespace, name = token
        return Attribute(
            namespace=namespace,
            name=name,
            arguments=arguments if arguments is not None else [],
            location=self._extract_location(meta),
        )

    def attribute_token(self, meta: LarkMeta, *tokens: Token) -> AttributeToken:
        names = [str(t) for t in tokens if t.type == 'NAME']
        if len(names) == 2:
            return names[0], names[1]
        return None, names[0]

    def attribute_arguments(self, meta: LarkMeta, *arguments: Union[AttributeArgument, QualifiedName]) -> List[AttributeArgument]:
        wrapped: List[AttributeArgument] = []
        for arg in arguments:
            if isinstance(arg, QualifiedName):
                arg = AttributeArgument(arg, arg.location)
            wrapped.append(arg)
        return wrapped

    def int_argument(self, meta: LarkMeta, token: Token) -> AttributeArgument:
        return AttributeArgument(int(token), self._token_location(token))

    def true_argument(self, meta: LarkMeta, token: Token) -> AttributeArgument:
        return AttributeArgument(True, self._token_location(token))

    def false_argument(self, meta: LarkMeta, token: Token) -> AttributeArgument:
        return AttributeArgument(False, self._token_location(token))

    # =========================================================================
    # NAMES
    # =========================================================================

    def qualified_name(self, meta: LarkMeta, *tokens: Token) -> QualifiedName:
        is_global = tokens[0].type == 'SEP'
        segments = [str(t) for t in tokens if t.type == 'NAME']
        return QualifiedName(segments=segments, is_global=is_global, location=self._extract_location(meta))
