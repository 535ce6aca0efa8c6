"""
Name Resolution Pass

Rust Pattern: rustc_resolve::Resolver

Walks the translation unit in source order and turns it into the resolver's
event stream: every namespace name, using-directive and check attribute gets
the next position of a single increasing counter, so "declared before" is
plain integer comparison.
"""

import logging
from dataclasses import dataclass, field
from itertools import count
from typing import Iterator, List, Optional, Union

from ..passes.base import BasePass, SemaCtxt
from ..shared.ast_visitor import DeclarationWalker
from ..shared.errors import ErrorCode
from ..shared.events import ImportDirective, ResolutionResult
from ..shared.nodes import (
    Attribute,
    AttributeDeclaration,
    NamespaceDefinition,
    QualifiedName,
    TranslationUnit,
    UsingDirective,
)
from ..shared.scope import ScopeNode
from ..shared.source_location import SourceLocation
from ..utils.config import CHECK_SYMBOL_ATTRIBUTE, CHECKER_ATTRIBUTE_NAMESPACE, TAG_DECL_ATTRIBUTE

logger = logging.getLogger("nsresolve.passes.name_resolution")


@dataclass
class QueryOutcome:
    """
    One `checkSymbolMatchTag(expected, name)` evaluated at its position.

    expected is an int tag, True (must resolve) or False (must not resolve).
    """
    name: QualifiedName
    expected: Union[int, bool]
    result: ResolutionResult
    scope: ScopeNode
    position: int
    location: SourceLocation


@dataclass
class NameResolutionAnalysis:
    """Results stored in SemaCtxt for later passes."""
    outcomes: List[QueryOutcome] = field(default_factory=list)
    imports: List[ImportDirective] = field(default_factory=list)
    namespaces_declared: int = 0


class _NameResolutionVisitor(DeclarationWalker):
    """Source-order walk that streams declarations, imports and queries into the session."""

    def __init__(self, tcx: SemaCtxt):
        self.tcx = tcx
        self.session = tcx.session
        self.reporter = tcx.reporter
        self.analysis = NameResolutionAnalysis()
        self._positions: Iterator[int] = count(1)
        self._scope_stack: List[ScopeNode] = [self.session.root]

    @property
    def current_scope(self) -> ScopeNode:
        return self._scope_stack[-1]

    def _next_position(self) -> int:
        return next(self._positions)

    # -------------------------------------------------------------------------
    # Namespaces
    # -------------------------------------------------------------------------

    def enter_namespace(self, node: NamespaceDefinition) -> int:
        tag = self._tag_of(node)
        depth = 0
        for i, segment in enumerate(node.segments):
            is_last = i == len(node.segments) - 1
            existing = self._existing_member(segment.name)
            enclosing = existing.parent if existing is not None else self.current_scope
            if existing is not None and segment.inline and not existing.inline:
                self.reporter.report_error(
                    f"namespace `{existing.qualified_name}` reopened with `inline`, "
                    f"but its original definition is not inline",
                    segment.location,
                    code=ErrorCode.INLINE_MISMATCH,
                    label="`inline` added here",
                    note=f"first defined at {existing.location}" if existing.location else None,
                )
            scope = self.session.declare_scope(
                segment.name,
                enclosing.scope_id,
                tag if is_last else None,
                self._next_position(),
                inline=segment.inline,
                location=segment.location,
            )
            if existing is None:
                self.analysis.namespaces_declared += 1
            self._scope_stack.append(scope)
            depth += 1
        return depth

    def _existing_member(self, name: str) -> Optional[ScopeNode]:
        """A namespace of that name already declared here, directly or in an inline member."""
        route = self.session.registry.lookup_child(self.current_scope, name)
        return route[-1] if route is not None else None

    def exit_namespace(self, node: NamespaceDefinition, token: Optional[object]) -> None:
        for _ in range(token or 0):
            self._scope_stack.pop()

    def _tag_of(self, node: NamespaceDefinition) -> Optional[int]:
        tag: Optional[int] = None
        for attr in node.attributes:
            if attr.is_checker(TAG_DECL_ATTRIBUTE):
                args = attr.arguments
                if len(args) != 1 or isinstance(args[0].value, bool) or not isinstance(args[0].value, int):
                    self._bad_attribute(attr, f"`{attr.full_name}` expects a single integer literal")
                    continue
                if tag is None:
                    tag = args[0].value
                else:
                    logger.debug(f"extra tagDecl({args[0].value}) on `{node.name}` ignored, keeping {tag}")
            elif attr.is_checker(CHECK_SYMBOL_ATTRIBUTE):
                self._bad_attribute(attr, f"`{attr.full_name}` is only allowed in an attribute declaration")
            else:
                self._ignore_attribute(attr)
        return tag

    # -------------------------------------------------------------------------
    # Using-directives
    # -------------------------------------------------------------------------

    def visit_using_directive(self, node: UsingDirective) -> None:
        for attr in node.attributes:
            self._check_not_checker(attr, "a using-directive")
        directive = self.session.issue_import(
            node.target.to_reference(),
            self.current_scope.scope_id,
            self._next_position(),
        )
        self.analysis.imports.append(directive)
        if directive.is_inert:
            self.reporter.report_error(
                f"`{node.target}` does not name a namespace declared before this directive",
                node.target.location,
                code=ErrorCode.UNRESOLVED_USING_DIRECTIVE,
                label="not found",
                note="the directive has no effect",
            )

    # -------------------------------------------------------------------------
    # Attribute declarations (checks)
    # -------------------------------------------------------------------------

    def visit_attribute_declaration(self, node: AttributeDeclaration) -> None:
        for attr in node.attributes:
            if attr.is_checker(CHECK_SYMBOL_ATTRIBUTE):
                self._run_check(attr)
            elif attr.is_checker(TAG_DECL_ATTRIBUTE):
                self._bad_attribute(attr, f"`{attr.full_name}` is only allowed on a namespace definition")
            else:
                self._ignore_attribute(attr)

    def _run_check(self, attr: Attribute) -> None:
        args = attr.arguments
        if (
            len(args) != 2
            or not isinstance(args[0].value, (bool, int))
            or not isinstance(args[1].value, QualifiedName)
        ):
            self._bad_attribute(
                attr,
                f"`{attr.full_name}` expects (integer | true | false, name)",
            )
            return
        expected, name = args[0].value, args[1].value
        position = self._next_position()
        result = self.session.query(name.to_reference(), self.current_scope.scope_id, position)
        logger.debug(f"check `{name}` in {self.current_scope.qualified_name} at {position}: {result}")
        self.analysis.outcomes.append(QueryOutcome(
            name=name,
            expected=expected,
            result=result,
            scope=self.current_scope,
            position=position,
            location=args[0].location,
        ))

    # -------------------------------------------------------------------------
    # Attribute helpers
    # -------------------------------------------------------------------------

    def _check_not_checker(self, attr: Attribute, where: str) -> None:
        if attr.namespace == CHECKER_ATTRIBUTE_NAMESPACE and attr.name in (TAG_DECL_ATTRIBUTE, CHECK_SYMBOL_ATTRIBUTE):
            self._bad_attribute(attr, f"`{attr.full_name}` is not allowed on {where}")
        else:
            self._ignore_attribute(attr)

    def _bad_attribute(self, attr: Attribute, message: str) -> None:
        self.reporter.report_error(message, attr.location, code=ErrorCode.BAD_ATTRIBUTE)

    def _ignore_attribute(self, attr: Attribute) -> None:
        logger.debug(f"ignoring attribute `{attr.full_name}` at {attr.location}")


class NameResolutionPass(BasePass):
    """
    Name resolution pass (Rust naming: rustc_resolve).

    The ONLY place that feeds events into the ResolutionSession. Results
    (one QueryOutcome per check) go to tcx for SymbolTagCheckPass.
    """
    requires = []  # No dependencies (first pass after parsing)

    def run(self, ast: TranslationUnit, tcx: SemaCtxt) -> TranslationUnit:
        visitor = _NameResolutionVisitor(tcx)
        ast.accept(visitor)
        logger.debug(
            f"name resolution: {visitor.analysis.namespaces_declared} namespace(s), "
            f"{len(visitor.analysis.imports)} using-directive(s), {len(visitor.analysis.outcomes)} check(s)"
        )
        tcx.set_analysis(NameResolutionPass, visitor.analysis)
        return ast
