"""
Symbol Tag Check Pass

Compares every recorded QueryOutcome against what its
`checkSymbolMatchTag(expected, name)` attribute asked for:

    false   the name must not resolve
    true    the name must resolve (to anything)
    N       the name must resolve to a namespace tagged N
"""

import logging
from dataclasses import dataclass

from ..passes.base import BasePass, SemaCtxt
from ..passes.name_resolution import NameResolutionAnalysis, NameResolutionPass, QueryOutcome
from ..shared.errors import ErrorCode
from ..shared.nodes import TranslationUnit

logger = logging.getLogger("nsresolve.passes.tag_check")


@dataclass
class TagCheckSummary:
    checked: int = 0
    failed: int = 0

    @property
    def passed(self) -> int:
        return self.checked - self.failed


class SymbolTagCheckPass(BasePass):
    requires = [NameResolutionPass]

    def run(self, ast: TranslationUnit, tcx: SemaCtxt) -> TranslationUnit:
        analysis: NameResolutionAnalysis = tcx.get_analysis(NameResolutionPass)
        summary = TagCheckSummary()
        for outcome in analysis.outcomes:
            summary.checked += 1
            if not self._check(outcome, tcx):
                summary.failed += 1
        logger.debug(f"tag checks: {summary.passed}/{summary.checked} passed")
        tcx.set_analysis(SymbolTagCheckPass, summary)
        return ast

    def _check(self, outcome: QueryOutcome, tcx: SemaCtxt) -> bool:
        reporter = tcx.reporter
        name = outcome.name
        result = outcome.result
        expected = outcome.expected

        if not result.is_resolved:
            if expected is False:
                return True
            reporter.report_error(
                f"while resolving `{name}` found nothing, but something was expected",
                outcome.location,
                code=ErrorCode.CHECK_EXPECTED_SOMETHING,
                label="expected a declaration",
            )
            return False

        found = result.node.qualified_name
        if expected is False:
            reporter.report_error(
                f"while resolving `{name}` found `{found}`, but nothing was expected",
                outcome.location,
                code=ErrorCode.CHECK_EXPECTED_NOTHING,
                label=f"resolves to `{found}` ({result.source.value} lookup)",
            )
            return False
        if expected is True:
            return True

        if result.tag is None:
            reporter.report_error(
                f"`{name}` resolves to `{found}`, which has no tag",
                outcome.location,
                code=ErrorCode.CHECK_MISSING_TAG,
                label=f"expected tag {expected}",
                help="add [[rustycpp::tagDecl(N)]] to the first definition of the namespace",
            )
            return False
        if result.tag != expected:
            reporter.report_error(
                f"`{name}` resolves to `{found}` with tag {result.tag}, expected tag {expected}",
                outcome.location,
                code=ErrorCode.CHECK_TAG_MISMATCH,
                label=f"found tag {result.tag}",
            )
            return False
        return True
