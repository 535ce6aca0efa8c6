"""
Test utilities for the nsresolve test suite.

EventScript drives a ResolutionSession the way the front end does (one
increasing position per event) so unit tests can build scope trees in a few
lines; the check helpers wrap CheckDriver for fixture-dialect sources.
"""

import re
import sys
from pathlib import Path
from typing import Any, Hashable, List, Optional, Union

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from nsresolve.analysis.session import ResolutionSession
from nsresolve.compiler.driver import CheckDriver, CheckResult
from nsresolve.shared.events import ImportDirective, ReferenceExpression, ResolutionResult
from nsresolve.shared.scope import ScopeNode

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")

ScopeRef = Union[ScopeNode, None]


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def ref(text: str) -> ReferenceExpression:
    """`ref("::A::B")` - shorthand for ReferenceExpression.parse."""
    return ReferenceExpression.parse(text)


class EventScript:
    """
    Feeds events into a session with an auto-incrementing position.

        script = EventScript()
        a = script.declare("A", tag=1)
        b = script.declare("B", tag=2, inside=a)
        script.use("A")
        assert script.query("B").tag == 2
    """

    def __init__(self, session: Optional[ResolutionSession] = None, start: int = 1):
        self.session = session if session is not None else ResolutionSession()
        self.position = start - 1

    def _next(self) -> int:
        self.position += 1
        return self.position

    def _scope_id(self, inside: ScopeRef):
        return (inside or self.session.root).scope_id

    def declare(self, name: str, tag: Optional[Hashable] = None, inside: ScopeRef = None, inline: bool = False) -> ScopeNode:
        return self.session.declare_scope(name, self._scope_id(inside), tag, self._next(), inline=inline)

    def use(self, target: str, inside: ScopeRef = None) -> ImportDirective:
        return self.session.issue_import(ref(target), self._scope_id(inside), self._next())

    def query(self, text: str, inside: ScopeRef = None) -> ResolutionResult:
        return self.session.query(ref(text), self._scope_id(inside), self._next())

    def tag_of(self, text: str, inside: ScopeRef = None) -> Any:
        """Tag the query resolves to, or False when it does not resolve."""
        result = self.query(text, inside)
        return result.tag if result.is_resolved else False


def check_source(source: str, source_file: str = "<test>.cpp", driver: Optional[CheckDriver] = None) -> CheckResult:
    """Check a fixture-dialect source (standalone helper, prefer the conftest fixture)."""
    return (driver or CheckDriver()).check(source, source_file)


def error_codes(result: CheckResult) -> List[Optional[str]]:
    return result.tcx.reporter.codes()


def format_errors(result: CheckResult) -> str:
    return strip_ansi(result.tcx.reporter.format_all_errors(color=False))


def assert_check_passes(result: CheckResult) -> None:
    assert result.success, f"expected a clean check, got:\n{format_errors(result)}"


def assert_error_codes(result: CheckResult, expected: List[str]) -> None:
    actual = error_codes(result)
    assert actual == expected, f"expected {expected}, got {actual}:\n{format_errors(result)}"


def check_attr(expected: Union[int, bool], name: str) -> str:
    """`[[rustycpp::checkSymbolMatchTag(expected, name)]];`"""
    if isinstance(expected, bool):
        expected_text = "true" if expected else "false"
    else:
        expected_text = str(expected)
    return f"[[rustycpp::checkSymbolMatchTag({expected_text}, {name})]];"
