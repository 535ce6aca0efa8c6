"""
Tests for the resolution session: the event-stream boundary of the resolver.
"""

import pytest

from nsresolve.analysis.session import ResolutionSession
from nsresolve.shared.errors import (
    EventOrderError,
    MalformedReferenceError,
    NsResolveImplementationError,
    ResolverContractError,
    UnknownScopeError,
)
from nsresolve.shared.events import ImportIssued, ReferenceExpression, ReferenceQuery, ScopeDeclared
from nsresolve.shared.scope_id import ScopeId


def _ref(text):
    return ReferenceExpression.parse(text)


class TestEventStream:
    def test_run_returns_query_results_in_order(self):
        session = ResolutionSession()
        root = session.root_id
        a_id = ScopeId(session=root.session, index=1)
        results = session.run([
            ReferenceQuery(_ref("A"), root, 1),
            ScopeDeclared("A", root, 1, 2),
            ScopeDeclared("B", a_id, 2, 3),
            ReferenceQuery(_ref("A::B"), root, 4),
            ReferenceQuery(_ref("B"), root, 5),
            ImportIssued(_ref("A"), root, 6),
            ReferenceQuery(_ref("B"), root, 7),
            ReferenceQuery(_ref("::B"), root, 8),
        ])
        assert [r.tag if r else False for r in results] == [False, 2, False, 2, 2]

    def test_apply_returns_event_products(self):
        session = ResolutionSession()
        node = session.apply(ScopeDeclared("A", session.root_id, "alpha", 1))
        assert node.tag == "alpha"
        directive = session.apply(ImportIssued(_ref("A"), session.root_id, 2))
        assert directive.target is node
        result = session.apply(ReferenceQuery(_ref("A"), session.root_id, 3))
        assert result.node is node

    def test_inline_flag_travels_with_event(self):
        session = ResolutionSession()
        node = session.apply(ScopeDeclared("V", session.root_id, None, 1, inline=True))
        assert node.inline

    def test_unknown_event_type(self):
        session = ResolutionSession()
        with pytest.raises(NsResolveImplementationError):
            session.apply(object())


class TestContractViolations:
    def test_position_must_strictly_increase(self):
        session = ResolutionSession()
        session.declare_scope("A", session.root_id, None, 5)
        with pytest.raises(EventOrderError) as exc_info:
            session.query(_ref("A"), session.root_id, 5)
        assert exc_info.value.position == 5
        assert exc_info.value.previous == 5
        with pytest.raises(EventOrderError):
            session.declare_scope("B", session.root_id, None, 3)

    def test_missing_position(self):
        session = ResolutionSession()
        with pytest.raises(EventOrderError):
            session.declare_scope("A", session.root_id, None, None)

    def test_rejected_event_does_not_advance_clock(self):
        session = ResolutionSession()
        session.declare_scope("A", session.root_id, None, 5)
        with pytest.raises(EventOrderError):
            session.declare_scope("B", session.root_id, None, 2)
        assert session.last_position == 5
        session.declare_scope("B", session.root_id, None, 6)

    @pytest.mark.parametrize("segment", ["", "A::B", None])
    def test_malformed_segment_does_not_advance_clock(self, segment):
        session = ResolutionSession()
        with pytest.raises(MalformedReferenceError):
            session.declare_scope(segment, session.root_id, None, 1)
        assert session.last_position is None
        assert session.declare_scope("A", session.root_id, None, 1).position == 1

    def test_unknown_enclosing_scope(self):
        session = ResolutionSession()
        bogus = ScopeId(session=session.root_id.session, index=99)
        with pytest.raises(UnknownScopeError):
            session.query(_ref("A"), bogus, 1)

    def test_contract_errors_share_a_base_class(self):
        assert issubclass(EventOrderError, ResolverContractError)
        assert issubclass(UnknownScopeError, ResolverContractError)
        assert issubclass(ResolverContractError, NsResolveImplementationError)


class TestImportIssuance:
    def test_forward_import_is_inert_forever(self):
        session = ResolutionSession()
        root = session.root_id
        directive = session.issue_import(_ref("Later"), root, 1)
        assert directive.is_inert
        later = session.declare_scope("Later", root, 1, 2)
        session.declare_scope("X", later.scope_id, 2, 3)
        assert not session.query(_ref("X"), root, 4)
        assert session.query(_ref("Later::X"), root, 5).tag == 2

    def test_target_resolved_from_issuing_scope(self):
        session = ResolutionSession()
        root = session.root_id
        a = session.declare_scope("A", root, 1, 1)
        b = session.declare_scope("B", a.scope_id, 2, 2)
        session.declare_scope("X", b.scope_id, 3, 3)
        directive = session.issue_import(_ref("B"), a.scope_id, 4)
        assert directive.target is b
        assert session.query(_ref("X"), a.scope_id, 5).tag == 3

    def test_imports_are_recorded(self):
        session = ResolutionSession()
        session.declare_scope("A", session.root_id, 1, 1)
        session.issue_import(_ref("A"), session.root_id, 2)
        session.issue_import(_ref("Nope"), session.root_id, 3)
        assert [d.is_inert for d in session.imports] == [False, True]


class TestReaders:
    def test_resolve_at_does_not_advance(self):
        session = ResolutionSession()
        session.declare_scope("A", session.root_id, 1, 1)
        assert session.resolve_at(_ref("A"), session.root_id, 100).tag == 1
        assert session.last_position == 1
        session.declare_scope("B", session.root_id, 2, 2)
