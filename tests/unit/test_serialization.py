"""
Tests for the YAML scope dump.
"""

import yaml

from nsresolve.shared.serialization import ScopeTreeSerializer, serialize_scope_tree, serialize_session
from tests.test_utils import EventScript


def _build():
    script = EventScript()
    a = script.declare("A", tag=1)
    script.declare("B", tag=2, inside=a)
    script.declare("V", inline=True)
    script.declare("A", tag=9)
    script.use("A")
    script.use("Missing")
    return script


class TestScopeTreeDump:
    def test_structure(self):
        script = _build()
        data = yaml.safe_load(serialize_scope_tree(script.session.tree))
        assert data["name"] == "::"
        assert data["kind"] == "root"
        assert data["id"] == str(script.session.root_id)
        assert "tag" not in data
        a, v = data["children"]
        assert a == {
            "name": "A",
            "id": str(script.session.root.child("A").scope_id),
            "kind": "namespace",
            "tag": 1,
            "position": 1,
            "inline": False,
            "reopened": 1,
            "children": [{
                "name": "B",
                "id": str(script.session.root.child("A").child("B").scope_id),
                "kind": "namespace",
                "tag": 2,
                "position": 2,
                "inline": False,
                "reopened": 0,
                "children": [],
            }],
        }
        assert v["inline"] is True
        assert v["tag"] is None

    def test_key_order_is_stable(self):
        text = serialize_scope_tree(_build().session.tree)
        assert text.index("name:") < text.index("kind:") < text.index("children:")

    def test_without_positions(self):
        script = _build()
        data = yaml.safe_load(serialize_scope_tree(script.session.tree, include_positions=False))
        assert "position" not in data["children"][0]

    def test_opaque_tags_are_repr(self):
        script = EventScript()
        script.declare("A", tag=("x", 1))
        data = ScopeTreeSerializer().serialize_node(script.session.root)
        assert data["children"][0]["tag"] == repr(("x", 1))


class TestSessionDump:
    def test_imports_listed_in_issue_order(self):
        data = yaml.safe_load(serialize_session(_build().session))
        assert set(data) == {"scope_tree", "imports"}
        assert data["imports"] == [
            {"target": "::A", "in": "::", "position": 5, "inert": False},
            {"target": "Missing", "in": "::", "position": 6, "inert": True},
        ]

    def test_same_session_dumps_identically(self):
        script = _build()
        assert serialize_session(script.session) == serialize_session(script.session)
