"""
Scope Tree Serialization
========================

Dumps a resolution session (scope tree plus import directives) to a
canonical YAML document for tests and debugging:

    scope_tree:
      name: '::'
      id: '0:0'
      kind: root
      children:
      - name: A
        id: '0:1'
        kind: namespace
        tag: 1
        position: 1
        inline: false
        reopened: 0
        children: []
    imports:
    - target: ::A
      in: '::'
      position: 5
      inert: false

Structured data (nested dicts/lists, insertion-ordered) is built first, then
dumped with yaml.safe_dump.
"""

from typing import TYPE_CHECKING, Any, Dict, List

import yaml

from .scope import ScopeNode, ScopeTree

if TYPE_CHECKING:
    from ..analysis.session import ResolutionSession


def _plain(value: Any) -> Any:
    """Tags and positions are opaque; keep YAML scalars, repr() anything else."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return repr(value)


class ScopeTreeSerializer:
    """Scope tree to structured data serializer."""

    def __init__(self, include_positions: bool = True):
        self.include_positions = include_positions

    def serialize_node(self, node: ScopeNode) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": node.qualified_name if node.is_root else node.name,
            "id": str(node.scope_id),
            "kind": node.kind.value,
        }
        if not node.is_root:
            out["tag"] = _plain(node.tag)
            if self.include_positions:
                out["position"] = _plain(node.position)
            out["inline"] = node.inline
            out["reopened"] = node.reopen_count
        out["children"] = [self.serialize_node(child) for child in node.children]
        return out

    def serialize_imports(self, session: 'ResolutionSession') -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for directive in session.imports:
            entry: Dict[str, Any] = {
                "target": (
                    directive.target.qualified_name
                    if directive.target is not None
                    else str(directive.target_path)
                ),
                "in": directive.scope.qualified_name,
            }
            if self.include_positions:
                entry["position"] = _plain(directive.position)
            entry["inert"] = directive.is_inert
            out.append(entry)
        return out

    def serialize_session(self, session: 'ResolutionSession') -> Dict[str, Any]:
        return {
            "scope_tree": self.serialize_node(session.tree.root),
            "imports": self.serialize_imports(session),
        }


def _dump(data: Any) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


def serialize_scope_tree(tree: ScopeTree, include_positions: bool = True) -> str:
    """Serialize a scope tree (root node and everything below it) to YAML."""
    return _dump(ScopeTreeSerializer(include_positions=include_positions).serialize_node(tree.root))


def serialize_session(session: 'ResolutionSession', include_positions: bool = True) -> str:
    """Serialize a whole session: the scope tree followed by the import list."""
    return _dump(ScopeTreeSerializer(include_positions=include_positions).serialize_session(session))
