"""
Base Pass System

Rust Pattern: rustc_mir::transform::MirPass
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Set, Type
import logging

from ..analysis.session import ResolutionSession
from ..shared.errors import ErrorReporter, NsResolveImplementationError
from ..shared.nodes import TranslationUnit
from ..shared.scope import ScopeTree

logger = logging.getLogger("nsresolve.passes")


class SemaCtxt:
    """
    Semantic context - single source of truth for one check run
    (Rust naming: rustc_middle::ty::TyCtxt).

    - The ResolutionSession (scope tree, imports, resolver) lives here, not in passes
    - Analysis results are stored per pass class
    - One SemaCtxt per checked file; never reused
    """

    def __init__(self):
        self.session: ResolutionSession = ResolutionSession()
        self.reporter: ErrorReporter = ErrorReporter({})
        self.source_files: Dict[str, str] = {}
        self._analysis_results: Dict[Type['BasePass'], Any] = {}

    @property
    def scope_tree(self) -> ScopeTree:
        return self.session.tree

    def add_source(self, source_file: str, source: str) -> None:
        self.source_files[source_file] = source
        self.reporter.source_files[source_file] = source

    def get_analysis(self, pass_class: Type['BasePass']) -> Any:
        """Get analysis results from a pass"""
        if pass_class not in self._analysis_results:
            raise NsResolveImplementationError(f"Analysis {pass_class.__name__} not available")
        return self._analysis_results[pass_class]

    def set_analysis(self, pass_class: Type['BasePass'], results: Any) -> None:
        """Store analysis results"""
        self._analysis_results[pass_class] = results


class BasePass(ABC):
    """
    Base class for all passes.

    Rust Pattern: rustc_mir::transform::MirPass

    - Explicit dependencies via `requires`
    - Pass results stored in SemaCtxt (not in pass)
    - Source problems are reported through tcx.reporter, never raised
    """
    requires: List[Type['BasePass']] = []  # Dependencies (empty by default)

    @abstractmethod
    def run(self, ast: TranslationUnit, tcx: SemaCtxt) -> TranslationUnit:
        raise NotImplementedError


class PassManager:
    """
    Pass manager with dependency resolution.

    Rust Pattern: rustc driver with pass scheduling
    - Automatic dependency resolution (topological sort)
    - Passes run in dependency order
    - Single SemaCtxt shared across all passes
    """

    def __init__(self):
        self.passes: List[Type[BasePass]] = []
        self._dependency_graph: Dict[Type[BasePass], Set[Type[BasePass]]] = {}

    def register_pass(self, pass_class: Type[BasePass]) -> None:
        """Register a pass"""
        self.passes.append(pass_class)
        self._dependency_graph[pass_class] = set(pass_class.requires)

    def run_all(self, ast: TranslationUnit, tcx: SemaCtxt) -> TranslationUnit:
        """Run all passes in dependency order."""
        for pass_class in self._topological_sort():
            logger.debug(f"running {pass_class.__name__}")
            ast = pass_class().run(ast, tcx)
        return ast

    def _topological_sort(self) -> List[Type[BasePass]]:
        """Topological sort of passes by dependencies"""
        for pass_class, deps in self._dependency_graph.items():
            missing = [d.__name__ for d in deps if d not in self._dependency_graph]
            if missing:
                raise NsResolveImplementationError(
                    f"{pass_class.__name__} requires unregistered pass(es): {', '.join(missing)}"
                )

        in_degree = {p: len(self._dependency_graph[p]) for p in self.passes}
        queue = [p for p, degree in in_degree.items() if degree == 0]
        result = []

        while queue:
            pass_class = queue.pop(0)
            result.append(pass_class)

            for other_pass in self.passes:
                if pass_class in self._dependency_graph[other_pass]:
                    in_degree[other_pass] -= 1
                    if in_degree[other_pass] == 0:
                        queue.append(other_pass)

        if len(result) != len(self.passes):
            raise NsResolveImplementationError("Circular dependency detected in passes")

        return result
