"""
Check Driver

Rust Pattern: rustc_driver::driver

Parses one fixture file, runs the passes over it and returns a CheckResult.
Problems in the fixture end up in tcx.reporter; resolver contract violations
(bugs in the passes) propagate as exceptions.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..frontend.parser import Parser, ParseError
from ..passes.base import PassManager, SemaCtxt
from ..passes.name_resolution import NameResolutionPass
from ..passes.tag_check import SymbolTagCheckPass
from ..shared.errors import ErrorCode
from ..shared.serialization import serialize_session
from ..shared.source_location import SourceLocation
from ..utils.config import ENV_DUMP_SCOPES, SCOPE_DUMP_DIR
from ..utils.io_utils import read_source_file, write_text_file

logger = logging.getLogger("nsresolve.compiler.driver")


class CheckResult:
    """Check result"""
    def __init__(self, tcx: Optional[SemaCtxt] = None, success: bool = False):
        self.tcx = tcx
        self.success = success


class CheckDriver:
    """
    Check driver (Rust naming: rustc_driver::driver).

    The parser (and its cached grammar) is shared across checks; every check
    gets a fresh SemaCtxt and therefore a fresh ResolutionSession.
    """

    def __init__(self, parser: Optional[Parser] = None):
        self.parser = parser if parser is not None else Parser()
        self.pass_manager = PassManager()
        self._register_passes()

    def _register_passes(self) -> None:
        # 1. Name resolution (streams events into the session, records check outcomes)
        self.pass_manager.register_pass(NameResolutionPass)
        # 2. Tag checks (compares outcomes with their expectations)
        self.pass_manager.register_pass(SymbolTagCheckPass)

    def check(self, source: str, source_file: str = "<input>.cpp") -> CheckResult:
        """
        Check one fixture.

        Phases:
        1. Parsing (source → AST)
        2. NameResolutionPass, SymbolTagCheckPass
        3. Optional scope dump (NSRESOLVE_DUMP_SCOPES)
        """
        tcx = SemaCtxt()
        tcx.add_source(source_file, source)

        try:
            ast = self.parser.parse(source, source_file)
        except ParseError as e:
            span = e.location or SourceLocation(file=source_file, line=1, column=1)
            tcx.reporter.report_error(e.message, span, code=ErrorCode.PARSE_ERROR)
            return CheckResult(tcx=tcx, success=False)

        self.pass_manager.run_all(ast, tcx)

        if os.environ.get(ENV_DUMP_SCOPES):
            self._dump_scopes(tcx, source_file)

        return CheckResult(tcx=tcx, success=not tcx.reporter.has_errors())

    def check_file(self, path: Path) -> CheckResult:
        return self.check(read_source_file(path), str(path))

    def _dump_scopes(self, tcx: SemaCtxt, source_file: str) -> None:
        out_path = Path(SCOPE_DUMP_DIR) / f"{Path(source_file).stem}.yaml"
        try:
            write_text_file(out_path, serialize_session(tcx.session))
        except OSError as e:
            logger.warning(f"could not write scope dump {out_path}: {e}")
        else:
            logger.debug(f"scope dump written to {out_path}")
