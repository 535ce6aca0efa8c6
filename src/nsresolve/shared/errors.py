"""
Error Reporting

Rust Pattern: rustc_errors::Diagnostic

Two families live here:
- Diagnostics (Error + ErrorReporter): problems in the checked source, collected
  and rendered rustc-style. Never raised.
- Exceptions: contract violations by the caller of the resolver core
  (malformed reference, out-of-order event, unknown scope id). Raised
  immediately; they indicate a producer bug, not a property of the source.
"""

import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .source_location import SourceLocation
from ..utils.config import ENV_COLOR


class ErrorCode(Enum):
    """Stable diagnostic codes (rustc-style E-numbers)."""
    PARSE_ERROR = "E0001"
    UNRESOLVED_USING_DIRECTIVE = "E0002"
    INLINE_MISMATCH = "E0003"
    CHECK_EXPECTED_NOTHING = "E0100"
    CHECK_EXPECTED_SOMETHING = "E0101"
    CHECK_MISSING_TAG = "E0102"
    CHECK_TAG_MISMATCH = "E0103"
    BAD_ATTRIBUTE = "E0200"
    INTERNAL = "E9999"


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get(ENV_COLOR, "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return sys.stderr.isatty() or explicit in ("1", "true", "yes", "always")


_BOLD = "\033[1m"
_RED = "\033[31m"
_BLUE = "\033[34m"
_CYAN = "\033[36m"
_RESET = "\033[0m"


def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color or not codes:
        return text
    return "".join(codes) + text + _RESET


@dataclass
class Error:
    """
    Diagnostic about the checked source.

    Rust Pattern: rustc_errors::Diagnostic
    """
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


def _caret_width(code_line: str, col_start: int) -> int:
    """Width of the token starting at col_start when no end column is known."""
    width = 0
    for ch in code_line[col_start:]:
        if ch in " \t;,()[]{}":
            break
        width += 1
    return max(1, width)


def _format_diagnostic(error: Error, source_files: Dict[str, str], color: bool = False) -> str:
    """
    Render one diagnostic in rustc style::

        error[E0103]: tag mismatch for `B`
         --> fixture.cpp:3:33
          |
        3 | [[rustycpp::checkSymbolMatchTag(7, B)]];
          |                                 ^ found tag 2
          |
          = help: ...
    """
    code_str = f"[{error.code}]" if error.code else ""
    out: List[str] = [
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    ]

    loc = error.location
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    gutter_width = max(len(str(loc.line)), 1)
    pad = " " * gutter_width
    out.append(_style(f"{pad}--> ", _BOLD, _BLUE, color=color) + str(loc))

    source = source_files.get(loc.file)
    if source is not None:
        lines = source.split("\n")
        code_line = lines[loc.line - 1] if 0 < loc.line <= len(lines) else ""
        col_start = max(loc.column, 1) - 1
        if loc.end_line == loc.line and loc.end_column > loc.column:
            width = loc.end_column - loc.column
        else:
            width = _caret_width(code_line, col_start)
        carets = " " * col_start + "^" * width
        if error.label:
            carets += f" {error.label}"
        out.append(_style(f"{pad} |", _BOLD, _BLUE, color=color))
        out.append(_style(f"{str(loc.line).rjust(gutter_width)} | ", _BOLD, _BLUE, color=color) + code_line)
        out.append(_style(f"{pad} | ", _BOLD, _BLUE, color=color) + _style(carets, _BOLD, _RED, color=color))

    _append_annotations(out, error, gutter_width, color)
    return "\n".join(out)


def _append_annotations(out: List[str], error: Error, gutter_width: int, color: bool) -> None:
    if not (error.help or error.note):
        return
    pad = " " * (gutter_width + 1)
    out.append(_style(f"{pad}|", _BOLD, _BLUE, color=color))
    for kind, text in (("help", error.help), ("note", error.note)):
        if text:
            out.append(_style(f"{pad}= ", _BOLD, _CYAN, color=color) + _style(f"{kind}: ", _BOLD, color=color) + text)


class ErrorReporter:
    """
    Collects diagnostics for one check run.

    Rust Pattern: rustc_errors::Emitter
    """

    def __init__(self, source_files: Dict[str, str]):
        self.source_files = source_files
        self.errors: List[Error] = []

    def report_error(
        self,
        message: str,
        location: Optional[SourceLocation],
        code: Optional[ErrorCode] = None,
        help: Optional[str] = None,
        note: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.errors.append(Error(
            message=message,
            location=location,
            code=code.value if code is not None else None,
            help=help,
            note=note,
            label=label,
        ))

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def codes(self) -> List[Optional[str]]:
        """Error codes in report order (handy for assertions)."""
        return [e.code for e in self.errors]

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        count = len(self.errors)
        summary = f"{count} error{'s' if count != 1 else ''} found"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)


# ============================================================================
# Exception Classes
# ============================================================================

class NsResolveError(Exception):
    """Base exception for problems in checked source text."""

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message}\n --> {self.location}"
        return self.message


class NsResolveImplementationError(Exception):
    """
    Error in how the library is driven (not in the checked source).

    Never use this for problems in the fixture text; those become diagnostics.
    """

    def __init__(self, message: str, error_code: str = ErrorCode.INTERNAL.value):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class ResolverContractError(NsResolveImplementationError):
    """The caller broke the resolver's input contract."""


class MalformedReferenceError(ResolverContractError):
    """Reference expression with no segments, or an empty/ill-formed segment."""

    def __init__(self, message: str):
        super().__init__(message, error_code="E9001")


class EventOrderError(ResolverContractError):
    """An event arrived at a position not strictly after the previous event."""

    def __init__(self, position, previous):
        self.position = position
        self.previous = previous
        super().__init__(
            f"event at position {position!r} does not follow previous position {previous!r}",
            error_code="E9002",
        )


class UnknownScopeError(ResolverContractError):
    """An event named an enclosing scope id that this session never allocated."""

    def __init__(self, scope_id):
        self.scope_id = scope_id
        super().__init__(f"unknown scope id {scope_id}", error_code="E9003")
