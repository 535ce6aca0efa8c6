"""
Source Location (Span)

Rust Pattern: rustc_span::Span
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Source location (Rust Span pattern).

    Rust Pattern: rustc_span::Span

    - File, line, column (+ optional start/end byte offsets)
    - end_line/end_column give the span for caret underlining in diagnostics
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        """Format as file:line:column (Rust pattern)"""
        return f"{self.file}:{self.line}:{self.column}"
