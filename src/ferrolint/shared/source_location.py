"""
Source Location (Span)

Rust Pattern: rustc_span::Span
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Span:
    """
    Source span (Rust Span pattern).

    Rust Pattern: rustc_span::Span

    Implementation Alignment: Follows Rust's `rustc_span::Span` structure:
    - Half-open [lo, hi) offsets into the source text of `file`
    - `expansion` names the macro whose expansion produced the span (None for user code)
    - Line/column are derived by the SourceMap when needed (not stored here)
    - Immutable (frozen) for hashability
    """
    lo: int
    hi: int
    file: str = "main.rs"
    expansion: Optional[str] = None

    def from_expansion(self) -> bool:
        """True if this span was produced by a macro expansion (Rust: Span::from_expansion)"""
        return self.expansion is not None

    def with_hi(self, hi: int) -> "Span":
        return replace(self, hi=hi)

    def with_lo(self, lo: int) -> "Span":
        return replace(self, lo=lo)

    def until(self, end: "Span") -> "Span":
        """Span from the start of self up to (excluding) the start of `end` (Rust: Span::until)"""
        return replace(self, hi=max(self.lo, end.lo))

    def to(self, end: "Span") -> "Span":
        """Span covering self through the end of `end` (Rust: Span::to)"""
        return replace(self, lo=min(self.lo, end.lo), hi=max(self.hi, end.hi))

    def is_empty(self) -> bool:
        return self.hi <= self.lo

    def __str__(self) -> str:
        """Format as file[lo..hi]"""
        return f"{self.file}[{self.lo}..{self.hi}]"


DUMMY_SP = Span(0, 0, "<dummy>")
