"""
Source Map

Rust Pattern: rustc_span::source_map::SourceMap
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .errors import SpanSnippetError
from .source_location import Span


@dataclass
class SourceFile:
    """One loaded source file with a line-start index (Rust: rustc_span::SourceFile)"""
    name: str
    src: str
    line_starts: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.line_starts:
            starts = [0]
            for i, ch in enumerate(self.src):
                if ch == "\n":
                    starts.append(i + 1)
            self.line_starts = starts

    def lookup_line_col(self, pos: int) -> Tuple[int, int]:
        """1-based (line, column) for a character offset"""
        line_idx = bisect_right(self.line_starts, pos) - 1
        return line_idx + 1, pos - self.line_starts[line_idx] + 1

    def line_text(self, line: int) -> str:
        lines = self.src.split("\n")
        if 1 <= line <= len(lines):
            return lines[line - 1]
        return ""


class SourceMap:
    """
    Source map (Rust naming: rustc_span::source_map::SourceMap).

    Rust Pattern: SourceMap::span_to_snippet()

    Implementation Alignment:
    - Owns the text of every file handed to the driver
    - `span_to_snippet` raises SpanSnippetError instead of guessing
    - Spans produced by macro expansion have no user-written text
    """

    def __init__(self) -> None:
        self.files: Dict[str, SourceFile] = {}

    def new_source_file(self, name: str, src: str) -> SourceFile:
        source_file = SourceFile(name, src)
        self.files[name] = source_file
        return source_file

    def get_source_file(self, name: str) -> SourceFile:
        if name not in self.files:
            raise SpanSnippetError(f"no source file named '{name}'")
        return self.files[name]

    def span_to_snippet(self, span: Span) -> str:
        """Literal source text under `span`"""
        if span.from_expansion():
            raise SpanSnippetError(f"span {span} comes from the expansion of `{span.expansion}!`")
        source_file = self.get_source_file(span.file)
        if span.lo < 0 or span.hi > len(source_file.src) or span.hi < span.lo:
            raise SpanSnippetError(f"span {span} is outside of '{span.file}'")
        return source_file.src[span.lo:span.hi]

    def lookup_char_pos(self, span: Span) -> Tuple[int, int]:
        return self.get_source_file(span.file).lookup_line_col(span.lo)

    def lookup_end_pos(self, span: Span) -> Tuple[int, int]:
        return self.get_source_file(span.file).lookup_line_col(span.hi)
