"""
Diagnostics and Error Reporting

Rust Pattern: rustc_errors::Diagnostic
"""

import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, TYPE_CHECKING

from .source_location import Span

if TYPE_CHECKING:
    from .source_map import SourceMap


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("FERROLINT_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_YELLOW = "\033[33m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Applicability / Suggestion / Diagnostic
# ---------------------------------------------------------------------------

class Applicability(Enum):
    """
    Confidence of a suggested fix (Rust pattern: rustc_errors::Applicability).

    Only MACHINE_APPLICABLE may be applied without a human looking at it.
    """
    MACHINE_APPLICABLE = "machine-applicable"
    MAYBE_INCORRECT = "maybe-incorrect"
    HAS_PLACEHOLDERS = "has-placeholders"
    UNSPECIFIED = "unspecified"

    def is_machine_applicable(self) -> bool:
        return self is Applicability.MACHINE_APPLICABLE


@dataclass(frozen=True)
class Suggestion:
    """Replacement text for `span` (rustc_errors::CodeSuggestion with one substitution)"""
    span: Span
    label: str
    replacement: str
    applicability: Applicability


@dataclass
class Diagnostic:
    """
    Lint diagnostic.

    Rust Pattern: rustc_errors::Diagnostic
    """
    level: str                      # "warning" or "error"
    message: str
    span: Optional[Span]
    lint_name: Optional[str] = None
    suggestion: Optional[Suggestion] = None
    notes: List[str] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.level == "error"


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    diag: Diagnostic,
    source_map: Optional["SourceMap"],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        warning: Matching on `Some` with `ok()` is redundant
         --> main.rs:2:5
          |
        2 |     if let Some(value) = input.parse().ok() {
          |     ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
          |
          = help: Consider matching on `Ok(value)` and removing the call to `ok` instead: `if let Ok(value) = input.parse()`
          = note: `#[warn(clippy::if_let_some_result)]` on by default
    """
    out: List[str] = []
    level_codes = (_BOLD, _RED) if diag.is_error else (_BOLD, _YELLOW)

    # ---- header -----------------------------------------------------------
    out.append(
        _style(diag.level, *level_codes, color=color)
        + _style(f": {diag.message}", _BOLD, color=color)
    )

    # ---- location arrow ---------------------------------------------------
    span = diag.span
    if span is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, diag, 1, color)
        return "\n".join(out)

    if source_map is None or span.file not in source_map.files:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + span.file)
        _append_annotations(out, diag, 1, color)
        return "\n".join(out)

    source_file = source_map.files[span.file]
    line, col = source_file.lookup_line_col(span.lo)
    end_line, end_col = source_file.lookup_line_col(span.hi)
    multiline = end_line > line

    gw = max(len(str(end_line)), 1)

    def empty_gutter() -> str:
        return _style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color)

    def code_gutter(num: int) -> str:
        return _style(str(num).rjust(gw) + " | ", _BOLD, _BLUE, color=color)

    def underline_gutter() -> str:
        return _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + f"{span.file}:{line}:{col}")
    out.append(empty_gutter())

    if not multiline:
        code_line = source_file.line_text(line)
        out.append(f"{code_gutter(line)}{code_line}")
        carets = " " * (col - 1) + "^" * max(1, end_col - col)
        out.append(f"{underline_gutter()}{_style(carets, *level_codes, color=color)}")
    else:
        for line_num in range(line, end_line + 1):
            code_line = source_file.line_text(line_num)
            if line_num == line:
                out.append(f"{code_gutter(line_num)}{code_line}")
                opening = " " + "_" * (col - 2) + "^" if col > 1 else "^"
                out.append(f"{underline_gutter()}{_style(opening, *level_codes, color=color)}")
            elif line_num == end_line:
                out.append(f"{code_gutter(line_num)}{_style('| ', *level_codes, color=color)}{code_line}")
                closing = "|" + "_" * max(1, end_col - 2) + "^"
                out.append(f"{underline_gutter()}{_style(closing, *level_codes, color=color)}")
            else:
                out.append(f"{code_gutter(line_num)}{_style('| ', *level_codes, color=color)}{code_line}")

    _append_annotations(out, diag, gw, color)

    return "\n".join(out)


def _append_annotations(
    out: List[str],
    diag: Diagnostic,
    gw: int,
    color: bool,
) -> None:
    if not diag.suggestion and not diag.notes:
        return
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    pad = " " * (gw + 1)
    if diag.suggestion:
        sugg = diag.suggestion
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("help: ", _BOLD, color=color)
            + f"{sugg.label}: `{sugg.replacement}`"
        )
    for note in diag.notes:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("note: ", _BOLD, color=color)
            + note
        )


# ---------------------------------------------------------------------------
# DiagnosticReporter
# ---------------------------------------------------------------------------

class DiagnosticReporter:
    """
    Diagnostic sink with rustc-style formatting.

    Rust Pattern: rustc_errors::Handler + Emitter
    """

    def __init__(self, source_map: Optional["SourceMap"] = None):
        self.source_map = source_map
        self.diagnostics: List[Diagnostic] = []

    def emit(self, diag: Diagnostic) -> None:
        self.diagnostics.append(diag)

    def format_diagnostic(self, diag: Diagnostic, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(diag, self.source_map, color=use_color)

    def format_all(self, color: Optional[bool] = None) -> str:
        parts = [self.format_diagnostic(d, color=color) for d in self.diagnostics]
        use_color = color if color is not None else _use_color()
        warnings = sum(1 for d in self.diagnostics if not d.is_error)
        errors = len(self.diagnostics) - warnings
        if warnings:
            summary = f"{warnings} warning{'s' if warnings != 1 else ''} emitted"
            parts.append(
                _style("warning", _BOLD, _YELLOW, color=use_color)
                + _style(f": {summary}", _BOLD, color=use_color)
            )
        if errors:
            summary = f"aborting due to {errors} previous error{'s' if errors != 1 else ''}"
            parts.append(
                _style("error", _BOLD, _RED, color=use_color)
                + _style(f": {summary}", _BOLD, color=use_color)
            )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)

    def print_diagnostics(self) -> None:
        if self.diagnostics:
            print(self.format_all(color=_use_color()), file=sys.stderr)


# ============================================================================
# Exception Classes
# ============================================================================

class FerrolintError(Exception):
    """Base exception for all ferrolint errors"""
    def __init__(self, message: str, span: Optional[Span] = None):
        super().__init__(message)
        self.message = message
        self.span = span


class SpanSnippetError(FerrolintError):
    """Source text for a span cannot be retrieved (Rust: rustc_span::SpanSnippetError)"""


class LintRegistrationError(FerrolintError):
    """A lint or lint pass was registered twice, or a level names an unknown lint"""


class LintInternalError(FerrolintError):
    """
    Inconsistent HIR or context observed inside a lint pass.

    Never used for problems in the checked code. The walker logs it and
    treats the node as not matching.
    """
