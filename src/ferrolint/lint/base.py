"""
Lint declarations, levels and the late lint pass interface

Rust Pattern: rustc_lint_defs::Lint, rustc_lint::LateLintPass, rustc_lint::LateContext
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, List, Optional, TYPE_CHECKING

from ..shared.errors import DiagnosticReporter, LintRegistrationError
from ..shared.nodes import Expr
from ..shared.source_map import SourceMap
from ..shared.types import Ty
from ..utils.config import LINT_TOOL_PREFIX, LINT_TOOL_SEPARATOR

if TYPE_CHECKING:
    from ..typeck.results import TypeckResults


class Level(Enum):
    """Lint level (Rust: rustc_lint_defs::Level)"""
    ALLOW = "allow"
    WARN = "warn"
    DENY = "deny"
    FORBID = "forbid"

    def diagnostic_level(self) -> Optional[str]:
        """Severity a diagnostic at this level is rendered with; None when suppressed"""
        if self is Level.ALLOW:
            return None
        if self is Level.WARN:
            return "warning"
        return "error"


# Clippy groups lints by category; the category fixes the default level
CATEGORY_LEVELS: Dict[str, Level] = {
    "correctness": Level.DENY,
    "suspicious": Level.WARN,
    "style": Level.WARN,
    "complexity": Level.WARN,
    "perf": Level.WARN,
    "pedantic": Level.ALLOW,
    "restriction": Level.ALLOW,
    "nursery": Level.ALLOW,
    "cargo": Level.ALLOW,
}


@dataclass(frozen=True)
class Lint:
    """
    Static lint descriptor (Rust: rustc_lint_defs::Lint).

    `name` is the declared UPPER_CASE identifier; `tool_name` is the
    `clippy::lower_case` form users write in attributes.
    """
    name: str
    default_level: Level
    category: str
    desc: str

    @property
    def name_lower(self) -> str:
        return self.name.lower()

    @property
    def tool_name(self) -> str:
        return f"{LINT_TOOL_PREFIX}{LINT_TOOL_SEPARATOR}{self.name_lower}"


def declare_clippy_lint(name: str, category: str, desc: str) -> Lint:
    """Rust: clippy's declare_clippy_lint! macro"""
    if category not in CATEGORY_LEVELS:
        raise LintRegistrationError(f"unknown lint category '{category}' for {name}")
    return Lint(name=name, default_level=CATEGORY_LEVELS[category], category=category, desc=desc)


class LateContext:
    """
    Everything a late lint pass may consult (Rust naming: rustc_lint::LateContext).

    Implementation Alignment:
    - Read-only view of type tables and source text
    - Lint levels come from the driver's overrides, falling back to each lint's default
    - Diagnostics go to the shared reporter
    """

    def __init__(self, typeck_results: "TypeckResults", source_map: SourceMap,
                 reporter: DiagnosticReporter, lint_levels: Optional[Dict[str, Level]] = None):
        self.typeck_results = typeck_results
        self.source_map = source_map
        self.reporter = reporter
        self.lint_levels: Dict[str, Level] = dict(lint_levels or {})

    def expr_ty_opt(self, expr: Expr) -> Optional[Ty]:
        """Resolved type of `expr`, or None when inference could not determine it"""
        return self.typeck_results.expr_ty_opt(expr)

    def lint_level(self, lint: Lint) -> Level:
        return self.lint_levels.get(lint.name_lower, lint.default_level)


class LateLintPass(ABC):
    """
    Base class for lint passes that run after type inference (Rust: LateLintPass).

    Passes are stateless; override only the check_* hooks you need.
    """
    lints: ClassVar[List[Lint]] = []

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def check_expr(self, cx: LateContext, expr: Expr) -> None:
        pass
