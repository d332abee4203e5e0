"""
Lint Driver

Rust Pattern: clippy_driver (rustc_driver with clippy's lint plugins registered)
"""

import logging
from typing import List, Mapping, Optional, Union

from .frontend.parser import Parser
from .lint import LateContext, LateLintWalker, Level, LintStore, register_plugins
from .shared.errors import Diagnostic, DiagnosticReporter
from .shared.nodes import Crate
from .shared.source_map import SourceMap
from .typeck import TypeInferencePass, TypeckResults
from .utils.config import DEFAULT_SOURCE_FILE

logger = logging.getLogger("ferrolint.driver")


class LintResult:
    """Outcome of linting one source file"""
    def __init__(self, crate: Crate, typeck_results: TypeckResults, reporter: DiagnosticReporter):
        self.crate = crate
        self.typeck_results = typeck_results
        self.reporter = reporter

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.reporter.diagnostics

    def has_errors(self) -> bool:
        """True if any lint fired at deny or forbid level"""
        return self.reporter.has_errors()

    def format_all(self, color: Optional[bool] = None) -> str:
        return self.reporter.format_all(color=color)


class LintDriver:
    """
    Lint driver (Rust naming: clippy_driver).

    Implementation Alignment:
    - Parse (source -> HIR), type inference, then one late lint walk
    - Parser and lint store are built once and reused across check() calls
    - Lint passes are instantiated fresh for every check
    - ParseError propagates to the caller; nothing is linted on a parse failure

    `lint_levels` overrides default levels, e.g. {"clippy::if_let_some_result": "deny"}.
    """

    def __init__(self, lint_levels: Optional[Mapping[str, Union[Level, str]]] = None):
        self.parser = Parser()
        self.store = LintStore()
        register_plugins(self.store)
        self.lint_levels = self.store.resolve_levels(lint_levels)

    def check(self, source: str, source_file: str = DEFAULT_SOURCE_FILE,
              expansion: Optional[str] = None) -> LintResult:
        """
        Lint one source file.

        Pass `expansion` when `source` is the output of a macro expansion; its
        text is then not offered for suggestions.

        Phases:
        1. Parsing and lowering (source -> HIR)
        2. Type inference (HIR -> TypeckResults)
        3. Late lint passes (diagnostics into the reporter)
        """
        source_map = SourceMap()
        source_map.new_source_file(source_file, source)
        reporter = DiagnosticReporter(source_map)

        crate = self.parser.parse(source, source_file, expansion)
        typeck_results = TypeInferencePass().run(crate)

        cx = LateContext(typeck_results, source_map, reporter, self.lint_levels)
        LateLintWalker(cx, self.store.create_late_passes()).run(crate)

        logger.debug(f"Linted {source_file}: {len(reporter.diagnostics)} diagnostics")
        return LintResult(crate, typeck_results, reporter)
