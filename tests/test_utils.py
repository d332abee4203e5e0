"""
Test utilities for the ferrolint test suite.
"""

import re
import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from ferrolint.shared.errors import Diagnostic
from ferrolint.shared.hir_visitor import HirVisitor
from ferrolint.shared.nodes import HirNode

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def apply_suggestion(source: str, diag: Diagnostic) -> str:
    """Replace the suggestion's span in `source` with its replacement text (what `cargo fix` does)"""
    sugg = diag.suggestion
    assert sugg is not None, f"diagnostic has no suggestion: {diag.message}"
    return source[:sugg.span.lo] + sugg.replacement + source[sugg.span.hi:]


def lint_names(diagnostics: List[Diagnostic]) -> List[str]:
    return [d.lint_name for d in diagnostics]


class _NodeCollector(HirVisitor):
    def __init__(self, node_class):
        self.node_class = node_class
        self.found = []

    def visit_expr(self, expr):
        if isinstance(expr, self.node_class):
            self.found.append(expr)
        super().visit_expr(expr)

    def visit_pat(self, pat):
        if isinstance(pat, self.node_class):
            self.found.append(pat)
        super().visit_pat(pat)


def find_nodes(root: HirNode, node_class) -> list:
    """All expressions or patterns of `node_class` under `root`, in pre-order"""
    collector = _NodeCollector(node_class)
    collector.visit(root)
    return collector.found


def span_text(source: str, node) -> str:
    """Source text under a node's or diagnostic's span"""
    return source[node.span.lo:node.span.hi]
