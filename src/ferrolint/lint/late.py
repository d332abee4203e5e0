"""
Late lint walker

Rust Pattern: rustc_lint::late::LateContextAndPass (runs every LateLintPass over the HIR)
"""

import logging
from typing import List

from ..shared.errors import LintInternalError
from ..shared.hir_visitor import HirVisitor
from ..shared.nodes import Crate, Expr
from .base import LateContext, LateLintPass

logger = logging.getLogger("ferrolint.lint.late")


class LateLintWalker(HirVisitor[None]):
    """
    Pre-order HIR walk calling check_expr of every pass once per expression.

    Implementation Alignment:
    - Every expression reachable from the crate is visited, including fn
      bodies, let initializers and match arm bodies
    - A pass is called on a node before any of the node's children
    - A pass that raises is logged and treated as not matching; the walk continues
    """

    def __init__(self, cx: LateContext, passes: List[LateLintPass]):
        self.cx = cx
        self.passes = passes

    def run(self, crate: Crate) -> None:
        logger.debug(f"Running {len(self.passes)} late lint passes: "
                     f"{', '.join(p.name for p in self.passes)}")
        self.visit(crate)

    def visit_expr(self, expr: Expr) -> None:
        for lint_pass in self.passes:
            try:
                lint_pass.check_expr(self.cx, expr)
            except LintInternalError as e:
                logger.warning(f"{lint_pass.name} failed on expression at {expr.span}: {e.message}")
            except Exception as e:
                logger.warning(f"{lint_pass.name} crashed on expression at {expr.span}: {e!r}", exc_info=True)
        super().visit_expr(expr)
