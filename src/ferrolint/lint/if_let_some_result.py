"""
IF_LET_SOME_RESULT

**What it does:** Checks for unnecessary `ok()` in `if let`.

**Why is this bad?** Calling `ok()` in `if let` is unnecessary, instead match
on `Ok(pat)`.

**Example:**

    for i in iter {
        if let Some(value) = i.parse().ok() {
            vec.push(value)
        }
    }

Could be written:

    for i in iter {
        if let Ok(value) = i.parse() {
            vec.push(value)
        }
    }
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..shared.errors import Applicability, LintInternalError
from ..shared.nodes import Expr, Match, MatchSource, MethodCall, TupleStructPattern
from ..shared.source_location import Span
from . import paths
from .base import LateContext, LateLintPass, declare_clippy_lint
from .utils import match_type, method_chain_args, snippet_with_applicability, span_lint_and_sugg

IF_LET_SOME_RESULT = declare_clippy_lint(
    "IF_LET_SOME_RESULT",
    "style",
    "usage of `ok()` in `if let Some(pat)` statements is unnecessary, match on `Ok(pat)` instead",
)

# ADTs whose `ok()` makes `if let Some(..)` redundant
RESULT_TYPE_PATHS = (paths.RESULT,)


@dataclass(frozen=True)
class OkIfLetMatch:
    """Spans captured from one `if let Some(p) = e.ok()`; lives for a single check_expr call"""
    expr_span: Span            # the whole `if let`
    scrutinee_span: Span       # `e.ok()`
    ok_span: Span              # `ok()`
    inner_pattern_span: Span   # `p`


def is_result_type(cx: LateContext, expr: Expr) -> bool:
    """
    True if `expr` is known to have a type from RESULT_TYPE_PATHS.

    Types inference could not determine never match.
    """
    ty = cx.expr_ty_opt(expr)
    if ty is None:
        return False
    return any(match_type(cx, ty, path) for path in RESULT_TYPE_PATHS)


def match_redundant_ok(cx: LateContext, expr: Expr) -> Optional[OkIfLetMatch]:
    """
    Recognize `if let Some(p) = e.ok() { .. }` with `e: Result<_, _>`.

    Only the first arm is looked at, and the variant is identified by the
    text of its path: any single-segment path printed as `Some` counts.
    """
    if not isinstance(expr, Match) or expr.source != MatchSource.IF_LET_DESUGAR:
        return None
    scrutinee = expr.scrutinee
    if not isinstance(scrutinee, MethodCall):
        return None
    if not expr.arms:
        return None

    pattern = expr.arms[0].pattern
    if not isinstance(pattern, TupleStructPattern) or not pattern.qpath.is_resolved():
        return None
    if pattern.qpath.path.render() != "Some":
        return None
    if len(pattern.subpatterns) != 1 or pattern.ddpos is not None:
        return None

    chain = method_chain_args(scrutinee, ["ok"])
    if chain is None or chain[0].args:
        return None
    ok_call = chain[0]

    if not is_result_type(cx, ok_call.receiver):
        return None

    return OkIfLetMatch(
        expr_span=expr.span,
        scrutinee_span=scrutinee.span,
        ok_span=ok_call.method_span,
        inner_pattern_span=pattern.subpatterns[0].span,
    )


def build_suggestion(cx: LateContext, m: OkIfLetMatch) -> Tuple[str, str, Applicability]:
    """
    Replacement text for the matched span.

    Returns (inner pattern text, suggestion, applicability). The receiver text
    is everything of the scrutinee before `ok()`, with the connecting `.` and
    surrounding whitespace removed. Whatever follows `ok()` inside the
    scrutinee (closing parentheses of `(r.ok())`) is kept.
    """
    if not (m.scrutinee_span.lo <= m.ok_span.lo <= m.ok_span.hi <= m.scrutinee_span.hi):
        raise LintInternalError(f"`ok` call at {m.ok_span} lies outside its scrutinee {m.scrutinee_span}")

    applicability = Applicability.MACHINE_APPLICABLE
    some_expr_string, applicability = snippet_with_applicability(
        cx, m.inner_pattern_span, "", applicability)
    trimmed_ok, applicability = snippet_with_applicability(
        cx, m.scrutinee_span.until(m.ok_span), "", applicability)
    closing, applicability = snippet_with_applicability(
        cx, m.scrutinee_span.with_lo(m.ok_span.hi), "", applicability)
    receiver = trimmed_ok.strip().rstrip(".").rstrip() + closing.strip()
    return some_expr_string, f"if let Ok({some_expr_string}) = {receiver}", applicability


def emit_redundant_ok(cx: LateContext, m: OkIfLetMatch, some_expr_string: str,
                      sugg: str, applicability: Applicability) -> None:
    span_lint_and_sugg(
        cx,
        IF_LET_SOME_RESULT,
        m.expr_span.with_hi(m.scrutinee_span.hi),
        "Matching on `Some` with `ok()` is redundant",
        f"Consider matching on `Ok({some_expr_string})` and removing the call to `ok` instead",
        sugg,
        applicability,
    )


class OkIfLet(LateLintPass):
    """Rust: declare_lint_pass!(OkIfLet => [IF_LET_SOME_RESULT])"""
    lints = [IF_LET_SOME_RESULT]

    def check_expr(self, cx: LateContext, expr: Expr) -> None:
        m = match_redundant_ok(cx, expr)
        if m is None:
            return
        some_expr_string, sugg, applicability = build_suggestion(cx, m)
        emit_redundant_ok(cx, m, some_expr_string, sugg, applicability)
