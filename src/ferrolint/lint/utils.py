"""
Helpers shared by lint passes

Rust Pattern: clippy_utils (match_type, method_chain_args, snippet_*, span_lint_and_sugg)
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..shared.errors import Applicability, Diagnostic, Suggestion, SpanSnippetError
from ..shared.nodes import Expr, MethodCall
from ..shared.source_location import Span
from ..shared.types import Ty, AdtType
from .base import LateContext, Lint
from .paths import DefPath

logger = logging.getLogger("ferrolint.lint.utils")


def match_def_path(def_path: DefPath, path: DefPath) -> bool:
    """True if `def_path` is exactly the canonical path `path`"""
    return tuple(def_path) == tuple(path)


def match_type(cx: LateContext, ty: Optional[Ty], path: DefPath) -> bool:
    """
    Checks if the type is the ADT at `path`, e.g. `match_type(cx, ty, paths.RESULT)`.

    References are not looked through: `&Result<T, E>` does not match.
    """
    if isinstance(ty, AdtType):
        return match_def_path(ty.path, path)
    return False


def method_chain_args(expr: Expr, methods: Sequence[str]) -> Optional[List[MethodCall]]:
    """
    Checks if `expr` ends in the method chain `methods`.

    `method_chain_args(e, ["bar", "baz"])` matches `foo.bar().baz()`; the
    calls come back in the order `methods` names them. Returns None if any
    link of the chain is missing or named differently.
    """
    current = expr
    calls: List[MethodCall] = []
    for method_name in reversed(methods):
        if not isinstance(current, MethodCall) or current.method_name != method_name:
            return None
        calls.append(current)
        current = current.receiver
    calls.reverse()
    return calls


def snippet_opt(cx: LateContext, span: Span) -> Optional[str]:
    """Source text under `span`, None if it cannot be retrieved"""
    try:
        return cx.source_map.span_to_snippet(span)
    except SpanSnippetError as e:
        logger.debug(f"No snippet for {span}: {e.message}")
        return None


def snippet_with_applicability(cx: LateContext, span: Span, default: str,
                               applicability: Applicability) -> Tuple[str, Applicability]:
    """
    Source text under `span` plus the applicability it leaves a suggestion with.

    - a span from a macro expansion downgrades anything but UNSPECIFIED to MAYBE_INCORRECT
    - unavailable text falls back to `default` and downgrades MACHINE_APPLICABLE
      to HAS_PLACEHOLDERS
    """
    if applicability != Applicability.UNSPECIFIED and span.from_expansion():
        applicability = Applicability.MAYBE_INCORRECT
    snippet = snippet_opt(cx, span)
    if snippet is None:
        if applicability == Applicability.MACHINE_APPLICABLE:
            applicability = Applicability.HAS_PLACEHOLDERS
        return default, applicability
    return snippet, applicability


def span_lint_and_sugg(cx: LateContext, lint: Lint, sp: Span, msg: str, help_msg: str,
                       sugg: str, applicability: Applicability) -> None:
    """
    Emit `lint` at `sp` with a replacement suggestion for the same span.

    Nothing is recorded when the lint's effective level is allow.
    """
    level = cx.lint_level(lint)
    severity = level.diagnostic_level()
    if severity is None:
        logger.debug(f"{lint.tool_name} is allowed, not emitting at {sp}")
        return

    notes = []
    if level == lint.default_level:
        notes.append(f"`#[{level.value}({lint.tool_name})]` on by default")

    cx.reporter.emit(Diagnostic(
        level=severity,
        message=msg,
        span=sp,
        lint_name=lint.tool_name,
        suggestion=Suggestion(span=sp, label=help_msg, replacement=sugg, applicability=applicability),
        notes=notes,
    ))
    logger.debug(f"Emitted {lint.tool_name} at {sp} ({applicability.value})")
