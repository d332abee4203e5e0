"""
Lint framework and the lints ferrolint ships

Rust Pattern: clippy_lints::register_plugins
"""

from types import MappingProxyType
from typing import Mapping

from .base import Level, Lint, LateContext, LateLintPass, declare_clippy_lint
from .store import LintStore
from .late import LateLintWalker
from .if_let_some_result import IF_LET_SOME_RESULT, OkIfLet

ALL_LINTS = [IF_LET_SOME_RESULT]
ALL_LATE_PASSES = [OkIfLet]


def register_plugins(store: LintStore) -> None:
    """Register every shipped lint and late pass with `store`"""
    store.register_lints(ALL_LINTS)
    for pass_class in ALL_LATE_PASSES:
        store.register_late_pass(pass_class)


def default_lint_store() -> LintStore:
    store = LintStore()
    register_plugins(store)
    return store


# Read-only view of the shipped lints, keyed by lower-case name
REGISTERED_LINTS: Mapping[str, Lint] = MappingProxyType(default_lint_store().lints)

__all__ = [
    "Level", "Lint", "LateContext", "LateLintPass", "declare_clippy_lint",
    "LintStore", "LateLintWalker",
    "IF_LET_SOME_RESULT", "OkIfLet",
    "ALL_LINTS", "ALL_LATE_PASSES", "REGISTERED_LINTS",
    "register_plugins", "default_lint_store",
]
