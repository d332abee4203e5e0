"""
Lint Store

Rust Pattern: rustc_lint::LintStore
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional, Union

from ..shared.errors import LintRegistrationError
from ..utils.config import LINT_TOOL_PREFIX, LINT_TOOL_SEPARATOR
from .base import Lint, Level, LateLintPass

logger = logging.getLogger("ferrolint.lint.store")

LatePassFactory = Callable[[], LateLintPass]


class LintStore:
    """
    Registry of declared lints and late pass constructors (Rust naming: LintStore).

    Implementation Alignment:
    - Lints are keyed by lower-case name
    - Passes are registered as factories and instantiated per check
    - Registering a lint or pass twice is an error, not a silent overwrite
    """

    def __init__(self):
        self.lints: Dict[str, Lint] = {}
        self.late_passes: List[LatePassFactory] = []

    def register_lints(self, lints: List[Lint]) -> None:
        for lint in lints:
            if lint.name_lower in self.lints:
                raise LintRegistrationError(f"duplicate registration of lint {lint.name_lower}")
            self.lints[lint.name_lower] = lint
            logger.debug(f"Registered lint {lint.tool_name} ({lint.category}, {lint.default_level.value})")

    def register_late_pass(self, factory: LatePassFactory) -> None:
        if factory in self.late_passes:
            raise LintRegistrationError(f"late lint pass {factory!r} registered twice")
        self.late_passes.append(factory)

    def create_late_passes(self) -> List[LateLintPass]:
        return [factory() for factory in self.late_passes]

    def find_lint(self, name: str) -> Optional[Lint]:
        """Look a lint up by `name`, `NAME` or `clippy::name`"""
        prefix = f"{LINT_TOOL_PREFIX}{LINT_TOOL_SEPARATOR}"
        if name.startswith(prefix):
            name = name[len(prefix):]
        return self.lints.get(name.lower())

    def resolve_levels(self, levels: Optional[Mapping[str, Union[Level, str]]]) -> Dict[str, Level]:
        """
        Normalize user-supplied level overrides.

        Keys may be any form find_lint accepts; values are Level members or
        their names ("allow", "warn", "deny", "forbid").
        """
        resolved: Dict[str, Level] = {}
        for name, level in (levels or {}).items():
            lint = self.find_lint(name)
            if lint is None:
                raise LintRegistrationError(f"unknown lint: `{name}`")
            if not isinstance(level, Level):
                try:
                    level = Level(str(level).lower())
                except ValueError as e:
                    raise LintRegistrationError(f"unknown lint level '{level}' for `{name}`") from e
            resolved[lint.name_lower] = level
        return resolved
