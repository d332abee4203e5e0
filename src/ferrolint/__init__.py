"""
ferrolint: clippy-style lints for a Rust subset
"""

from .driver import LintDriver, LintResult
from .frontend import Parser, ParseError
from .lint import IF_LET_SOME_RESULT, OkIfLet, Level, REGISTERED_LINTS

__version__ = "0.1.0"

__all__ = [
    "LintDriver", "LintResult", "Parser", "ParseError",
    "IF_LET_SOME_RESULT", "OkIfLet", "Level", "REGISTERED_LINTS",
]
