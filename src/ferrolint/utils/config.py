"""
Configuration constants to replace magic strings throughout ferrolint
"""

import os
import tempfile

# Source handling
DEFAULT_SOURCE_FILE = "main.rs"

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "ferrolint_parser.cache")
GRAMMAR_FILE = "grammar.lark"

# Path rendering
PATH_SEPARATOR = "::"

# Lint naming: lints are declared UPPER_CASE and addressed as clippy::lower_case
LINT_TOOL_PREFIX = "clippy"
LINT_TOOL_SEPARATOR = "::"
