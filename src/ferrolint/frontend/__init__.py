"""
Frontend: source text to HIR
"""

from .parser import Parser, ParseError

__all__ = ["Parser", "ParseError"]
