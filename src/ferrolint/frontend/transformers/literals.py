"""
Literal Parser - Extracted from HirTransformer
Handles lowering of literal tokens (integers, strings, chars, booleans)
"""

import re

from lark.lexer import Token

from ...shared import Literal, LitKind, Span

_INT_DIGITS = re.compile(r"[0-9_]+")


class LiteralParser:
    """Dedicated parser for literal tokens"""

    @staticmethod
    def parse_int(token: Token, span: Span) -> Literal:
        """Integer literal; suffixes (1u8, 10_usize) and digit separators are dropped from the value"""
        digits = _INT_DIGITS.match(str(token)).group().replace("_", "")
        return Literal(value=int(digits), lit_kind=LitKind.INT, span=span)

    @staticmethod
    def parse_str(token: Token, span: Span) -> Literal:
        # Escapes stay as written; only the source text matters to lints
        return Literal(value=str(token)[1:-1], lit_kind=LitKind.STR, span=span)

    @staticmethod
    def parse_char(token: Token, span: Span) -> Literal:
        return Literal(value=str(token)[1:-1], lit_kind=LitKind.CHAR, span=span)

    @staticmethod
    def parse_bool(value: bool, span: Span) -> Literal:
        return Literal(value=value, lit_kind=LitKind.BOOL, span=span)
