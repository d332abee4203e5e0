"""
Parser

Rust Pattern: rustc_parse + rustc_ast_lowering (source text straight to HIR)
"""

from typing import Optional
from pathlib import Path
from lark import Lark
from lark.exceptions import UnexpectedInput, VisitError, ParseError as LarkParseError
import logging

from ..shared.nodes import Crate
from ..shared.source_location import Span
from .transformers.base import HirTransformer
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, DEFAULT_SOURCE_FILE, GRAMMAR_FILE

logger = logging.getLogger("ferrolint.frontend.parser")


class Parser:
    """
    Parser (Rust naming: rustc_parse).

    Implementation Alignment:
    - Takes source code, returns a lowered HIR Crate
    - Preserves byte-offset spans on every node
    - Uses Lark LALR parser with on-disk grammar caching
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / GRAMMAR_FILE
        self.parser = Lark.open(
            grammar_path,
            start='crate',
            parser='lalr',              # Required for caching
            cache=cache_file,
            propagate_positions=True,   # Spans for every rule
            maybe_placeholders=False,   # Missing optionals are dropped, not None
        )
        self.transformer = HirTransformer()

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_FILE,
              expansion: Optional[str] = None) -> Crate:
        """
        Parse source code to HIR.

        `expansion` names the macro that produced `source`; every span is then
        marked as coming from that expansion (Rust: Span::from_expansion).

        Returns: Crate
        """
        try:
            self.transformer.current_file = source_file
            self.transformer.current_expansion = expansion
            tree = self.parser.parse(source)
            crate = self.transformer.transform(tree)
            logger.debug(f"Parsed {source_file}: {len(crate.stmts)} top-level statements")
            return crate

        except UnexpectedInput as e:
            pos = getattr(e, "pos_in_stream", None)
            token = getattr(e, "token", None)
            if pos is None and token is not None:
                pos = getattr(token, "start_pos", None)
            span = Span(pos, pos + 1, source_file) if pos is not None else None
            raise ParseError(f"Parse error: {e}", source_file, span) from e

        except VisitError as e:
            # Lowering failures surface with the original message, not Lark's wrapper
            raise ParseError(f"Parse error: {e.orig_exc}", source_file,
                             getattr(e.orig_exc, "span", None)) from e

        except LarkParseError as e:
            raise ParseError(f"Parse error: {e}", source_file) from e


class ParseError(Exception):
    """Parse error with source span"""
    def __init__(self, message: str, source_file: str, span: Optional[Span] = None):
        self.message = message
        self.source_file = source_file
        self.span = span
        super().__init__(f"{message} in {source_file}")
