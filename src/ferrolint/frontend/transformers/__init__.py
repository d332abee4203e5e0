"""
ferrolint HIR Transformers
==========================

Lowering from the Lark parse tree to HIR.
"""

from .base import HirTransformer
from .literals import LiteralParser
from .desugar import DesugarBuilder

__all__ = [
    'HirTransformer',
    'LiteralParser',
    'DesugarBuilder',
]
