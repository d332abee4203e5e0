"""
ferrolint utilities package
"""

from .config import DEFAULT_SOURCE_FILE, DEFAULT_PARSER_CACHE_FILE

__all__ = ["DEFAULT_SOURCE_FILE", "DEFAULT_PARSER_CACHE_FILE"]
