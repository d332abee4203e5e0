"""
Canonical def paths of well-known library types

Rust Pattern: clippy_utils::paths
"""

from typing import Dict, Tuple

DefPath = Tuple[str, ...]

RESULT: DefPath = ("core", "result", "Result")
OPTION: DefPath = ("core", "option", "Option")
STRING: DefPath = ("alloc", "string", "String")
VEC: DefPath = ("alloc", "vec", "Vec")
HASHMAP: DefPath = ("std", "collections", "hash", "map", "HashMap")

# How each type may be written in source. The prelude names resolve without
# imports; the io/fmt aliases fix the error type, so they take one argument less.
TYPE_NAMES: Dict[str, DefPath] = {
    "Result": RESULT,
    "std::result::Result": RESULT,
    "core::result::Result": RESULT,
    "Option": OPTION,
    "std::option::Option": OPTION,
    "core::option::Option": OPTION,
    "String": STRING,
    "std::string::String": STRING,
    "Vec": VEC,
    "std::vec::Vec": VEC,
    "HashMap": HASHMAP,
    "std::collections::HashMap": HASHMAP,
}

IO_ERROR: DefPath = ("std", "io", "error", "Error")
FMT_ERROR: DefPath = ("core", "fmt", "Error")

ALIASED_RESULTS: Dict[str, DefPath] = {
    "io::Result": IO_ERROR,
    "std::io::Result": IO_ERROR,
    "fmt::Result": FMT_ERROR,
    "std::fmt::Result": FMT_ERROR,
}
