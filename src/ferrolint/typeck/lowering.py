"""
Type annotation lowering: written types (TypeRef) to semantic types (Ty)

Rust Pattern: rustc_hir_analysis::hir_ty_lowering
"""

from typing import Optional

from ..shared.nodes import TypeRef
from ..shared.types import Ty, AdtType, RefType, TupleType, SliceType, UNKNOWN, UNIT, PRIMITIVES
from ..lint import paths
from ..utils.config import PATH_SEPARATOR


def lower_type(ty_ref: Optional[TypeRef]) -> Ty:
    """
    Resolve a written type.

    Well-known library names go through the paths catalogue, so `Result<T, E>`,
    `std::result::Result<T, E>` and `io::Result<T>` all become
    core::result::Result. Names the catalogue does not know are treated as
    items of the current crate.
    """
    if ty_ref is None:
        return UNKNOWN
    if ty_ref.kind == "ref":
        return RefType(lower_type(ty_ref.inner), ty_ref.mutable)
    if ty_ref.kind == "tuple":
        return TupleType(tuple(lower_type(e) for e in ty_ref.elements))
    if ty_ref.kind == "slice":
        return SliceType(lower_type(ty_ref.inner))
    if ty_ref.kind != "path":
        return UNKNOWN

    segments = ty_ref.path.segments
    names = tuple(seg.name for seg in segments)
    written = PATH_SEPARATOR.join(names)
    args = tuple(lower_type(a) for a in segments[-1].args)

    if len(names) == 1 and not args and written in PRIMITIVES:
        return PRIMITIVES[written]
    if written in paths.ALIASED_RESULTS:
        ok_ty = args[0] if args else UNIT
        return AdtType(paths.RESULT, (ok_ty, AdtType(paths.ALIASED_RESULTS[written])))
    if written in paths.TYPE_NAMES:
        return AdtType(paths.TYPE_NAMES[written], args)
    return AdtType(("crate",) + names, args)
