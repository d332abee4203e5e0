"""
Built-in method signatures for the library types inference knows about

Rust Pattern: rustc_hir_typeck::method (inherent impls of std types)
"""

from typing import Callable, Dict, List, Optional, Union

from ..shared.types import (
    Ty, AdtType, RefType, SliceType, PrimitiveType, UNKNOWN, UNIT, BOOL, STR, USIZE, peel_refs,
)
from ..lint import paths

# A table entry is either a fixed return type or a function of
# (receiver, turbofish args, argument types)
MethodRet = Union[Ty, Callable[[Ty, List[Ty], List[Ty]], Ty]]


def _option(inner: Ty) -> AdtType:
    return AdtType(paths.OPTION, (inner,))


def _result(ok: Ty, err: Ty) -> AdtType:
    return AdtType(paths.RESULT, (ok, err))


def _string() -> AdtType:
    return AdtType(paths.STRING)


def _first_arg(args: List[Ty]) -> Ty:
    return args[0] if args else UNKNOWN


_RESULT_METHODS: Dict[str, MethodRet] = {
    "ok": lambda r, g, a: _option(r.arg(0)),
    "err": lambda r, g, a: _option(r.arg(1)),
    "unwrap": lambda r, g, a: r.arg(0),
    "expect": lambda r, g, a: r.arg(0),
    "unwrap_or": lambda r, g, a: r.arg(0),
    "unwrap_or_default": lambda r, g, a: r.arg(0),
    "unwrap_err": lambda r, g, a: r.arg(1),
    "as_ref": lambda r, g, a: _result(RefType(r.arg(0)), RefType(r.arg(1))),
    "map": lambda r, g, a: _result(UNKNOWN, r.arg(1)),
    "map_err": lambda r, g, a: _result(r.arg(0), UNKNOWN),
    "is_ok": BOOL,
    "is_err": BOOL,
}

_OPTION_METHODS: Dict[str, MethodRet] = {
    "unwrap": lambda o, g, a: o.arg(0),
    "expect": lambda o, g, a: o.arg(0),
    "unwrap_or": lambda o, g, a: o.arg(0),
    "unwrap_or_default": lambda o, g, a: o.arg(0),
    "ok_or": lambda o, g, a: _result(o.arg(0), _first_arg(a)),
    "ok_or_else": lambda o, g, a: _result(o.arg(0), UNKNOWN),
    "as_ref": lambda o, g, a: _option(RefType(o.arg(0))),
    "cloned": lambda o, g, a: _option(peel_refs(o.arg(0))),
    "copied": lambda o, g, a: _option(peel_refs(o.arg(0))),
    "map": lambda o, g, a: _option(UNKNOWN),
    "is_some": BOOL,
    "is_none": BOOL,
}

_STR_METHODS: Dict[str, MethodRet] = {
    # "42".parse::<i32>() -> Result<i32, ParseIntError>; the error type is left open
    "parse": lambda s, g, a: _result(g[0] if g else UNKNOWN, UNKNOWN),
    "trim": RefType(STR),
    "trim_start": RefType(STR),
    "trim_end": RefType(STR),
    "as_str": RefType(STR),
    "to_string": lambda s, g, a: _string(),
    "to_owned": lambda s, g, a: _string(),
    "to_uppercase": lambda s, g, a: _string(),
    "to_lowercase": lambda s, g, a: _string(),
    "len": USIZE,
    "is_empty": BOOL,
    "starts_with": BOOL,
    "ends_with": BOOL,
    "contains": BOOL,
}

_VEC_METHODS: Dict[str, MethodRet] = {
    "get": lambda v, g, a: _option(RefType(_element(v))),
    "first": lambda v, g, a: _option(RefType(_element(v))),
    "last": lambda v, g, a: _option(RefType(_element(v))),
    "pop": lambda v, g, a: _option(_element(v)),
    "push": UNIT,
    "clear": UNIT,
    "len": USIZE,
    "is_empty": BOOL,
    "contains": BOOL,
}

_HASHMAP_METHODS: Dict[str, MethodRet] = {
    "get": lambda m, g, a: _option(RefType(m.arg(1))),
    "insert": lambda m, g, a: _option(m.arg(1)),
    "remove": lambda m, g, a: _option(m.arg(1)),
    "contains_key": BOOL,
    "len": USIZE,
    "is_empty": BOOL,
}

# Available on every type (Clone / ToString)
_ANY_METHODS: Dict[str, MethodRet] = {
    "clone": lambda t, g, a: t,
    "to_string": lambda t, g, a: _string(),
}


def _element(ty: Ty) -> Ty:
    if isinstance(ty, SliceType):
        return ty.element
    if isinstance(ty, AdtType):
        return ty.arg(0)
    return UNKNOWN


def _table_for(ty: Ty) -> Optional[Dict[str, MethodRet]]:
    if isinstance(ty, AdtType):
        if ty.path == paths.RESULT:
            return _RESULT_METHODS
        if ty.path == paths.OPTION:
            return _OPTION_METHODS
        if ty.path == paths.STRING:
            return _STR_METHODS
        if ty.path == paths.VEC:
            return _VEC_METHODS
        if ty.path == paths.HASHMAP:
            return _HASHMAP_METHODS
        return None
    if isinstance(ty, SliceType):
        return _VEC_METHODS
    if isinstance(ty, PrimitiveType) and ty == STR:
        return _STR_METHODS
    return None


def method_return_type(receiver_ty: Ty, name: str, generic_args: List[Ty], arg_types: List[Ty]) -> Ty:
    """
    Return type of `receiver.name::<generic_args>(args)`.

    Receivers auto-deref through any number of references, as method calls do
    in Rust. Methods the table does not list (including every method of a
    user-defined type) are UNKNOWN.
    """
    receiver = peel_refs(receiver_ty)
    if receiver.is_unknown():
        return UNKNOWN
    table = _table_for(receiver)
    entry = table.get(name) if table is not None else None
    if entry is None:
        entry = _ANY_METHODS.get(name)
    if entry is None:
        return UNKNOWN
    if isinstance(entry, Ty):
        return entry
    return entry(receiver, generic_args, arg_types)
