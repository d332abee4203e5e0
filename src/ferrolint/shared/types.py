"""
Type System

Rust Pattern: rustc_middle::ty::Ty

Convention: types are resolved once by type inference and never mutated.
ADTs are identified by their canonical def path (e.g. core::result::Result),
not by the name the user wrote.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class TypeKind(Enum):
    """
    Type kind (Rust pattern: rustc_middle::ty::TyKind).
    """
    PRIMITIVE = "primitive"  # i32, bool, str, ...
    ADT = "adt"              # Result, Option, String, Vec, user structs/enums
    REF = "ref"              # &T, &mut T
    TUPLE = "tuple"          # (A, B), () is the unit type
    SLICE = "slice"          # [T]
    UNKNOWN = "unknown"      # Not inferred (Rust: TyKind::Error / Infer)


@dataclass(frozen=True)
class Ty:
    """
    Type representation (Rust pattern: rustc_middle::ty::Ty).

    Immutable (frozen dataclass); equality is structural.
    """
    kind: TypeKind

    def is_unknown(self) -> bool:
        return self.kind == TypeKind.UNKNOWN


@dataclass(frozen=True)
class PrimitiveType(Ty):
    """Primitive type (i32, bool, str, etc.)"""
    name: str

    def __init__(self, name: str):
        super().__init__(kind=TypeKind.PRIMITIVE)
        object.__setattr__(self, 'name', name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class AdtType(Ty):
    """
    Algebraic data type (Rust pattern: TyKind::Adt(AdtDef, SubstsRef)).

    `path` is the canonical def path, e.g. ("core", "result", "Result").
    """
    path: Tuple[str, ...]
    args: Tuple[Ty, ...]

    def __init__(self, path: Tuple[str, ...], args: Tuple[Ty, ...] = ()):
        super().__init__(kind=TypeKind.ADT)
        object.__setattr__(self, 'path', tuple(path))
        object.__setattr__(self, 'args', tuple(args))

    @property
    def name(self) -> str:
        return self.path[-1]

    def arg(self, index: int) -> Ty:
        """Generic argument at `index`, UNKNOWN if absent"""
        if index < len(self.args):
            return self.args[index]
        return UNKNOWN

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.args)}>"


@dataclass(frozen=True)
class RefType(Ty):
    """Reference type &T / &mut T"""
    inner: Ty
    mutable: bool

    def __init__(self, inner: Ty, mutable: bool = False):
        super().__init__(kind=TypeKind.REF)
        object.__setattr__(self, 'inner', inner)
        object.__setattr__(self, 'mutable', mutable)

    def __str__(self) -> str:
        return f"&{'mut ' if self.mutable else ''}{self.inner}"


@dataclass(frozen=True)
class TupleType(Ty):
    """Tuple type; the empty tuple is unit"""
    elements: Tuple[Ty, ...]

    def __init__(self, elements: Tuple[Ty, ...] = ()):
        super().__init__(kind=TypeKind.TUPLE)
        object.__setattr__(self, 'elements', tuple(elements))

    def __str__(self) -> str:
        if len(self.elements) == 1:
            return f"({self.elements[0]},)"
        return f"({', '.join(str(e) for e in self.elements)})"


@dataclass(frozen=True)
class SliceType(Ty):
    """Slice type [T]"""
    element: Ty

    def __init__(self, element: Ty):
        super().__init__(kind=TypeKind.SLICE)
        object.__setattr__(self, 'element', element)

    def __str__(self) -> str:
        return f"[{self.element}]"


@dataclass(frozen=True)
class UnknownType(Ty):
    def __init__(self):
        super().__init__(kind=TypeKind.UNKNOWN)

    def __str__(self) -> str:
        return "_"


# Singleton types
UNKNOWN = UnknownType()
UNIT = TupleType(())
BOOL = PrimitiveType("bool")
CHAR = PrimitiveType("char")
STR = PrimitiveType("str")
I32 = PrimitiveType("i32")
I64 = PrimitiveType("i64")
U8 = PrimitiveType("u8")
U32 = PrimitiveType("u32")
U64 = PrimitiveType("u64")
USIZE = PrimitiveType("usize")
F32 = PrimitiveType("f32")
F64 = PrimitiveType("f64")

PRIMITIVES = {
    p.name: p for p in (
        BOOL, CHAR, STR, I32, I64, U8, U32, U64, USIZE, F32, F64,
        PrimitiveType("i8"), PrimitiveType("i16"), PrimitiveType("i128"), PrimitiveType("isize"),
        PrimitiveType("u16"), PrimitiveType("u128"),
    )
}


def peel_refs(ty: Ty) -> Ty:
    """Strip all reference layers (Rust: TyS::peel_refs)"""
    while isinstance(ty, RefType):
        ty = ty.inner
    return ty
