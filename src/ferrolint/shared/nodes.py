"""
HIR (High-level Intermediate Representation) Definitions

Rust Pattern: rustc_hir::hir

The frontend lowers surface syntax straight into these nodes. Surface forms
that rustc desugars (if let, while let, for, ?) are already desugared here:
each becomes a Match whose `source` records where it came from.

Visitor Pattern Support:
- All HIR nodes have accept() methods for polymorphic dispatch
- HirVisitor (shared/hir_visitor.py) provides the default walk
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TYPE_CHECKING, TypeVar

from .source_location import Span
from ..utils.config import PATH_SEPARATOR

if TYPE_CHECKING:
    from .hir_visitor import HirVisitor

T = TypeVar('T')

HirId = int

_hir_ids = itertools.count(1)


class NodeType(Enum):
    """HIR node kinds (closed set)"""
    CRATE = "crate"
    FN_ITEM = "fn_item"
    PARAM = "param"
    # Statements
    LET = "let"
    EXPR_STMT = "expr_stmt"
    ITEM_STMT = "item_stmt"
    # Expressions
    LITERAL = "literal"
    PATH = "path"
    CALL = "call"
    METHOD_CALL = "method_call"
    MACRO_CALL = "macro_call"
    FIELD = "field"
    INDEX = "index"
    UNARY = "unary"
    ADDR_OF = "addr_of"
    BINARY = "binary"
    ASSIGN = "assign"
    TUPLE = "tuple"
    ARRAY = "array"
    BLOCK = "block"
    IF = "if"
    MATCH = "match"
    LOOP = "loop"
    BREAK = "break"
    CONTINUE = "continue"
    RETURN = "return"
    MATCH_ARM = "match_arm"
    # Patterns
    WILD_PAT = "wild_pat"
    BINDING_PAT = "binding_pat"
    LIT_PAT = "lit_pat"
    TUPLE_PAT = "tuple_pat"
    TUPLE_STRUCT_PAT = "tuple_struct_pat"
    PATH_PAT = "path_pat"
    REF_PAT = "ref_pat"


class MatchSource(Enum):
    """
    Where a Match came from (Rust pattern: rustc_hir::MatchSource).

    Distinguishes the concise binding forms from an explicit `match`, even
    though they lower to the same shape.
    """
    NORMAL = "normal"
    IF_LET_DESUGAR = "if_let_desugar"
    WHILE_DESUGAR = "while_desugar"
    WHILE_LET_DESUGAR = "while_let_desugar"
    FOR_LOOP_DESUGAR = "for_loop_desugar"
    TRY_DESUGAR = "try_desugar"


class LoopSource(Enum):
    """Rust pattern: rustc_hir::LoopSource"""
    LOOP = "loop"
    WHILE = "while"
    WHILE_LET = "while_let"
    FOR_LOOP = "for"


class QPathKind(Enum):
    """
    Rust pattern: rustc_hir::QPath.

    RESOLVED: a plain path (`Some`, `Option::Some`).
    TYPE_RELATIVE: a path whose final segment is looked up on a type (`Self::Some`).
    """
    RESOLVED = "resolved"
    TYPE_RELATIVE = "type_relative"


class LitKind(Enum):
    INT = "int"
    STR = "str"
    CHAR = "char"
    BOOL = "bool"


class UnOp(Enum):
    NEG = "-"
    NOT = "!"
    DEREF = "*"


class BinOp(Enum):
    OR = "||"
    AND = "&&"
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    REM = "%"

    def is_comparison(self) -> bool:
        return self in (BinOp.EQ, BinOp.NE, BinOp.LT, BinOp.GT, BinOp.LE, BinOp.GE,
                        BinOp.OR, BinOp.AND)


# ============================================================================
# Syntactic types and paths
# ============================================================================

@dataclass
class TypeRef:
    """
    A type as written in source (Rust: hir::Ty, before resolution).

    kind is one of "path", "ref", "tuple", "slice", "infer".
    """
    kind: str
    span: Span
    path: Optional['Path'] = None
    inner: Optional['TypeRef'] = None
    elements: Optional[List['TypeRef']] = None
    mutable: bool = False

    def render(self) -> str:
        if self.kind == "path":
            return self.path.render()
        if self.kind == "ref":
            return f"&{'mut ' if self.mutable else ''}{self.inner.render()}"
        if self.kind == "tuple":
            return f"({', '.join(e.render() for e in self.elements)})"
        if self.kind == "slice":
            return f"[{self.inner.render()}]"
        return "_"


@dataclass
class PathSegment:
    """Rust pattern: rustc_hir::PathSegment (identifier + generic args)"""
    name: str
    args: List[TypeRef]
    span: Span

    def render(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}<{', '.join(a.render() for a in self.args)}>"


@dataclass
class Path:
    """Rust pattern: rustc_hir::Path"""
    segments: List[PathSegment]
    span: Span

    def render(self) -> str:
        """Print the path the way rustc_hir_pretty::print_path(path, false) does"""
        return PATH_SEPARATOR.join(seg.render() for seg in self.segments)

    @property
    def last_name(self) -> str:
        return self.segments[-1].name


@dataclass
class QPath:
    """Rust pattern: rustc_hir::QPath"""
    kind: QPathKind
    path: Path

    def is_resolved(self) -> bool:
        return self.kind == QPathKind.RESOLVED


# ============================================================================
# Base classes
# ============================================================================

class HirNode:
    """
    Base class for all HIR nodes.

    Every node gets a fresh HirId; type tables are keyed by it.
    """

    def __init__(self, node_type: NodeType, span: Span):
        self.node_type = node_type
        self.span = span
        self.hir_id: HirId = next(_hir_ids)

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


class Expr(HirNode):
    """Base class for expressions (Rust: hir::Expr)"""


class Stmt(HirNode):
    """Base class for statements (Rust: hir::Stmt)"""


class Pattern(HirNode):
    """Base class for patterns (Rust: hir::Pat)"""


# ============================================================================
# Items
# ============================================================================

@dataclass(eq=False)
class Param(HirNode):
    pattern: Pattern
    ty: TypeRef

    def __init__(self, pattern: Pattern, ty: TypeRef, span: Span):
        super().__init__(NodeType.PARAM, span)
        self.pattern = pattern
        self.ty = ty

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_param(self)


@dataclass(eq=False)
class FnItem(HirNode):
    """Function item: fn name(params) -> ret { body }"""
    name: str
    params: List[Param]
    ret_ty: Optional[TypeRef]
    body: 'Block'

    def __init__(self, name: str, params: List[Param], ret_ty: Optional[TypeRef],
                 body: 'Block', span: Span):
        super().__init__(NodeType.FN_ITEM, span)
        self.name = name
        self.params = params
        self.ret_ty = ret_ty
        self.body = body

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_fn_item(self)


@dataclass(eq=False)
class Crate(HirNode):
    """Root node: top-level statements and fn items of one source file"""
    stmts: List[Stmt]

    def __init__(self, stmts: List[Stmt], span: Span):
        super().__init__(NodeType.CRATE, span)
        self.stmts = stmts

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_crate(self)

    def fn_items(self) -> List[FnItem]:
        return [s.item for s in self.stmts if isinstance(s, ItemStmt)]


# ============================================================================
# Statements
# ============================================================================

@dataclass(eq=False)
class Let(Stmt):
    """let pattern: ty = init;"""
    pattern: Pattern
    ty: Optional[TypeRef]
    init: Optional[Expr]

    def __init__(self, pattern: Pattern, ty: Optional[TypeRef], init: Optional[Expr], span: Span):
        super().__init__(NodeType.LET, span)
        self.pattern = pattern
        self.ty = ty
        self.init = init

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_let(self)


@dataclass(eq=False)
class ExprStmt(Stmt):
    """Expression statement, with or without a trailing semicolon"""
    expr: Expr
    semi: bool

    def __init__(self, expr: Expr, semi: bool, span: Span):
        super().__init__(NodeType.EXPR_STMT, span)
        self.expr = expr
        self.semi = semi

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_expr_stmt(self)


@dataclass(eq=False)
class ItemStmt(Stmt):
    item: FnItem

    def __init__(self, item: FnItem, span: Span):
        super().__init__(NodeType.ITEM_STMT, span)
        self.item = item

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_item_stmt(self)


# ============================================================================
# Expressions
# ============================================================================

@dataclass(eq=False)
class Literal(Expr):
    value: object
    lit_kind: LitKind

    def __init__(self, value: object, lit_kind: LitKind, span: Span):
        super().__init__(NodeType.LITERAL, span)
        self.value = value
        self.lit_kind = lit_kind

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_literal(self)


@dataclass(eq=False)
class PathExpr(Expr):
    """Path expression: x, Vec::new, None"""
    qpath: QPath

    def __init__(self, qpath: QPath, span: Span):
        super().__init__(NodeType.PATH, span)
        self.qpath = qpath

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_path_expr(self)


@dataclass(eq=False)
class Call(Expr):
    """Function or constructor call: f(a, b), Some(x)"""
    func: Expr
    args: List[Expr]

    def __init__(self, func: Expr, args: List[Expr], span: Span):
        super().__init__(NodeType.CALL, span)
        self.func = func
        self.args = args

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_call(self)


@dataclass(eq=False)
class MethodCall(Expr):
    """
    Method call: receiver.name::<T>(args)

    Rust Pattern: ExprKind::MethodCall(segment, span, args)

    `args` excludes the receiver. `method_span` starts at the method name and
    ends at the closing parenthesis (`ok()` in `x.ok()`).
    """
    segment: PathSegment
    receiver: Expr
    args: List[Expr]
    method_span: Span

    def __init__(self, segment: PathSegment, receiver: Expr, args: List[Expr],
                 method_span: Span, span: Span):
        super().__init__(NodeType.METHOD_CALL, span)
        self.segment = segment
        self.receiver = receiver
        self.args = args
        self.method_span = method_span

    @property
    def method_name(self) -> str:
        return self.segment.name

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_method_call(self)


@dataclass(eq=False)
class MacroCall(Expr):
    """Unexpanded macro invocation: name!(args) / name![args]"""
    path: Path
    args: List[Expr]
    delimiter: str

    def __init__(self, path: Path, args: List[Expr], delimiter: str, span: Span):
        super().__init__(NodeType.MACRO_CALL, span)
        self.path = path
        self.args = args
        self.delimiter = delimiter

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_macro_call(self)


@dataclass(eq=False)
class Field(Expr):
    """Field access: receiver.name or receiver.0"""
    receiver: Expr
    name: str

    def __init__(self, receiver: Expr, name: str, span: Span):
        super().__init__(NodeType.FIELD, span)
        self.receiver = receiver
        self.name = name

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_field(self)


@dataclass(eq=False)
class Index(Expr):
    receiver: Expr
    index: Expr

    def __init__(self, receiver: Expr, index: Expr, span: Span):
        super().__init__(NodeType.INDEX, span)
        self.receiver = receiver
        self.index = index

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_index(self)


@dataclass(eq=False)
class Unary(Expr):
    op: UnOp
    operand: Expr

    def __init__(self, op: UnOp, operand: Expr, span: Span):
        super().__init__(NodeType.UNARY, span)
        self.op = op
        self.operand = operand

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_unary(self)


@dataclass(eq=False)
class AddrOf(Expr):
    """&operand / &mut operand"""
    operand: Expr
    mutable: bool

    def __init__(self, operand: Expr, mutable: bool, span: Span):
        super().__init__(NodeType.ADDR_OF, span)
        self.operand = operand
        self.mutable = mutable

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_addr_of(self)


@dataclass(eq=False)
class Binary(Expr):
    op: BinOp
    left: Expr
    right: Expr

    def __init__(self, op: BinOp, left: Expr, right: Expr, span: Span):
        super().__init__(NodeType.BINARY, span)
        self.op = op
        self.left = left
        self.right = right

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_binary(self)


@dataclass(eq=False)
class Assign(Expr):
    target: Expr
    value: Expr

    def __init__(self, target: Expr, value: Expr, span: Span):
        super().__init__(NodeType.ASSIGN, span)
        self.target = target
        self.value = value

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_assign(self)


@dataclass(eq=False)
class Tuple(Expr):
    elements: List[Expr]

    def __init__(self, elements: List[Expr], span: Span):
        super().__init__(NodeType.TUPLE, span)
        self.elements = elements

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_tuple(self)


@dataclass(eq=False)
class Array(Expr):
    elements: List[Expr]

    def __init__(self, elements: List[Expr], span: Span):
        super().__init__(NodeType.ARRAY, span)
        self.elements = elements

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_array(self)


@dataclass(eq=False)
class Block(Expr):
    """Block: { stmts; tail }"""
    stmts: List[Stmt]
    tail: Optional[Expr]

    def __init__(self, stmts: List[Stmt], tail: Optional[Expr], span: Span):
        super().__init__(NodeType.BLOCK, span)
        self.stmts = stmts
        self.tail = tail

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_block(self)


@dataclass(eq=False)
class If(Expr):
    """Plain if/else (if let lowers to Match)"""
    condition: Expr
    then_block: Block
    else_expr: Optional[Expr]

    def __init__(self, condition: Expr, then_block: Block, else_expr: Optional[Expr], span: Span):
        super().__init__(NodeType.IF, span)
        self.condition = condition
        self.then_block = then_block
        self.else_expr = else_expr

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_if(self)


@dataclass(eq=False)
class MatchArm(HirNode):
    """Match arm: pattern => body"""
    pattern: Pattern
    body: Expr

    def __init__(self, pattern: Pattern, body: Expr, span: Span):
        super().__init__(NodeType.MATCH_ARM, span)
        self.pattern = pattern
        self.body = body

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_arm(self)


@dataclass(eq=False)
class Match(Expr):
    """
    Match expression (Rust: ExprKind::Match(scrutinee, arms, source)).

    `source` tells an explicit `match` apart from the desugared forms.
    """
    scrutinee: Expr
    arms: List[MatchArm]
    source: MatchSource

    def __init__(self, scrutinee: Expr, arms: List[MatchArm], source: MatchSource, span: Span):
        super().__init__(NodeType.MATCH, span)
        self.scrutinee = scrutinee
        self.arms = arms
        self.source = source

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_match(self)


@dataclass(eq=False)
class Loop(Expr):
    body: Block
    source: LoopSource

    def __init__(self, body: Block, source: LoopSource, span: Span):
        super().__init__(NodeType.LOOP, span)
        self.body = body
        self.source = source

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_loop(self)


@dataclass(eq=False)
class Break(Expr):
    def __init__(self, span: Span):
        super().__init__(NodeType.BREAK, span)

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_break(self)


@dataclass(eq=False)
class Continue(Expr):
    def __init__(self, span: Span):
        super().__init__(NodeType.CONTINUE, span)

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_continue(self)


@dataclass(eq=False)
class Return(Expr):
    value: Optional[Expr]

    def __init__(self, value: Optional[Expr], span: Span):
        super().__init__(NodeType.RETURN, span)
        self.value = value

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_return(self)


# ============================================================================
# Patterns
# ============================================================================

@dataclass(eq=False)
class WildPattern(Pattern):
    """Wildcard pattern: _"""

    def __init__(self, span: Span):
        super().__init__(NodeType.WILD_PAT, span)

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_wild_pat(self)


@dataclass(eq=False)
class BindingPattern(Pattern):
    """Binding pattern: x, mut x"""
    name: str
    mutable: bool

    def __init__(self, name: str, mutable: bool, span: Span):
        super().__init__(NodeType.BINDING_PAT, span)
        self.name = name
        self.mutable = mutable

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_binding_pat(self)


@dataclass(eq=False)
class LitPattern(Pattern):
    literal: Literal

    def __init__(self, literal: Literal, span: Span):
        super().__init__(NodeType.LIT_PAT, span)
        self.literal = literal

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_lit_pat(self)


@dataclass(eq=False)
class TuplePattern(Pattern):
    """
    Tuple pattern: (a, b), (first, ..)

    `ddpos` is the index of a `..` rest marker among the written elements, if any.
    """
    subpatterns: List[Pattern]
    ddpos: Optional[int]

    def __init__(self, subpatterns: List[Pattern], ddpos: Optional[int], span: Span):
        super().__init__(NodeType.TUPLE_PAT, span)
        self.subpatterns = subpatterns
        self.ddpos = ddpos

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_tuple_pat(self)


@dataclass(eq=False)
class TupleStructPattern(Pattern):
    """
    Tuple-struct pattern: Some(x), Ok((a, b)), Point(x, ..)

    Rust Pattern: PatKind::TupleStruct(QPath, &[Pat], Option<usize>)
    """
    qpath: QPath
    subpatterns: List[Pattern]
    ddpos: Optional[int]

    def __init__(self, qpath: QPath, subpatterns: List[Pattern], ddpos: Optional[int], span: Span):
        super().__init__(NodeType.TUPLE_STRUCT_PAT, span)
        self.qpath = qpath
        self.subpatterns = subpatterns
        self.ddpos = ddpos

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_tuple_struct_pat(self)


@dataclass(eq=False)
class PathPattern(Pattern):
    """Unit variant or constant pattern: None, Ordering::Less"""
    qpath: QPath

    def __init__(self, qpath: QPath, span: Span):
        super().__init__(NodeType.PATH_PAT, span)
        self.qpath = qpath

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_path_pat(self)


@dataclass(eq=False)
class RefPattern(Pattern):
    """&pat / &mut pat"""
    inner: Pattern
    mutable: bool

    def __init__(self, inner: Pattern, mutable: bool, span: Span):
        super().__init__(NodeType.REF_PAT, span)
        self.inner = inner
        self.mutable = mutable

    def accept(self, visitor: 'HirVisitor[T]') -> T:
        return visitor.visit_ref_pat(self)
