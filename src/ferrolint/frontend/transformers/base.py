"""
HIR Transformer

Converts the Lark parse tree straight into HIR nodes. Desugaring of the
concise control-flow forms is delegated to DesugarBuilder; literal tokens to
LiteralParser.
"""

from dataclasses import dataclass
from typing import List, Optional, Union, Any

from lark import Transformer, v_args
from lark.lexer import Token
from typing_extensions import TypeAlias

from ...shared import (
    Span, HirNode, Expr, Stmt, Pattern,
    Crate, FnItem, Param, Let, ExprStmt, ItemStmt,
    PathExpr, Call, MethodCall, MacroCall, Field, Index, Unary, AddrOf,
    Binary, Assign, Tuple, Array, Block, If, Match, MatchArm, MatchSource, Loop, LoopSource,
    Break, Continue, Return,
    WildPattern, BindingPattern, LitPattern, TuplePattern, TupleStructPattern, PathPattern,
    RefPattern, UnOp, BinOp,
    TypeRef, PathSegment, Path, QPath, QPathKind,
    FerrolintError,
)
from .literals import LiteralParser
from .desugar import DesugarBuilder

# Lark Meta object carries start_pos/end_pos when propagate_positions is on
LarkMeta: TypeAlias = Any


@dataclass
class RestMarker:
    """`..` inside a tuple or tuple-struct pattern (not a pattern on its own)"""
    span: Span


PatElem: TypeAlias = Union[Pattern, RestMarker]


@v_args(inline=True, meta=True)
class HirTransformer(Transformer):
    """
    Lark tree -> HIR (Rust pattern: rustc_ast_lowering::LoweringContext).

    Every rule callback receives (meta, *children); anonymous tokens are
    already filtered out by Lark.
    """

    def __init__(self) -> None:
        super().__init__()
        self.desugar: DesugarBuilder = DesugarBuilder()
        self.current_file: str = ""  # Must be set by parser before use
        self.current_expansion: Optional[str] = None  # Macro the source was expanded from, if any

    def __default__(self, data, children, meta):
        raise FerrolintError(f"Missing lowering for grammar rule '{data}'")

    def _span(self, meta: LarkMeta) -> Span:
        """Extract span from Lark meta object"""
        if not self.current_file:
            raise RuntimeError(
                "Parser bug: current_file not set. "
                "Parser must set current_file before transforming."
            )
        if meta is None or getattr(meta, "empty", True):
            return Span(0, 0, self.current_file, self.current_expansion)
        return Span(meta.start_pos, meta.end_pos, self.current_file, self.current_expansion)

    def _token_span(self, token: Token) -> Span:
        return Span(token.start_pos, token.end_pos, self.current_file, self.current_expansion)

    # =========================================================================
    # CRATE / ITEMS
    # =========================================================================

    def crate(self, meta: LarkMeta, *stmts: Stmt) -> Crate:
        return Crate(stmts=list(stmts), span=self._span(meta))

    def fn_item(self, meta: LarkMeta, name: Token, *rest: Any) -> ItemStmt:
        """Grammar: "fn" NAME "(" [params] ")" [ret_type] block"""
        params: List[Param] = []
        ret_ty: Optional[TypeRef] = None
        body: Optional[Block] = None
        for part in rest:
            if isinstance(part, list):
                params = part
            elif isinstance(part, TypeRef):
                ret_ty = part
            elif isinstance(part, Block):
                body = part
        span = self._span(meta)
        return ItemStmt(FnItem(str(name), params, ret_ty, body, span), span)

    def params(self, meta: LarkMeta, *params: Param) -> List[Param]:
        return list(params)

    def param(self, meta: LarkMeta, pattern: Pattern, ty: TypeRef) -> Param:
        return Param(pattern, ty, self._span(meta))

    def ret_type(self, meta: LarkMeta, ty: TypeRef) -> TypeRef:
        return ty

    # =========================================================================
    # STATEMENTS
    # =========================================================================

    def let_stmt(self, meta: LarkMeta, pattern: Pattern, *rest: Any) -> Let:
        """Grammar: "let" pattern [":" type] ["=" let_init] ";" """
        ty = next((r for r in rest if isinstance(r, TypeRef)), None)
        init = next((r for r in rest if isinstance(r, Expr)), None)
        return Let(pattern, ty, init, self._span(meta))

    def expr_stmt(self, meta: LarkMeta, expr: Expr) -> ExprStmt:
        return ExprStmt(expr, True, self._span(meta))

    def block_like_stmt(self, meta: LarkMeta, expr: Expr) -> ExprStmt:
        span = self._span(meta)
        return ExprStmt(expr, span.hi > expr.span.hi, span)

    def return_stmt(self, meta: LarkMeta, value: Optional[Expr] = None) -> ExprStmt:
        span = self._span(meta)
        return ExprStmt(Return(value, span), True, span)

    def break_stmt(self, meta: LarkMeta) -> ExprStmt:
        span = self._span(meta)
        return ExprStmt(Break(span), True, span)

    def continue_stmt(self, meta: LarkMeta) -> ExprStmt:
        span = self._span(meta)
        return ExprStmt(Continue(span), True, span)

    def block(self, meta: LarkMeta, *children: HirNode) -> Block:
        """Grammar: "{" stmt* [expr] "}" - a trailing Expr child is the block's value"""
        stmts = [c for c in children if isinstance(c, Stmt)]
        tail = children[-1] if children and isinstance(children[-1], Expr) else None
        return Block(stmts, tail, self._span(meta))

    # =========================================================================
    # BLOCK-LIKE EXPRESSIONS
    # =========================================================================

    def if_expr(self, meta: LarkMeta, condition: Expr, then_block: Block,
                else_expr: Optional[Expr] = None) -> If:
        return If(condition, then_block, else_expr, self._span(meta))

    def if_let_expr(self, meta: LarkMeta, pattern: Pattern, scrutinee: Expr, then_block: Block,
                    else_expr: Optional[Expr] = None) -> Match:
        return self.desugar.lower_if_let(pattern, scrutinee, then_block, else_expr, self._span(meta))

    def match_expr(self, meta: LarkMeta, scrutinee: Expr, *arms: MatchArm) -> Match:
        return Match(scrutinee, list(arms), MatchSource.NORMAL, self._span(meta))

    def match_arm(self, meta: LarkMeta, pattern: Pattern, body: Expr) -> MatchArm:
        return MatchArm(pattern, body, self._span(meta))

    def last_arm(self, meta: LarkMeta, pattern: Pattern, body: Expr) -> MatchArm:
        return MatchArm(pattern, body, self._span(meta))

    def while_expr(self, meta: LarkMeta, condition: Expr, body: Block) -> Loop:
        return self.desugar.lower_while(condition, body, self._span(meta))

    def while_let_expr(self, meta: LarkMeta, pattern: Pattern, scrutinee: Expr, body: Block) -> Loop:
        return self.desugar.lower_while_let(pattern, scrutinee, body, self._span(meta))

    def loop_expr(self, meta: LarkMeta, body: Block) -> Loop:
        return Loop(body, LoopSource.LOOP, self._span(meta))

    def for_expr(self, meta: LarkMeta, pattern: Pattern, iterable: Expr, body: Block) -> Loop:
        return self.desugar.lower_for(pattern, iterable, body, self._span(meta))

    # =========================================================================
    # OPERATORS
    # =========================================================================

    def _binary(self, meta: LarkMeta, op: BinOp, left: Expr, right: Expr) -> Binary:
        return Binary(op, left, right, self._span(meta))

    def assign(self, meta: LarkMeta, target: Expr, value: Expr) -> Assign:
        return Assign(target, value, self._span(meta))

    def or_op(self, meta, left, right):
        return self._binary(meta, BinOp.OR, left, right)

    def and_op(self, meta, left, right):
        return self._binary(meta, BinOp.AND, left, right)

    def eq_op(self, meta, left, right):
        return self._binary(meta, BinOp.EQ, left, right)

    def ne_op(self, meta, left, right):
        return self._binary(meta, BinOp.NE, left, right)

    def lt_op(self, meta, left, right):
        return self._binary(meta, BinOp.LT, left, right)

    def gt_op(self, meta, left, right):
        return self._binary(meta, BinOp.GT, left, right)

    def le_op(self, meta, left, right):
        return self._binary(meta, BinOp.LE, left, right)

    def ge_op(self, meta, left, right):
        return self._binary(meta, BinOp.GE, left, right)

    def add_op(self, meta, left, right):
        return self._binary(meta, BinOp.ADD, left, right)

    def sub_op(self, meta, left, right):
        return self._binary(meta, BinOp.SUB, left, right)

    def mul_op(self, meta, left, right):
        return self._binary(meta, BinOp.MUL, left, right)

    def div_op(self, meta, left, right):
        return self._binary(meta, BinOp.DIV, left, right)

    def rem_op(self, meta, left, right):
        return self._binary(meta, BinOp.REM, left, right)

    def neg_op(self, meta: LarkMeta, operand: Expr) -> Unary:
        return Unary(UnOp.NEG, operand, self._span(meta))

    def not_op(self, meta: LarkMeta, operand: Expr) -> Unary:
        return Unary(UnOp.NOT, operand, self._span(meta))

    def deref_op(self, meta: LarkMeta, operand: Expr) -> Unary:
        return Unary(UnOp.DEREF, operand, self._span(meta))

    def ref_op(self, meta: LarkMeta, operand: Expr) -> AddrOf:
        return AddrOf(operand, False, self._span(meta))

    def ref_mut_op(self, meta: LarkMeta, operand: Expr) -> AddrOf:
        return AddrOf(operand, True, self._span(meta))

    # =========================================================================
    # POSTFIX EXPRESSIONS
    # =========================================================================

    def method_call(self, meta: LarkMeta, receiver: Expr, name: Token,
                    args: Optional[List[Expr]] = None) -> MethodCall:
        span = self._span(meta)
        segment = PathSegment(str(name), [], self._token_span(name))
        method_span = span.with_lo(name.start_pos)
        return MethodCall(segment, receiver, args or [], method_span, span)

    def method_call_turbofish(self, meta: LarkMeta, receiver: Expr, name: Token,
                              generic_args: List[TypeRef],
                              args: Optional[List[Expr]] = None) -> MethodCall:
        span = self._span(meta)
        segment = PathSegment(str(name), generic_args, self._token_span(name))
        method_span = span.with_lo(name.start_pos)
        return MethodCall(segment, receiver, args or [], method_span, span)

    def field(self, meta: LarkMeta, receiver: Expr, name: Token) -> Field:
        return Field(receiver, str(name), self._span(meta))

    def tuple_field(self, meta: LarkMeta, receiver: Expr, index: Token) -> Field:
        return Field(receiver, str(index), self._span(meta))

    def index(self, meta: LarkMeta, receiver: Expr, index: Expr) -> Index:
        return Index(receiver, index, self._span(meta))

    def try_op(self, meta: LarkMeta, operand: Expr) -> Match:
        return self.desugar.lower_try(operand, self._span(meta))

    # =========================================================================
    # PRIMARY EXPRESSIONS
    # =========================================================================

    def _qpath(self, path: Path) -> QPath:
        if len(path.segments) > 1 and path.segments[0].name == "Self":
            return QPath(QPathKind.TYPE_RELATIVE, path)
        return QPath(QPathKind.RESOLVED, path)

    def path(self, meta: LarkMeta, *names: Token) -> Path:
        segments = [PathSegment(str(n), [], self._token_span(n)) for n in names]
        return Path(segments, self._span(meta))

    def path_expr(self, meta: LarkMeta, path: Path) -> PathExpr:
        return PathExpr(self._qpath(path), self._span(meta))

    def call_expr(self, meta: LarkMeta, path: Path, args: Optional[List[Expr]] = None) -> Call:
        func = PathExpr(self._qpath(path), path.span)
        return Call(func, args or [], self._span(meta))

    def macro_call_paren(self, meta: LarkMeta, path: Path, args: Optional[List[Expr]] = None) -> MacroCall:
        return MacroCall(path, args or [], "()", self._span(meta))

    def macro_call_bracket(self, meta: LarkMeta, path: Path, args: Optional[List[Expr]] = None) -> MacroCall:
        return MacroCall(path, args or [], "[]", self._span(meta))

    def paren_expr(self, meta: LarkMeta, expr: Expr) -> Expr:
        """(e) is e itself, spanning the parentheses (Rust: ExprKind::Paren lowering)"""
        expr.span = self._span(meta)
        return expr

    def args(self, meta: LarkMeta, *exprs: Expr) -> List[Expr]:
        return list(exprs)

    def tuple_expr(self, meta: LarkMeta, *elements: Expr) -> Tuple:
        return Tuple(list(elements), self._span(meta))

    def array_expr(self, meta: LarkMeta, elements: Optional[List[Expr]] = None) -> Array:
        return Array(elements or [], self._span(meta))

    def int_lit(self, meta: LarkMeta, token: Token):
        return LiteralParser.parse_int(token, self._span(meta))

    def str_lit(self, meta: LarkMeta, token: Token):
        return LiteralParser.parse_str(token, self._span(meta))

    def char_lit(self, meta: LarkMeta, token: Token):
        return LiteralParser.parse_char(token, self._span(meta))

    def true_lit(self, meta: LarkMeta):
        return LiteralParser.parse_bool(True, self._span(meta))

    def false_lit(self, meta: LarkMeta):
        return LiteralParser.parse_bool(False, self._span(meta))

    # =========================================================================
    # PATTERNS
    # =========================================================================

    def _split_rest(self, elems: List[PatElem]) -> "tuple[List[Pattern], Optional[int]]":
        """Drop the `..` marker and remember where it was (Rust: ddpos)"""
        subpatterns: List[Pattern] = []
        ddpos: Optional[int] = None
        for elem in elems:
            if isinstance(elem, RestMarker):
                if ddpos is not None:
                    raise FerrolintError("`..` can only be used once per pattern", elem.span)
                ddpos = len(subpatterns)
            else:
                subpatterns.append(elem)
        return subpatterns, ddpos

    def wild_pat(self, meta: LarkMeta, token: Token) -> WildPattern:
        return WildPattern(self._span(meta))

    def mut_binding_pat(self, meta: LarkMeta, name: Token) -> BindingPattern:
        return BindingPattern(str(name), True, self._span(meta))

    def path_pat(self, meta: LarkMeta, path: Path) -> Pattern:
        """A lone lowercase identifier binds; anything else names a unit variant or constant"""
        span = self._span(meta)
        if len(path.segments) == 1:
            name = path.segments[0].name
            if name[0].islower() or name[0] == "_":
                return BindingPattern(name, False, span)
        return PathPattern(self._qpath(path), span)

    def tuple_struct_pat(self, meta: LarkMeta, path: Path,
                         elems: Optional[List[PatElem]] = None) -> TupleStructPattern:
        subpatterns, ddpos = self._split_rest(elems or [])
        return TupleStructPattern(self._qpath(path), subpatterns, ddpos, self._span(meta))

    def tuple_pat(self, meta: LarkMeta, *elems: PatElem) -> TuplePattern:
        subpatterns, ddpos = self._split_rest(list(elems))
        return TuplePattern(subpatterns, ddpos, self._span(meta))

    def paren_pat(self, meta: LarkMeta, elem: PatElem) -> Pattern:
        """(pat) is pat itself; (..) is the all-rest tuple pattern"""
        if isinstance(elem, RestMarker):
            return TuplePattern([], 0, self._span(meta))
        return elem

    def pat_list(self, meta: LarkMeta, *elems: PatElem) -> List[PatElem]:
        return list(elems)

    def rest_pat(self, meta: LarkMeta) -> RestMarker:
        return RestMarker(self._span(meta))

    def ref_pat(self, meta: LarkMeta, inner: Pattern) -> RefPattern:
        return RefPattern(inner, False, self._span(meta))

    def lit_pat(self, meta: LarkMeta, literal) -> LitPattern:
        return LitPattern(literal, self._span(meta))

    # =========================================================================
    # TYPES
    # =========================================================================

    def type_path(self, meta: LarkMeta, *segments: PathSegment) -> TypeRef:
        span = self._span(meta)
        return TypeRef("path", span, path=Path(list(segments), span))

    def type_segment(self, meta: LarkMeta, name: Token,
                     generic_args: Optional[List[TypeRef]] = None) -> PathSegment:
        return PathSegment(str(name), generic_args or [], self._span(meta))

    def type_list(self, meta: LarkMeta, *types: TypeRef) -> List[TypeRef]:
        return list(types)

    def generic_args(self, meta: LarkMeta, types: Optional[List[TypeRef]] = None) -> List[TypeRef]:
        """Turbofish arguments; `::<>` is an empty list"""
        return types or []

    def ref_type(self, meta: LarkMeta, inner: TypeRef) -> TypeRef:
        return TypeRef("ref", self._span(meta), inner=inner)

    def ref_mut_type(self, meta: LarkMeta, inner: TypeRef) -> TypeRef:
        return TypeRef("ref", self._span(meta), inner=inner, mutable=True)

    def tuple_type(self, meta: LarkMeta, *elements: TypeRef) -> TypeRef:
        return TypeRef("tuple", self._span(meta), elements=list(elements))

    def slice_type(self, meta: LarkMeta, inner: TypeRef) -> TypeRef:
        return TypeRef("slice", self._span(meta), inner=inner)

    def infer_type(self, meta: LarkMeta, token: Token) -> TypeRef:
        return TypeRef("infer", self._span(meta))
