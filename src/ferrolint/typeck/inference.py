"""
Type Inference Pass

Rust Pattern: rustc_hir_typeck

Best effort, single forward pass: no unification and no trait solving.
Whatever cannot be derived from literals, annotations, constructors, known
function signatures and the built-in method table is UNKNOWN, and lints
treat UNKNOWN as "type unavailable".
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple as TupleOf

from ..shared.hir_visitor import HirVisitor
from ..shared.nodes import (
    Expr, Pattern,
    Crate, FnItem, Let, ExprStmt, ItemStmt,
    Literal, LitKind, PathExpr, Call, MethodCall, MacroCall, Field, Index, Unary, UnOp, AddrOf,
    Binary, Assign, Tuple, Array, Block, If, Match, MatchArm, MatchSource, Loop, LoopSource,
    Break, Continue, Return,
    BindingPattern, TuplePattern, TupleStructPattern, RefPattern,
)
from ..shared.types import (
    Ty, AdtType, RefType, TupleType, SliceType, UNKNOWN, UNIT, BOOL, CHAR, STR, I32, peel_refs,
)
from ..lint import paths
from .lowering import lower_type
from .methods import method_return_type
from .results import TypeckResults

logger = logging.getLogger("ferrolint.typeck.inference")


@dataclass
class FunctionSignature:
    """Signature of a crate-local fn, collected before bodies are checked"""
    name: str
    parameter_types: TupleOf[Ty, ...]
    return_type: Ty


class TypeInferencePass:
    """
    Type inference pass (Rust naming: rustc_hir_typeck::typeck).

    Implementation Alignment:
    - Signatures of every fn item are collected first, so calls may precede definitions
    - Every expression node gets an entry in the resulting TypeckResults
    """

    def run(self, crate: Crate) -> TypeckResults:
        inferencer = TypeInferencer()
        crate.accept(inferencer)
        logger.debug(f"Type inference recorded {len(inferencer.results)} node types")
        return inferencer.results


class TypeInferencer(HirVisitor[Ty]):
    """
    Expression typer (Rust naming: FnCtxt).

    Each visit_* returns the node's type; visit_expr records it.
    """

    def __init__(self):
        self.results = TypeckResults()
        self.signatures: Dict[str, FunctionSignature] = {}
        self._scope_stack: List[Dict[str, Ty]] = [{}]

    # =========================================================================
    # Scopes
    # =========================================================================

    def _get_var(self, name: str) -> Optional[Ty]:
        """Look a local up through the scope chain (inner -> outer)"""
        for scope in reversed(self._scope_stack):
            if name in scope:
                return scope[name]
        return None

    def _set_var(self, name: str, ty: Ty) -> None:
        self._scope_stack[-1][name] = ty

    @contextmanager
    def _scope(self):
        """Context manager for entering/exiting a scope (RAII)"""
        self._scope_stack.append({})
        try:
            yield
        finally:
            if len(self._scope_stack) > 1:
                self._scope_stack.pop()

    # =========================================================================
    # Entry points
    # =========================================================================

    def visit_expr(self, expr: Expr) -> Ty:
        ty = expr.accept(self)
        if ty is None:
            ty = UNKNOWN
        self.results.record(expr, ty)
        return ty

    # =========================================================================
    # Items and statements
    # =========================================================================

    def _collect_signature(self, item: FnItem) -> None:
        self.signatures[item.name] = FunctionSignature(
            name=item.name,
            parameter_types=tuple(lower_type(p.ty) for p in item.params),
            return_type=lower_type(item.ret_ty) if item.ret_ty is not None else UNIT,
        )

    def visit_crate(self, node: Crate) -> Ty:
        for item in node.fn_items():
            self._collect_signature(item)
        with self._scope():
            for stmt in node.stmts:
                self.visit_stmt(stmt)
        return UNIT

    def visit_fn_item(self, node: FnItem) -> Ty:
        if node.name not in self.signatures:
            self._collect_signature(node)
        with self._scope():
            for param in node.params:
                self._bind_pattern(param.pattern, lower_type(param.ty))
            self.visit_expr(node.body)
        return UNIT

    def visit_let(self, node: Let) -> Ty:
        init_ty = self.visit_expr(node.init) if node.init is not None else UNKNOWN
        declared = lower_type(node.ty)
        self._bind_pattern(node.pattern, init_ty if declared.is_unknown() else declared)
        return UNIT

    def visit_expr_stmt(self, node: ExprStmt) -> Ty:
        self.visit_expr(node.expr)
        return UNIT

    def visit_item_stmt(self, node: ItemStmt) -> Ty:
        return node.item.accept(self)

    # =========================================================================
    # Patterns
    # =========================================================================

    def _bind_pattern(self, pattern: Pattern, ty: Ty) -> None:
        """Bind every name a pattern introduces to the type of the part it matches"""
        if isinstance(pattern, BindingPattern):
            self._set_var(pattern.name, ty)
        elif isinstance(pattern, TupleStructPattern):
            inner = self._variant_payload(pattern.qpath.path.last_name, ty)
            for sub in pattern.subpatterns:
                self._bind_pattern(sub, inner)
        elif isinstance(pattern, TuplePattern):
            elements = ty.elements if isinstance(ty, TupleType) else ()
            exact = pattern.ddpos is None and len(elements) == len(pattern.subpatterns)
            for i, sub in enumerate(pattern.subpatterns):
                self._bind_pattern(sub, elements[i] if exact else UNKNOWN)
        elif isinstance(pattern, RefPattern):
            self._bind_pattern(pattern.inner, ty.inner if isinstance(ty, RefType) else UNKNOWN)

    def _variant_payload(self, variant: str, ty: Ty) -> Ty:
        if not isinstance(ty, AdtType):
            return UNKNOWN
        if ty.path == paths.OPTION and variant == "Some":
            return ty.arg(0)
        if ty.path == paths.RESULT and variant == "Ok":
            return ty.arg(0)
        if ty.path == paths.RESULT and variant == "Err":
            return ty.arg(1)
        return UNKNOWN

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_literal(self, node: Literal) -> Ty:
        if node.lit_kind == LitKind.INT:
            return I32
        if node.lit_kind == LitKind.STR:
            return RefType(STR)
        if node.lit_kind == LitKind.CHAR:
            return CHAR
        return BOOL

    def visit_path_expr(self, node: PathExpr) -> Ty:
        path = node.qpath.path
        if len(path.segments) == 1:
            local = self._get_var(path.last_name)
            if local is not None:
                return local
        if path.last_name == "None":
            return AdtType(paths.OPTION, (UNKNOWN,))
        return UNKNOWN

    def visit_call(self, node: Call) -> Ty:
        self.visit_expr(node.func)
        arg_types = [self.visit_expr(arg) for arg in node.args]
        if not isinstance(node.func, PathExpr):
            return UNKNOWN
        path = node.func.qpath.path
        name = path.last_name
        first = arg_types[0] if arg_types else UNKNOWN
        if len(path.segments) == 1 or path.segments[-2].name in ("Option", "Result"):
            if name == "Some":
                return AdtType(paths.OPTION, (first,))
            if name == "Ok":
                return AdtType(paths.RESULT, (first, UNKNOWN))
            if name == "Err":
                return AdtType(paths.RESULT, (UNKNOWN, first))
        if len(path.segments) == 1 and name in self.signatures:
            return self.signatures[name].return_type
        return UNKNOWN

    def visit_method_call(self, node: MethodCall) -> Ty:
        receiver_ty = self.visit_expr(node.receiver)
        arg_types = [self.visit_expr(arg) for arg in node.args]
        generic_args = [lower_type(arg) for arg in node.segment.args]
        return method_return_type(receiver_ty, node.method_name, generic_args, arg_types)

    def visit_macro_call(self, node: MacroCall) -> Ty:
        arg_types = [self.visit_expr(arg) for arg in node.args]
        name = node.path.last_name
        if name == "format":
            return AdtType(paths.STRING)
        if name == "vec":
            return AdtType(paths.VEC, (arg_types[0] if arg_types else UNKNOWN,))
        if name in ("println", "print", "eprintln", "eprint", "assert", "assert_eq", "assert_ne"):
            return UNIT
        return UNKNOWN

    def visit_field(self, node: Field) -> Ty:
        receiver_ty = peel_refs(self.visit_expr(node.receiver))
        if isinstance(receiver_ty, TupleType) and node.name.isdigit():
            index = int(node.name)
            if index < len(receiver_ty.elements):
                return receiver_ty.elements[index]
        return UNKNOWN

    def visit_index(self, node: Index) -> Ty:
        receiver_ty = peel_refs(self.visit_expr(node.receiver))
        self.visit_expr(node.index)
        if isinstance(receiver_ty, SliceType):
            return receiver_ty.element
        if isinstance(receiver_ty, AdtType):
            if receiver_ty.path == paths.VEC:
                return receiver_ty.arg(0)
            if receiver_ty.path == paths.HASHMAP:
                return receiver_ty.arg(1)
        return UNKNOWN

    def visit_unary(self, node: Unary) -> Ty:
        operand_ty = self.visit_expr(node.operand)
        if node.op == UnOp.DEREF:
            return operand_ty.inner if isinstance(operand_ty, RefType) else UNKNOWN
        return operand_ty

    def visit_addr_of(self, node: AddrOf) -> Ty:
        return RefType(self.visit_expr(node.operand), node.mutable)

    def visit_binary(self, node: Binary) -> Ty:
        left = self.visit_expr(node.left)
        self.visit_expr(node.right)
        if node.op.is_comparison():
            return BOOL
        return left

    def visit_assign(self, node: Assign) -> Ty:
        self.visit_expr(node.target)
        self.visit_expr(node.value)
        return UNIT

    def visit_tuple(self, node: Tuple) -> Ty:
        return TupleType(tuple(self.visit_expr(e) for e in node.elements))

    def visit_array(self, node: Array) -> Ty:
        # [T; N] is approximated by [T]
        element_types = [self.visit_expr(e) for e in node.elements]
        return SliceType(element_types[0] if element_types else UNKNOWN)

    def visit_block(self, node: Block) -> Ty:
        with self._scope():
            for stmt in node.stmts:
                self.visit_stmt(stmt)
            if node.tail is not None:
                return self.visit_expr(node.tail)
            # `{ ...; match x { .. } }` - a trailing block-like statement without `;` is the value
            last = node.stmts[-1] if node.stmts else None
            if isinstance(last, ExprStmt) and not last.semi:
                return self.results.expr_ty(last.expr)
        return UNIT

    def visit_if(self, node: If) -> Ty:
        self.visit_expr(node.condition)
        then_ty = self.visit_expr(node.then_block)
        if node.else_expr is None:
            return UNIT
        self.visit_expr(node.else_expr)
        return then_ty

    def visit_match(self, node: Match) -> Ty:
        scrutinee_ty = self.visit_expr(node.scrutinee)
        binding_ty = scrutinee_ty
        if node.source == MatchSource.FOR_LOOP_DESUGAR:
            binding_ty = AdtType(paths.OPTION, (self._iterator_item(scrutinee_ty),))

        arm_types = [self._check_arm(arm, binding_ty) for arm in node.arms]

        if node.source == MatchSource.TRY_DESUGAR:
            carrier = peel_refs(scrutinee_ty)
            if isinstance(carrier, AdtType) and carrier.path in (paths.RESULT, paths.OPTION):
                return carrier.arg(0)
            return UNKNOWN
        if node.source in (MatchSource.WHILE_DESUGAR, MatchSource.WHILE_LET_DESUGAR,
                           MatchSource.FOR_LOOP_DESUGAR):
            return UNIT
        return next((t for t in arm_types if not t.is_unknown()), UNKNOWN)

    def _check_arm(self, arm: MatchArm, scrutinee_ty: Ty) -> Ty:
        with self._scope():
            self._bind_pattern(arm.pattern, scrutinee_ty)
            return self.visit_expr(arm.body)

    def _iterator_item(self, iterable_ty: Ty) -> Ty:
        """`for x in v` yields T for Vec<T>, &T for &Vec<T>"""
        if isinstance(iterable_ty, RefType):
            inner = self._iterator_item(iterable_ty.inner)
            return UNKNOWN if inner.is_unknown() else RefType(inner, iterable_ty.mutable)
        if isinstance(iterable_ty, SliceType):
            return iterable_ty.element
        if isinstance(iterable_ty, AdtType) and iterable_ty.path == paths.VEC:
            return iterable_ty.arg(0)
        return UNKNOWN

    def visit_loop(self, node: Loop) -> Ty:
        self.visit_expr(node.body)
        # `loop` only yields through `break value`, which the subset lacks
        return UNKNOWN if node.source == LoopSource.LOOP else UNIT

    def visit_break(self, node: Break) -> Ty:
        return UNKNOWN

    def visit_continue(self, node: Continue) -> Ty:
        return UNKNOWN

    def visit_return(self, node: Return) -> Ty:
        if node.value is not None:
            self.visit_expr(node.value)
        return UNKNOWN
