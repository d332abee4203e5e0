"""
HIR Visitor

Rust Pattern: rustc_hir::intravisit::Visitor

Design:
- One visit_* method per node kind, each defaulting to a walk of its children
- All child traversal funnels through visit_expr / visit_stmt / visit_pat, so a
  subclass can hook every expression in one place (LateLintWalker does this)
- Arm bodies and else branches are walked like any other expression
"""

from typing import Generic, TypeVar

from .nodes import (
    HirNode, Expr, Stmt, Pattern,
    Crate, FnItem, Param, Let, ExprStmt, ItemStmt,
    Literal, PathExpr, Call, MethodCall, MacroCall, Field, Index, Unary, AddrOf,
    Binary, Assign, Tuple, Array, Block, If, Match, MatchArm, Loop, Break, Continue, Return,
    WildPattern, BindingPattern, LitPattern, TuplePattern, TupleStructPattern, PathPattern,
    RefPattern,
)

T = TypeVar("T")


class HirVisitor(Generic[T]):
    """
    Default-walking HIR visitor (Rust: intravisit::Visitor + walk_*).

    Usage:
        class Counter(HirVisitor):
            def __init__(self):
                self.calls = 0

            def visit_method_call(self, node):
                self.calls += 1
                super().visit_method_call(node)
    """

    # =========================================================================
    # Entry points (override to hook every node of a category)
    # =========================================================================

    def visit(self, node: HirNode) -> T:
        return node.accept(self)

    def visit_expr(self, expr: Expr) -> T:
        return expr.accept(self)

    def visit_stmt(self, stmt: Stmt) -> T:
        return stmt.accept(self)

    def visit_pat(self, pat: Pattern) -> T:
        return pat.accept(self)

    # =========================================================================
    # Items and statements
    # =========================================================================

    def visit_crate(self, node: Crate) -> None:
        for stmt in node.stmts:
            self.visit_stmt(stmt)

    def visit_fn_item(self, node: FnItem) -> None:
        for param in node.params:
            param.accept(self)
        self.visit_expr(node.body)

    def visit_param(self, node: Param) -> None:
        self.visit_pat(node.pattern)

    def visit_let(self, node: Let) -> None:
        if node.init is not None:
            self.visit_expr(node.init)
        self.visit_pat(node.pattern)

    def visit_expr_stmt(self, node: ExprStmt) -> None:
        self.visit_expr(node.expr)

    def visit_item_stmt(self, node: ItemStmt) -> None:
        node.item.accept(self)

    # =========================================================================
    # Expressions
    # =========================================================================

    def visit_literal(self, node: Literal) -> None:
        pass

    def visit_path_expr(self, node: PathExpr) -> None:
        pass

    def visit_call(self, node: Call) -> None:
        self.visit_expr(node.func)
        for arg in node.args:
            self.visit_expr(arg)

    def visit_method_call(self, node: MethodCall) -> None:
        self.visit_expr(node.receiver)
        for arg in node.args:
            self.visit_expr(arg)

    def visit_macro_call(self, node: MacroCall) -> None:
        for arg in node.args:
            self.visit_expr(arg)

    def visit_field(self, node: Field) -> None:
        self.visit_expr(node.receiver)

    def visit_index(self, node: Index) -> None:
        self.visit_expr(node.receiver)
        self.visit_expr(node.index)

    def visit_unary(self, node: Unary) -> None:
        self.visit_expr(node.operand)

    def visit_addr_of(self, node: AddrOf) -> None:
        self.visit_expr(node.operand)

    def visit_binary(self, node: Binary) -> None:
        self.visit_expr(node.left)
        self.visit_expr(node.right)

    def visit_assign(self, node: Assign) -> None:
        self.visit_expr(node.target)
        self.visit_expr(node.value)

    def visit_tuple(self, node: Tuple) -> None:
        for elem in node.elements:
            self.visit_expr(elem)

    def visit_array(self, node: Array) -> None:
        for elem in node.elements:
            self.visit_expr(elem)

    def visit_block(self, node: Block) -> None:
        for stmt in node.stmts:
            self.visit_stmt(stmt)
        if node.tail is not None:
            self.visit_expr(node.tail)

    def visit_if(self, node: If) -> None:
        self.visit_expr(node.condition)
        self.visit_expr(node.then_block)
        if node.else_expr is not None:
            self.visit_expr(node.else_expr)

    def visit_match(self, node: Match) -> None:
        self.visit_expr(node.scrutinee)
        for arm in node.arms:
            arm.accept(self)

    def visit_arm(self, node: MatchArm) -> None:
        self.visit_pat(node.pattern)
        self.visit_expr(node.body)

    def visit_loop(self, node: Loop) -> None:
        self.visit_expr(node.body)

    def visit_break(self, node: Break) -> None:
        pass

    def visit_continue(self, node: Continue) -> None:
        pass

    def visit_return(self, node: Return) -> None:
        if node.value is not None:
            self.visit_expr(node.value)

    # =========================================================================
    # Patterns
    # =========================================================================

    def visit_wild_pat(self, node: WildPattern) -> None:
        pass

    def visit_binding_pat(self, node: BindingPattern) -> None:
        pass

    def visit_lit_pat(self, node: LitPattern) -> None:
        pass

    def visit_tuple_pat(self, node: TuplePattern) -> None:
        for sub in node.subpatterns:
            self.visit_pat(sub)

    def visit_tuple_struct_pat(self, node: TupleStructPattern) -> None:
        for sub in node.subpatterns:
            self.visit_pat(sub)

    def visit_path_pat(self, node: PathPattern) -> None:
        pass

    def visit_ref_pat(self, node: RefPattern) -> None:
        self.visit_pat(node.inner)
