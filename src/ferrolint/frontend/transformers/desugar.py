"""
Desugaring of surface control flow into Match (Rust pattern: rustc_ast_lowering)

if let P = e { A } else { B }  =>  match e { P => { A }, _ => { B } }      (IfLetDesugar)
while c { A }                  =>  loop { match c { true => { A }, _ => break } }
while let P = e { A }          =>  loop { match e { P => { A }, _ => break } }
for P in e { A }               =>  loop { match e { None => break, Some(P) => { A } } }
e?                             =>  match e { Ok(val) => val, Err(err) => return Err(err) }

Synthesized nodes reuse the span of the construct they were lowered from.
"""

from typing import Optional

from ...shared import (
    Span, Expr, Pattern, Block, Match, MatchArm, MatchSource, Loop, LoopSource,
    Break, Return, Call, PathExpr, Literal, LitKind,
    WildPattern, BindingPattern, LitPattern, TupleStructPattern, PathPattern,
    Path, PathSegment, QPath, QPathKind,
)


def lang_qpath(name: str, span: Span) -> QPath:
    """Resolved single-segment path to a prelude item (Some, None, Ok, Err)"""
    return QPath(QPathKind.RESOLVED, Path([PathSegment(name, [], span)], span))


class DesugarBuilder:
    """Builds the desugared HIR shapes for the concise control-flow forms"""

    def lower_if_let(self, pattern: Pattern, scrutinee: Expr, then_block: Block,
                     else_expr: Optional[Expr], span: Span) -> Match:
        if else_expr is None:
            else_span = Span(then_block.span.hi, then_block.span.hi, span.file, span.expansion)
            else_expr = Block([], None, else_span)
        arms = [
            MatchArm(pattern, then_block, pattern.span.to(then_block.span)),
            MatchArm(WildPattern(else_expr.span), else_expr, else_expr.span),
        ]
        return Match(scrutinee, arms, MatchSource.IF_LET_DESUGAR, span)

    def lower_while(self, condition: Expr, body: Block, span: Span) -> Loop:
        arms = [
            MatchArm(LitPattern(Literal(True, LitKind.BOOL, condition.span), condition.span), body, body.span),
            MatchArm(WildPattern(condition.span), Break(condition.span), condition.span),
        ]
        match_expr = Match(condition, arms, MatchSource.WHILE_DESUGAR, span)
        return Loop(Block([], match_expr, body.span), LoopSource.WHILE, span)

    def lower_while_let(self, pattern: Pattern, scrutinee: Expr, body: Block, span: Span) -> Loop:
        arms = [
            MatchArm(pattern, body, pattern.span.to(body.span)),
            MatchArm(WildPattern(scrutinee.span), Break(scrutinee.span), scrutinee.span),
        ]
        match_expr = Match(scrutinee, arms, MatchSource.WHILE_LET_DESUGAR, span)
        return Loop(Block([], match_expr, body.span), LoopSource.WHILE_LET, span)

    def lower_for(self, pattern: Pattern, iterable: Expr, body: Block, span: Span) -> Loop:
        arms = [
            MatchArm(PathPattern(lang_qpath("None", iterable.span), iterable.span),
                     Break(iterable.span), iterable.span),
            MatchArm(TupleStructPattern(lang_qpath("Some", pattern.span), [pattern], None, pattern.span),
                     body, pattern.span.to(body.span)),
        ]
        match_expr = Match(iterable, arms, MatchSource.FOR_LOOP_DESUGAR, span)
        return Loop(Block([], match_expr, body.span), LoopSource.FOR_LOOP, span)

    def lower_try(self, operand: Expr, span: Span) -> Match:
        op_span = operand.span
        ok_arm = MatchArm(
            TupleStructPattern(lang_qpath("Ok", op_span), [BindingPattern("val", False, op_span)], None, op_span),
            PathExpr(QPath(QPathKind.RESOLVED, Path([PathSegment("val", [], op_span)], op_span)), op_span),
            op_span,
        )
        err_value = Call(
            PathExpr(lang_qpath("Err", op_span), op_span),
            [PathExpr(QPath(QPathKind.RESOLVED, Path([PathSegment("err", [], op_span)], op_span)), op_span)],
            op_span,
        )
        err_arm = MatchArm(
            TupleStructPattern(lang_qpath("Err", op_span), [BindingPattern("err", False, op_span)], None, op_span),
            Return(err_value, op_span),
            op_span,
        )
        return Match(operand, [ok_arm, err_arm], MatchSource.TRY_DESUGAR, span)
