"""
Shared components: HIR, spans, types, diagnostics.

Rust Pattern: Shared foundational types and utilities
"""

from .source_location import Span, DUMMY_SP
from .source_map import SourceMap, SourceFile
from .errors import (
    Applicability, Suggestion, Diagnostic, DiagnosticReporter,
    FerrolintError, SpanSnippetError, LintRegistrationError, LintInternalError,
)
from .types import (
    Ty, TypeKind, PrimitiveType, AdtType, RefType, TupleType, SliceType,
    UNKNOWN, UNIT, BOOL, CHAR, STR, I32, USIZE,
)
from .nodes import (
    HirNode, HirId, NodeType, Expr, Stmt, Pattern,
    MatchSource, LoopSource, QPathKind, LitKind, UnOp, BinOp,
    TypeRef, PathSegment, Path, QPath,
    Crate, FnItem, Param, Let, ExprStmt, ItemStmt,
    Literal, PathExpr, Call, MethodCall, MacroCall, Field, Index, Unary, AddrOf,
    Binary, Assign, Tuple, Array, Block, If, Match, MatchArm, Loop, Break, Continue, Return,
    WildPattern, BindingPattern, LitPattern, TuplePattern, TupleStructPattern, PathPattern,
    RefPattern,
)
from .hir_visitor import HirVisitor
