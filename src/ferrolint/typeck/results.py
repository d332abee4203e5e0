"""
Type tables

Rust Pattern: rustc_middle::ty::TypeckResults
"""

from typing import Dict, Optional

from ..shared.nodes import HirNode, HirId
from ..shared.types import Ty, UNKNOWN


class TypeckResults:
    """
    Per-node types produced by TypeInferencePass (Rust: TypeckResults::node_types).

    Nodes never seen by inference, and nodes inferred as UNKNOWN, have no
    type as far as lints are concerned.
    """

    def __init__(self):
        self.node_types: Dict[HirId, Ty] = {}

    def record(self, node: HirNode, ty: Ty) -> None:
        self.node_types[node.hir_id] = ty

    def node_type_opt(self, hir_id: HirId) -> Optional[Ty]:
        ty = self.node_types.get(hir_id)
        if ty is None or ty.is_unknown():
            return None
        return ty

    def expr_ty_opt(self, expr: HirNode) -> Optional[Ty]:
        """Rust: TypeckResults::expr_ty_opt"""
        return self.node_type_opt(expr.hir_id)

    def expr_ty(self, expr: HirNode) -> Ty:
        return self.node_types.get(expr.hir_id, UNKNOWN)

    def __len__(self) -> int:
        return len(self.node_types)
