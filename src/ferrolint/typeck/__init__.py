"""
Type inference: HIR to per-node type tables
"""

from .results import TypeckResults
from .inference import TypeInferencePass, TypeInferencer, FunctionSignature
from .lowering import lower_type

__all__ = ["TypeckResults", "TypeInferencePass", "TypeInferencer", "FunctionSignature", "lower_type"]
