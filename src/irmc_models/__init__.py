"""
Configuration and state models for Fujitsu iRMC / Redfish managed servers.
"""

from .diagnostics import Diagnostic, Diagnostics, Severity
from .errors import CapacityTypeMismatchError, IrmcModelError, StateMappingError
from .quantity import (
    DEFAULT_CAPACITY_TOLERANCE,
    AbsoluteTolerance,
    BlockAlignedTolerance,
    CapacityBytes,
    RelativeTolerance,
    SemanticEquality,
    semantic_equals,
    structural_equals,
)

__all__ = [
    "DEFAULT_CAPACITY_TOLERANCE",
    "AbsoluteTolerance",
    "BlockAlignedTolerance",
    "CapacityBytes",
    "CapacityTypeMismatchError",
    "Diagnostic",
    "Diagnostics",
    "IrmcModelError",
    "RelativeTolerance",
    "SemanticEquality",
    "Severity",
    "StateMappingError",
    "semantic_equals",
    "structural_equals",
]
