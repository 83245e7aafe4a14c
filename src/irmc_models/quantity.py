"""
Byte capacity values with tolerance-based semantic equality.

RAID controllers round a requested volume capacity to stripe and block
boundaries, so the capacity read back from the controller rarely matches the
configured value byte for byte. ``CapacityBytes`` keeps exact (structural)
equality for hashing and deduplication and offers ``semantic_equals`` for
deciding whether an observed capacity still satisfies the desired one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .diagnostics import Diagnostics
from .errors import CapacityTypeMismatchError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

DEFAULT_CAPACITY_TOLERANCE = 500_000_000


@dataclass(frozen=True)
class CapacityBytes:
    """Signed 64-bit byte count. Negative values are accepted as-is."""
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"capacity must be an integer, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"capacity {self.value} does not fit in a signed 64-bit integer")

    @classmethod
    def from_raw(cls, raw: int) -> CapacityBytes:
        return cls(raw)

    def semantic_equals(
        self, other: object, policy: TolerancePolicy | None = None
    ) -> SemanticEquality:
        return semantic_equals(self, other, policy)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_int = core_schema.no_info_after_validator_function(
            cls, core_schema.int_schema(strict=True, ge=INT64_MIN, le=INT64_MAX)
        )
        return core_schema.json_or_python_schema(
            json_schema=from_int,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_int]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.value
            ),
        )


class TolerancePolicy(Protocol):
    """Decides whether two raw capacities are close enough to be equal."""

    def allows(self, desired: int, observed: int) -> bool:
        ...

    def describe_allowance(self, desired: int, observed: int) -> str:
        """Human readable allowance, used in drift diagnostics."""
        ...


@dataclass(frozen=True)
class AbsoluteTolerance:
    """Equal when the absolute difference is strictly below ``limit`` bytes."""
    limit: int = DEFAULT_CAPACITY_TOLERANCE

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError("absolute tolerance must be positive")

    def allows(self, desired: int, observed: int) -> bool:
        return abs(desired - observed) < self.limit

    def describe_allowance(self, desired: int, observed: int) -> str:
        return f"{self.limit} bytes"


@dataclass(frozen=True)
class RelativeTolerance:
    """Equal when the difference is below ``ratio`` of the larger magnitude."""
    ratio: float

    def __post_init__(self) -> None:
        if not 0 < self.ratio < 1:
            raise ValueError("relative tolerance ratio must be between 0 and 1")

    def _limit(self, desired: int, observed: int) -> float:
        return self.ratio * max(abs(desired), abs(observed))

    def allows(self, desired: int, observed: int) -> bool:
        diff = abs(desired - observed)
        return diff == 0 or diff < self._limit(desired, observed)

    def describe_allowance(self, desired: int, observed: int) -> str:
        return f"{int(self._limit(desired, observed))} bytes ({self.ratio:.2%})"


@dataclass(frozen=True)
class BlockAlignedTolerance:
    """Equal when both values round down to the same ``block_size`` boundary."""
    block_size: int

    def __post_init__(self) -> None:
        if self.block_size <= 0:
            raise ValueError("block size must be positive")

    def allows(self, desired: int, observed: int) -> bool:
        return desired // self.block_size == observed // self.block_size

    def describe_allowance(self, desired: int, observed: int) -> str:
        return f"rounding within a {self.block_size} byte block"


DEFAULT_POLICY = AbsoluteTolerance()


@dataclass(frozen=True)
class SemanticEquality:
    """Outcome of a semantic comparison. Truthy when the values are equal."""
    equal: bool
    difference: int
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def __bool__(self) -> bool:
        return self.equal


def semantic_equals(
    desired: object, observed: object, policy: TolerancePolicy | None = None
) -> SemanticEquality:
    """Compare two capacities under ``policy`` (absolute 500000000 bytes by default).

    Raises CapacityTypeMismatchError when either side is not a CapacityBytes;
    a mismatch of types is never reported as "not equal".
    """
    if not isinstance(desired, CapacityBytes):
        raise CapacityTypeMismatchError(desired)
    if not isinstance(observed, CapacityBytes):
        raise CapacityTypeMismatchError(observed)

    policy = policy or DEFAULT_POLICY
    diff = abs(desired.value - observed.value)
    if policy.allows(desired.value, observed.value):
        return SemanticEquality(equal=True, difference=diff)

    diags = Diagnostics()
    diags.add_error(
        "Capacity semantic equality",
        "Current volume capacity differs too much vs requested value "
        f"({diff} bytes while allowed "
        f"{policy.describe_allowance(desired.value, observed.value)})",
    )
    return SemanticEquality(equal=False, difference=diff, diagnostics=diags)


def structural_equals(a: object, b: object) -> bool:
    """Exact equality of the raw byte counts, no tolerance applied."""
    if not isinstance(a, CapacityBytes):
        raise CapacityTypeMismatchError(a)
    if not isinstance(b, CapacityBytes):
        raise CapacityTypeMismatchError(b)
    return a.value == b.value
