"""
Tests for capacity values and their semantic equality.
"""

import dataclasses

import pytest
from pydantic import ValidationError

from irmc_models.errors import CapacityTypeMismatchError
from irmc_models.models import StorageVolumeResourceModel, resource_schema
from irmc_models.quantity import (
    DEFAULT_CAPACITY_TOLERANCE,
    INT64_MAX,
    INT64_MIN,
    AbsoluteTolerance,
    BlockAlignedTolerance,
    CapacityBytes,
    RelativeTolerance,
    semantic_equals,
    structural_equals,
)

TB = 1_000_000_000_000


class TestCapacityBytes:
    """Construction and structural equality."""

    def test_from_raw(self):
        assert CapacityBytes.from_raw(42).value == 42
        assert int(CapacityBytes(42)) == 42

    def test_negative_values_are_accepted(self):
        assert CapacityBytes(-1).value == -1

    def test_int64_bounds(self):
        assert CapacityBytes(INT64_MIN).value == INT64_MIN
        assert CapacityBytes(INT64_MAX).value == INT64_MAX
        with pytest.raises(ValueError):
            CapacityBytes(INT64_MAX + 1)
        with pytest.raises(ValueError):
            CapacityBytes(INT64_MIN - 1)

    @pytest.mark.parametrize("raw", [1.5, "10", True, None])
    def test_rejects_non_integers(self, raw):
        with pytest.raises(TypeError):
            CapacityBytes(raw)

    def test_immutable(self):
        capacity = CapacityBytes(10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            capacity.value = 11

    def test_structural_equality_ignores_tolerance(self):
        a, b = CapacityBytes(TB), CapacityBytes(TB + 1)
        assert not structural_equals(a, b)
        assert a != b
        assert structural_equals(a, CapacityBytes(TB))
        assert a == CapacityBytes(TB)

    def test_structural_equality_rejects_raw_ints(self):
        with pytest.raises(CapacityTypeMismatchError):
            structural_equals(CapacityBytes(1), 1)
        with pytest.raises(CapacityTypeMismatchError):
            structural_equals(1, CapacityBytes(1))
        assert CapacityBytes(1) != 1

    def test_hashable(self):
        assert len({CapacityBytes(1), CapacityBytes(1), CapacityBytes(2)}) == 2

    def test_not_equal_to_plain_int(self):
        assert CapacityBytes(1) != 1


class TestSemanticEquals:
    """Tolerance-based comparison with the default absolute policy."""

    def test_default_tolerance(self):
        assert DEFAULT_CAPACITY_TOLERANCE == 500_000_000

    def test_controller_rounding_is_accepted(self):
        result = semantic_equals(CapacityBytes(TB), CapacityBytes(TB + 400))
        assert result
        assert result.equal is True
        assert result.difference == 400
        assert len(result.diagnostics) == 0

    def test_large_difference_is_drift(self):
        result = semantic_equals(CapacityBytes(TB), CapacityBytes(1_000_600_000_000))
        assert not result
        assert result.difference == 600_000_000
        assert result.diagnostics.has_error()
        detail = result.diagnostics.errors()[0].detail
        assert "600000000" in detail
        assert "500000000" in detail

    def test_boundary_is_exclusive(self):
        assert not semantic_equals(CapacityBytes(0), CapacityBytes(500_000_000))
        assert semantic_equals(CapacityBytes(0), CapacityBytes(499_999_999))
        assert not semantic_equals(CapacityBytes(-250_000_000), CapacityBytes(250_000_000))

    @pytest.mark.parametrize(
        "a,b",
        [
            (0, 0),
            (TB, TB + 400),
            (TB, TB + 600_000_000),
            (-5, 499_999_990),
            (INT64_MIN, INT64_MAX),
        ],
    )
    def test_symmetric(self, a, b):
        forward = semantic_equals(CapacityBytes(a), CapacityBytes(b))
        backward = semantic_equals(CapacityBytes(b), CapacityBytes(a))
        assert forward.equal == backward.equal
        assert forward.difference == backward.difference == abs(a - b)

    @pytest.mark.parametrize("x", [0, 1, -1, TB, INT64_MIN, INT64_MAX])
    def test_reflexive(self, x):
        assert semantic_equals(CapacityBytes(x), CapacityBytes(x))

    def test_difference_is_exact_for_extremes(self):
        result = semantic_equals(CapacityBytes(INT64_MIN), CapacityBytes(INT64_MAX))
        assert result.difference == 2**64 - 1
        assert str(2**64 - 1) in result.diagnostics.errors()[0].detail

    def test_method_form(self):
        assert CapacityBytes(TB).semantic_equals(CapacityBytes(TB + 1))

    @pytest.mark.parametrize("other", [TB, "1000000000000", None, 1.0])
    def test_type_mismatch_is_an_error_not_inequality(self, other):
        with pytest.raises(CapacityTypeMismatchError):
            semantic_equals(CapacityBytes(TB), other)
        with pytest.raises(CapacityTypeMismatchError):
            semantic_equals(other, CapacityBytes(TB))
        with pytest.raises(TypeError):
            CapacityBytes(TB).semantic_equals(other)


class TestTolerancePolicies:
    """Alternative tolerance policies."""

    def test_absolute_custom_limit(self):
        policy = AbsoluteTolerance(1000)
        assert semantic_equals(CapacityBytes(0), CapacityBytes(999), policy)
        result = semantic_equals(CapacityBytes(0), CapacityBytes(1000), policy)
        assert not result
        assert "1000 bytes" in result.diagnostics.errors()[0].detail

    def test_absolute_must_be_positive(self):
        with pytest.raises(ValueError):
            AbsoluteTolerance(0)

    def test_relative(self):
        policy = RelativeTolerance(0.01)
        assert semantic_equals(CapacityBytes(1000), CapacityBytes(1009), policy)
        assert not semantic_equals(CapacityBytes(1000), CapacityBytes(1020), policy)
        assert semantic_equals(CapacityBytes(0), CapacityBytes(0), policy)

    def test_relative_ratio_range(self):
        with pytest.raises(ValueError):
            RelativeTolerance(0)
        with pytest.raises(ValueError):
            RelativeTolerance(1.5)

    def test_block_aligned(self):
        policy = BlockAlignedTolerance(1024)
        assert semantic_equals(CapacityBytes(1024), CapacityBytes(2047), policy)
        assert not semantic_equals(CapacityBytes(1023), CapacityBytes(1024), policy)

    def test_block_size_must_be_positive(self):
        with pytest.raises(ValueError):
            BlockAlignedTolerance(0)


class TestPydanticIntegration:
    """CapacityBytes as a model field."""

    def test_validates_from_int(self):
        volume = StorageVolumeResourceModel(capacity_bytes=TB)
        assert isinstance(volume.capacity_bytes, CapacityBytes)
        assert volume.capacity_bytes.value == TB

    def test_accepts_instance(self):
        volume = StorageVolumeResourceModel(capacity_bytes=CapacityBytes(5))
        assert volume.capacity_bytes == CapacityBytes(5)

    def test_serializes_to_int(self):
        volume = StorageVolumeResourceModel(capacity_bytes=TB)
        assert volume.model_dump()["capacity_bytes"] == TB
        assert f'"capacity_bytes":{TB}' in volume.model_dump_json()

    def test_from_json(self):
        volume = StorageVolumeResourceModel.model_validate_json('{"capacity_bytes": 1024}')
        assert volume.capacity_bytes == CapacityBytes(1024)

    @pytest.mark.parametrize("raw", ["abc", True, 1.5, 2**63])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValidationError):
            StorageVolumeResourceModel(capacity_bytes=raw)

    def test_json_schema_is_integer(self):
        prop = resource_schema("storage_volume")["properties"]["capacity_bytes"]
        assert any(entry.get("type") == "integer" for entry in prop["anyOf"])
