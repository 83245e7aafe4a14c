"""
Drift detection between desired configuration and observed device state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from .config import tolerance_policy
from .diagnostics import Diagnostics
from .models.storage import StorageVolumeResourceModel
from .models.system import PowerResourceModel
from .quantity import TolerancePolicy, semantic_equals

EXACT_VOLUME_FIELDS = ("name", "raid_type", "drive_cache_mode", "optimum_io_size_bytes")


def _attribute_text(value: Any) -> str:
    # Redfish reports booleans as JSON true/false
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class FieldDrift:
    field: str
    desired: Any
    observed: Any
    detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "desired": self.desired,
            "observed": self.observed,
            "detail": self.detail,
        }


@dataclass
class DriftReport:
    resource: str
    drifts: list[FieldDrift] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def has_drift(self) -> bool:
        return bool(self.drifts)

    def fields(self) -> list[str]:
        return [d.field for d in self.drifts]

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource": self.resource,
            "drift": self.has_drift,
            "fields": [d.to_dict() for d in self.drifts],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class DriftDetector:
    """Compares desired records against observed ones.

    The capacity tolerance policy is bound at construction and is the only
    state a detector holds.
    """

    def __init__(self, policy: TolerancePolicy | None = None):
        self.policy = policy or tolerance_policy()
        self.logger = structlog.get_logger(__name__)

    def _record(self, report: DriftReport, drift: FieldDrift) -> None:
        report.drifts.append(drift)
        self.logger.info(
            "drift_detected",
            resource=report.resource,
            field=drift.field,
            desired=drift.desired,
            observed=drift.observed,
        )

    def volume_drift(
        self, desired: StorageVolumeResourceModel, observed: StorageVolumeResourceModel
    ) -> DriftReport:
        """Only attributes set in ``desired`` take part in the comparison."""
        report = DriftReport(resource=desired.id or observed.id or "storage_volume")

        if desired.capacity_bytes is not None:
            if observed.capacity_bytes is None:
                self._record(report, FieldDrift("capacity_bytes", desired.capacity_bytes.value, None))
            else:
                result = semantic_equals(desired.capacity_bytes, observed.capacity_bytes, self.policy)
                if not result:
                    detail = next(iter(result.diagnostics)).detail
                    report.diagnostics.extend(result.diagnostics)
                    self._record(
                        report,
                        FieldDrift(
                            "capacity_bytes",
                            desired.capacity_bytes.value,
                            observed.capacity_bytes.value,
                            detail,
                        ),
                    )

        for name in EXACT_VOLUME_FIELDS:
            want = getattr(desired, name)
            have = getattr(observed, name)
            if want is not None and want != have:
                self._record(report, FieldDrift(name, want, have))

        for name in ("read_mode", "write_mode"):
            requested = getattr(desired, name).requested
            actual = getattr(observed, name).actual
            if requested is not None and requested != actual:
                self._record(
                    report,
                    FieldDrift(name, requested, actual, "controller applied a different mode"),
                )
        return report

    def attributes_drift(
        self, resource: str, desired: dict[str, str], observed: dict[str, Any]
    ) -> DriftReport:
        """Compare BIOS or iRMC attribute maps; observed values compare as strings."""
        report = DriftReport(resource=resource)
        for key, want in sorted(desired.items()):
            if key not in observed:
                self._record(report, FieldDrift(key, want, None, "attribute not reported by device"))
                continue
            have = observed[key]
            if _attribute_text(have) != want:
                self._record(report, FieldDrift(key, want, have))
        return report

    def power_drift(self, desired_state: str, observed: PowerResourceModel) -> DriftReport:
        report = DriftReport(resource=observed.id or "power")
        if observed.power_state != desired_state:
            self._record(report, FieldDrift("power_state", desired_state, observed.power_state))
        return report
