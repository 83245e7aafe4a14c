"""
Mapping between Redfish Volume payloads and the storage volume record.

Everything here is a pure function over already fetched JSON; sending the
payloads and polling the controller is the caller's business.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import settings
from .diagnostics import Diagnostics
from .errors import StateMappingError
from .models.base import DynamicParameter
from .models.storage import StorageVolumeResourceModel

logger = logging.getLogger(__name__)


class FujitsuVolumeOem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    init_mode: str | None = Field(default=None, alias="InitMode")
    read_mode: str | None = Field(default=None, alias="ReadMode")
    write_mode: str | None = Field(default=None, alias="WriteMode")
    drive_cache_mode: str | None = Field(default=None, alias="DriveCacheMode")


class VolumeOem(BaseModel):
    ts_fujitsu: FujitsuVolumeOem = Field(default_factory=FujitsuVolumeOem)


class RedfishVolume(BaseModel):
    """The parts of a Redfish ``Volume`` resource the volume record uses."""
    model_config = ConfigDict(populate_by_name=True)

    odata_id: str = Field(alias="@odata.id")
    name: str | None = Field(default=None, alias="Name")
    capacity_bytes: int | None = Field(default=None, alias="CapacityBytes")
    raid_type: str | None = Field(default=None, alias="RAIDType")
    optimum_io_size_bytes: int | None = Field(default=None, alias="OptimumIOSizeBytes")
    oem: VolumeOem = Field(default_factory=VolumeOem, alias="Oem")


class RaidLevelCapability(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    raid_type: str = Field(alias="RAIDType")
    stripe_sizes: list[int] = Field(default_factory=list, alias="StripeSizes")
    minimum_drive_count: int = Field(default=0, alias="MinimumDriveCount")
    maximum_drive_count: int = Field(default=0, alias="MaximumDriveCount")
    minimum_span_count: int = Field(default=0, alias="MinimumSpanCount")
    maximum_span_count: int = Field(default=0, alias="MaximumSpanCount")


class RaidCapabilities(BaseModel):
    raid_levels: list[RaidLevelCapability] = Field(default_factory=list, alias="RAIDLevels")


def parse_volume(payload: dict[str, Any] | RedfishVolume) -> RedfishVolume:
    if isinstance(payload, RedfishVolume):
        return payload
    try:
        return RedfishVolume.model_validate(payload)
    except ValidationError as e:
        raise StateMappingError(f"Could not map Redfish volume payload: {e}") from e


def storage_id_from_volume_odata_id(volume_odata_id: str) -> str:
    """Return the storage id in ``.../Storage/<id>/Volumes/<n>``."""
    suffix = volume_odata_id.find("/Volume")
    if suffix < 0:
        raise StateMappingError(f"Not a volume resource path: {volume_odata_id}")
    head = volume_odata_id[:suffix]
    return head[head.rfind("/") + 1:]


def _or_none(value: str | None) -> str | None:
    return value or None


def read_volume_state(
    payload: dict[str, Any] | RedfishVolume,
    storage_serial: str,
    state: StorageVolumeResourceModel | None = None,
) -> StorageVolumeResourceModel:
    """Overlay what the controller reports for a volume onto ``state``.

    Plan-only attributes (drives, init mode, requested read/write mode,
    server) are kept from ``state`` when given.
    """
    volume = parse_volume(payload)
    oem = volume.oem.ts_fujitsu

    data: dict[str, Any] = state.model_dump() if state else {}
    previous_read = data.get("read_mode") or {}
    previous_write = data.get("write_mode") or {}
    data.update(
        id=data.get("id") or volume.odata_id,
        storage_controller_serial_number=storage_serial,
        name=_or_none(volume.name),
        optimum_io_size_bytes=volume.optimum_io_size_bytes,
        capacity_bytes=volume.capacity_bytes,
        # A volume can be migrated to a different RAID type behind our back
        raid_type=_or_none(volume.raid_type),
        read_mode={"requested": previous_read.get("requested"), "actual": _or_none(oem.read_mode)},
        write_mode={"requested": previous_write.get("requested"), "actual": _or_none(oem.write_mode)},
        drive_cache_mode=_or_none(oem.drive_cache_mode),
    )
    try:
        return StorageVolumeResourceModel.model_validate(data)
    except ValidationError as e:
        raise StateMappingError(f"Volume {volume.odata_id} has unexpected state: {e}") from e


def merge_volume_state(
    plan: StorageVolumeResourceModel,
    observed: StorageVolumeResourceModel,
    volume_odata_id: str,
) -> StorageVolumeResourceModel:
    """Build the record to store after creating or updating a volume."""
    job_timeout = plan.job_timeout or observed.job_timeout or settings.volume_job_timeout
    return StorageVolumeResourceModel(
        id=volume_odata_id,
        storage_controller_serial_number=plan.storage_controller_serial_number,
        server=plan.server,
        # Not reported by Redfish
        physical_drives=plan.physical_drives,
        init_mode=plan.init_mode,
        optimum_io_size_bytes=observed.optimum_io_size_bytes,
        raid_type=observed.raid_type,
        name=observed.name,
        capacity_bytes=observed.capacity_bytes,
        read_mode=DynamicParameter(
            requested=plan.read_mode.requested, actual=observed.read_mode.actual
        ),
        write_mode=DynamicParameter(
            requested=plan.write_mode.requested, actual=observed.write_mode.actual
        ),
        drive_cache_mode=observed.drive_cache_mode,
        job_timeout=job_timeout,
    )


def physical_disk_groups(plan: StorageVolumeResourceModel) -> list[dict[str, list[str]]]:
    """Decode ``physical_drives`` entries (JSON lists of slots) into disk groups.

    Slots are ``"<slot>"`` for directly attached drives and
    ``"<enclosure>-<slot>"`` for drives in an enclosure.
    """
    groups = []
    for entry in plan.physical_drives:
        try:
            slots = json.loads(entry)
        except json.JSONDecodeError as e:
            raise StateMappingError(f"Could not decode requested drives '{entry}': {e}") from e
        if not isinstance(slots, list) or not all(isinstance(s, str) for s in slots):
            raise StateMappingError(f"Requested drives must be a list of slot strings: '{entry}'")
        groups.append({"Group": slots})
    return groups


def volume_create_payload(plan: StorageVolumeResourceModel) -> dict[str, Any]:
    """Body of the POST on a storage controller's Volumes collection.

    Optional attributes the plan leaves unset are omitted.
    """
    diags = plan.check_plan()
    if diags.has_error():
        missing = ", ".join(d.detail for d in diags.errors())
        raise StateMappingError(f"Volume plan is incomplete: {missing}")

    payload: dict[str, Any] = {
        "RAIDType": plan.raid_type,
        "PhysicalDisks": physical_disk_groups(plan),
    }
    if plan.name:
        payload["Name"] = plan.name
    if plan.capacity_bytes is not None and plan.capacity_bytes.value != 0:
        payload["CapacityBytes"] = plan.capacity_bytes.value
    if plan.init_mode:
        payload["InitMode"] = plan.init_mode
    if plan.read_mode.requested:
        payload["ReadMode"] = plan.read_mode.requested
    if plan.write_mode.requested:
        payload["WriteMode"] = plan.write_mode.requested
    if plan.drive_cache_mode:
        payload["DriveCacheMode"] = plan.drive_cache_mode
    if plan.optimum_io_size_bytes:
        payload["OptimumIOSizeBytes"] = plan.optimum_io_size_bytes

    logger.debug("Volume creation payload: %s", payload)
    return payload


def volume_patch_payload(plan: StorageVolumeResourceModel) -> dict[str, Any]:
    """Body of the PATCH changing the mutable attributes of a volume."""
    fujitsu: dict[str, str] = {}
    if plan.drive_cache_mode is not None:
        fujitsu["DriveCacheMode"] = plan.drive_cache_mode
    if plan.name is not None:
        fujitsu["Name"] = plan.name
    return {"Oem": {"ts_fujitsu": fujitsu}}


def new_volume_id(ids_before: list[str], ids_after: list[str]) -> str | None:
    """Return the first volume id that appeared after creation, if any."""
    before = set(ids_before)
    for volume_id in ids_after:
        if volume_id not in before:
            return volume_id
    return None


def validate_against_capabilities(
    plan: StorageVolumeResourceModel,
    capabilities: dict[str, Any],
    controller_name: str = "",
) -> Diagnostics:
    """Check a volume plan against a controller's RAIDCapabilities resource."""
    diags = Diagnostics()
    try:
        caps = RaidCapabilities.model_validate(capabilities)
    except ValidationError as e:
        diags.add_error("Could not read RAID capabilities", str(e))
        return diags

    try:
        groups = physical_disk_groups(plan)
    except StateMappingError as e:
        diags.add_error("Invalid physical_drives", str(e))
        return diags

    level = next((lv for lv in caps.raid_levels if lv.raid_type == plan.raid_type), None)
    if level is None:
        supported = ", ".join(lv.raid_type for lv in caps.raid_levels)
        diags.add_error(
            "Unsupported raid_type",
            f"{plan.raid_type} is not supported by the controller (supported: {supported})",
        )
        return diags

    if plan.optimum_io_size_bytes not in level.stripe_sizes:
        diags.add_error(
            "Unsupported optimum_io_size_bytes",
            f"{plan.optimum_io_size_bytes} is not one of {level.stripe_sizes} for {level.raid_type}",
        )

    if level.minimum_span_count and level.maximum_span_count:
        if not level.minimum_span_count <= len(groups) <= level.maximum_span_count:
            diags.add_error(
                "Unsupported number of disk groups",
                f"Requested number of disk groups {len(groups)} does not match {level.raid_type}",
            )
        else:
            min_disks = level.minimum_drive_count // level.minimum_span_count
            for i, group in enumerate(groups):
                if len(group["Group"]) < min_disks:
                    diags.add_error(
                        "Too few disks in group",
                        f"Minimal number of disks in group {i} is not fulfilled ({min_disks})",
                    )
    elif len(groups) != 1:
        diags.add_error(
            "Unsupported number of disk groups",
            f"For {level.raid_type} only single group of disks is supported",
        )

    if plan.capacity_bytes is not None and "PDUAL CP100" in controller_name:
        diags.add_error(
            "capacity_bytes not supported",
            "PDUAL CP100 controller supports only full volumes (capacity_bytes cannot be specified)",
        )
    return diags
