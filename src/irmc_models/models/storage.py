"""
Storage controller settings and logical volumes.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import Field, field_validator

from ..diagnostics import Diagnostics
from ..quantity import CapacityBytes
from .base import DynamicParameter, ResourceModel

STORAGE_JOB_DEFAULT_TIMEOUT = 300  # seconds
STORAGE_VOLUME_JOB_DEFAULT_TIMEOUT = 300  # seconds
VOLUME_NAME_MAX_LENGTH = 15

BiosContinueOnError = Literal["StopOnErrors", "PauseOnErrors", "IgnoreErrors", "SafeModeOnErrors"]
PatrolReadMode = Literal["Automatic", "Disabled", "Manual"]
MdcScheduleMode = Literal["Disabled", "Sequential", "Concurrent"]
CoercionMode = Literal["None", "Coerce128MiB", "Coerce1GiB"]

RaidType = Literal["RAID0", "RAID1", "RAID1E", "RAID10", "RAID5", "RAID50", "RAID6", "RAID60"]
InitMode = Literal["None", "Fast", "Normal"]
ReadMode = Literal["Adaptive", "NoReadAhead", "ReadAhead"]
WriteMode = Literal["WriteBack", "AlwaysWriteBack", "WriteThrough"]
DriveCacheMode = Literal["Enabled", "Disabled", "Unchanged"]


class StorageSettings(ResourceModel):
    storage_controller_serial_number: str
    bios_continue_on_error: BiosContinueOnError | None = None
    bios_status: bool | None = None
    patrol_read: PatrolReadMode | None = None
    patrol_read_rate: int | None = Field(default=None, ge=0, le=100)
    patrol_read_recovery_support: bool | None = None
    bgi_rate: int | None = Field(default=None, ge=0, le=100)
    mdc_rate: int | None = Field(default=None, ge=0, le=100)
    rebuild_rate: int | None = Field(default=None, ge=0, le=100)
    migration_rate: int | None = Field(default=None, ge=0, le=100)
    spindown_delay: int | None = Field(default=None, ge=30, le=1440)
    spinup_delay: int | None = Field(default=None, ge=0, le=6)
    spindown_unconfigured_drive_enabled: bool | None = None
    spindown_hotspare_enabled: bool | None = None
    mdc_schedule_mode: MdcScheduleMode | None = None
    mdc_abort_on_error_enabled: bool | None = None
    coercion_mode: CoercionMode | None = None
    auto_rebuild_enabled: bool | None = None


class StorageResourceModel(StorageSettings):
    job_timeout: int = STORAGE_JOB_DEFAULT_TIMEOUT


class StorageDataSourceModel(StorageSettings):
    pass


class StorageVolumeResourceModel(ResourceModel):
    """Logical volume on a RAID controller.

    The same record carries both the desired configuration and the state read
    back from the controller. Capacity is compared semantically since the
    controller rounds the requested size; read and write mode keep the
    requested value next to the one the controller actually applied.
    """
    storage_controller_serial_number: str | None = None
    job_timeout: int | None = None

    raid_type: RaidType | None = None
    capacity_bytes: CapacityBytes | None = None
    # Length is a plan constraint only, controllers may report longer names
    name: str | None = None
    init_mode: InitMode | None = None
    physical_drives: list[str] = Field(default_factory=list)
    optimum_io_size_bytes: int | None = None
    read_mode: DynamicParameter = Field(default_factory=DynamicParameter)
    write_mode: DynamicParameter = Field(default_factory=DynamicParameter)
    drive_cache_mode: DriveCacheMode | None = None

    def check_plan(self) -> Diagnostics:
        """Report attributes a volume creation plan must provide."""
        diags = Diagnostics()
        if not self.storage_controller_serial_number:
            diags.add_error("Missing required attribute", "storage_controller_serial_number")
        if self.raid_type is None:
            diags.add_error("Missing required attribute", "raid_type")
        if not self.physical_drives:
            diags.add_error("Missing required attribute", "physical_drives")
        if self.optimum_io_size_bytes is None:
            diags.add_error("Missing required attribute", "optimum_io_size_bytes")
        if self.name is not None and not 1 <= len(self.name) <= VOLUME_NAME_MAX_LENGTH:
            diags.add_error(
                "Invalid attribute value",
                f"name must be 1 to {VOLUME_NAME_MAX_LENGTH} characters long",
            )
        return diags

    @field_validator("read_mode")
    @classmethod
    def _check_read_mode(cls, value: DynamicParameter) -> DynamicParameter:
        if value.requested is not None and value.requested not in get_args(ReadMode):
            raise ValueError(f"unsupported read mode: {value.requested}")
        return value

    @field_validator("write_mode")
    @classmethod
    def _check_write_mode(cls, value: DynamicParameter) -> DynamicParameter:
        if value.requested is not None and value.requested not in get_args(WriteMode):
            raise ValueError(f"unsupported write mode: {value.requested}")
        return value
