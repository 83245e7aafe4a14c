"""
Host level settings: BIOS, boot configuration and power.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from .base import ResourceModel

SystemResetType = Literal["ForceRestart", "GracefulRestart", "PowerCycle"]

BootSourceTarget = Literal["Pxe", "Cd", "Hdd", "BiosSetup"]

# "Continues" is the spelling older configurations use
BootSourceOverrideEnabled = Literal["Once", "Continuous", "Continues"]

HostPowerAction = Literal[
    "On",
    "ForceOn",
    "ForceOff",
    "ForceRestart",
    "GracefulRestart",
    "GracefulShutdown",
    "PushPowerButton",
    "PowerCycle",
    "Nmi",
]

POWER_MAX_WAIT_TIME = 120  # seconds
SYSTEM_JOB_DEFAULT_TIMEOUT = 600  # seconds


class BiosResourceModel(ResourceModel):
    attributes: dict[str, str]
    system_reset_type: SystemResetType | None = None
    job_timeout: int = SYSTEM_JOB_DEFAULT_TIMEOUT


class BiosDataSourceModel(ResourceModel):
    attributes: dict[str, str] = Field(default_factory=dict)


class BootOrderResourceModel(ResourceModel):
    boot_order: list[str] = Field(min_length=1)
    system_reset_type: SystemResetType | None = None
    job_timeout: int = SYSTEM_JOB_DEFAULT_TIMEOUT


class BootSourceOverrideResourceModel(ResourceModel):
    boot_source_override_target: BootSourceTarget
    boot_source_override_enabled: BootSourceOverrideEnabled
    system_reset_type: SystemResetType
    job_timeout: int = SYSTEM_JOB_DEFAULT_TIMEOUT


class SystemBootDataSource(ResourceModel):
    boot_order: list[str] = Field(default_factory=list)
    boot_source_override_enabled: str | None = None
    boot_source_override_mode: str | None = None
    boot_source_override_target: str | None = None


class PowerResourceModel(ResourceModel):
    host_power_action: HostPowerAction
    max_wait_time: int = POWER_MAX_WAIT_TIME
    # Computed, "On" or "Off"
    power_state: str | None = None
