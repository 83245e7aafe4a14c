"""
iRMC controller resources: reset, attributes and firmware.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import ResourceModel

FIRMWARE_UPDATE_TIMEOUT = 3000  # seconds
SIMPLE_UPDATE_TIMEOUT = 3000  # seconds
IRMC_ATTRIBUTES_JOB_DEFAULT_TIMEOUT = 300  # seconds

FirmwareUpdateType = Literal["File", "TFTP", "MemoryCard"]
FlashSelector = Literal["Auto", "LowFWImage", "HighFWImage"]
BootSelector = Literal[
    "Auto",
    "LowFWImage",
    "HighFWImage",
    "OldestFW",
    "MostRecentProgrammedFW",
    "LeastRecentProgrammedFW",
]
TransferProtocol = Literal["http", "https", "ftp"]
OperationApplyTime = Literal["Immediate", "OnReset"]


class IrmcResetResourceModel(ResourceModel):
    pass


class IrmcAttributesResourceModel(ResourceModel):
    attributes: dict[str, str]
    job_timeout: int = IRMC_ATTRIBUTES_JOB_DEFAULT_TIMEOUT


class IrmcAttributesDataSourceModel(ResourceModel):
    attributes: dict[str, str] = Field(default_factory=dict)


class IrmcFirmwareUpdateResourceModel(ResourceModel):
    update_type: FirmwareUpdateType
    irmc_path_to_binary: str = ""
    tftp_server_addr: str = ""
    tftp_update_file: str = ""
    irmc_flash_selector: FlashSelector = "Auto"
    irmc_boot_selector: BootSelector = "Auto"
    update_timeout: int = FIRMWARE_UPDATE_TIMEOUT
    reset_irmc_after_update: bool = False

    @model_validator(mode="after")
    def _require_update_source(self) -> IrmcFirmwareUpdateResourceModel:
        if self.update_type == "File" and not self.irmc_path_to_binary:
            raise ValueError("irmc_path_to_binary is required when update_type is File")
        if self.update_type == "TFTP" and not (self.tftp_server_addr and self.tftp_update_file):
            raise ValueError(
                "tftp_server_addr and tftp_update_file are required when update_type is TFTP"
            )
        return self


class SimpleUpdateResourceModel(ResourceModel):
    transfer_protocol: TransferProtocol
    update_image: str
    operation_apply_time: OperationApplyTime = "Immediate"
    update_timeout: int = SIMPLE_UPDATE_TIMEOUT
    ume_tool_directory_name: str = "Tools"


class Inventory(BaseModel):
    """One entry of the Redfish firmware inventory."""
    model_config = ConfigDict(extra="forbid")

    odata_id: str
    id: str
    name: str | None = None
    software_id: str | None = None
    updateable: bool = False
    version: str | None = None
    state: str | None = None
    health: str | None = None


class FirmwareInventory(ResourceModel):
    inventory: list[Inventory] = Field(default_factory=list)
