"""
Resource and data source records, keyed by their configuration type names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from .base import DynamicParameter, RedfishServer, ResourceModel
from .irmc import (
    FirmwareInventory,
    Inventory,
    IrmcAttributesDataSourceModel,
    IrmcAttributesResourceModel,
    IrmcFirmwareUpdateResourceModel,
    IrmcResetResourceModel,
    SimpleUpdateResourceModel,
)
from .security import (
    CertificateCaCasSmtpResourceModel,
    CertificateCaUpdDeployResourceModel,
    CertificateWebServerResourceModel,
    IrmcUserAccountResourceModel,
)
from .storage import (
    STORAGE_VOLUME_JOB_DEFAULT_TIMEOUT,
    StorageDataSourceModel,
    StorageResourceModel,
    StorageSettings,
    StorageVolumeResourceModel,
)
from .system import (
    BiosDataSourceModel,
    BiosResourceModel,
    BootOrderResourceModel,
    BootSourceOverrideResourceModel,
    PowerResourceModel,
    SystemBootDataSource,
)
from .virtual_media import VirtualMediaData, VirtualMediaDataSource, VirtualMediaResourceModel

PROVIDER_TYPE_NAME = "irmc-redfish_"

RESOURCE_MODELS: dict[str, type[BaseModel]] = {
    PROVIDER_TYPE_NAME + "bios": BiosResourceModel,
    PROVIDER_TYPE_NAME + "boot_order": BootOrderResourceModel,
    PROVIDER_TYPE_NAME + "boot_source_override": BootSourceOverrideResourceModel,
    PROVIDER_TYPE_NAME + "certificate_ca_cas_smtp": CertificateCaCasSmtpResourceModel,
    PROVIDER_TYPE_NAME + "certificate_ca_upd_deploy": CertificateCaUpdDeployResourceModel,
    PROVIDER_TYPE_NAME + "certificate_web_server": CertificateWebServerResourceModel,
    PROVIDER_TYPE_NAME + "irmc_attributes": IrmcAttributesResourceModel,
    PROVIDER_TYPE_NAME + "irmc_firmware_update": IrmcFirmwareUpdateResourceModel,
    PROVIDER_TYPE_NAME + "irmc_reset": IrmcResetResourceModel,
    PROVIDER_TYPE_NAME + "power": PowerResourceModel,
    PROVIDER_TYPE_NAME + "simple_update": SimpleUpdateResourceModel,
    PROVIDER_TYPE_NAME + "storage": StorageResourceModel,
    PROVIDER_TYPE_NAME + "storage_volume": StorageVolumeResourceModel,
    PROVIDER_TYPE_NAME + "user_account": IrmcUserAccountResourceModel,
    PROVIDER_TYPE_NAME + "virtual_media": VirtualMediaResourceModel,
}

DATA_SOURCE_MODELS: dict[str, type[BaseModel]] = {
    PROVIDER_TYPE_NAME + "bios": BiosDataSourceModel,
    PROVIDER_TYPE_NAME + "firmware_inventory": FirmwareInventory,
    PROVIDER_TYPE_NAME + "irmc_attributes": IrmcAttributesDataSourceModel,
    PROVIDER_TYPE_NAME + "storage": StorageDataSourceModel,
    PROVIDER_TYPE_NAME + "system_boot": SystemBootDataSource,
    PROVIDER_TYPE_NAME + "virtual_media": VirtualMediaDataSource,
}


def model_for(name: str, data_source: bool = False) -> type[BaseModel]:
    """Look up a model by type name; the provider prefix is optional."""
    registry = DATA_SOURCE_MODELS if data_source else RESOURCE_MODELS
    key = name if name.startswith(PROVIDER_TYPE_NAME) else PROVIDER_TYPE_NAME + name
    try:
        return registry[key]
    except KeyError:
        kind = "data source" if data_source else "resource"
        raise KeyError(f"Unknown {kind}: {name}") from None


def resource_schema(name: str, data_source: bool = False) -> dict[str, Any]:
    return model_for(name, data_source).model_json_schema()


__all__ = [
    "DATA_SOURCE_MODELS",
    "PROVIDER_TYPE_NAME",
    "RESOURCE_MODELS",
    "STORAGE_VOLUME_JOB_DEFAULT_TIMEOUT",
    "BiosDataSourceModel",
    "BiosResourceModel",
    "BootOrderResourceModel",
    "BootSourceOverrideResourceModel",
    "CertificateCaCasSmtpResourceModel",
    "CertificateCaUpdDeployResourceModel",
    "CertificateWebServerResourceModel",
    "DynamicParameter",
    "FirmwareInventory",
    "Inventory",
    "IrmcAttributesDataSourceModel",
    "IrmcAttributesResourceModel",
    "IrmcFirmwareUpdateResourceModel",
    "IrmcResetResourceModel",
    "IrmcUserAccountResourceModel",
    "PowerResourceModel",
    "RedfishServer",
    "ResourceModel",
    "SimpleUpdateResourceModel",
    "StorageDataSourceModel",
    "StorageResourceModel",
    "StorageSettings",
    "StorageVolumeResourceModel",
    "SystemBootDataSource",
    "VirtualMediaData",
    "VirtualMediaDataSource",
    "VirtualMediaResourceModel",
    "model_for",
    "resource_schema",
]
