from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .base import RedfishServer, ResourceModel

VirtualMediaTransferProtocol = Literal["CIFS", "HTTPS", "NFS"]


class VirtualMediaData(BaseModel):
    model_config = ConfigDict(extra="forbid")

    odata_id: str
    id: str


class VirtualMediaDataSource(BaseModel):
    model_config = ConfigDict(extra="forbid")

    server: list[RedfishServer] = Field(default_factory=list)
    virtual_media: list[VirtualMediaData] = Field(default_factory=list)


class VirtualMediaResourceModel(ResourceModel):
    image: str
    # Computed
    inserted: bool | None = None
    transfer_protocol_type: VirtualMediaTransferProtocol
    # Computed
    write_protected: bool | None = None
