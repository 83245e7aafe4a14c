from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class RedfishServer(BaseModel):
    """Connection details of one server BMC."""
    model_config = ConfigDict(extra="forbid")

    username: str
    password: SecretStr
    endpoint: str
    ssl_insecure: bool = False


class ResourceModel(BaseModel):
    """Common shape of every resource and data source record."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str | None = None
    server: list[RedfishServer] = Field(default_factory=list)


class DynamicParameter(BaseModel):
    """A requested setting travelling together with the value observed on the device.

    ``requested`` is configuration input; ``actual`` is read-only state filled
    in from the device. The two are only ever compared as exact strings.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    requested: str | None = None
    actual: str | None = None

    def is_satisfied(self) -> bool:
        return self.requested is None or self.requested == self.actual
