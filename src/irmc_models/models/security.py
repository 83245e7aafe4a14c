"""
Certificates and user accounts.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, model_validator

from .base import ResourceModel

UserRole = Literal["Administrator", "Operator", "ReadOnly"]
ChannelRole = Literal["Administrator", "Operator", "User", "OEM"]
ShellAccess = Literal["RemoteManager", "None"]
CertificateUploadType = Literal["File", "Text"]

MIN_USERNAME_LENGTH = 1
MAX_USERNAME_LENGTH = 16


class CertificateWebServerResourceModel(ResourceModel):
    cert_private_key: SecretStr
    cert_public_key: str


class CertificateCaCasSmtpResourceModel(ResourceModel):
    certificate_ca_file: str


class CertificateCaUpdDeployResourceModel(ResourceModel):
    certificate_upload_type: CertificateUploadType
    certificate_file: str = ""
    certificate_text: str = ""

    @model_validator(mode="after")
    def _require_certificate_source(self) -> CertificateCaUpdDeployResourceModel:
        if self.certificate_upload_type == "File" and not self.certificate_file:
            raise ValueError("certificate_file is required when certificate_upload_type is File")
        if self.certificate_upload_type == "Text" and not self.certificate_text:
            raise ValueError("certificate_text is required when certificate_upload_type is Text")
        return self


class IrmcUserAccountResourceModel(ResourceModel):
    user_id: str | None = None
    user_username: str = Field(min_length=MIN_USERNAME_LENGTH, max_length=MAX_USERNAME_LENGTH)
    user_password: SecretStr | None = None
    user_role: UserRole = "Administrator"
    user_enabled: bool = True
    user_redfish_enabled: bool = True
    user_lanchannel_role: ChannelRole = "Administrator"
    user_serialchannel_role: ChannelRole = "Administrator"
    user_account_config_enabled: bool = True
    user_irmc_settings_config_enabled: bool = True
    user_video_redirection_enabled: bool = True
    user_remote_storage_enabled: bool = True
    user_shell_access: ShellAccess = "RemoteManager"
    user_alert_chassis_events: bool = False
