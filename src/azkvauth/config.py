from __future__ import annotations

from enum import Enum
from typing import Any, Final

from azure.identity import AzureAuthorityHosts
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
    model_validator,
)

DEFAULT_AUTHORITY_HOST: Final[str] = AzureAuthorityHosts.AZURE_PUBLIC_CLOUD


class Strategy(str, Enum):
    """Supported authentication strategies, in order of precedence."""

    CLIENT_SECRET = "client_secret"
    CLIENT_CERTIFICATE = "client_certificate"
    AZ_CLI_SERVICE_PRINCIPAL = "az_cli_service_principal"
    MANAGED_IDENTITY = "managed_identity"


class AADConfig(BaseModel):
    """Selection of fields from an Azure authentication file.

    Field names follow the document keys written by tooling around Azure
    Active Directory (``tenantId``, ``clientId``...). The ``appId``,
    ``tenant`` and ``password`` keys are the Service Principal fields as
    generated by ``az ad sp create-for-rbac``.

    All fields default to their zero value, so a field that is absent from
    the document, or set to ``null``, reads as ``""`` or ``False``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        strict=True,
    )

    # Only the document keys are recognised, also when building from python.

    tenant_id: str = Field(default="", validation_alias="tenantId")
    client_id: str = Field(default="", validation_alias="clientId")
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        validation_alias="clientSecret",
    )
    client_certificate: SecretStr = Field(
        default=SecretStr(""),
        validation_alias="clientCertificate",
    )
    client_certificate_password: SecretStr = Field(
        default=SecretStr(""),
        validation_alias="clientCertificatePassword",
    )
    client_certificate_send_chain: bool = Field(
        default=False,
        validation_alias="clientCertificateSendChain",
    )
    authority_host: str = Field(default="", validation_alias="authorityHost")

    # az CLI Service Principal output
    app_id: str = Field(default="", validation_alias="appId")
    tenant: str = Field(default="", validation_alias="tenant")
    password: SecretStr = Field(default=SecretStr(""), validation_alias="password")

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        """Map document keys onto the known aliases ignoring case.

        A key that matches an alias exactly takes precedence over one that
        only matches after case folding. Among case-folded matches the last
        key wins.
        """
        if not isinstance(data, dict):
            return data
        known = {
            str(f.validation_alias).casefold(): str(f.validation_alias)
            for f in cls.model_fields.values()
        }

        exact = {k: v for k, v in data.items() if isinstance(k, str) and k in known.values()}
        folded: dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(key, str) or key in exact:
                continue
            target = known.get(key.casefold())
            if target is not None and target not in exact:
                folded[target] = value
        return {**folded, **exact}

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero_value(cls, v: Any, info: ValidationInfo) -> Any:
        """Treat an explicit ``null`` as an absent field."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator(
        "client_secret", "client_certificate", "client_certificate_password", "password",
        mode="before",
    )
    @classmethod
    def _wrap_secret(cls, v: Any) -> Any:
        """Strict mode only accepts ``SecretStr`` instances, so wrap plain strings."""
        if isinstance(v, str):
            return SecretStr(v)
        return v

    def get_authority_host(self) -> str:
        """Return the configured authority host, or the Azure Public Cloud default."""
        if self.authority_host:
            return self.authority_host
        return DEFAULT_AUTHORITY_HOST
