from __future__ import annotations

import logging
from typing import Callable, Final

from azure.core.credentials import TokenCredential
from azure.identity import (
    CertificateCredential,
    ClientSecretCredential,
    ManagedIdentityCredential,
)

from .certificate import parse_certificates, to_pem
from .config import AADConfig, Strategy
from .exceptions import CredentialConstructionError, NoMatchingStrategyError
from .loader import load_config
from .token import Token

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE: Final[str] = (
    "invalid data: requires a 'clientId' field, a combination of "
    "'tenantId', 'clientId' and 'clientSecret', or "
    "'tenantId', 'clientId' and 'clientCertificate'"
)


def _has_client_secret(c: AADConfig) -> bool:
    return bool(c.tenant_id and c.client_id and c.client_secret.get_secret_value())


def _has_client_certificate(c: AADConfig) -> bool:
    return bool(c.tenant_id and c.client_id and c.client_certificate.get_secret_value())


def _has_az_service_principal(c: AADConfig) -> bool:
    return bool(c.tenant and c.app_id and c.password.get_secret_value())


def _has_client_id(c: AADConfig) -> bool:
    return bool(c.client_id)


def _client_secret(c: AADConfig) -> TokenCredential:
    return ClientSecretCredential(
        tenant_id=c.tenant_id,
        client_id=c.client_id,
        client_secret=c.client_secret.get_secret_value(),
        authority=c.get_authority_host(),
    )


def _client_certificate(c: AADConfig) -> TokenCredential:
    # Parse errors surface as CertificateParseError before the SDK is involved.
    certificates, key = parse_certificates(
        c.client_certificate.get_secret_value().encode("utf-8"),
        c.client_certificate_password.get_secret_value().encode("utf-8"),
    )
    return CertificateCredential(
        tenant_id=c.tenant_id,
        client_id=c.client_id,
        certificate_data=to_pem(certificates, key),
        send_certificate_chain=c.client_certificate_send_chain,
        authority=c.get_authority_host(),
    )


def _az_service_principal(c: AADConfig) -> TokenCredential:
    return ClientSecretCredential(
        tenant_id=c.tenant,
        client_id=c.app_id,
        client_secret=c.password.get_secret_value(),
        authority=c.get_authority_host(),
    )


def _managed_identity(c: AADConfig) -> TokenCredential:
    return ManagedIdentityCredential(client_id=c.client_id)


_Row = tuple[
    Strategy, Callable[[AADConfig], bool], Callable[[AADConfig], TokenCredential]
]

# Evaluated top to bottom, first match wins. A builder failure is final.
STRATEGIES: Final[tuple[_Row, ...]] = (
    (Strategy.CLIENT_SECRET, _has_client_secret, _client_secret),
    (Strategy.CLIENT_CERTIFICATE, _has_client_certificate, _client_certificate),
    (Strategy.AZ_CLI_SERVICE_PRINCIPAL, _has_az_service_principal, _az_service_principal),
    (Strategy.MANAGED_IDENTITY, _has_client_id, _managed_identity),
)


def select_strategy(config: AADConfig) -> Strategy | None:
    """Return the strategy :func:`token_from_config` would use, if any."""
    for strategy, matches, _ in STRATEGIES:
        if matches(config):
            return strategy
    return None


def token_from_config(config: AADConfig) -> Token:
    """Construct a :class:`Token` from the credentials found in ``config``.

    Credentials are detected in the following order:

    - ``ClientSecretCredential`` when ``tenantId``, ``clientId`` and
      ``clientSecret`` are set.
    - ``CertificateCredential`` when ``tenantId``, ``clientId`` and
      ``clientCertificate`` (optionally ``clientCertificatePassword``) are set.
    - ``ClientSecretCredential`` when the ``az`` CLI fields ``tenant``,
      ``appId`` and ``password`` are set.
    - ``ManagedIdentityCredential`` for a user-assigned identity when
      ``clientId`` is set.

    No token is requested here.

    Args:
        config: The loaded authentication file.

    Returns:
        A :class:`Token` wrapping the selected credential.

    Raises:
        CertificateParseError: If ``clientCertificate`` cannot be parsed.
        CredentialConstructionError: If ``azure.identity`` rejects the fields.
        NoMatchingStrategyError: If no supported combination of fields is set.
    """
    for strategy, matches, build in STRATEGIES:
        if not matches(config):
            continue
        logger.debug("Using %s credential", strategy.value)
        try:
            credential = build(config)
        except ValueError as e:
            raise CredentialConstructionError(
                f"failed to construct {strategy.value} credential: {e}"
            ) from e
        return Token(credential, strategy)
    raise NoMatchingStrategyError(NO_MATCH_MESSAGE)


def credential_from_bytes(data: bytes) -> Token:
    """Load an Azure authentication file and resolve it into a :class:`Token`."""
    return token_from_config(load_config(data))
