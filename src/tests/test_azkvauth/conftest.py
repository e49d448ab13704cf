from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterator

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

import azkvauth.factory as factory


@pytest.fixture(autouse=True)
def clear_azure_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove variables read by azure.identity to prevent cross-test leakage.

    Yields:
        Iterator[None]: Context manager semantics for pytest.
    """
    prefixes = ("AZURE_", "IDENTITY_", "MSI_", "IMDS_")
    for k in [k for k in os.environ if k.startswith(prefixes)]:
        monkeypatch.delenv(k, raising=False)
    yield


@pytest.fixture()
def recorders(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Replace the azure.identity constructors used by the factory with recorders.

    Returns:
        dict[str, Any]: Recorder classes by name, exposing call kwargs.
    """

    def _make(name: str) -> type:
        class _C:
            last_args: tuple[Any, ...] | None = None
            last_kwargs: dict[str, Any] | None = None
            call_count: int = 0

            def __init__(self, *args: Any, **kwargs: Any) -> None:
                type(self).last_args = args
                type(self).last_kwargs = dict(kwargs)
                type(self).call_count += 1
                self.entered = False
                self.closed = False

            def __enter__(self) -> "_C":
                self.entered = True
                return self

            def close(self) -> None:
                self.closed = True

            def get_token(self, *scopes: str, **kwargs: Any) -> tuple[str, tuple[str, ...]]:
                return name, scopes

        _C.__name__ = _C.__qualname__ = name
        return _C

    names = [
        "ClientSecretCredential",
        "CertificateCredential",
        "ManagedIdentityCredential",
    ]
    classes = {n: _make(n) for n in names}
    for n, cls in classes.items():
        monkeypatch.setattr(factory, n, cls)
    return classes


@dataclass(frozen=True)
class CertMaterial:
    certificate: x509.Certificate
    key: rsa.RSAPrivateKey
    cert_pem: bytes
    key_pem: bytes
    encrypted_key_pem: bytes
    password: bytes


def _self_signed(common_name: str) -> tuple[x509.Certificate, rsa.RSAPrivateKey]:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=1))
        .sign(private_key=key, algorithm=hashes.SHA256())
    )
    return cert, key


@pytest.fixture(scope="session")
def cert_material() -> CertMaterial:
    """A self-signed certificate with its key, plain and password protected."""
    cert, key = _self_signed("azkvauth-test")
    password = b"s3cret"
    return CertMaterial(
        certificate=cert,
        key=key,
        cert_pem=cert.public_bytes(serialization.Encoding.PEM),
        key_pem=key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ),
        encrypted_key_pem=key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.BestAvailableEncryption(password),
        ),
        password=password,
    )


@pytest.fixture(scope="session")
def ca_certificate() -> x509.Certificate:
    """An unrelated certificate to append as an extra chain member."""
    cert, _ = _self_signed("azkvauth-test-ca")
    return cert
