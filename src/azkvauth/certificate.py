"""Parsing of client certificates embedded in an Azure authentication file."""

from __future__ import annotations

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from cryptography.hazmat.primitives.serialization import pkcs12

from .exceptions import CertificateParseError

_PEM_MARKER = b"-----BEGIN"


def parse_certificates(
    data: bytes, password: bytes | None = None
) -> tuple[list[x509.Certificate], PrivateKeyTypes]:
    """Load a certificate chain and its private key from PEM or PKCS#12 bytes.

    PEM data must contain at least one ``CERTIFICATE`` block and one private
    key block, in any order. Anything else is treated as PKCS#12.

    Args:
        data: The certificate material.
        password: Password protecting the private key or the PKCS#12 bundle.
            Empty or ``None`` means unencrypted.

    Returns:
        A tuple ``(certificates, private_key)``. For PKCS#12 the leaf
        certificate comes first, followed by any additional certificates.

    Raises:
        CertificateParseError: If no certificate or key is found, or the data
            cannot be decoded or decrypted.
    """
    password = password or None
    try:
        if _PEM_MARKER in data:
            certificates = x509.load_pem_x509_certificates(data)
            key = serialization.load_pem_private_key(data, password=password)
        else:
            key, leaf, additional = pkcs12.load_key_and_certificates(data, password)
            certificates = ([leaf] if leaf is not None else []) + list(additional)
    except (ValueError, TypeError) as e:
        raise CertificateParseError(f"failed to parse client certificate: {e}") from e

    if not certificates:
        raise CertificateParseError("failed to parse client certificate: no certificate found")
    if key is None:
        raise CertificateParseError("failed to parse client certificate: no private key found")
    return certificates, key


def to_pem(certificates: list[x509.Certificate], key: PrivateKeyTypes) -> bytes:
    """Serialise a certificate chain and private key into a single PEM bundle.

    The certificates are written first, followed by the unencrypted PKCS#8 key.
    """
    cert_pem = b"".join(c.public_bytes(serialization.Encoding.PEM) for c in certificates)
    key_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,  # produces "PRIVATE KEY"
        encryption_algorithm=serialization.NoEncryption(),
    )
    return cert_pem + key_pem
