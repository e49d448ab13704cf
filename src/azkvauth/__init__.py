"""Load Azure authentication files and resolve them into credentials.

Public API:
- load_config(), load_config_file() → AADConfig
- token_from_config(), credential_from_bytes() → Token (a TokenCredential)
- select_strategy() → Strategy | None
- AADConfig (settings), Strategy (enum of auth strategies)
- DEFAULT_AUTHORITY_HOST (Azure Public Cloud)
"""

from .config import DEFAULT_AUTHORITY_HOST, AADConfig, Strategy
from .exceptions import (
    AzureAuthError,
    CertificateParseError,
    ConfigError,
    CredentialConstructionError,
    CredentialError,
    DecodeError,
    NoMatchingStrategyError,
    ParseError,
)
from .factory import credential_from_bytes, select_strategy, token_from_config
from .loader import load_config, load_config_file
from .token import Token

__all__ = [
    "AADConfig",
    "Strategy",
    "DEFAULT_AUTHORITY_HOST",
    "Token",
    "load_config",
    "load_config_file",
    "token_from_config",
    "select_strategy",
    "credential_from_bytes",
    "AzureAuthError",
    "ConfigError",
    "DecodeError",
    "ParseError",
    "CredentialError",
    "CertificateParseError",
    "CredentialConstructionError",
    "NoMatchingStrategyError",
]
