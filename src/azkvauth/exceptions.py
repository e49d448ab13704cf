"""Exceptions raised while loading an Azure authentication file and
resolving it into a credential.

Every error is chained to the underlying cause, so ``__cause__`` carries the
original ``UnicodeError``, ``yaml.YAMLError``, ``ValidationError`` or
``ValueError`` raised by the Azure SDK.
"""


class AzureAuthError(Exception):
    """Base exception for this package."""


# Loading errors
class ConfigError(AzureAuthError):
    """Base exception for failures turning bytes into an :class:`AADConfig`."""


class DecodeError(ConfigError):
    """The file bytes could not be transcoded to UTF-8."""


class ParseError(ConfigError):
    """The decoded document is malformed or does not match the schema."""


# Resolution errors
class CredentialError(AzureAuthError):
    """Base exception for failures turning an :class:`AADConfig` into a credential."""


class CertificateParseError(CredentialError):
    """The client certificate (or its password) could not be parsed."""


class CredentialConstructionError(CredentialError):
    """``azure.identity`` rejected the supplied fields."""


class NoMatchingStrategyError(CredentialError):
    """No supported combination of fields is present in the configuration."""
