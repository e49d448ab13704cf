from __future__ import annotations

from typing import Any

from azure.core.credentials import AccessToken, TokenCredential

from .config import Strategy


class Token:
    """A credential resolved from an Azure authentication file.

    Wraps the ``azure.identity`` credential selected for the configuration and
    exposes it through the :class:`TokenCredential` protocol, so a ``Token``
    can be passed to any Azure SDK client. No token is requested until
    :meth:`get_token` is called.
    """

    def __init__(self, credential: TokenCredential, strategy: Strategy) -> None:
        self._credential = credential
        self._strategy = strategy

    @property
    def credential(self) -> TokenCredential:
        return self._credential

    @property
    def strategy(self) -> Strategy:
        """The strategy that produced the wrapped credential."""
        return self._strategy

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        return self._credential.get_token(*scopes, **kwargs)

    def close(self) -> None:
        """Close the wrapped credential and its transport."""
        close = getattr(self._credential, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> Token:
        enter = getattr(self._credential, "__enter__", None)
        if enter is not None:
            enter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Token(strategy={self._strategy.value!r}, credential={type(self._credential).__name__})"
