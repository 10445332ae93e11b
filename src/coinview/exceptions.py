"""Custom exceptions for the coinview market-data service.

Provider and mapping errors live here so the client, the adapters and the
HTTP layer can share them without circular imports.
"""


class CoinViewError(Exception):
    """Base exception for all coinview errors."""


class ProviderError(CoinViewError):
    """Raised when an upstream provider is unreachable, times out, or answers non-2xx."""


class MalformedResponseError(ProviderError):
    """Raised when an upstream response does not have the expected shape."""


class UnsupportedIntervalError(CoinViewError, ValueError):
    """Raised when a caller asks for a history interval outside the supported set."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Unsupported interval: {label!r}")
        self.label = label
