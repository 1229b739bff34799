"""Exception hierarchy for Forvo pronunciation lookup."""


class ForvoError(Exception):
    """Base exception for all forvo-pronounce errors."""


class ConfigError(ForvoError):
    """Persisted configuration is unreadable or malformed."""


class TransferError(ForvoError):
    """A network fetch or the local write of its body failed."""

    def __init__(
        self,
        message: str,
        url: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CollectionError(ForvoError):
    """AnkiConnect rejected a request or could not be reached."""
