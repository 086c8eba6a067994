"""Custom exceptions for realm-talks."""


class RealmTalksError(Exception):
    """Base exception for all realm-talks errors."""

    pass


class NetworkError(RealmTalksError):
    """Feed request failed: non-2xx response, timeout or connection error."""

    pass


class FeedParseError(RealmTalksError):
    """Feed body could not be parsed into entries."""

    pass


class FieldError(RealmTalksError):
    """A feed entry field was missing or invalid and a default was used."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class FilesystemError(RealmTalksError):
    """Talks directory or talk file could not be created or written."""

    pass
