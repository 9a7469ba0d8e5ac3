"""Exception types raised by env-prefs."""


class PreferenceError(Exception):
    """Base error for preference storage operations."""


class PreferenceEncodeError(PreferenceError):
    """Raised when a value cannot be serialized for storage.

    Reads are lenient and never raise; writes are strict and surface
    this error to the caller.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Cannot encode value for {key}: {reason}")
        self.key = key
        self.reason = reason


class ConfirmationError(PreferenceError):
    """Raised when a confirmation request is resolved twice or is unknown."""
