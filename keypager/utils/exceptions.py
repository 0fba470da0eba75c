class KeypagerError(Exception):
    """Base exception for all Keypager errors."""


class InvalidOrderError(KeypagerError):
    """Raised when an ordering key is malformed or unusable for a cursor."""


class InvalidPageRequestError(KeypagerError):
    """Raised when first/last counts are missing, conflicting or out of range."""


class CursorDecodeError(KeypagerError):
    """Raised when an opaque cursor cannot be turned back into a value."""
