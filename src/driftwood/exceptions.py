class DriftwoodError(Exception):
    """Base exception for the Driftwood project."""


class LevelFormatError(DriftwoodError, ValueError):
    """Raised when a level layout or level file cannot be parsed."""


class RegistryError(DriftwoodError):
    """Raised when a caller breaks the entity registry contract (e.g. two logs on one cell)."""
