class DuelError(Exception):
    """Base error for duel engine domain exceptions."""


class InvalidTransitionError(DuelError):
    """Raised when a battle operation is not permitted in the current state."""


class MissingActionError(DuelError):
    """Raised when a round is resolved without a selected action."""


class ConfigError(DuelError):
    """Raised when configuration or enemy catalog data is malformed."""


class NotFound(DuelError):
    """Raised when a requested enemy cannot be found in the roster."""
