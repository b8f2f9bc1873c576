class RuleError(Exception):
    """Base exception for rule-engine contract violations."""

    pass


class InvalidPiece(RuleError, ValueError):
    """Raised when a piece has an unknown color or a value outside 1..10."""

    pass


class InventoryExhausted(RuleError, ValueError):
    """Raised when taking a piece whose remaining count is zero."""

    pass


class MissingCompensation(RuleError, LookupError):
    """Raised when a pass has no used piece to return to the mover."""

    pass
