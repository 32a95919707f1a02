"""
Gobblet Error Hierarchy

Exception hierarchy for the Gobblet AI service. All custom exceptions
inherit from GobbletError so HTTP handlers can catch and serialise them in
one place.

Usage:
    from app.errors import RulesViolationError

    try:
        position.apply_move(move)
    except RulesViolationError as e:
        logger.warning("Invalid move: %s", e.message)
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    # Base error
    "GobbletError",
    "InvalidStateError",
    # Game rules errors
    "RulesViolationError",
]


class GobbletError(Exception):
    """Base exception for all Gobblet service errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "GOBBLET_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Game Rules Errors
# =============================================================================


class RulesViolationError(GobbletError):
    """Move that breaks the placement rules.

    Raised by ``Position.apply_move`` when the chip is not the mover's, the
    mover has no chip of that size left, or the target cell holds an equal
    or larger chip. Inside the engine this is always a caller bug.
    """
    code: str = "RULES_VIOLATION"


class InvalidStateError(GobbletError):
    """Malformed game state.

    Raised when an inbound state or fingerprint cannot describe a position
    (e.g. a chip with an owner but no size, or a fingerprint wider than
    the packed layout).
    """
    code: str = "INVALID_STATE"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GobbletError):
    """Invalid service configuration (environment variables)."""
    code: str = "CONFIGURATION_ERROR"
