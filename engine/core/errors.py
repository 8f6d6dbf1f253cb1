# engine/core/errors.py
"""
Exception types raised by the battle and message systems.
"""


class EngineError(Exception):
    """Base class for engine errors."""
    pass


class ThreatValueError(EngineError, ValueError):
    """Raised when a non-finite or non-numeric value reaches the threat ledger."""
    pass


class FontMetricsError(EngineError):
    """Raised when the host cannot measure text. Treated as a fatal configuration error."""
    pass


class MessageStateError(EngineError):
    """Raised when a message operation is called in the wrong reflow state."""
    pass
