"""Contract helpers for the sizesweep CLI."""

from .error import (
    BadInputError,
    EnvelopeError,
    ErrorEnvelope,
    Exit,
    IOErrorEnvelope,
    SpawnError,
    die,
    guard_cli,
)

__all__ = [
    "Exit",
    "ErrorEnvelope",
    "EnvelopeError",
    "BadInputError",
    "IOErrorEnvelope",
    "SpawnError",
    "guard_cli",
    "die",
]
