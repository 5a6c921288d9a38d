"""Error envelope helpers and exit codes for the sizesweep CLI."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from functools import wraps
from typing import Any, NoReturn, TypeVar

logger = logging.getLogger(__name__)
T = TypeVar("T")


class Exit(IntEnum):
    """Process exit status of a sweep, by failure kind."""

    OK = 0
    BAD_INPUT = 2
    POLICY = 4
    IO = 5
    SPAWN = 6


@dataclass(slots=True)
class ErrorEnvelope:
    """One-line JSON description of why a sweep stopped."""

    error: str
    detail: str
    hint: str | None = None

    def to_json(self) -> str:
        payload = {"error": self.error, "detail": self.detail}
        if self.hint:
            payload["hint"] = self.hint
        return json.dumps(payload, ensure_ascii=False)


def die(code: Exit, kind: str, detail: str, hint: str | None = None) -> NoReturn:
    """Write the envelope to stderr, then exit with ``code``."""

    env = ErrorEnvelope(error=kind, detail=detail, hint=hint)
    sys.stderr.write(env.to_json() + "\n")
    try:
        sys.stderr.flush()
    finally:
        sys.exit(int(code))


class EnvelopeError(Exception):
    """Fatal sweep error; ``hint`` suggests a fix to the operator."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class BadInputError(EnvelopeError):
    """Raised for malformed settings, flags or environment overrides."""


class IOErrorEnvelope(EnvelopeError):  # noqa: N818 - mirrors Exit.IO
    """Raised when the configuration document cannot be written."""


class SpawnError(EnvelopeError):
    """Raised when the benchmark executable cannot be launched or times out."""


_EXCEPTION_ORDER: tuple[tuple[type[EnvelopeError], Exit, str], ...] = (
    (BadInputError, Exit.BAD_INPUT, "BadInput"),
    (IOErrorEnvelope, Exit.IO, "IO"),
    (SpawnError, Exit.SPAWN, "Spawn"),
)


def guard_cli(fn: Callable[..., T]) -> Callable[..., T]:
    """Turn fatal sweep errors raised by ``fn`` into an envelope and exit status."""

    @wraps(fn)
    def _wrapped(*args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        except EnvelopeError as exc:
            for exc_type, exit_code, label in _EXCEPTION_ORDER:
                if isinstance(exc, exc_type):
                    die(exit_code, label, str(exc), hint=getattr(exc, "hint", None))
            die(Exit.POLICY, "UnhandledEnvelope", str(exc), hint=getattr(exc, "hint", None))
        except FileNotFoundError as exc:
            die(Exit.IO, "FileNotFound", str(exc))
        except Exception as exc:  # pragma: no cover - unexpected failure
            logger.exception("Unhandled CLI exception")
            die(Exit.POLICY, "Unhandled", f"{type(exc).__name__}: {exc}")

    return _wrapped


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
