"""Safe wrapper around standard-library subprocess for benchmark launches."""

from __future__ import annotations

import logging
import shlex
import subprocess  # noqa: S404  # nosec B404 - subprocess usage governed via validation helpers
from collections.abc import Sequence

logger = logging.getLogger(__name__)


class SubprocessError(RuntimeError):
    """Raised when a benchmark invocation exceeds its timeout."""


def _validate_args(args: Sequence[str]) -> list[str]:
    if not isinstance(args, list | tuple) or not args:
        raise ValueError("args must be a non-empty sequence of strings")
    if not all(isinstance(arg, str) for arg in args):
        raise ValueError("all subprocess arguments must be strings")
    return list(args)


def format_command(args: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in args)


def safe_call(
    args: Sequence[str],
    *,
    timeout: float | None = None,
) -> int:
    """Run a command to completion with inherited stdio and return its exit code.

    A non-zero exit code is logged but never raised. Spawn failures (missing or
    non-executable program) propagate as ``OSError``.
    """

    command = _validate_args(args)
    cmd_repr = format_command(command)
    logger.debug("Executing command: %s (timeout=%s)", cmd_repr, timeout)
    try:
        completed = subprocess.run(  # noqa: S603  # nosec B603 - command validated via _validate_args
            command,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        logger.warning("Command timed out after %.1fs: %s", timeout, cmd_repr)
        raise SubprocessError(f"Command timed out after {timeout:.1f}s: {cmd_repr}") from exc
    except OSError as exc:
        logger.error("Failed to spawn process %s: %s", cmd_repr, exc)
        raise
    if completed.returncode != 0:
        logger.warning("Command exited with code %s: %s", completed.returncode, cmd_repr)
    else:
        logger.debug("Command succeeded: %s", cmd_repr)
    return completed.returncode


__all__ = [
    "SubprocessError",
    "format_command",
    "safe_call",
]
