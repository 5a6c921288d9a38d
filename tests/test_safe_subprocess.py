from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import cast

import pytest

from sizesweep._safe_subprocess import SubprocessError, format_command, safe_call


def test_safe_call_returns_zero() -> None:
    assert safe_call([sys.executable, "-c", "pass"]) == 0


def test_safe_call_returns_nonzero_without_raising(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    assert safe_call([sys.executable, "-c", "import sys; sys.exit(3)"]) == 3
    assert "exited with code 3" in caplog.text


def test_safe_call_inherits_stdout(capfd: pytest.CaptureFixture[str]) -> None:
    safe_call([sys.executable, "-c", "print('from child')"])
    assert "from child" in capfd.readouterr().out


def test_safe_call_timeout() -> None:
    with pytest.raises(SubprocessError):
        safe_call([sys.executable, "-c", "import time; time.sleep(2)"], timeout=0.1)


def test_safe_call_missing_executable(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)
    with pytest.raises(OSError):
        safe_call(["./__nonexistent_bench__"])
    assert "Failed to spawn" in caplog.text


def test_safe_call_validates_args_sequence() -> None:
    with pytest.raises(ValueError):
        safe_call(())
    with pytest.raises(ValueError):
        safe_call(["echo", cast(str, 123)])


def test_format_command_quotes_parts() -> None:
    assert format_command(["./bench", "my config.toml"]) == "./bench 'my config.toml'"
