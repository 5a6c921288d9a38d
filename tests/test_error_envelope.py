from __future__ import annotations

import json

import pytest

from sizesweep.contracts.error import (
    BadInputError,
    ErrorEnvelope,
    EnvelopeError,
    Exit,
    IOErrorEnvelope,
    SpawnError,
    die,
    guard_cli,
)


def test_envelope_omits_empty_hint() -> None:
    assert json.loads(ErrorEnvelope(error="IO", detail="disk full").to_json()) == {
        "error": "IO",
        "detail": "disk full",
    }


def test_die_writes_envelope(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        die(Exit.IO, "IO", "disk full", hint="free some space")
    assert excinfo.value.code == int(Exit.IO)
    payload = json.loads(capsys.readouterr().err)
    assert payload == {"error": "IO", "detail": "disk full", "hint": "free some space"}


@pytest.mark.parametrize(
    ("exc", "code", "label"),
    [
        (BadInputError("bad"), Exit.BAD_INPUT, "BadInput"),
        (IOErrorEnvelope("io"), Exit.IO, "IO"),
        (SpawnError("spawn"), Exit.SPAWN, "Spawn"),
        (EnvelopeError("other"), Exit.POLICY, "UnhandledEnvelope"),
        (FileNotFoundError("gone"), Exit.IO, "FileNotFound"),
    ],
)
def test_guard_cli_maps_exceptions(
    exc: Exception, code: Exit, label: str, capsys: pytest.CaptureFixture[str]
) -> None:
    @guard_cli
    def _handler() -> int:
        raise exc

    with pytest.raises(SystemExit) as excinfo:
        _handler()
    assert excinfo.value.code == int(code)
    assert json.loads(capsys.readouterr().err)["error"] == label


def test_guard_cli_passes_through_return_value() -> None:
    @guard_cli
    def _handler(value: int) -> int:
        return value * 2

    assert _handler(21) == 42
