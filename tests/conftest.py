import logging
import os
import stat
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
if SRC.exists():
    sys.path.insert(0, str(SRC))

# Register shared Hypothesis profiles for deterministic CI runs and fast local loops.
from tests.util import hypothesis_profiles  # noqa: E402,F401  pylint: disable=unused-import

_STUB_TEMPLATE = """#!/bin/sh
echo "$1" >> "{workdir}/calls.log"
n=$(wc -l < "{workdir}/calls.log" | tr -d ' ')
cp "$1" "{workdir}/seen_$n.toml"
if [ "$n" -eq "{fail_on}" ]; then
  exit 1
fi
exit 0
"""


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees package records."""

    yield
    pkg_logger = logging.getLogger("sizesweep")
    for handler in list(pkg_logger.handlers):
        handler.close()
        pkg_logger.removeHandler(handler)
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _clear_sweep_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("SWEEP_") or key == "SIZESWEEP_SETTINGS":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def make_stub_bench(tmp_path: Path) -> Callable[..., Path]:
    """Write ``./bench`` into ``tmp_path``; it logs each argument and snapshots the config."""

    def _make(fail_on: int = 0) -> Path:
        bench = tmp_path / "bench"
        bench.write_text(_STUB_TEMPLATE.format(workdir=tmp_path, fail_on=fail_on))
        bench.chmod(bench.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return bench

    return _make
