"""Typed settings loader for the size sweep."""

from __future__ import annotations

import math
import os
import shlex
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError
from .document import DEFAULT_SEED

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _default_bench() -> list[str]:
    return ["./bench"]


@dataclass
class SweepConfig:
    start: int = 1_000_000
    stop: int = 100_000_000
    step: int = 1_000_000
    seed: int = DEFAULT_SEED
    config_path: Path = Path("config.toml")
    bench: list[str] = field(default_factory=_default_bench)
    timeout: float | None = None
    report_path: Path | None = None

    @classmethod
    def load(cls, path: Path | None) -> SweepConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Settings file not found: {path}") from exc
            except (OSError, UnicodeDecodeError) as exc:
                raise BadInputError(f"Unable to read settings file {path}: {exc}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SweepConfig:
        sweep = data.get("sweep", {})
        if not isinstance(sweep, dict):
            raise BadInputError("[sweep] section must be a table")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(sweep) - known)
        if unknown:
            raise BadInputError(f"Unknown [sweep] keys: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for name in ("start", "stop", "step", "seed"):
            if name in sweep:
                value = sweep[name]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise BadInputError(f"sweep.{name} must be an integer")
                kwargs[name] = value
        if "config_path" in sweep:
            kwargs["config_path"] = Path(str(sweep["config_path"]))
        if "report_path" in sweep:
            kwargs["report_path"] = Path(str(sweep["report_path"]))
        if "bench" in sweep:
            kwargs["bench"] = _coerce_command(sweep["bench"], "sweep.bench")
        if "timeout" in sweep:
            kwargs["timeout"] = _coerce_timeout(sweep["timeout"], "sweep.timeout")
        return cls(**kwargs)

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        mapping: dict[str, tuple[str, Callable[[str], Any]]] = {
            "SWEEP_START": ("start", int),
            "SWEEP_STOP": ("stop", int),
            "SWEEP_STEP": ("step", int),
            "SWEEP_SEED": ("seed", int),
            "SWEEP_CONFIG_PATH": ("config_path", Path),
            "SWEEP_BENCH": ("bench", shlex.split),
            "SWEEP_TIMEOUT": ("timeout", float),
        }
        for key, (attr, caster) in mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(self, attr, value)

    def with_overrides(self, **overrides: Any) -> SweepConfig:
        """Return a copy with every non-``None`` override applied, validated."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        updated = replace(self, **changes)
        updated.validate()
        return updated

    def validate(self) -> None:
        if self.start <= 0:
            raise BadInputError("sweep.start must be > 0")
        if self.step <= 0:
            raise BadInputError("sweep.step must be > 0")
        if self.stop < self.start:
            raise BadInputError("sweep.stop must be >= sweep.start")
        if self.stop > _INT64_MAX:
            raise BadInputError("sweep.stop must fit in a signed 64-bit integer")
        if not _INT64_MIN <= self.seed <= _INT64_MAX:
            raise BadInputError("sweep.seed must fit in a signed 64-bit integer")
        if not self.config_path.name:
            raise BadInputError("sweep.config_path must name a file")
        if not self.bench or not all(part for part in self.bench):
            raise BadInputError(
                "sweep.bench must be a non-empty command",
                hint="e.g. bench = \"./bench\" or bench = [\"./bench\", \"--quiet\"]",
            )
        if self.timeout is not None and not (math.isfinite(self.timeout) and self.timeout > 0):
            raise BadInputError("sweep.timeout must be a finite number > 0 when set")


def _coerce_command(value: Any, label: str) -> list[str]:
    if isinstance(value, str):
        return shlex.split(value)
    if isinstance(value, list) and all(isinstance(part, str) for part in value):
        return list(value)
    raise BadInputError(f"{label} must be a string or a list of strings")


def _coerce_timeout(value: Any, label: str) -> float | None:
    if isinstance(value, str) and value.strip().lower() in {"none", "off", "disabled"}:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise BadInputError(f"{label} must be a number or 'none'")
    return float(value)


def load_sweep_config(path: str | None) -> SweepConfig:
    settings_path = Path(path) if path else None
    return SweepConfig.load(settings_path)


__all__ = [
    "SweepConfig",
    "load_sweep_config",
]
