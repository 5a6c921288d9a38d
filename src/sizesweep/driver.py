"""Size sweep driver: write a config document, then run the benchmark on it."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from . import _safe_subprocess
from ._safe_subprocess import SubprocessError
from .config import SweepConfig
from .contracts.error import IOErrorEnvelope, SpawnError
from .document import ConfigDocument, write_document

logger = logging.getLogger(__name__)


def iter_sizes(start: int, stop: int, step: int) -> Iterator[int]:
    """Yield ``start, start + step, ...`` up to and including ``stop``."""

    return iter(range(start, stop + 1, step))


@dataclass
class IterationResult:
    size: int
    exit_code: int
    duration_seconds: float


class SweepDriver:
    def __init__(self, config: SweepConfig) -> None:
        self.config = config

    def sizes(self) -> Iterator[int]:
        return iter_sizes(self.config.start, self.config.stop, self.config.step)

    def command(self) -> list[str]:
        return [*self.config.bench, str(self.config.config_path)]

    def run(self) -> list[IterationResult]:
        results: list[IterationResult] = []
        for size in self.sizes():
            results.append(self.run_iteration(size))
        failures = sum(1 for result in results if result.exit_code != 0)
        logger.info(
            "Sweep finished: %d invocations, %d non-zero exits", len(results), failures
        )
        if self.config.report_path is not None:
            self._write_report(results)
        return results

    def run_iteration(self, size: int) -> IterationResult:
        doc = ConfigDocument.for_size(size, seed=self.config.seed)
        path = self.config.config_path
        try:
            write_document(path, doc)
        except OSError as exc:
            raise IOErrorEnvelope(f"Unable to write {path}: {exc}") from exc

        print(f"Benchmarking size {size}...", flush=True)

        command = self.command()
        start = time.perf_counter()
        try:
            exit_code = _safe_subprocess.safe_call(command, timeout=self.config.timeout)
        except OSError as exc:
            raise SpawnError(
                f"Failed to launch {_safe_subprocess.format_command(command)}: {exc}",
                hint="check that the benchmark exists and is executable",
            ) from exc
        except SubprocessError as exc:
            raise SpawnError(str(exc)) from exc
        duration = time.perf_counter() - start
        return IterationResult(size=size, exit_code=exit_code, duration_seconds=duration)

    def _write_report(self, results: Iterable[IterationResult]) -> None:
        report_path = self.config.report_path
        if report_path is None:
            return
        lines = [
            "# Size Sweep Report",
            "",
            f"Generated: {time.strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            f"Command: `{_safe_subprocess.format_command(self.command())}`",
            "",
            "| Size | Exit code | Status | Duration (s) |",
            "|---:|---:|---|---:|",
        ]
        for result in results:
            status = "ok" if result.exit_code == 0 else "failed"
            lines.append(
                f"| {result.size} | {result.exit_code} | {status} | "
                f"{result.duration_seconds:.2f} |"
            )
        lines.append("")
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text("\n".join(lines), encoding="utf-8")
        logger.info("Wrote report to %s", report_path)


__all__ = [
    "IterationResult",
    "SweepDriver",
    "iter_sizes",
]
