"""Command-line entry point for the benchmark size sweep."""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import os
import shlex
import sys
from collections.abc import Sequence
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import load_sweep_config
from .contracts.error import Exit, guard_cli
from .driver import SweepDriver

logger = logging.getLogger("sizesweep")

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"
DEFAULT_LOG_MAX_BYTES = 5_000_000
DEFAULT_LOG_BACKUP_COUNT = 5
SETTINGS_ENV = "SIZESWEEP_SETTINGS"


class JsonFormatter(logging.Formatter):
    """Render log records as JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, DEFAULT_LOG_DATEFMT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    use_json: bool = False,
    log_file: str | None = None,
    *,
    max_bytes: int = DEFAULT_LOG_MAX_BYTES,
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT,
    level: int = logging.INFO,
) -> None:
    """Configure stderr (and optional rotating file) logging for the package."""

    formatter: logging.Formatter
    if use_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_LOG_DATEFMT)

    for handler in list(logger.handlers):
        with contextlib.suppress(Exception):
            handler.close()
        logger.removeHandler(handler)

    logger.setLevel(level)
    logger.propagate = False

    # stdout carries progress lines only
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_file:
        handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Write a benchmark config for each input size and run the benchmark against it."
        )
    )
    parser.add_argument("--start", type=int, default=None, help="First input size (inclusive).")
    parser.add_argument("--stop", type=int, default=None, help="Last input size (inclusive).")
    parser.add_argument("--step", type=int, default=None, help="Increment between sizes.")
    parser.add_argument("--seed", type=int, default=None, help="Seed written to every config.")
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Config document the benchmark reads (default: config.toml).",
    )
    parser.add_argument(
        "--bench",
        default=None,
        help="Benchmark command; the config path is appended (default: ./bench).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each benchmark run (default: no limit).",
    )
    parser.add_argument(
        "--report", type=Path, default=None, help="Write a Markdown run report to this path."
    )
    parser.add_argument(
        "--settings",
        default=None,
        help=f"TOML settings file with a [sweep] table (or set {SETTINGS_ENV}).",
    )
    parser.add_argument("--log-json", action="store_true", help="Emit logs in JSON format")
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional log file path (rotates at 5MB, keeps 5 backups by default)",
    )
    parser.add_argument(
        "--log-max-bytes",
        type=int,
        default=DEFAULT_LOG_MAX_BYTES,
        help="Max bytes per log file before rotation (default: %(default)s)",
    )
    parser.add_argument(
        "--log-backup-count",
        type=int,
        default=DEFAULT_LOG_BACKUP_COUNT,
        help="Number of rotated log files to keep (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


@guard_cli
def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(
        args.log_json,
        args.log_file,
        max_bytes=args.log_max_bytes,
        backup_count=args.log_backup_count,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    settings_path = args.settings or os.getenv(SETTINGS_ENV)
    cfg = load_sweep_config(settings_path)
    if settings_path:
        logger.info("Loaded settings from %s", settings_path)
    cfg = cfg.with_overrides(
        start=args.start,
        stop=args.stop,
        step=args.step,
        seed=args.seed,
        config_path=args.config_file,
        bench=shlex.split(args.bench) if args.bench is not None else None,
        timeout=args.timeout,
        report_path=args.report,
    )

    SweepDriver(cfg).run()
    return int(Exit.OK)


def console_main() -> None:
    """Entry point for console_scripts."""

    raise SystemExit(main(sys.argv[1:]))


__all__ = [
    "JsonFormatter",
    "build_parser",
    "configure_logging",
    "console_main",
    "main",
]
