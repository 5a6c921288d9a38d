"""Benchmark size sweep driver."""

from . import config, contracts, document, driver

__all__ = [
    "config",
    "contracts",
    "document",
    "driver",
]
