"""Configuration document handed to the benchmark executable."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

DEFAULT_SEED = 42


class ConfigDocument(BaseModel):
    """The three keys the benchmark reads: ``input-size``, ``input-range``, ``seed``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    input_size: int = Field(..., alias="input-size", gt=0, description="Number of inserts.")
    input_range: int = Field(
        ..., alias="input-range", gt=0, description="Upper bound for generated keys."
    )
    seed: int = Field(default=DEFAULT_SEED, description="Seed for the benchmark's RNG.")

    @model_validator(mode="after")
    def _range_matches_size(self) -> ConfigDocument:
        if self.input_range != self.input_size:
            raise ValueError("input-range must equal input-size")
        return self

    @classmethod
    def for_size(cls, size: int, seed: int = DEFAULT_SEED) -> ConfigDocument:
        return cls(input_size=size, input_range=size, seed=seed)


def format_document_to_toml(doc: ConfigDocument) -> str:
    lines = [f"{key} = {value}" for key, value in doc.model_dump(by_alias=True).items()]
    lines.append("")
    return "\n".join(lines)


def write_document(path: Path, doc: ConfigDocument) -> None:
    """Replace ``path`` with the serialized document.

    Serialization happens with the handle open, so the file is closed on every
    exit path. The parent directory must already exist.
    """

    with path.open("w", encoding="utf-8") as fh:
        fh.write(format_document_to_toml(doc))
    logger.debug("Wrote %s (input-size=%d)", path, doc.input_size)


__all__ = [
    "DEFAULT_SEED",
    "ConfigDocument",
    "format_document_to_toml",
    "write_document",
]
