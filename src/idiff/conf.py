from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["DEFAULT_BLOCK_SIZE", "DiffOptions"]

DEFAULT_BLOCK_SIZE = 10


class DiffOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    src: Path
    tgt: Path
    strict: bool = False
    highlight: bool = False
    block_size: int = Field(default=DEFAULT_BLOCK_SIZE, ge=1)
    output: str | None = Field(default=None, min_length=1)
    json_out: Path | None = None
    verbose: bool = False

    @field_validator("output")
    @classmethod
    def _check_output_name(cls, value: str | None) -> str | None:
        # may point into a subdirectory, but must end in a file name
        if value is not None and Path(value).name in ("", ".", ".."):
            raise ValueError(f"output must name a file, got {value!r}")
        return value
