from __future__ import annotations

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Dimensions(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=0)
    height: int = Field(ge=0)

    @classmethod
    def of(cls, image: Image.Image) -> Dimensions:
        width, height = image.size
        return cls(width=width, height=height)

    def __str__(self) -> str:
        return f"({self.width}, {self.height})"


class Bounds(BaseModel):
    """Axis-aligned rectangle, half-open on the max side."""

    model_config = ConfigDict(frozen=True)

    min_width: int = Field(ge=0)
    max_width: int = Field(ge=0)
    min_height: int = Field(ge=0)
    max_height: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_not_degenerate(self) -> Bounds:
        if self.min_width >= self.max_width or self.min_height >= self.max_height:
            raise ValueError(
                f"degenerate bounds: width [{self.min_width}, {self.max_width}), "
                f"height [{self.min_height}, {self.max_height})"
            )
        return self

    @property
    def width(self) -> int:
        return self.max_width - self.min_width

    @property
    def height(self) -> int:
        return self.max_height - self.min_height

    @property
    def area(self) -> int:
        return self.width * self.height

    def as_box(self) -> tuple[int, int, int, int]:
        # inclusive corners, as expected by ImageDraw
        return (self.min_width, self.min_height, self.max_width - 1, self.max_height - 1)

    def contains(self, other: Bounds) -> bool:
        return (
            self.min_width <= other.min_width
            and other.max_width <= self.max_width
            and self.min_height <= other.min_height
            and other.max_height <= self.max_height
        )


class DiffReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: float
    differing_blocks: tuple[Bounds, ...] = ()
    changed_pixels: int = 0
    total_pixels: int

    @property
    def has_difference(self) -> bool:
        return self.changed_pixels > 0


class ComparisonResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source: Dimensions
    target: Dimensions
    bounds: Bounds
    block_size: int
    report: DiffReport
    highlighted: Image.Image | None = Field(default=None, exclude=True)
