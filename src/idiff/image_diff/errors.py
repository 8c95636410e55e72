from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Bounds, Dimensions


class ImageDiffError(Exception):
    pass


class EmptyIntersection(ImageDiffError):
    def __init__(self, source: Dimensions, target: Dimensions) -> None:
        super().__init__("Maximum width / height cannot be ZERO (0).")
        self.source = source
        self.target = target


class DimensionMismatch(ImageDiffError):
    def __init__(self, source: Dimensions, target: Dimensions) -> None:
        super().__init__(
            f"'src' ({source}) & 'tgt' ({target}) do not have the same dimensions. "
            "(Try without 'strict' flag to check the differences)"
        )
        self.source = source
        self.target = target


class BlockSizeExceedsBounds(ImageDiffError):
    def __init__(self, block_size: int, bounds: Bounds) -> None:
        super().__init__(
            f"block size ({block_size}) cannot be greater than the max bound "
            f"(height: {bounds.max_height}, width: {bounds.max_width})."
        )
        self.block_size = block_size
        self.bounds = bounds


class BufferAccessError(ImageDiffError):
    """Decoding, copying or encoding an image failed."""
