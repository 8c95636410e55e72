from __future__ import annotations

from .errors import BlockSizeExceedsBounds, DimensionMismatch, EmptyIntersection
from .types import Bounds, Dimensions


def ensure_same_dimensions(source: Dimensions, target: Dimensions) -> None:
    if source != target:
        raise DimensionMismatch(source, target)


def resolve_bounds(source: Dimensions, target: Dimensions) -> Bounds:
    """Return the area shared by both images, anchored at the origin.

    Raises EmptyIntersection when the images overlap on zero width or height.
    """
    max_width = min(source.width, target.width)
    max_height = min(source.height, target.height)

    if max_width == 0 or max_height == 0:
        raise EmptyIntersection(source, target)

    return Bounds(min_width=0, max_width=max_width, min_height=0, max_height=max_height)


def check_block_size(bounds: Bounds, block_size: int) -> None:
    if block_size < 1:
        raise ValueError(f"block size must be a positive integer, got {block_size}")
    if block_size * block_size > bounds.area:
        raise BlockSizeExceedsBounds(block_size, bounds)
