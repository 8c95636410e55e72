from __future__ import annotations

from collections.abc import Iterator

from PIL import Image

from .types import Bounds, DiffReport


def iter_blocks(bounds: Bounds, block_size: int) -> Iterator[Bounds]:
    """Partition ``bounds`` into square blocks in row-major order.

    Blocks on the right and bottom fringe are clipped to ``bounds``.
    """
    if block_size < 1:
        raise ValueError(f"block size must be a positive integer, got {block_size}")

    for start_height in range(bounds.min_height, bounds.max_height, block_size):
        max_height = min(start_height + block_size, bounds.max_height)
        for start_width in range(bounds.min_width, bounds.max_width, block_size):
            max_width = min(start_width + block_size, bounds.max_width)
            yield Bounds(
                min_width=start_width,
                max_width=max_width,
                min_height=start_height,
                max_height=max_height,
            )


def _pixels(image: Image.Image):
    if image.mode != "RGBA":
        raise ValueError(f"expected an RGBA image, got mode {image.mode!r}")
    return image.load()


def _count_mismatches(src_px, tgt_px, block: Bounds) -> int:
    diff = 0
    for y in range(block.min_height, block.max_height):
        for x in range(block.min_width, block.max_width):
            if src_px[x, y] != tgt_px[x, y]:
                diff += 1
    return diff


def pixel_difference(src: Image.Image, tgt: Image.Image, bounds: Bounds) -> int:
    """Count the pixels inside ``bounds`` whose RGBA values differ."""
    return _count_mismatches(_pixels(src), _pixels(tgt), bounds)


def percentage_difference(
    src: Image.Image,
    tgt: Image.Image,
    bounds: Bounds,
    block_size: int,
) -> DiffReport:
    """Compare ``src`` and ``tgt`` block by block over ``bounds``.

    The percentage is ``mismatching pixels / (max_width * max_height) * 100``,
    so the area always counts from the image origin even for offset bounds.
    Every block holding at least one mismatch is reported, in scan order.
    """
    src_px = _pixels(src)
    tgt_px = _pixels(tgt)

    per_block = [
        (block, _count_mismatches(src_px, tgt_px, block))
        for block in iter_blocks(bounds, block_size)
    ]
    differing = tuple(block for block, diff in per_block if diff)
    changed = sum(diff for _, diff in per_block)
    total = bounds.max_width * bounds.max_height

    return DiffReport(
        percentage=changed * 100 / total,
        differing_blocks=differing,
        changed_pixels=changed,
        total_pixels=total,
    )
