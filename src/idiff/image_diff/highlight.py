from __future__ import annotations

from collections.abc import Iterable

from PIL import Image, ImageDraw

from .types import Bounds

HIGHLIGHT_COLOR = (255, 0, 0, 255)


def highlight(
    image: Image.Image,
    blocks: Iterable[Bounds],
    color: tuple[int, int, int, int] = HIGHLIGHT_COLOR,
) -> None:
    """Outline every block on ``image`` in place with a one pixel border.

    Pass a copy when the original image must be preserved.
    """
    image_bounds = Bounds(
        min_width=0, max_width=image.width, min_height=0, max_height=image.height
    )
    draw = ImageDraw.Draw(image)
    for block in blocks:
        if not image_bounds.contains(block):
            raise ValueError(f"block {block!r} lies outside the image {image.size}")
        draw.rectangle(block.as_box(), outline=color, width=1)
