from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

from idiff.conf import DEFAULT_BLOCK_SIZE

from .blocks import percentage_difference
from .bounds import check_block_size, ensure_same_dimensions, resolve_bounds
from .errors import BufferAccessError
from .highlight import highlight as draw_highlight
from .types import ComparisonResult, Dimensions

logger = logging.getLogger(__name__)

JPEG_SUFFIXES = (".jpg", ".jpeg")

ImageSource = str | Path | bytes | Image.Image


def load_image(source: ImageSource) -> Image.Image:
    """Decode ``source`` into an RGBA image.

    Paths and bytes are opened and fully loaded; images are converted when
    they are not already RGBA. Decode failures raise BufferAccessError.
    """
    if isinstance(source, Image.Image):
        return source if source.mode == "RGBA" else source.convert("RGBA")

    fp = io.BytesIO(source) if isinstance(source, bytes) else source
    try:
        with Image.open(fp) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, ValueError) as e:
        raise BufferAccessError(
            "Encountered error while opening source / target image."
        ) from e


def save_image(image: Image.Image, path: str | Path) -> None:
    if image.mode == "RGBA" and Path(path).suffix.lower() in JPEG_SUFFIXES:
        image = image.convert("RGB")
    try:
        image.save(path)
    except (OSError, ValueError, KeyError) as e:
        raise BufferAccessError(f"Encountered error while writing image to {path}.") from e


def copy_image(image: Image.Image) -> Image.Image:
    try:
        return image.copy()
    except (OSError, ValueError) as e:
        raise BufferAccessError(
            "Encountered error while creating a copy of target image for highlighting."
        ) from e


def compare_images(
    source: ImageSource,
    target: ImageSource,
    *,
    block_size: int = DEFAULT_BLOCK_SIZE,
    strict: bool = False,
    highlight: bool = False,
) -> ComparisonResult:
    src_img = load_image(source)
    tgt_img = load_image(target)

    src_dims = Dimensions.of(src_img)
    tgt_dims = Dimensions.of(tgt_img)
    if strict:
        ensure_same_dimensions(src_dims, tgt_dims)

    bounds = resolve_bounds(src_dims, tgt_dims)
    check_block_size(bounds, block_size)

    logger.debug(
        "image_diff.compare: scanning",
        extra={
            "source": str(src_dims),
            "target": str(tgt_dims),
            "block_size": block_size,
        },
    )
    report = percentage_difference(src_img, tgt_img, bounds, block_size)
    logger.info(
        "image_diff.compare: %d of %d pixels differ in %d blocks",
        report.changed_pixels,
        report.total_pixels,
        len(report.differing_blocks),
        extra={"percentage": report.percentage},
    )

    highlighted: Image.Image | None = None
    if highlight and report.has_difference:
        # tgt_img may be the caller's own image; annotate a copy
        highlighted = copy_image(tgt_img)
        draw_highlight(highlighted, report.differing_blocks)

    return ComparisonResult(
        source=src_dims,
        target=tgt_dims,
        bounds=bounds,
        block_size=block_size,
        report=report,
        highlighted=highlighted,
    )
