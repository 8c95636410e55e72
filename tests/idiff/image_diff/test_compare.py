from __future__ import annotations

import io

import pytest
from PIL import Image, ImageDraw

from idiff.image_diff.compare import compare_images, load_image, save_image
from idiff.image_diff.errors import (
    BlockSizeExceedsBounds,
    BufferAccessError,
    DimensionMismatch,
    EmptyIntersection,
)
from idiff.image_diff.highlight import HIGHLIGHT_COLOR
from idiff.image_diff.types import Bounds, Dimensions


def _make_solid_image(width: int, height: int, color: tuple[int, int, int, int]) -> Image.Image:
    return Image.new("RGBA", (width, height), color)


class TestCompareImages:
    def test_identical_images(self):
        img = _make_solid_image(100, 100, (128, 128, 128, 255))
        result = compare_images(img, img.copy())
        assert result.report.percentage == 0.0
        assert result.report.changed_pixels == 0
        assert result.report.total_pixels == 100 * 100
        assert result.highlighted is None

    def test_different_sizes(self):
        small = _make_solid_image(30, 40, (100, 100, 100, 255))
        large = _make_solid_image(50, 20, (100, 100, 100, 255))
        result = compare_images(small, large)
        assert result.source == Dimensions(width=30, height=40)
        assert result.target == Dimensions(width=50, height=20)
        assert result.bounds == Bounds(min_width=0, max_width=30, min_height=0, max_height=20)
        assert result.report.total_pixels == 600

    def test_modified_block(self):
        before = _make_solid_image(100, 100, (100, 100, 100, 255))
        after = _make_solid_image(100, 100, (100, 100, 100, 255))
        draw = ImageDraw.Draw(after)
        draw.rectangle((10, 10, 29, 29), fill=(255, 0, 0, 255))
        result = compare_images(before, after)
        assert result.report.changed_pixels == 400
        assert result.report.percentage == 4.0
        assert len(result.report.differing_blocks) == 4

    def test_bytes_input(self):
        img = _make_solid_image(30, 30, (128, 128, 128, 255))
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        img_bytes = buf.getvalue()

        result = compare_images(img_bytes, img_bytes)
        assert result.report.percentage == 0.0

    def test_rgb_input_is_converted(self):
        rgb = Image.new("RGB", (20, 20), (5, 6, 7))
        rgba = _make_solid_image(20, 20, (5, 6, 7, 255))
        result = compare_images(rgb, rgba)
        assert not result.report.has_difference

    def test_strict_mismatch(self):
        with pytest.raises(DimensionMismatch):
            compare_images(
                _make_solid_image(10, 10, (0, 0, 0, 255)),
                _make_solid_image(10, 11, (0, 0, 0, 255)),
                strict=True,
            )

    def test_non_strict_allows_mismatch(self):
        result = compare_images(
            _make_solid_image(10, 10, (0, 0, 0, 255)),
            _make_solid_image(10, 11, (0, 0, 0, 255)),
        )
        assert not result.report.has_difference

    def test_empty_intersection(self):
        with pytest.raises(EmptyIntersection):
            compare_images(
                _make_solid_image(0, 10, (0, 0, 0, 255)),
                _make_solid_image(10, 10, (0, 0, 0, 255)),
            )

    def test_block_size_too_large(self):
        img = _make_solid_image(10, 10, (0, 0, 0, 255))
        with pytest.raises(BlockSizeExceedsBounds):
            compare_images(img, img.copy(), block_size=11)

    def test_invalid_bytes(self):
        with pytest.raises(BufferAccessError):
            compare_images(b"not an image", b"not an image")

    def test_highlight_annotates_a_copy(self):
        before = _make_solid_image(40, 40, (0, 0, 0, 255))
        after = _make_solid_image(40, 40, (0, 0, 0, 255))
        after.putpixel((15, 15), (9, 9, 9, 255))
        original = after.tobytes()

        result = compare_images(before, after, highlight=True)

        assert after.tobytes() == original
        assert result.highlighted is not None
        assert result.report.differing_blocks == (
            Bounds(min_width=10, max_width=20, min_height=10, max_height=20),
        )
        assert result.highlighted.getpixel((10, 10)) == HIGHLIGHT_COLOR
        assert result.highlighted.getpixel((19, 12)) == HIGHLIGHT_COLOR
        assert result.highlighted.getpixel((15, 15)) == (9, 9, 9, 255)
        assert result.highlighted.getpixel((30, 30)) == (0, 0, 0, 255)

    def test_highlight_skipped_without_difference(self):
        img = _make_solid_image(20, 20, (1, 1, 1, 255))
        result = compare_images(img, img.copy(), highlight=True)
        assert result.highlighted is None


class TestImageIO:
    def test_load_missing_file(self, tmp_path):
        with pytest.raises(BufferAccessError):
            load_image(tmp_path / "missing.png")

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "foo.png"
        path.touch()
        with pytest.raises(BufferAccessError) as excinfo:
            load_image(path)
        assert str(excinfo.value) == "Encountered error while opening source / target image."

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "out.png"
        save_image(_make_solid_image(4, 4, (1, 2, 3, 4)), path)
        loaded = load_image(path)
        assert loaded.mode == "RGBA"
        assert loaded.getpixel((0, 0)) == (1, 2, 3, 4)

    def test_save_rgba_as_jpeg(self, tmp_path):
        path = tmp_path / "out.jpg"
        save_image(_make_solid_image(4, 4, (1, 2, 3, 255)), path)
        assert load_image(path).size == (4, 4)

    def test_save_unknown_extension(self, tmp_path):
        with pytest.raises(BufferAccessError):
            save_image(_make_solid_image(4, 4, (1, 2, 3, 255)), tmp_path / "out.unknownext")
