from __future__ import annotations

from pathlib import Path

import orjson

from idiff.image_diff.errors import BufferAccessError
from idiff.image_diff.types import ComparisonResult


def generate_output_file_name(output: str | None, target: Path) -> Path:
    """Name the highlighted image after ``output``, or ``<target stem>_diff``.

    The file lands next to ``target`` and keeps its extension.
    """
    file_name = output if output else f"{target.stem}_diff"
    path = target.parent / file_name
    if target.suffix:
        path = path.with_suffix(target.suffix)
    return path


def serialize_report(result: ComparisonResult) -> dict[str, object]:
    report = result.report
    return {
        "source": result.source.model_dump(),
        "target": result.target.model_dump(),
        "bounds": result.bounds.model_dump(),
        "block_size": result.block_size,
        "percentage": report.percentage,
        "changed_pixels": report.changed_pixels,
        "total_pixels": report.total_pixels,
        "differing_blocks": [block.model_dump() for block in report.differing_blocks],
    }


def write_report(result: ComparisonResult, path: Path) -> None:
    data = orjson.dumps(serialize_report(result), option=orjson.OPT_INDENT_2)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise BufferAccessError(f"Encountered error while writing report to {path}.") from e
