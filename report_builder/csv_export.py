"""
csv_export.py — CSV Serializer and file export.

Flattens a generated dataset into comma-separated text. The header is
`date` followed by the selection as it stands at export time, which may
differ from the selection that generated the rows; absent values become
empty fields.

Values are joined as-is with no quoting. Every generated value is
comma-free, so the output stays well-formed for sample data only.
"""

import logging
from pathlib import Path
from typing import Any, Iterable

from report_builder.exceptions import EmptyDatasetError
from report_builder.generator import ReportDataset

logger = logging.getLogger(__name__)

CSV_FILENAME = "custom-report.csv"
CSV_MEDIA_TYPE = "text/csv"
SEPARATOR = ","


def _field(value: Any) -> str:
    return "" if value is None else str(value)


def to_csv(dataset: ReportDataset, selection: Iterable[str]) -> str:
    """Serialize `dataset` with columns `date` + `selection`.

    Args:
        dataset: Generated rows. Must not be empty.
        selection: Live selection, in click order.

    Returns:
        CSV text, lines separated by newlines, no trailing newline.

    Raises:
        EmptyDatasetError: If nothing has been generated yet.
    """
    if len(dataset) == 0:
        raise EmptyDatasetError("No report data to export; generate a preview first")

    headers = ["date", *selection]
    lines = [SEPARATOR.join(headers)]
    for row in dataset:
        lines.append(SEPARATOR.join(_field(row.get(h)) for h in headers))

    logger.debug("Serialized %d rows x %d columns to CSV", len(dataset), len(headers))
    return "\n".join(lines)


def write_csv(csv_text: str, output_dir: str | Path, filename: str = CSV_FILENAME) -> Path:
    """Write CSV text byte-for-byte to `output_dir/filename`.

    Args:
        csv_text: Output of `to_csv`.
        output_dir: Destination directory (created if missing).
        filename: Target file name.

    Returns:
        Path to the written file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / filename

    with open(output_path, "w", encoding="utf-8", newline="") as fh:
        fh.write(csv_text)

    logger.info("CSV report saved to %s (%s)", output_path, CSV_MEDIA_TYPE)
    return output_path
