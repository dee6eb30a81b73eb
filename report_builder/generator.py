"""
generator.py — Sample Data Generator.

Produces the synthetic rows behind the report preview: five monthly
buckets (2025-01 to 2025-05), one value per selected metric. The metric's
`ValueKind` picks a plausible fake value:

    number    — integer in [0, 100)
    status    — "Complete", "In Progress" or "Not Started"
    duration  — "<0..119> mins"
    id / date / text — "Sample <metricId> <row>"

Randomness comes from a NumPy `Generator`. Production callers leave it
unseeded; tests inject a seeded generator (or any object exposing
`integers(low, high)`) so values can be asserted against.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

import numpy as np
import pandas as pd

from report_builder.catalog import MetricCatalog, ValueKind
from report_builder.selection import SelectionSet

logger = logging.getLogger(__name__)

ROW_COUNT = 5
STATUS_VALUES = ("Complete", "In Progress", "Not Started")
NUMBER_UPPER = 100
DURATION_UPPER_MINS = 120


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class ReportRow:
    """One time bucket: a date label plus a value per selected metric."""
    date: str
    values: dict[str, Any] = field(default_factory=dict)

    def keys(self) -> tuple[str, ...]:
        return ("date",) + tuple(self.values)

    def get(self, key: str, default: Any = None) -> Any:
        if key == "date":
            return self.date
        return self.values.get(key, default)

    def __getitem__(self, key: str) -> Any:
        if key == "date":
            return self.date
        return self.values[key]

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, **self.values}


@dataclass
class ReportDataset:
    """Rows from a single generation, plus the selection order that produced them."""
    rows: list[ReportRow] = field(default_factory=list)
    columns: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "ReportDataset":
        return cls()

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ReportRow]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> ReportRow:
        return self.rows[index]

    def is_empty(self) -> bool:
        return not self.rows

    def to_frame(self) -> pd.DataFrame:
        """Tabular view: a `date` column followed by one column per generated metric."""
        return pd.DataFrame(
            [row.to_dict() for row in self.rows],
            columns=["date", *self.columns],
        )


# ---------------------------------------------------------------------------
# Value generation
# ---------------------------------------------------------------------------

def _row_date(index: int) -> str:
    return f"2025-0{index + 1}-01"


def _sample_value(
    metric_id: str,
    kind: Optional[ValueKind],
    row_index: int,
    rng: Any,
) -> Any:
    """Generate one value for `metric_id` in row `row_index`.

    An unknown kind (id missing from the catalog) takes the generic text branch.
    """
    if kind is ValueKind.NUMBER:
        return int(rng.integers(0, NUMBER_UPPER))
    if kind is ValueKind.STATUS:
        return STATUS_VALUES[int(rng.integers(0, len(STATUS_VALUES)))]
    if kind is ValueKind.DURATION:
        return f"{int(rng.integers(0, DURATION_UPPER_MINS))} mins"
    if kind in (ValueKind.ID, ValueKind.DATE, ValueKind.TEXT, None):
        return f"Sample {metric_id} {row_index + 1}"
    raise NotImplementedError(f"No sample generator for value kind {kind!r}")


def generate(
    selection: SelectionSet,
    catalog: MetricCatalog,
    rng: Optional[Any] = None,
) -> ReportDataset:
    """Build a fresh five-row dataset for the current selection.

    Args:
        selection: Metrics to include, in click order.
        catalog: Catalog used to resolve each metric's value kind.
        rng: NumPy Generator (or compatible). Defaults to an unseeded one.

    Returns:
        ReportDataset whose rows hold exactly `date` plus every selected id.
    """
    if rng is None:
        rng = np.random.default_rng()

    columns = tuple(selection)
    kinds: dict[str, Optional[ValueKind]] = {}
    for metric_id in columns:
        definition = catalog.lookup(metric_id)
        if definition is None:
            logger.warning(
                "Selected metric %r is not in the catalog; "
                "selection and catalog are out of sync, using sample text",
                metric_id,
            )
        kinds[metric_id] = definition.kind if definition else None

    rows = []
    for i in range(ROW_COUNT):
        row = ReportRow(date=_row_date(i))
        for metric_id in columns:
            row.values[metric_id] = _sample_value(metric_id, kinds[metric_id], i, rng)
        rows.append(row)

    logger.info("Generated %d sample rows for %d metrics", len(rows), len(columns))
    return ReportDataset(rows=rows, columns=columns)
