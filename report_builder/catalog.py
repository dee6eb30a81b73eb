"""
catalog.py — Metric Catalog.

The fixed, ordered list of metrics a user can pick from when building a
custom report. Each metric carries a `ValueKind` which decides how sample
values are generated and whether the metric can be drawn on the chart.

The catalog is immutable once built: the same definitions come back, in
the same order, on every read.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    """Semantic category of a metric's value."""

    ID = "id"
    DATE = "date"
    TEXT = "text"
    STATUS = "status"
    NUMBER = "number"
    DURATION = "duration"

    @property
    def is_chartable(self) -> bool:
        """Only numeric metrics are plotted as chart lines."""
        return self is ValueKind.NUMBER


@dataclass(frozen=True)
class MetricDefinition:
    """A single selectable metric."""
    id: str
    label: str
    kind: ValueKind


class MetricCatalog:
    """Read-only ordered collection of metric definitions with id lookup."""

    def __init__(self, definitions: Iterable[MetricDefinition]):
        self._definitions = tuple(definitions)
        self._by_id: dict[str, MetricDefinition] = {}
        for definition in self._definitions:
            if definition.id in self._by_id:
                raise ValueError(f"Duplicate metric id in catalog: {definition.id!r}")
            self._by_id[definition.id] = definition

    def __iter__(self) -> Iterator[MetricDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __getitem__(self, index: int) -> MetricDefinition:
        return self._definitions[index]

    def __contains__(self, metric_id: object) -> bool:
        return metric_id in self._by_id

    def __repr__(self) -> str:
        return f"MetricCatalog({len(self)} metrics)"

    def ids(self) -> tuple[str, ...]:
        return tuple(d.id for d in self._definitions)

    def lookup(self, metric_id: str) -> Optional[MetricDefinition]:
        """Return the definition for `metric_id`, or None if it is not catalogued."""
        return self._by_id.get(metric_id)

    def label_for(self, metric_id: str) -> str:
        """Display label for `metric_id`, falling back to the raw id."""
        definition = self._by_id.get(metric_id)
        return definition.label if definition else metric_id

    def chartable(self) -> tuple[MetricDefinition, ...]:
        """Definitions that can be plotted, in catalog order."""
        return tuple(d for d in self._definitions if d.kind.is_chartable)


# ---------------------------------------------------------------------------
# Reference catalog
# ---------------------------------------------------------------------------

DEFAULT_METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition("masterOId",         "Master-O ID",         ValueKind.ID),
    MetricDefinition("contentLaunchDate", "Content Launch Date", ValueKind.DATE),
    MetricDefinition("challenges",        "Challenges",          ValueKind.TEXT),
    MetricDefinition("completionStatus",  "Completion Status",   ValueKind.STATUS),
    MetricDefinition("completionDate",    "Completion Date",     ValueKind.DATE),
    MetricDefinition("completedInDays",   "Completed In Days",   ValueKind.NUMBER),
    MetricDefinition("attempts",          "Attempts",            ValueKind.NUMBER),
    MetricDefinition("score",             "Score",               ValueKind.NUMBER),
    MetricDefinition("maxScore",          "Max Score",           ValueKind.NUMBER),
    MetricDefinition("timeSpent",         "Time Spent",          ValueKind.DURATION),
    MetricDefinition("microskillName",    "Microskill Name",     ValueKind.TEXT),
    MetricDefinition("loginStatus",       "Login Status",        ValueKind.STATUS),
    MetricDefinition("lastLoginDate",     "Last Login Date",     ValueKind.DATE),
)

DEFAULT_CATALOG = MetricCatalog(DEFAULT_METRICS)
