"""
selection.py — Selection State.

Tracks which catalog metrics the user has ticked. The set is immutable:
`toggle` returns a new `SelectionSet` rather than mutating in place.

Two orders are in play:
    - Membership is a plain set; two selections holding the same ids are
      equal no matter how they were clicked.
    - Iteration follows click order. That order becomes the CSV column
      order, so an export reproduces exactly what the user picked.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from report_builder.catalog import MetricCatalog

logger = logging.getLogger(__name__)

# Row key holding the time bucket; never a selectable metric
DATE_KEY = "date"


@dataclass(frozen=True, eq=False)
class SelectionSet:
    """Metric ids chosen by the user, held in click order."""
    ids: tuple[str, ...] = ()

    def __post_init__(self):
        unique = tuple(m for m in dict.fromkeys(self.ids) if m != DATE_KEY)
        if unique != tuple(self.ids):
            logger.debug("Dropped duplicate or reserved ids from selection %r", self.ids)
        object.__setattr__(self, "ids", unique)

    def toggle(self, metric_id: str, catalog: Optional[MetricCatalog] = None) -> "SelectionSet":
        """Remove `metric_id` if selected, append it otherwise.

        Args:
            metric_id: Catalog id clicked by the user.
            catalog: When given, ids missing from it are ignored.

        Returns:
            The resulting SelectionSet (self when the toggle is a no-op).
        """
        if metric_id == DATE_KEY or (catalog is not None and metric_id not in catalog):
            logger.debug("Ignoring toggle of unknown metric id %r", metric_id)
            return self
        if metric_id in self.ids:
            return SelectionSet(tuple(m for m in self.ids if m != metric_id))
        return SelectionSet(self.ids + (metric_id,))

    def is_empty(self) -> bool:
        return not self.ids

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, metric_id: object) -> bool:
        return metric_id in self.ids

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionSet):
            return NotImplemented
        return frozenset(self.ids) == frozenset(other.ids)

    def __hash__(self) -> int:
        return hash(frozenset(self.ids))
