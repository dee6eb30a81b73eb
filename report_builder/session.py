"""
session.py — Report builder session context.

Owns everything that changes while a user builds a report: the current
selection, the last generated dataset and the random source. Each user
action (toggle, generate, export) is one method call that runs to
completion before the next.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import numpy as np

from report_builder.catalog import DEFAULT_CATALOG, MetricCatalog
from report_builder.csv_export import CSV_FILENAME, to_csv, write_csv
from report_builder.exceptions import ConfigError
from report_builder.generator import ReportDataset, generate
from report_builder.selection import SelectionSet

logger = logging.getLogger(__name__)


class ReportSession:
    """Selection + dataset state for one report-building session."""

    def __init__(self, catalog: MetricCatalog = DEFAULT_CATALOG, rng: Optional[Any] = None):
        self.catalog = catalog
        self.rng = rng if rng is not None else np.random.default_rng()
        self.selection = SelectionSet()
        self.dataset = ReportDataset.empty()

    @classmethod
    def from_config(cls, cfg: dict[str, Any], catalog: MetricCatalog = DEFAULT_CATALOG) -> "ReportSession":
        """Build a session whose random source honours `data_generation.seed`.

        Raises:
            ConfigError: If the seed is set but is not an integer.
        """
        seed = (cfg.get("data_generation") or {}).get("seed")
        if seed is not None:
            if isinstance(seed, bool) or not isinstance(seed, int):
                try:
                    seed = int(str(seed).strip())
                except ValueError:
                    raise ConfigError(
                        f"data_generation.seed must be an integer, got {seed!r}"
                    ) from None
            if seed < 0:
                raise ConfigError(f"data_generation.seed must be non-negative, got {seed}")
            logger.info("Seeding sample data generator (seed=%d)", seed)
        return cls(catalog=catalog, rng=np.random.default_rng(seed))

    # -- gating ---------------------------------------------------------------

    @property
    def can_generate(self) -> bool:
        return not self.selection.is_empty()

    @property
    def can_export(self) -> bool:
        return not self.dataset.is_empty()

    @property
    def can_email(self) -> bool:
        # Email delivery is not implemented; the control stays disabled.
        return False

    # -- actions --------------------------------------------------------------

    def toggle(self, metric_id: str) -> SelectionSet:
        self.selection = self.selection.toggle(metric_id, self.catalog)
        return self.selection

    def generate(self) -> ReportDataset:
        """Replace the session dataset with freshly generated rows."""
        self.dataset = generate(self.selection, self.catalog, self.rng)
        return self.dataset

    def export_csv(self) -> str:
        """CSV text of the current dataset using the live selection."""
        return to_csv(self.dataset, self.selection)

    def download_csv(self, output_dir: str | Path, filename: str = CSV_FILENAME) -> Path:
        return write_csv(self.export_csv(), output_dir, filename)
