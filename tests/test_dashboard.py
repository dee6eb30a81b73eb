"""
test_dashboard.py — Tests for the chart/table preview.

Tests cover:
    - Chart series only for numeric metrics, coloured by selection index
    - Table headers use labels and blank missing values
    - Plotly figures carry one trace per series
    - HTML page written with and without data
"""

import sys
from pathlib import Path

import plotly.graph_objects as go
import pytest
import yaml

sys.path.insert(0, str(Path(__file__).parent.parent))

from report_builder.catalog import DEFAULT_CATALOG
from report_builder.config import DEFAULT_CONFIG
from report_builder.dashboard import (
    build_chart,
    build_table,
    chart_series,
    generate_dashboard,
    table_model,
)
from report_builder.generator import generate
from report_builder.selection import SelectionSet
from report_builder.session import ReportSession

BRAND = DEFAULT_CONFIG["brand"]


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"paths": {"output_dir": str(tmp_path / "out")}}))
    return path


class TestChartSeries:
    """Tests for chart_series."""

    def test_only_number_metrics_are_plotted(self, rng):
        selection = SelectionSet(("completionStatus", "score", "timeSpent", "attempts"))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        series = chart_series(dataset, selection, DEFAULT_CATALOG)
        assert [s.metric_id for s in series] == ["score", "attempts"]

    def test_colour_uses_selection_index(self, rng):
        selection = SelectionSet(("completionStatus", "score", "timeSpent", "attempts"))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        series = chart_series(dataset, selection, DEFAULT_CATALOG)
        assert [s.colour for s in series] == ["hsl(30, 70%, 50%)", "hsl(90, 70%, 50%)"]

    def test_series_values_match_rows(self, rng):
        selection = SelectionSet(("score",))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        (series,) = chart_series(dataset, selection, DEFAULT_CATALOG)
        assert series.label == "Score"
        assert series.dates == [row.date for row in dataset]
        assert series.values == [row["score"] for row in dataset]

    def test_no_numeric_metrics_no_series(self, rng):
        selection = SelectionSet(("challenges",))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        assert chart_series(dataset, selection, DEFAULT_CATALOG) == []


class TestTableModel:
    """Tests for table_model."""

    def test_header_uses_labels(self, rng):
        selection = SelectionSet(("timeSpent", "score"))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        header, body = table_model(dataset, selection, DEFAULT_CATALOG)
        assert header == ["Date", "Time Spent", "Score"]
        assert len(body) == 5
        assert body[0][0] == "2025-01-01"

    def test_missing_values_are_blank(self, rng):
        dataset = generate(SelectionSet(("score",)), DEFAULT_CATALOG, rng)
        _, body = table_model(dataset, SelectionSet(("score", "attempts")), DEFAULT_CATALOG)
        assert all(row[2] == "" for row in body)


class TestFigures:
    """Tests for build_chart / build_table."""

    def test_chart_has_one_trace_per_series(self, rng):
        selection = SelectionSet(("score", "attempts", "completionStatus"))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        fig = build_chart(dataset, selection, DEFAULT_CATALOG, BRAND)
        assert isinstance(fig, go.Figure)
        assert [t.name for t in fig.data] == ["Score", "Attempts"]

    def test_table_figure(self, rng):
        selection = SelectionSet(("score",))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        fig = build_table(dataset, selection, DEFAULT_CATALOG, BRAND)
        assert list(fig.data[0].header.values) == ["Date", "Score"]


class TestGenerateDashboard:
    """Tests for the HTML preview page."""

    def test_page_with_data(self, rng, config_file):
        session = ReportSession(rng=rng)
        session.toggle("score")
        session.generate()
        path = generate_dashboard(session, str(config_file))
        assert path.exists()
        assert path.name == "custom-report.html"
        content = path.read_text(encoding="utf-8")
        assert "Custom Report Builder" in content
        assert "Report Preview" in content
        assert "Master-O ID" in content

    def test_page_without_data(self, rng, config_file):
        session = ReportSession(rng=rng)
        path = generate_dashboard(session, str(config_file))
        assert path.exists()
        assert "Report Preview" in path.read_text(encoding="utf-8")

    def test_loaded_config_takes_precedence(self, rng, tmp_path):
        cfg = yaml.safe_load(yaml.safe_dump(DEFAULT_CONFIG))
        cfg["paths"]["output_dir"] = str(tmp_path / "in-memory")
        cfg["report"]["title"] = "Learner Progress"
        session = ReportSession(rng=rng)
        path = generate_dashboard(session, str(tmp_path / "absent.yaml"), cfg=cfg)
        assert path.parent == tmp_path / "in-memory"
        assert "Learner Progress" in path.read_text(encoding="utf-8")

    def test_chart_series_follow_catalog_chartable(self, rng):
        selection = SelectionSet(tuple(DEFAULT_CATALOG.ids()))
        dataset = generate(selection, DEFAULT_CATALOG, rng)
        series_ids = [s.metric_id for s in chart_series(dataset, selection, DEFAULT_CATALOG)]
        assert series_ids == [d.id for d in DEFAULT_CATALOG.chartable()]
