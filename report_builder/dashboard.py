"""
dashboard.py — Report preview (chart + table) as a Plotly HTML page.

Builds the presentation models the UI draws from a session, then renders
them as a self-contained HTML file that can be opened straight from disk:

    Header        — title, subtitle and instruction banner
    Metrics list  — every catalog metric, ticked when selected
    Chart         — one line per selected numeric metric (only once data exists)
    Table         — "Report Preview": date + every selected metric

Chart and table columns follow the live selection, in click order.
"""

import html
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import plotly.graph_objects as go

from report_builder.catalog import MetricCatalog
from report_builder.config import load_config
from report_builder.generator import ReportDataset
from report_builder.selection import SelectionSet
from report_builder.session import ReportSession

logger = logging.getLogger(__name__)

TEMPLATE = "plotly_white"


@dataclass
class ChartSeries:
    """One plotted line."""
    metric_id: str
    label: str
    colour: str
    dates: list = field(default_factory=list)
    values: list = field(default_factory=list)


def _hex(h: str) -> str:
    """Ensure hex colour has # prefix."""
    return f"#{h.lstrip('#')}"


def _series_colour(index: int) -> str:
    return f"hsl({index * 30}, 70%, 50%)"


# ---------------------------------------------------------------------------
# Presentation models
# ---------------------------------------------------------------------------

def chart_series(
    dataset: ReportDataset,
    selection: SelectionSet,
    catalog: MetricCatalog,
) -> list[ChartSeries]:
    """Chart lines for the numeric metrics in `selection`.

    The colour index is the metric's position in the whole selection, so a
    line keeps its colour when non-numeric metrics are added before it.
    """
    dates = [row.date for row in dataset]
    chartable = {d.id: d for d in catalog.chartable()}
    series = []
    for index, metric_id in enumerate(selection):
        definition = chartable.get(metric_id)
        if definition is None:
            continue
        series.append(ChartSeries(
            metric_id=metric_id,
            label=definition.label,
            colour=_series_colour(index),
            dates=dates,
            values=[row.get(metric_id) for row in dataset],
        ))
    return series


def table_model(
    dataset: ReportDataset,
    selection: SelectionSet,
    catalog: MetricCatalog,
) -> tuple[list[str], list[list[str]]]:
    """Header labels and stringified body rows for the preview table."""
    header = ["Date"] + [catalog.label_for(m) for m in selection]
    body = []
    for row in dataset:
        cells = [row.date]
        for metric_id in selection:
            value = row.get(metric_id)
            cells.append("" if value is None else str(value))
        body.append(cells)
    return header, body


# ---------------------------------------------------------------------------
# Figures
# ---------------------------------------------------------------------------

def build_chart(
    dataset: ReportDataset,
    selection: SelectionSet,
    catalog: MetricCatalog,
    brand: dict,
) -> go.Figure:
    """Line chart: one trace per numeric metric, dates on the x axis."""
    fig = go.Figure()
    for s in chart_series(dataset, selection, catalog):
        fig.add_trace(go.Scatter(
            x=s.dates, y=s.values,
            name=s.label, mode="lines+markers",
            line=dict(color=s.colour, width=2, shape="spline"),
            hovertemplate=f"Date: %{{x}}<br>{s.label}: %{{y}}<extra></extra>",
        ))
    fig.update_layout(
        template=TEMPLATE,
        xaxis=dict(title=dict(text="date", font=dict(color=_hex(brand["primary"]))),
                   showgrid=True, griddash="dash"),
        yaxis=dict(showgrid=True, griddash="dash"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, x=0),
        width=700,
        height=400,
        margin=dict(l=20, r=30, t=5, b=5),
    )
    return fig


def build_table(
    dataset: ReportDataset,
    selection: SelectionSet,
    catalog: MetricCatalog,
    brand: dict,
) -> go.Figure:
    """Plotly table mirroring the report preview."""
    header, body = table_model(dataset, selection, catalog)
    columns = [list(col) for col in zip(*body)] if body else [[] for _ in header]

    fig = go.Figure(go.Table(
        header=dict(values=header, fill_color="#F4F4F4", align="left",
                    line_color="#DDDDDD", font=dict(color=_hex(brand["primary"]))),
        cells=dict(values=columns, align="left", line_color="#DDDDDD"),
    ))
    fig.update_layout(
        title=dict(text="Report Preview", font=dict(size=16, color=_hex(brand["primary"]))),
        template=TEMPLATE,
        height=120 + 30 * max(len(body), 1),
        margin=dict(l=10, r=10, t=50, b=10),
    )
    return fig


def _build_metric_list(selection: SelectionSet, catalog: MetricCatalog) -> str:
    """Checkbox list in catalog order (static; reflects the current selection)."""
    items = ""
    for definition in catalog:
        checked = " checked" if definition.id in selection else ""
        items += (
            f'<div class="metric-item"><input type="checkbox" id="{definition.id}" '
            f'disabled{checked}> <label for="{definition.id}">'
            f"{html.escape(definition.label)}</label></div>"
        )
    return items


def generate_dashboard(
    session: ReportSession,
    config_path: str = "config.yaml",
    cfg: Optional[dict[str, Any]] = None,
) -> Path:
    """Render the session's preview to an HTML file.

    Args:
        session: Session holding selection and dataset.
        config_path: Path to configuration YAML, read only when `cfg` is None.
        cfg: Already-loaded configuration (takes precedence over `config_path`).

    Returns:
        Path to the generated .html file.
    """
    if cfg is None:
        cfg = load_config(config_path)
    brand = cfg["brand"]
    report_cfg: dict[str, Any] = cfg["report"]
    output_dir = Path(cfg["paths"]["output_dir"])
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / cfg["paths"]["dashboard_filename"]

    logger.info(
        "Building preview page: %d metrics selected, %d rows",
        len(session.selection), len(session.dataset),
    )

    chart_args = {"include_plotlyjs": False, "full_html": False}
    chart_div = ""
    if session.can_export:
        chart = build_chart(session.dataset, session.selection, session.catalog, brand)
        chart_div = f'<div class="card">{chart.to_html(**chart_args)}</div>'
    table = build_table(session.dataset, session.selection, session.catalog, brand)
    table_div = table.to_html(**chart_args)

    title = html.escape(report_cfg["title"])
    page = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width,initial-scale=1.0">
    <title>{title}</title>
    <script src="https://cdn.plot.ly/plotly-latest.min.js"></script>
    <style>
        body{{font-family:Arial,sans-serif;margin:16px;}}
        .instruction{{text-align:center;color:#555;font-size:14px;background:{_hex(brand['banner'])};
                      padding:10px 15px;border:1px solid #ddd;border-radius:8px;}}
        .dashboard{{padding:20px;max-width:1200px;margin:20px auto;background:{_hex(brand['background'])};
                    border-radius:16px;box-shadow:0 4px 10px rgba(0,0,0,.2);}}
        .header{{text-align:center;color:{_hex(brand['primary'])};padding:8px;border-radius:8px;
                 box-shadow:0 4px 10px rgba(0,0,0,.2);}}
        .content{{display:flex;gap:20px;}}
        .sidebar{{flex:1;}}
        .metrics-list{{background:#f8f9fa;padding:10px;border-radius:8px;}}
        .metric-item{{margin-bottom:8px;}}
        .main{{flex:3;}}
        .card{{background:#fff;border-radius:8px;padding:6px;margin-bottom:20px;}}
        .footer{{text-align:center;padding:14px;color:#888;font-size:11px;}}
    </style>
</head>
<body>
    <div class="instruction">{html.escape(report_cfg["instruction"])}</div>
    <div class="dashboard">
        <div class="header">
            <h1>{title}</h1>
            <p>{html.escape(report_cfg["subtitle"])}</p>
        </div>
        <div class="content">
            <div class="sidebar">
                <h2>Metrics</h2>
                <div class="metrics-list">{_build_metric_list(session.selection, session.catalog)}</div>
            </div>
            <div class="main">
                {chart_div}
                <div class="card">{table_div}</div>
            </div>
        </div>
    </div>
    <div class="footer">Sample data only &nbsp;|&nbsp; Generated: {datetime.today().strftime('%Y-%m-%d %H:%M')}</div>
</body>
</html>"""

    output_path.write_text(page, encoding="utf-8")
    logger.info("Preview page saved to %s", output_path)
    return output_path
