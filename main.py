"""
main.py — Custom Report Builder — CLI Entry Point.

Drives a report-building session from the command line: tick metrics,
preview the generated sample rows, download the CSV and render the
chart/table preview page. Stages share one in-memory session.

Usage:
    python main.py --list-metrics
    python main.py --select score --select attempts --preview
    python main.py --select completionStatus --select score --csv --dashboard
    python main.py --select score --full-run --seed 7 --log-level DEBUG

Outputs (data/output/):
    custom-report.csv      — Sample report rows as CSV
    custom-report.html     — Chart + table preview page
"""

import argparse
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path

import yaml


def _configure_logging(log_dir: str = "logs", level: str = "INFO") -> None:
    """Configure rotating file handler + stream handler.

    Args:
        log_dir: Directory for log files.
        level: Log level string.
    """
    effective_level = os.environ.get("LOG_LEVEL", level).upper()
    numeric = getattr(logging, effective_level, logging.INFO)

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_file = Path(log_dir) / f"report_builder_{datetime.today().strftime('%Y%m%d')}.log"

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    fh = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=10 * 1024 * 1024, backupCount=7, encoding="utf-8"
    )
    fh.setFormatter(fmt)
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(numeric)
    root.addHandler(fh)
    root.addHandler(sh)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="report-builder",
        description="Custom Report Builder — pick metrics, preview sample data, export CSV.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --list-metrics
  python main.py --select score --preview
  python main.py --select score --select timeSpent --csv
  python main.py --select attempts --full-run --seed 42
        """,
    )
    parser.add_argument("--config", default="config.yaml",
                        help="Path to config.yaml (default: config.yaml)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--select", action="append", default=[], metavar="METRIC_ID",
                        help="Toggle a metric (repeatable; order sets CSV column order)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for repeatable sample values (overrides config)")

    stages = parser.add_argument_group("Stages")
    stages.add_argument("--list-metrics", action="store_true",
                        help="List the metric catalog")
    stages.add_argument("--preview", action="store_true",
                        help="Generate sample rows and log the report preview")
    stages.add_argument("--csv", action="store_true",
                        help="Generate sample rows and write custom-report.csv")
    stages.add_argument("--dashboard", action="store_true",
                        help="Write the chart + table preview page")
    stages.add_argument("--full-run", action="store_true",
                        help="Run preview -> csv -> dashboard")
    return parser


def run_pipeline(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Execute the requested stages against a fresh session.

    Args:
        args: Parsed CLI arguments.
        logger: Configured logger.

    Returns:
        0 on success, 1 on error.
    """
    from report_builder.config import load_config
    from report_builder.dashboard import generate_dashboard
    from report_builder.exceptions import ConfigError, EmptyDatasetError
    from report_builder.session import ReportSession

    do_all = args.full_run

    try:
        cfg = load_config(args.config)
        if args.seed is not None:
            cfg["data_generation"]["seed"] = args.seed
        session = ReportSession.from_config(cfg)
    except (yaml.YAMLError, ConfigError) as exc:
        logger.error("Invalid config file %s: %s", args.config, exc)
        return 1
    except Exception as exc:
        logger.error("Session setup failed: %s", exc, exc_info=True)
        return 1
    paths = cfg["paths"]

    # -------------------------------------------------------------------------
    # Catalog listing
    # -------------------------------------------------------------------------
    if args.list_metrics:
        logger.info("Available metrics (%d):", len(session.catalog))
        for definition in session.catalog:
            logger.info("  %-20s %-22s %s", definition.id, definition.label, definition.kind.value)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------
    for metric_id in args.select:
        before = session.selection
        after = session.toggle(metric_id)
        if after is before:
            logger.warning("Unknown metric id %r ignored (see --list-metrics)", metric_id)
    if args.select:
        logger.info("Selected metrics: %s", ", ".join(session.selection) or "(none)")

    # -------------------------------------------------------------------------
    # Stage 1: Sample data generation
    # -------------------------------------------------------------------------
    if do_all or args.preview or args.csv or args.dashboard:
        if session.can_generate:
            try:
                dataset = session.generate()
                logger.info("Generated %d rows", len(dataset))
            except Exception as exc:
                logger.error("Sample data generation failed: %s", exc, exc_info=True)
                return 1
        else:
            logger.warning("No metrics selected -- nothing to preview")

    # -------------------------------------------------------------------------
    # Stage 2: Report preview
    # -------------------------------------------------------------------------
    if (do_all or args.preview) and session.can_export:
        logger.info("=" * 65)
        logger.info("Report Preview")
        logger.info("=" * 65)
        for line in session.dataset.to_frame().to_string(index=False).splitlines():
            logger.info("  %s", line)

    # -------------------------------------------------------------------------
    # Stage 3: CSV download
    # -------------------------------------------------------------------------
    if do_all or args.csv:
        try:
            csv_path = session.download_csv(paths["output_dir"], paths["csv_filename"])
            logger.info("CSV written: %s", csv_path)
        except EmptyDatasetError as exc:
            logger.error("CSV export skipped: %s", exc)
            return 1
        except Exception as exc:
            logger.error("CSV export failed: %s", exc, exc_info=True)
            return 1

    # -------------------------------------------------------------------------
    # Stage 4: Preview page
    # -------------------------------------------------------------------------
    if do_all or args.dashboard:
        try:
            page_path = generate_dashboard(session, args.config, cfg=cfg)
            logger.info("Preview page written: %s", page_path)
        except Exception as exc:
            logger.error("Preview page generation failed: %s", exc, exc_info=True)
            return 1

    return 0


def main() -> None:
    """Parse args, configure logging, and run the requested stages."""
    parser = _build_parser()
    args = parser.parse_args()

    try:
        with open(args.config, "r") as fh:
            cfg = yaml.safe_load(fh) or {}
        log_dir = (cfg.get("paths") or {}).get("log_dir") or "logs"
    except Exception:
        log_dir = "logs"

    _configure_logging(log_dir=log_dir, level=args.log_level)
    logger = logging.getLogger(__name__)

    no_stage = not any([
        args.list_metrics, args.preview, args.csv, args.dashboard, args.full_run,
    ])
    if no_stage:
        parser.print_help()
        sys.exit(0)

    logger.info(
        "Custom Report Builder v1.0 | %s",
        datetime.today().strftime("%Y-%m-%d %H:%M:%S"),
    )
    sys.exit(run_pipeline(args, logger))


if __name__ == "__main__":
    main()
