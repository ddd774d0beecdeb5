"""CLI para procesar el JSON de frecuencia cardíaca y exportar gráfico/Excel."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from hr_dashboard.chart import build_figure, write_html
from hr_dashboard.config import DashboardConfig
from hr_dashboard.excel_writer import ExcelLayout, write_series_xlsx
from hr_dashboard.model import ALL_DATES, THRESHOLD_BPM
from hr_dashboard.processing import (
    available_dates,
    dashboard_title,
    flatten_and_filter,
    format_stat,
    highlight_points,
    no_data_message,
    summarize,
    summary_from_record,
)
from hr_dashboard.sources.heart_rate_json import HeartRateJsonPaths, HeartRateJsonSource

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Dashboard de frecuencia cardíaca a partir de un JSON diario."
    )
    parser.add_argument(
        "--data",
        default=str(Path("data") / "heartRateData.json"),
        help="Archivo JSON o carpeta con *.json (default: data/heartRateData.json).",
    )
    parser.add_argument(
        "--date",
        default=None,
        help="Fecha a mostrar (YYYY-MM-DD); sin valor se muestran todas.",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=THRESHOLD_BPM,
        help=f"Umbral en bpm para resaltar lecturas (default: {THRESHOLD_BPM}).",
    )
    parser.add_argument("--tz", default=None, help="Zona horaria (default: local).")
    parser.add_argument("--html", default=None, help="Escribe el gráfico en HTML.")
    parser.add_argument("--xlsx", default=None, help="Escribe la serie en Excel.")
    parser.add_argument(
        "--list-dates",
        action="store_true",
        help="Lista las fechas disponibles y termina.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log DEBUG.")
    return parser.parse_args()


def configure_logging(verbose: bool) -> None:
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Run the heart-rate dashboard CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args()
    configure_logging(ns.verbose)
    config = DashboardConfig(threshold_bpm=ns.threshold, timezone=ns.tz)

    source = HeartRateJsonSource(HeartRateJsonPaths(root=Path(ns.data).expanduser()))
    source.validate()
    data_file = source.newest_json()
    dataset = source.load_dataset(data_file)
    logger.info("Heart rate data: %s", data_file)

    if ns.list_dates:
        for day in available_dates(dataset):
            print(day)
        return 0

    date_filter = ns.date if ns.date is not None else ALL_DATES
    samples = flatten_and_filter(
        dataset,
        date_filter,
        threshold=config.threshold_bpm,
        zone=config.resolve_tz(),
    )
    # Vista completa: cifras pre-agregadas del primer registro.
    if date_filter is ALL_DATES:
        stats = summary_from_record(dataset)
    else:
        stats = summarize(samples)

    print(dashboard_title(dataset))
    print(f"Max HR: {format_stat(stats.max_hr)} bpm")
    print(f"Min HR: {format_stat(stats.min_hr)} bpm")
    print(f"Resting HR: {format_stat(stats.resting_hr)} bpm")
    print(f"7-Day Avg Resting HR: {format_stat(stats.seven_day_avg_resting_hr)} bpm")

    if not samples:
        print(no_data_message(dataset, date_filter))
        return 0

    print(
        f"OK: {len(samples)} lecturas, "
        f"{len(highlight_points(samples))} sobre {config.threshold_label}"
    )
    if ns.html:
        out_html = Path(ns.html).expanduser()
        write_html(build_figure(samples, config), out_html)
        print(f"OK: HTML: {out_html}")
    if ns.xlsx:
        out_xlsx = Path(ns.xlsx).expanduser()
        write_series_xlsx(samples, stats, out_xlsx, ExcelLayout())
        print(f"OK: Excel: {out_xlsx}")
    return 0
