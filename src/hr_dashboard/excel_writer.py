"""Exportación a Excel de la serie de frecuencia cardíaca con gráfico nativo."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.chart import LineChart, Reference
from openpyxl.styles import Alignment, Border, Font, Side

from hr_dashboard.model import Sample, SummaryStats
from hr_dashboard.processing import format_stat, samples_to_frame

_HEADER_MAP: dict[str, str] = {
    "timestamp": "Fecha / Hora",
    "heart_rate": "FC (bpm)",
    "highlighted": "Sobre umbral",
}

_SUMMARY_LABELS: tuple[tuple[str, str], ...] = (
    ("max_hr", "Max HR"),
    ("min_hr", "Min HR"),
    ("resting_hr", "Resting HR"),
    ("seven_day_avg_resting_hr", "7-Day Avg Resting HR"),
)


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the exported workbook."""

    series_sheet: str = "Serie"
    summary_sheet: str = "Resumen"
    chart_anchor: str = "E2"


def write_series_xlsx(
    samples: Sequence[Sample],
    stats: SummaryStats,
    out_path: Path,
    layout: ExcelLayout,
) -> None:
    """Write the series, the summary figures and a line chart to XLSX.

    Args:
        samples: Chronological samples.
        stats: Summary figures for the summary sheet.
        out_path: Output path for the XLSX file.
        layout: Excel layout parameters.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    export_df = samples_to_frame(samples)[["timestamp", "heart_rate", "highlighted"]]
    export_df = export_df.rename(columns=_HEADER_MAP)
    summary_df = pd.DataFrame(
        {
            "Indicador": [label for _, label in _SUMMARY_LABELS],
            "Valor (bpm)": [
                format_stat(getattr(stats, key)) for key, _ in _SUMMARY_LABELS
            ],
        }
    )

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.series_sheet)
        summary_df.to_excel(writer, index=False, sheet_name=layout.summary_sheet)
        ws = writer.book[layout.series_sheet]
        _format_sheet(ws)
        _mark_highlighted_rows(ws)
        if samples:
            _add_line_chart(ws, len(samples), layout.chart_anchor)
        _format_sheet(writer.book[layout.summary_sheet])


def _style_header_row(ws: Any) -> None:
    """Aplica fuente negrita, alineación y borde a la fila de cabecera."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    header_font = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = center
        cell.border = border


def _style_body_rows(ws: Any) -> None:
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center")
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border


def _apply_column_widths(ws: Any) -> None:
    """Ancho de columna según el texto más largo (mínimo 10)."""
    for column in ws.columns:
        longest = max(len(str(cell.value or "")) for cell in column)
        ws.column_dimensions[column[0].column_letter].width = max(10, longest + 2)


def _mark_highlighted_rows(ws: Any) -> None:
    """Fuente roja en las filas por encima del umbral."""
    headers = [str(cell.value) for cell in ws[1]]
    flag_col = headers.index(_HEADER_MAP["highlighted"])
    red = Font(color="FFFF0000", bold=True)
    for row in ws.iter_rows(min_row=2):
        if row[flag_col].value is True:
            for cell in row:
                cell.font = red


def _add_line_chart(ws: Any, count: int, anchor: str) -> None:
    chart = LineChart()
    chart.title = "Heart Rate"
    chart.y_axis.title = "bpm"
    chart.height = 10
    chart.width = 24
    data = Reference(ws, min_col=2, min_row=1, max_row=count + 1)
    labels = Reference(ws, min_col=1, min_row=2, max_row=count + 1)
    chart.add_data(data, titles_from_data=True)
    chart.set_categories(labels)
    ws.add_chart(chart, anchor)


def _format_sheet(ws: Any) -> None:
    """Apply header style, borders and widths to a worksheet.

    Args:
        ws: openpyxl worksheet.
    """
    _style_header_row(ws)
    _style_body_rows(ws)
    _apply_column_widths(ws)
