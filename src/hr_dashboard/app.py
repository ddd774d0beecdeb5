"""App Kivy: selector de fecha, resumen y gráfico de frecuencia cardíaca."""

from __future__ import annotations

import traceback
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from hr_dashboard.config import DashboardConfig
from hr_dashboard.model import ALL_DATES, DateFilter, Sample, SummaryStats
from hr_dashboard.processing import (
    available_dates,
    dashboard_title,
    flatten_and_filter,
    format_stat,
    no_data_message,
    summarize,
    summary_from_record,
)
from hr_dashboard.sources.heart_rate_json import HeartRateJsonPaths, HeartRateJsonSource

DEFAULT_DATA = Path("data") / "heartRateData.json"
ALL_LABEL = "Todas las fechas"


def selection_to_filter(choice: str) -> str | DateFilter:
    """Map the Spinner text to a date filter."""
    return ALL_DATES if choice == ALL_LABEL else choice


def compute_view(
    dataset: Any, date_filter: str | DateFilter, config: DashboardConfig
) -> tuple[list[Sample], SummaryStats]:
    """Recompute series and summary for one filter selection."""
    samples = flatten_and_filter(
        dataset,
        date_filter,
        threshold=config.threshold_bpm,
        zone=config.resolve_tz(),
    )
    if date_filter is ALL_DATES:
        return samples, summary_from_record(dataset)
    return samples, summarize(samples)


def summary_lines(stats: SummaryStats) -> list[str]:
    """Text lines of the summary card."""
    return [
        f"Max HR: {format_stat(stats.max_hr)} bpm",
        f"Min HR: {format_stat(stats.min_hr)} bpm",
        f"Resting HR: {format_stat(stats.resting_hr)} bpm",
        f"7-Day Avg Resting HR: {format_stat(stats.seven_day_avg_resting_hr)} bpm",
    ]


def scale_point(
    index: int,
    value: float,
    count: int,
    box: tuple[float, float, float, float],
    y_domain: tuple[float, float],
) -> tuple[float, float]:
    """Map (position, bpm) into widget coordinates, clamped to the y domain.

    Args:
        index: Position of the sample in the series.
        value: Heart rate in bpm.
        count: Number of samples in the series.
        box: Widget (x, y, width, height).
        y_domain: Visible (low, high) bpm range.
    """
    x0, y0, width, height = box
    low, high = y_domain
    span = (high - low) or 1
    clamped = min(max(value, low), high)
    x = x0 + (width * index / (count - 1) if count > 1 else width / 2)
    y = y0 + height * (clamped - low) / span
    return x, y


def run_app(data_path: str | None = None) -> int:
    """Lanza la app Kivy."""
    from kivy.app import App
    from kivy.graphics import Color, Ellipse, Line
    from kivy.uix.boxlayout import BoxLayout
    from kivy.uix.label import Label
    from kivy.uix.spinner import Spinner
    from kivy.uix.widget import Widget

    class HeartRateChart(Widget):
        """Line chart drawn with Kivy canvas instructions."""

        def __init__(self, config: DashboardConfig, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self._config = config
            self._samples: list[Sample] = []
            self.bind(pos=self._redraw, size=self._redraw)

        def show(self, samples: Sequence[Sample]) -> None:
            self._samples = list(samples)
            self._redraw()

        def _redraw(self, *_args: object) -> None:
            self.canvas.clear()
            if not self._samples:
                return
            box = (self.x, self.y, self.width, self.height)
            domain = self._config.y_domain
            count = len(self._samples)
            points: list[float] = []
            for i, sample in enumerate(self._samples):
                points.extend(scale_point(i, sample.heart_rate, count, box, domain))
            _, threshold_y = scale_point(
                0, self._config.threshold_bpm, count, box, domain
            )
            with self.canvas:
                Color(0.19, 0.51, 0.81)
                if count > 1:
                    Line(points=points, width=1.5)
                Color(1, 0, 0)
                Line(
                    points=[self.x, threshold_y, self.right, threshold_y],
                    dash_length=6,
                    dash_offset=4,
                )
                for i, sample in enumerate(self._samples):
                    if not sample.highlighted:
                        continue
                    x, y = scale_point(i, sample.heart_rate, count, box, domain)
                    Ellipse(pos=(x - 3, y - 3), size=(6, 6))

    class HeartRateDashboardApp(App):
        """Main Kivy app."""

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self.dash_config = DashboardConfig()
            self.dataset: Any = None
            self.chart: HeartRateChart | None = None
            self.summary: Label | None = None
            self.status: Label | None = None
            self.title_label: Label | None = None

        def build(self) -> BoxLayout:
            root = BoxLayout(orientation="vertical", spacing=8, padding=10)
            self.title_label = Label(text="", size_hint_y=None, height=36, bold=True)
            root.add_widget(self.title_label)

            selector = Spinner(
                text=ALL_LABEL, values=[ALL_LABEL], size_hint_y=None, height=40
            )
            selector.bind(
                text=lambda _spinner, value: self._refresh(selection_to_filter(value))
            )
            root.add_widget(selector)

            self.summary = Label(text="", size_hint_y=None, height=90)
            root.add_widget(self.summary)
            self.status = Label(text="", size_hint_y=None, height=30)
            root.add_widget(self.status)

            self.chart = HeartRateChart(self.dash_config)
            root.add_widget(self.chart)

            try:
                self._load(selector)
            except Exception as exc:
                self._show_error("cargar", exc)
            return root

        def _load(self, selector: Spinner) -> None:
            path = Path(data_path).expanduser() if data_path else DEFAULT_DATA
            source = HeartRateJsonSource(HeartRateJsonPaths(root=path))
            source.validate()
            self.dataset = source.load_dataset()
            selector.values = [ALL_LABEL, *available_dates(self.dataset)]
            if self.title_label is not None:
                self.title_label.text = dashboard_title(self.dataset)
            self._refresh(ALL_DATES)

        def _refresh(self, date_filter: str | DateFilter) -> None:
            samples, stats = compute_view(self.dataset, date_filter, self.dash_config)
            if self.summary is not None:
                self.summary.text = "\n".join(summary_lines(stats))
            if self.chart is not None:
                self.chart.show(samples)
            if self.status is not None:
                self.status.text = (
                    f"{len(samples)} lecturas"
                    if samples
                    else no_data_message(self.dataset, date_filter)
                )

        def _show_error(self, action: str, exc: Exception) -> None:
            error_type = type(exc).__name__
            if self.status is not None:
                self.status.text = f"Error al {action} ({error_type}): {exc}"
            if self.summary is not None:
                self.summary.text = traceback.format_exc(limit=2)

    HeartRateDashboardApp().run()
    return 0
