"""Gráfico Plotly de la serie de frecuencia cardíaca con línea de umbral."""

from __future__ import annotations

import math
from collections.abc import Sequence
from pathlib import Path

import plotly.graph_objects as go

from hr_dashboard.config import DashboardConfig
from hr_dashboard.model import Sample

LINE_COLOR = "#3182CE"
THRESHOLD_COLOR = "red"


def tick_step(count: int, max_ticks: int) -> int:
    """Label every n-th point so that about ``max_ticks`` labels are shown."""
    if count <= 0 or max_ticks <= 0:
        return 1
    return max(1, math.ceil(count / max_ticks))


def build_figure(
    samples: Sequence[Sample], config: DashboardConfig | None = None
) -> go.Figure:
    """Build the heart-rate line chart.

    Points are placed by position in the (already chronological) series and
    labelled with their display timestamp, so repeated labels never collapse.

    Args:
        samples: Chronological samples from ``flatten_and_filter``.
        config: Dashboard configuration (threshold, y domain, ticks).

    Returns:
        Plotly figure with the series, the threshold line and highlight markers.
    """
    cfg = config or DashboardConfig()
    positions = list(range(len(samples)))
    labels = [s.timestamp_display for s in samples]

    fig = go.Figure()
    fig.add_scatter(
        x=positions,
        y=[s.heart_rate for s in samples],
        mode="lines",
        name="Heart rate",
        line={"color": LINE_COLOR, "width": 1.5, "shape": "spline"},
        customdata=labels,
        hovertemplate="%{customdata}<br>%{y} bpm<extra></extra>",
    )

    highlighted = [(i, s) for i, s in zip(positions, samples) if s.highlighted]
    fig.add_scatter(
        x=[i for i, _ in highlighted],
        y=[s.heart_rate for _, s in highlighted],
        mode="markers",
        name=f"> {cfg.threshold_bpm:g} bpm",
        marker={"color": THRESHOLD_COLOR, "symbol": "pentagon", "size": 8},
        customdata=[s.timestamp_display for _, s in highlighted],
        hovertemplate="%{customdata}<br>%{y} bpm<extra></extra>",
    )

    fig.add_hline(
        y=cfg.threshold_bpm,
        line_color=THRESHOLD_COLOR,
        line_dash="dash",
        annotation_text=cfg.threshold_label,
    )

    step = tick_step(len(samples), cfg.max_ticks)
    fig.update_layout(
        xaxis={
            "tickmode": "array",
            "tickvals": positions[::step],
            "ticktext": labels[::step],
            "tickangle": -15,
        },
        yaxis={"range": list(cfg.y_domain), "title": "bpm"},
        height=500,
        showlegend=False,
    )
    return fig


def write_html(fig: go.Figure, out_path: Path) -> None:
    """Write a standalone HTML page with the figure."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(out_path), include_plotlyjs="cdn")
