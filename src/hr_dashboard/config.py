"""Configuración del dashboard (umbral, ejes, zona horaria)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from dateutil import tz

from hr_dashboard.model import THRESHOLD_BPM


@dataclass(frozen=True)
class DashboardConfig:
    """Rendering and processing parameters for the dashboard."""

    threshold_bpm: float = THRESHOLD_BPM
    y_domain: tuple[float, float] = (40, 150)
    max_ticks: int = 6
    timezone: str | None = None

    def resolve_tz(self) -> tzinfo:
        """Resolve the configured timezone (local time when unset).

        Raises:
            ValueError: If the timezone name is unknown.
        """
        if not self.timezone:
            return tz.tzlocal()
        resolved = tz.gettz(self.timezone)
        if resolved is None:
            raise ValueError(f"Unknown timezone: {self.timezone}")
        return resolved

    @property
    def threshold_label(self) -> str:
        """Label for the reference line."""
        return f"Threshold {self.threshold_bpm:g} bpm"
