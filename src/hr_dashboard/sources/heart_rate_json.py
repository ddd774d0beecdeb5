"""Lectura del documento JSON estático con la frecuencia cardíaca diaria."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from hr_dashboard.sources.base import DataSource, SourcePaths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeartRateJsonPaths(SourcePaths):
    """Path to a heart-rate JSON file or a folder of them."""

    # root: heartRateData.json o carpeta con *.json


class HeartRateJsonSource(DataSource):
    """Static heart-rate JSON reader."""

    def validate(self) -> None:
        """Validate that the configured file or folder exists."""
        if not self._paths.root.exists():
            raise FileNotFoundError(str(self._paths.root))

    def newest_json(self) -> Path:
        """Return the configured file, or the newest *.json of the folder by mtime."""
        if self._paths.root.is_file():
            return self._paths.root
        files = sorted(
            self._paths.root.glob("*.json"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if not files:
            raise FileNotFoundError(f"No *.json in {self._paths.root}")
        return files[0]

    def load_dataset(self, path: Path | None = None) -> Any:
        """Decode the JSON document without validating its shape.

        Shape problems (not a list, missing blocks) are reported later by the
        processor as "no data".

        Args:
            path: JSON file; defaults to ``newest_json()``.

        Returns:
            The decoded JSON value.

        Raises:
            json.JSONDecodeError: If the file is not valid JSON.
        """
        target = path if path is not None else self.newest_json()
        text = target.read_text(encoding="utf-8")
        data = _extract_json(text)
        logger.debug("Loaded heart rate JSON from %s", target)
        return data


def _extract_json(text: str) -> Any:
    """Decode JSON, tolerating leading non-JSON lines (e.g. log output).

    Each "[" or "{" is tried as the start of the document; the first one that
    decodes up to the end of the text wins.

    Raises:
        json.JSONDecodeError: If no offset yields a complete document.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        first_error = exc

    decoder = json.JSONDecoder()
    for idx, char in enumerate(text):
        if char not in "[{":
            continue
        try:
            data, end = decoder.raw_decode(text, idx)
        except json.JSONDecodeError:
            continue
        if not text[end:].strip():
            return data
    raise first_error
