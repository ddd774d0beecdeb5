from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from hr_dashboard.sources.heart_rate_json import (
    HeartRateJsonPaths,
    HeartRateJsonSource,
    _extract_json,
)


def test_load_dataset_from_file(tmp_path: Path) -> None:
    data = [{"date": "2024-01-01", "heart_rate": {"heartRateValues": [[1, 60]]}}]
    p = tmp_path / "heartRateData.json"
    p.write_text(json.dumps(data), encoding="utf-8")

    src = HeartRateJsonSource(HeartRateJsonPaths(root=p))
    src.validate()

    assert src.newest_json() == p
    assert src.load_dataset() == data


def test_validate_raises_when_root_missing(tmp_path: Path) -> None:
    missing = tmp_path / "noexiste.json"
    src = HeartRateJsonSource(HeartRateJsonPaths(root=missing))
    with pytest.raises(FileNotFoundError, match=str(missing)):
        src.validate()


def test_newest_json_raises_when_folder_empty(tmp_path: Path) -> None:
    src = HeartRateJsonSource(HeartRateJsonPaths(root=tmp_path))
    with pytest.raises(FileNotFoundError, match=r"No \*\.json"):
        src.newest_json()


def test_newest_json_picks_latest_mtime(tmp_path: Path) -> None:
    old_f = tmp_path / "old.json"
    new_f = tmp_path / "new.json"
    old_f.write_text("[]", encoding="utf-8")
    new_f.write_text("[]", encoding="utf-8")
    os.utime(old_f, (1_000_000, 1_000_000))
    os.utime(new_f, (2_000_000, 2_000_000))

    src = HeartRateJsonSource(HeartRateJsonPaths(root=tmp_path))
    assert src.newest_json() == new_f


def test_load_dataset_keeps_non_list_shape(tmp_path: Path) -> None:
    p = tmp_path / "obj.json"
    p.write_text('{"a": 1}', encoding="utf-8")
    src = HeartRateJsonSource(HeartRateJsonPaths(root=p))
    assert src.load_dataset(p) == {"a": 1}


def test_load_dataset_invalid_json_raises(tmp_path: Path) -> None:
    p = tmp_path / "bad.json"
    p.write_text("not json", encoding="utf-8")
    src = HeartRateJsonSource(HeartRateJsonPaths(root=p))
    with pytest.raises(json.JSONDecodeError):
        src.load_dataset(p)


def test_extract_json_skips_leading_log_lines() -> None:
    text = 'Raw JSON Data:\n[{"date": "2024-01-01"}]'
    assert _extract_json(text) == [{"date": "2024-01-01"}]


def test_extract_json_skips_bracketed_log_prefix() -> None:
    text = '[INFO] loading heart rate data\n[{"date": "2024-01-01"}]'
    assert _extract_json(text) == [{"date": "2024-01-01"}]


def test_extract_json_plain_document() -> None:
    assert _extract_json('{"a": [1, 2]}') == {"a": [1, 2]}


def test_extract_json_without_document_raises() -> None:
    with pytest.raises(json.JSONDecodeError):
        _extract_json("[INFO] nothing here")
