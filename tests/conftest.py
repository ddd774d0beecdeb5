from __future__ import annotations

from typing import Any

import pytest

T1 = 1704103200000  # 2024-01-01 10:00 UTC
T2 = 1704117600000  # 2024-01-01 14:00 UTC
T3 = 1704182400000  # 2024-01-02 08:00 UTC


@pytest.fixture
def dataset() -> list[dict[str, Any]]:
    return [
        {
            "date": "2024-01-01",
            "heart_rate": {
                "maxHeartRate": 130,
                "minHeartRate": 52,
                "restingHeartRate": 58,
                "lastSevenDaysAvgRestingHeartRate": 60.5,
                "heartRateValues": [[T2, 130], [T1, 110]],
            },
        },
        {
            "date": "2024-01-02",
            "heart_rate": {"heartRateValues": [[T3, 90]]},
        },
    ]
