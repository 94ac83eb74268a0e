# tests/conftest.py
from __future__ import annotations

import pytest

from repseries.models import RepMetricData


def make_rep(rep_number: int, n: int = 5, warmup: bool = False) -> RepMetricData:
    """Rep sintetica: rampa di posizione, carico crescente, offset a 40 ms."""
    return RepMetricData(
        rep_number=rep_number,
        is_warmup=warmup,
        start_timestamp=1_700_000_000_000 + rep_number * 3000,
        end_timestamp=1_700_000_000_000 + rep_number * 3000 + 2 * n * 40,
        duration_ms=2 * n * 40,
        concentric_duration_ms=n * 40,
        concentric_positions=[10.0 * i for i in range(n)],
        concentric_loads_a=[20.0 + 0.5 * i for i in range(n)],
        concentric_loads_b=[19.5 + 0.5 * i for i in range(n)],
        concentric_velocities=[250.0 + 0.1 * i for i in range(n)],
        concentric_timestamps=[40 * i for i in range(n)],
        eccentric_duration_ms=n * 40,
        eccentric_positions=[10.0 * (n - 1 - i) for i in range(n)],
        eccentric_loads_a=[22.0 - 0.25 * i for i in range(n)],
        eccentric_loads_b=[21.5 - 0.25 * i for i in range(n)],
        eccentric_velocities=[-200.0 - 0.1 * i for i in range(n)],
        eccentric_timestamps=[40 * i for i in range(n)],
        peak_force_a=22.0,
        peak_force_b=21.5,
        avg_force_concentric_a=21.0,
        avg_force_concentric_b=20.5,
        avg_force_eccentric_a=21.5,
        avg_force_eccentric_b=21.0,
        peak_velocity=250.4,
        avg_velocity_concentric=250.2,
        avg_velocity_eccentric=-200.2,
        range_of_motion_mm=10.0 * (n - 1),
        peak_power_watts=54.3,
        avg_power_watts=31.7,
    )


@pytest.fixture
def reps():
    return [make_rep(1, warmup=True), make_rep(2), make_rep(3, n=0)]
