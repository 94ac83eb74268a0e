# tests/test_models.py
from __future__ import annotations

import pytest

from repseries.models import RepMetricData


def test_phase_samples_aligns_curves():
    m = RepMetricData(
        rep_number=1,
        concentric_positions=[0.0, 5.0, 10.0],
        concentric_loads_a=[20.0, 21.0, 22.0],
        concentric_loads_b=[20.0, 20.5, 21.0],
        concentric_velocities=[100.0, 120.0],
        concentric_timestamps=[0, 40, 80],
    )

    rows = m.phase_samples("concentric")

    assert len(rows) == 3
    assert rows[0] == {
        "idx": 0,
        "t_ms": 0,
        "position": 0.0,
        "load_a": 20.0,
        "load_b": 20.0,
        "velocity": 100.0,
    }
    # curva più corta: valore mancante
    assert rows[2]["velocity"] is None
    assert m.phase_samples("eccentric") == []


def test_phase_samples_unknown_phase():
    with pytest.raises(ValueError, match="Unknown phase"):
        RepMetricData(rep_number=1).phase_samples("isometric")
