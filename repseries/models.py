from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


# Curve fields stored as encoded text, grouped by decode kind.
FLOAT_CURVE_FIELDS = (
    "concentric_positions",
    "concentric_loads_a",
    "concentric_loads_b",
    "concentric_velocities",
    "eccentric_positions",
    "eccentric_loads_a",
    "eccentric_loads_b",
    "eccentric_velocities",
)

INT_CURVE_FIELDS = (
    "concentric_timestamps",
    "eccentric_timestamps",
)

SUMMARY_FIELDS = (
    "peak_force_a",
    "peak_force_b",
    "avg_force_concentric_a",
    "avg_force_concentric_b",
    "avg_force_eccentric_a",
    "avg_force_eccentric_b",
    "peak_velocity",
    "avg_velocity_concentric",
    "avg_velocity_eccentric",
    "range_of_motion_mm",
    "peak_power_watts",
    "avg_power_watts",
)

PHASES = ("concentric", "eccentric")


@dataclass
class RepMetricData:
    """
    Per-rep sample curves and summaries for one repetition of a set.

    Curves are split by phase (concentric = lifting, eccentric = lowering).
    `*_loads_a` / `*_loads_b` are the loads on the two cables, timestamps
    are millisecond offsets from `start_timestamp`.
    """

    rep_number: int
    is_warmup: bool = False
    start_timestamp: int = 0
    end_timestamp: int = 0
    duration_ms: int = 0

    concentric_duration_ms: int = 0
    concentric_positions: List[float] = field(default_factory=list)
    concentric_loads_a: List[float] = field(default_factory=list)
    concentric_loads_b: List[float] = field(default_factory=list)
    concentric_velocities: List[float] = field(default_factory=list)
    concentric_timestamps: List[int] = field(default_factory=list)

    eccentric_duration_ms: int = 0
    eccentric_positions: List[float] = field(default_factory=list)
    eccentric_loads_a: List[float] = field(default_factory=list)
    eccentric_loads_b: List[float] = field(default_factory=list)
    eccentric_velocities: List[float] = field(default_factory=list)
    eccentric_timestamps: List[int] = field(default_factory=list)

    peak_force_a: float = 0.0
    peak_force_b: float = 0.0
    avg_force_concentric_a: float = 0.0
    avg_force_concentric_b: float = 0.0
    avg_force_eccentric_a: float = 0.0
    avg_force_eccentric_b: float = 0.0
    peak_velocity: float = 0.0
    avg_velocity_concentric: float = 0.0
    avg_velocity_eccentric: float = 0.0
    range_of_motion_mm: float = 0.0
    peak_power_watts: float = 0.0
    avg_power_watts: float = 0.0

    def phase_samples(self, phase: str) -> List[dict]:
        """
        Righe campione per una fase: una dict per indice, fino alla curva
        più lunga (i valori mancanti restano None).
        """
        if phase not in PHASES:
            raise ValueError(f"Unknown phase '{phase}', expected one of {list(PHASES)}")

        t_ms = getattr(self, f"{phase}_timestamps")
        positions = getattr(self, f"{phase}_positions")
        loads_a = getattr(self, f"{phase}_loads_a")
        loads_b = getattr(self, f"{phase}_loads_b")
        velocities = getattr(self, f"{phase}_velocities")

        n = max(len(t_ms), len(positions), len(loads_a), len(loads_b), len(velocities))

        def at(seq, i):
            return seq[i] if i < len(seq) else None

        return [
            {
                "idx": i,
                "t_ms": at(t_ms, i),
                "position": at(positions, i),
                "load_a": at(loads_a, i),
                "load_b": at(loads_b, i),
                "velocity": at(velocities, i),
            }
            for i in range(n)
        ]


class StrengthProfile(str, Enum):
    """Shape of the force curve over the range of motion."""

    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"
    BELL_SHAPED = "BELL_SHAPED"
    FLAT = "FLAT"


@dataclass
class ForceCurveData:
    """
    Force curve of one rep, resampled on a normalized position axis.

    `normalized_position_pct` goes 0..100 over the rep's range of motion,
    `normalized_force_n` is the force at each of those points.
    """

    rep_number: int
    normalized_force_n: List[float] = field(default_factory=list)
    normalized_position_pct: List[float] = field(default_factory=list)
    sticking_point_pct: Optional[float] = None
    strength_profile: StrengthProfile = StrengthProfile.FLAT
    timestamp: int = 0
