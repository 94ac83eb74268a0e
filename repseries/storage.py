from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

import logging
import sqlite3

from .core import MalformedInputError, encode_series, decode_series
from .models import (
    FLOAT_CURVE_FIELDS,
    INT_CURVE_FIELDS,
    SUMMARY_FIELDS,
    ForceCurveData,
    RepMetricData,
    StrengthProfile,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------
TIMING_FIELDS = (
    "start_timestamp",
    "end_timestamp",
    "duration_ms",
    "concentric_duration_ms",
    "eccentric_duration_ms",
)

ROW_FIELDS = (
    ("rep_number", "is_warmup")
    + TIMING_FIELDS
    + FLOAT_CURVE_FIELDS
    + INT_CURVE_FIELDS
    + SUMMARY_FIELDS
)

CREATE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS rep_metric (\n"
    "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
    "  session_id TEXT NOT NULL,\n"
    "  rep_number INTEGER NOT NULL,\n"
    "  is_warmup INTEGER NOT NULL DEFAULT 0,\n"
    + "".join(f"  {name} INTEGER NOT NULL,\n" for name in TIMING_FIELDS)
    + "".join(
        f"  {name} TEXT NOT NULL DEFAULT '[]',\n"
        for name in FLOAT_CURVE_FIELDS + INT_CURVE_FIELDS
    )
    + "".join(f"  {name} REAL NOT NULL,\n" for name in SUMMARY_FIELDS)
    + "  updated_at INTEGER,\n"
    "  server_id TEXT\n"
    ")"
)

CREATE_INDEX_SQL = (
    "CREATE INDEX IF NOT EXISTS idx_rep_metric_session "
    "ON rep_metric(session_id, rep_number)"
)

INSERT_SQL = (
    "INSERT INTO rep_metric (session_id, "
    + ", ".join(ROW_FIELDS)
    + ") VALUES (?, "
    + ", ".join("?" for _ in ROW_FIELDS)
    + ")"
)

SELECT_SQL = (
    "SELECT "
    + ", ".join(ROW_FIELDS)
    + " FROM rep_metric WHERE session_id = ? ORDER BY rep_number, id"
)

# Force curves: one row per rep, curves as encoded text
FORCE_CURVE_FIELDS = (
    "rep_number",
    "normalized_force_n",
    "normalized_position_pct",
    "sticking_point_pct",
    "strength_profile",
    "timestamp",
)

CREATE_FORCE_CURVE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS rep_force_curve (\n"
    "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
    "  session_id TEXT NOT NULL,\n"
    "  rep_number INTEGER NOT NULL,\n"
    "  normalized_force_n TEXT NOT NULL DEFAULT '[]',\n"
    "  normalized_position_pct TEXT NOT NULL DEFAULT '[]',\n"
    "  sticking_point_pct REAL,\n"
    "  strength_profile TEXT NOT NULL,\n"
    "  timestamp INTEGER NOT NULL\n"
    ")"
)

INSERT_FORCE_CURVE_SQL = (
    "INSERT INTO rep_force_curve (session_id, "
    + ", ".join(FORCE_CURVE_FIELDS)
    + ") VALUES (?, "
    + ", ".join("?" for _ in FORCE_CURVE_FIELDS)
    + ")"
)

SELECT_FORCE_CURVE_SQL = (
    "SELECT "
    + ", ".join(FORCE_CURVE_FIELDS)
    + " FROM rep_force_curve WHERE session_id = ? ORDER BY rep_number, id"
)


# ---------------------------------------------------------------------------
# Row <-> dataclass
# ---------------------------------------------------------------------------
def _decode_column(row: sqlite3.Row, name: str, kind: str, session_id: str) -> list:
    try:
        return decode_series(row[name], kind=kind)
    except MalformedInputError:
        logger.error(
            "Corrupted curve %s for session=%s rep=%s",
            name,
            session_id,
            row["rep_number"],
        )
        raise


def metric_to_row(session_id: str, metric: RepMetricData) -> tuple:
    values: list = [session_id, int(metric.rep_number), 1 if metric.is_warmup else 0]
    for name in TIMING_FIELDS:
        values.append(int(getattr(metric, name)))
    for name in FLOAT_CURVE_FIELDS:
        values.append(encode_series(getattr(metric, name), kind="float"))
    # gli offset vengono riletti come int: un float qui renderebbe la riga illeggibile
    for name in INT_CURVE_FIELDS:
        values.append(encode_series(getattr(metric, name), kind="int"))
    for name in SUMMARY_FIELDS:
        values.append(float(getattr(metric, name)))
    return tuple(values)


def row_to_metric(row: sqlite3.Row, session_id: str) -> RepMetricData:
    kwargs = {
        "rep_number": int(row["rep_number"]),
        "is_warmup": row["is_warmup"] != 0,
    }
    for name in TIMING_FIELDS:
        kwargs[name] = int(row[name])
    for name in FLOAT_CURVE_FIELDS:
        kwargs[name] = _decode_column(row, name, "float", session_id)
    for name in INT_CURVE_FIELDS:
        kwargs[name] = _decode_column(row, name, "int", session_id)
    for name in SUMMARY_FIELDS:
        kwargs[name] = float(row[name])
    return RepMetricData(**kwargs)


def force_curve_to_row(session_id: str, curve: ForceCurveData) -> tuple:
    sticking = curve.sticking_point_pct
    return (
        session_id,
        int(curve.rep_number),
        encode_series(curve.normalized_force_n, kind="float"),
        encode_series(curve.normalized_position_pct, kind="float"),
        None if sticking is None else float(sticking),
        StrengthProfile(curve.strength_profile).value,
        int(curve.timestamp),
    )


def row_to_force_curve(row: sqlite3.Row, session_id: str) -> ForceCurveData:
    try:
        profile = StrengthProfile(row["strength_profile"])
    except ValueError:
        # profilo sconosciuto (es. scritto da una versione più nuova): FLAT
        logger.warning(
            "Unknown strength profile %r for session=%s rep=%s, using FLAT",
            row["strength_profile"],
            session_id,
            row["rep_number"],
        )
        profile = StrengthProfile.FLAT

    sticking = row["sticking_point_pct"]
    return ForceCurveData(
        rep_number=int(row["rep_number"]),
        normalized_force_n=_decode_column(row, "normalized_force_n", "float", session_id),
        normalized_position_pct=_decode_column(
            row, "normalized_position_pct", "float", session_id
        ),
        sticking_point_pct=None if sticking is None else float(sticking),
        strength_profile=profile,
        timestamp=int(row["timestamp"]),
    )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------
class RepMetricStore:
    """
    SQLite repository for per-rep metrics and force curves, one row per rep.

    Curves are persisted as encoded text (see repseries.core). No subscription
    tier is involved: metrics are captured for every user.

    With read_only=True the database file must already exist; it is opened
    with SQLite's mode=ro and no table is created.
    """

    def __init__(self, db_path: Union[str, Path] = ":memory:", read_only: bool = False) -> None:
        self.db_path = str(db_path)
        self.read_only = read_only
        if read_only:
            if self.db_path == ":memory:":
                raise ValueError("read_only requires a database file")
            uri = Path(self.db_path).resolve().as_uri() + "?mode=ro"
            self._conn = sqlite3.connect(uri, uri=True)
        else:
            self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        if not read_only:
            with self._conn:
                self._conn.execute(CREATE_TABLE_SQL)
                self._conn.execute(CREATE_INDEX_SQL)
                self._conn.execute(CREATE_FORCE_CURVE_TABLE_SQL)
        logger.debug(
            "Opened rep metric store at %s (read_only=%s)", self.db_path, read_only
        )

    # -- rep metrics --------------------------------------------------------
    def save_rep_metrics(self, session_id: str, metrics: Iterable[RepMetricData]) -> int:
        """Insert all metrics in one transaction. Returns the number of rows."""
        # encode prima di aprire la transazione: un NaN non lascia righe a metà
        rows = [metric_to_row(session_id, m) for m in metrics]
        with self._conn:
            self._conn.executemany(INSERT_SQL, rows)
        logger.info("Saved %d rep metrics for session %s", len(rows), session_id)
        return len(rows)

    def get_rep_metrics(self, session_id: str) -> List[RepMetricData]:
        cur = self._conn.execute(SELECT_SQL, (session_id,))
        return [row_to_metric(row, session_id) for row in cur.fetchall()]

    def delete_rep_metrics(self, session_id: str) -> int:
        with self._conn:
            cur = self._conn.execute(
                "DELETE FROM rep_metric WHERE session_id = ?", (session_id,)
            )
        logger.info("Deleted %d rep metrics for session %s", cur.rowcount, session_id)
        return cur.rowcount

    def count_rep_metrics(self, session_id: str) -> int:
        cur = self._conn.execute(
            "SELECT COUNT(*) FROM rep_metric WHERE session_id = ?", (session_id,)
        )
        return int(cur.fetchone()[0])

    def list_sessions(self) -> List[str]:
        cur = self._conn.execute(
            "SELECT DISTINCT session_id FROM rep_metric ORDER BY session_id"
        )
        return [row[0] for row in cur.fetchall()]

    # -- force curves -------------------------------------------------------
    def save_force_curves(self, session_id: str, curves: Iterable[ForceCurveData]) -> int:
        rows = [force_curve_to_row(session_id, c) for c in curves]
        with self._conn:
            self._conn.executemany(INSERT_FORCE_CURVE_SQL, rows)
        logger.info("Saved %d force curves for session %s", len(rows), session_id)
        return len(rows)

    def get_force_curves(self, session_id: str) -> List[ForceCurveData]:
        cur = self._conn.execute(SELECT_FORCE_CURVE_SQL, (session_id,))
        return [row_to_force_curve(row, session_id) for row in cur.fetchall()]

    def delete_force_curves(self, session_id: str) -> int:
        with self._conn:
            cur = self._conn.execute(
                "DELETE FROM rep_force_curve WHERE session_id = ?", (session_id,)
            )
        logger.info("Deleted %d force curves for session %s", cur.rowcount, session_id)
        return cur.rowcount

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "RepMetricStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
