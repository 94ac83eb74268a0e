# repseries/cli.py
from __future__ import annotations

import argparse
import csv
import logging
import sqlite3
import sys
from pathlib import Path
from typing import List

from .core import (
    KINDS,
    MalformedInputError,
    NonFiniteValueError,
    encode_series,
    decode_series,
)
from .models import PHASES
from .storage import RepMetricStore

logger = logging.getLogger(__name__)

EXPORT_HEADER = [
    "session_id",
    "rep",
    "warmup",
    "phase",
    "idx",
    "t_ms",
    "position",
    "load_a",
    "load_b",
    "velocity",
]


# ---------------------------------------------------------------------------
# CSV helpers
# ---------------------------------------------------------------------------
def load_values_from_csv(path: Path, kind: str = "float") -> list:
    """Carica la prima colonna numerica da un CSV (ignorando righe vuote / commenti)."""
    cast = int if kind == "int" else float
    values: list = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            first = line.split(",")[0].strip()
            try:
                values.append(cast(first))
            except ValueError:
                if kind == "int" and _looks_numeric(first):
                    # es. "1.5" con --kind int: saltarlo perderebbe un campione
                    raise MalformedInputError(
                        f"{path}:{lineno}: {first!r} is not an integer sample"
                    )
                # header testuale: lo saltiamo ma lo diciamo
                logger.warning("%s:%d: skipping non-numeric value %r", path, lineno, first)
                continue
    return values


def _looks_numeric(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def save_values_to_csv(values: list, path: Path, kind: str = "float") -> None:
    with path.open("w", encoding="utf-8") as f:
        f.write("# value\n")
        for v in values:
            f.write(f"{v!r}\n" if kind == "float" else f"{v}\n")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="repseries",
        description="repseries – per-rep sample series codec and store",
    )
    p.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level",
    )
    sub = p.add_subparsers(dest="command")

    # encode
    p_enc = sub.add_parser("encode", help="encode a CSV column into text form")
    p_enc.add_argument("input", type=str, help="input CSV file")
    p_enc.add_argument("output", type=str, help="output text file")
    p_enc.add_argument(
        "--kind", type=str, default="float", choices=list(KINDS), help="sample type"
    )
    p_enc.set_defaults(func=cli_encode)

    # decode
    p_dec = sub.add_parser("decode", help="decode text form into CSV")
    p_dec.add_argument("input", type=str, help="input text file")
    p_dec.add_argument("output", type=str, help="output CSV file")
    p_dec.add_argument(
        "--kind", type=str, default="float", choices=list(KINDS), help="sample type"
    )
    p_dec.set_defaults(func=cli_decode)

    # info
    p_info = sub.add_parser("info", help="inspect an encoded series")
    p_info.add_argument("input", type=str, help="input text file")
    p_info.add_argument(
        "--kind", type=str, default="float", choices=list(KINDS), help="sample type"
    )
    p_info.add_argument(
        "-v", "--verbose", action="store_true", help="print every sample"
    )
    p_info.set_defaults(func=cli_info)

    # export-reps
    p_exp = sub.add_parser(
        "export-reps",
        help="export the rep curves of a session to CSV (one row per sample)",
    )
    p_exp.add_argument("db", type=str, help="SQLite database file")
    p_exp.add_argument("session_id", type=str, help="session id")
    p_exp.add_argument("output", type=str, help="output CSV file")
    p_exp.set_defaults(func=cli_export_reps)

    return p


def cli_encode(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    output_path = Path(args.output)

    values = load_values_from_csv(input_path, kind=args.kind)
    text = encode_series(values, kind=args.kind)
    output_path.write_text(text, encoding="utf-8")
    logger.info("Encoded %d samples from %s", len(values), input_path)


def _read_encoded(path: Path) -> str:
    # l'eventuale newline finale aggiunto da un editor non fa parte del valore
    return path.read_text(encoding="utf-8").rstrip("\r\n")


def cli_decode(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    output_path = Path(args.output)

    values = decode_series(_read_encoded(input_path), kind=args.kind)
    save_values_to_csv(values, output_path, kind=args.kind)
    logger.info("Decoded %d samples into %s", len(values), output_path)


def cli_info(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    text = _read_encoded(input_path)
    values = decode_series(text, kind=args.kind)

    print(f"File        : {input_path.name}")
    print(f"Size        : {len(text)} chars")
    print(f"Kind        : {args.kind}")
    print()

    print("Series      :")
    print(f"  points    : {len(values)}")
    if values:
        print(f"  min       : {min(values)!r}")
        print(f"  max       : {max(values)!r}")
        print(f"  mean      : {sum(values) / len(values):.6g}")
        print(f"  first     : {values[0]!r}")
        print(f"  last      : {values[-1]!r}")

    if args.verbose and values:
        print()
        print("Samples:")
        print("  idx   value")
        print("  ----- ---------------")
        for i, v in enumerate(values):
            print(f"  {i:5d} {v!r}")


def cli_export_reps(args: argparse.Namespace) -> None:
    db_path = Path(args.db)
    output_path = Path(args.output)
    if not db_path.is_file():
        raise FileNotFoundError(f"No such database: {db_path}")

    # export in sola lettura: il database dell'utente non viene toccato
    with RepMetricStore(db_path, read_only=True) as store:
        metrics = store.get_rep_metrics(args.session_id)

    n_rows = 0
    with output_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(EXPORT_HEADER)
        for m in metrics:
            for phase in PHASES:
                for s in m.phase_samples(phase):
                    writer.writerow(
                        [
                            args.session_id,
                            m.rep_number,
                            int(m.is_warmup),
                            phase,
                            s["idx"],
                            "" if s["t_ms"] is None else s["t_ms"],
                            "" if s["position"] is None else repr(s["position"]),
                            "" if s["load_a"] is None else repr(s["load_a"]),
                            "" if s["load_b"] is None else repr(s["load_b"]),
                            "" if s["velocity"] is None else repr(s["velocity"]),
                        ]
                    )
                    n_rows += 1

    logger.info(
        "Exported %d reps (%d samples) of session %s",
        len(metrics),
        n_rows,
        args.session_id,
    )


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    try:
        args.func(args)
    except (MalformedInputError, NonFiniteValueError, OSError, sqlite3.Error) as e:
        print(f"repseries {args.command}: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
