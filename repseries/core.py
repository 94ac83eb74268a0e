from __future__ import annotations

from typing import Iterable, List, Optional, Union

import math
import re


Number = Union[int, float]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class MalformedInputError(ValueError):
    """Encoded text that is not a bracketed, comma-delimited number list."""


class NonFiniteValueError(ValueError):
    """NaN or infinity passed to encode_series."""


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------
# encoded := "[]" | "[" element ("," element)* "]"
OPEN = "["
CLOSE = "]"
SEP = ","

INT_TOKEN_RE = re.compile(r"-?[0-9]+")
FLOAT_TOKEN_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

KINDS = ("float", "int")


def format_value(v: Number, kind: Optional[str] = None) -> str:
    """
    Canonical decimal form of one sample (round-trip exact).

    With kind='int' only int samples are accepted, so the text always
    decodes with decode_series(..., kind='int').
    """
    if kind is not None and kind not in KINDS:
        raise ValueError(f"Unknown kind '{kind}', expected one of {list(KINDS)}")
    # bool è sottoclasse di int: non è un campione
    if isinstance(v, bool):
        raise TypeError(f"Expected int or float sample, got bool {v!r}")
    if isinstance(v, int):
        return str(v)
    if kind == "int":
        raise TypeError(f"Expected int sample, got {type(v).__name__} {v!r}")
    if isinstance(v, float):
        if not math.isfinite(v):
            raise NonFiniteValueError(f"Non-finite sample {v!r} cannot be encoded")
        # repr() è la forma più corta che rilegge lo stesso double
        return repr(v)
    raise TypeError(f"Expected int or float sample, got {type(v).__name__}")


def parse_token(token: str, kind: str = "float") -> Number:
    """Parse one interior token as `kind` ('float' or 'int')."""
    if kind == "int":
        if not INT_TOKEN_RE.fullmatch(token):
            raise MalformedInputError(f"Invalid integer token {token!r}")
        try:
            return int(token)
        except ValueError as e:
            # es. oltre il limite di cifre di int()
            raise MalformedInputError(
                f"Integer token of {len(token)} chars cannot be parsed: {e}"
            ) from e
    if kind == "float":
        if not FLOAT_TOKEN_RE.fullmatch(token):
            raise MalformedInputError(f"Invalid float token {token!r}")
        value = float(token)
        # es. "1e999" rispetta la grammatica ma trabocca a inf
        if not math.isfinite(value):
            raise MalformedInputError(f"Float token {token!r} overflows")
        return value
    raise ValueError(f"Unknown kind '{kind}', expected one of {list(KINDS)}")


# ---------------------------------------------------------------------------
# Codec: encode / decode
# ---------------------------------------------------------------------------
def encode_series(values: Iterable[Number], kind: Optional[str] = None) -> str:
    """
    Encode an ordered sequence of samples as text, e.g. [1.5,2.7] -> "[1.5,2.7]".

    The empty sequence encodes to "[]". Floats use their shortest
    round-trip representation, ints their plain decimal form; no whitespace
    is emitted.

    Args:
        values: samples, in order.
        kind: None accepts ints and floats; 'int' accepts only ints;
            'float' accepts both (ints read back as floats).

    Raises:
        NonFiniteValueError: a sample is NaN or infinite.
        TypeError: a sample is not an int or float, or not an int for kind='int'.
    """
    return OPEN + SEP.join(format_value(v, kind) for v in values) + CLOSE


def decode_series(text: str, kind: str = "float") -> List[Number]:
    """
    Decode text produced by encode_series back into a list of samples.

    Args:
        text: encoded form.
        kind: 'float' for curves, 'int' for millisecond offsets.

    Raises:
        MalformedInputError: missing brackets, empty or non-numeric tokens.
    """
    if kind not in KINDS:
        raise ValueError(f"Unknown kind '{kind}', expected one of {list(KINDS)}")
    if not isinstance(text, str):
        raise MalformedInputError(f"Expected text, got {type(text).__name__}")
    if len(text) < 2 or not text.startswith(OPEN) or not text.endswith(CLOSE):
        raise MalformedInputError(f"Encoded series must be enclosed in []: {text!r}")

    interior = text[1:-1]
    # "".split(",") darebbe [""]: la sequenza vuota va gestita a parte
    if interior == "":
        return []

    return [parse_token(token, kind) for token in interior.split(SEP)]


def decode_float_series(text: str) -> List[float]:
    return decode_series(text, kind="float")  # type: ignore[return-value]


def decode_int_series(text: str) -> List[int]:
    return decode_series(text, kind="int")  # type: ignore[return-value]
