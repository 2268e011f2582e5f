from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math
from typing import Callable, Sequence

import numpy as np

from plotframe.geometry import Length


SUGGESTED_TICKS = 3


@dataclass(frozen=True)
class Tick:
    """A tick value; an empty label marks a minor tick."""

    value: float
    label: str = ""

    def is_minor(self) -> bool:
        return self.label == ""

    def length_offset(self, length: Length) -> Length:
        if self.is_minor():
            return length / 2.0
        return 0.0


Ticker = Callable[[float, float], list[Tick]]


def default_ticks(vmin: float, vmax: float) -> list[Tick]:
    """Labelled major ticks near ``SUGGESTED_TICKS`` per range, with unlabelled minors between."""
    if not (math.isfinite(vmin) and math.isfinite(vmax)) or vmax <= vmin:
        return []
    span = vmax - vmin
    # Spans that overflow, or are so small the decade underflows, get no ticks.
    if not math.isfinite(span):
        return []
    tens = 10.0 ** math.floor(math.log10(span))
    if tens == 0.0:
        return []
    n = span / tens
    while n < SUGGESTED_TICKS:
        tens /= 10.0
        if tens == 0.0:
            return []
        n = span / tens

    major_mult = int(n / SUGGESTED_TICKS)
    if major_mult == 7:
        major_mult = 6
    elif major_mult == 9:
        major_mult = 8
    major_step = major_mult * tens

    majors = _multiples(vmin, vmax, major_step)
    ticks = [Tick(float(v), label) for v, label in zip(majors.tolist(), format_ticks_for_axis(majors), strict=False)]

    minor_step = major_step / 2.0
    if major_mult in (3, 6):
        minor_step = major_step / 3.0
    elif major_mult == 5:
        minor_step = major_step / 5.0
    eps = minor_step * 1e-6
    for v in _multiples(vmin, vmax, minor_step).tolist():
        if np.any(np.isclose(majors, v, rtol=0.0, atol=eps)):
            continue
        ticks.append(Tick(float(v)))
    return ticks


def constant_ticks(ticks: Sequence[Tick]) -> Ticker:
    fixed = tuple(ticks)

    def ticker(vmin: float, vmax: float) -> list[Tick]:
        return list(fixed)

    return ticker


def _multiples(vmin: float, vmax: float, step: float) -> np.ndarray:
    first = math.ceil(vmin / step - 1e-9)
    last = math.floor(vmax / step + 1e-9)
    values = np.arange(first, last + 1, dtype=np.float64) * step
    # Snap floating-point drift such as -4.44e-16 to zero.
    values[np.isclose(values, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return values


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    # Round off binary noise (0.30000000000000004) before counting decimals.
    d = Decimal(repr(float(f"{step:.12g}"))).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
