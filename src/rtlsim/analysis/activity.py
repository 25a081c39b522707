"""
Switching activity from a Trace.

A field toggles at cycle k when its committed value at the end of cycle
k differs from the value at the end of cycle k-1. For slot fields each
slot is counted separately.
"""

from __future__ import annotations
from dataclasses import fields
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from rtlsim.core.register import Register
    from rtlsim.core.trace import Trace


def toggle_counts(trace: "Trace", register: "Register | str") -> dict[str, np.ndarray]:
    """
    Count value changes per field.

    Returns:
        {field_name: counts}; counts is a 0-d array for scalar fields and
        one entry per slot for slot fields
    """
    values = trace.values(register)
    out = {}
    for f in fields(values[0]):
        series = trace.series(register, f.name)
        changed = series[1:] != series[:-1]
        out[f.name] = np.asarray(changed.sum(axis=0), dtype=np.int64)
    return out


def toggle_rates(trace: "Trace", register: "Register | str") -> dict[str, np.ndarray]:
    """Toggle counts divided by the number of cycles."""
    n = trace.n_cycles
    counts = toggle_counts(trace, register)
    if n == 0:
        return {k: np.zeros_like(v, dtype=np.float64) for k, v in counts.items()}
    return {k: v / n for k, v in counts.items()}


def first_divergence(a: "Trace", b: "Trace") -> int | None:
    """
    First cycle index where two traces differ, or None if they agree.

    Registers are matched by recording position. Traces whose register
    lists differ in name or order count as diverging at index 0.
    """
    if a.names != b.names:
        return 0
    n = min(a.n_cycles, b.n_cycles) + 1
    for k in range(n):
        if a.at(k) != b.at(k):
            return k
    if a.n_cycles != b.n_cycles:
        return n
    return None
