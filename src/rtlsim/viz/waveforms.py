"""
Waveform (timing diagram) plots of recorded traces.

Each signal is a step plot of one register field over cycles. Slot
fields get one line per slot.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from rtlsim.core.register import Register
    from rtlsim.core.trace import Trace


def _label(register: "Register | str", field: str) -> str:
    name = register if isinstance(register, str) else register.name
    return f"{name}.{field}"


def plot_waveform(
    trace: "Trace",
    register: "Register | str",
    field: str,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 2),
    color: str = "tab:blue",
    show_values: bool = False,
) -> tuple[Figure, Axes]:
    """
    Plot one register field over cycles.

    Args:
        trace: Recorded simulation trace
        register: Register (or its name)
        field: Port field to plot
        ax: Existing axes (creates new if None)
        color: Line color (slot fields cycle through the default colors)
        show_values: Annotate each value change with the new value

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    series = trace.series(register, field)
    cycles = np.arange(len(series))
    label = _label(register, field)

    if series.ndim == 1:
        ax.step(cycles, series.astype(np.float64), where="post", color=color, label=label)
        if show_values:
            changes = np.flatnonzero(np.r_[True, series[1:] != series[:-1]])
            for k in changes:
                ax.annotate(
                    str(series[k]), (cycles[k], float(series[k])),
                    textcoords="offset points", xytext=(3, 3), fontsize=8,
                )
    else:
        for slot in range(series.shape[1]):
            ax.step(
                cycles, series[:, slot].astype(np.float64),
                where="post", label=f"{label}[{slot}]",
            )

    ax.set_ylabel(label)
    ax.set_xlim(0, max(len(series) - 1, 1))
    ax.grid(True, axis="x", alpha=0.3)

    return fig, ax


def plot_waveforms(
    trace: "Trace",
    signals: Sequence[tuple["Register | str", str]],
    title: str = "Waveforms",
    figsize: tuple[float, float] | None = None,
) -> Figure:
    """
    Stack several waveforms sharing the cycle axis.

    Args:
        trace: Recorded simulation trace
        signals: (register, field) pairs, top to bottom
        title: Figure title

    Returns:
        Figure
    """
    n = len(signals)
    if n == 0:
        raise ValueError("no signals to plot")
    if figsize is None:
        figsize = (10, 1.6 * n + 0.8)

    fig, axes = plt.subplots(n, 1, figsize=figsize, sharex=True, squeeze=False)
    for ax, (register, field) in zip(axes[:, 0], signals):
        plot_waveform(trace, register, field, ax=ax)

    axes[-1, 0].set_xlabel("cycle")
    fig.suptitle(title)
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
