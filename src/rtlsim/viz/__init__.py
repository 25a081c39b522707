"""
Visualization utilities.

- Waveform plots of register fields over cycles
"""

from rtlsim.viz.waveforms import (
    plot_waveform,
    plot_waveforms,
    save_figure,
)

__all__ = [
    "plot_waveform",
    "plot_waveforms",
    "save_figure",
]
