"""Smoke tests for waveform plots."""

import matplotlib.pyplot as plt
import pytest

from rtlsim.core import Register, Simulator
from rtlsim.viz import plot_waveform, plot_waveforms, save_figure

from circuits import Bundle


@pytest.fixture
def traced(counter):
    reg, inc = counter
    bundle = Register(Bundle(), name="bundle")
    sim = Simulator().register(inc, bundle)
    sim.simulate(5)
    yield sim.trace, reg, bundle
    plt.close("all")


class TestWaveforms:
    """Tests for waveform plotting."""

    def test_scalar_waveform(self, traced):
        trace, reg, _ = traced
        fig, ax = plot_waveform(trace, reg, "val", show_values=True)
        assert len(ax.lines) == 1
        assert ax.get_ylabel() == "count.val"

    def test_slot_waveform_one_line_per_slot(self, traced):
        trace, _, bundle = traced
        _, ax = plot_waveform(trace, bundle, "valid")
        assert len(ax.lines) == 2

    def test_stacked(self, traced):
        trace, reg, bundle = traced
        fig = plot_waveforms(trace, [(reg, "val"), (bundle, "valid")])
        assert len(fig.axes) == 2

    def test_stacked_needs_signals(self, traced):
        trace, _, _ = traced
        with pytest.raises(ValueError):
            plot_waveforms(trace, [])

    def test_save(self, traced, tmp_path):
        trace, reg, _ = traced
        fig, _ = plot_waveform(trace, reg, "val")
        path = tmp_path / "wave.png"
        save_figure(fig, path)
        assert path.exists()
