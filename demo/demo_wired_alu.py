#!/usr/bin/env python3
"""
Demo: Logic chained through a wire

An accumulator register feeds an adder; the adder's result goes over a
wire (same cycle, no register) to a saturating clamp, which writes the
accumulator back. The scheduler orders the adder before the clamp even
though the clamp is registered first.

    acc --> Adder ==wire==> Clamp --> acc

Output: output/demo_wired_alu/waveforms.png
"""

import logging
from pathlib import Path

from rtlsim.core import Port, Register, Simulator, Wire, combinational, port
from rtlsim.viz import plot_waveform, save_figure

LIMIT = 40
STEP = 7


@port
class Word(Port):
    val: int = 0


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=" * 60)
    print("  WIRED ADDER + CLAMP")
    print("=" * 60)

    acc = Register(Word(), name="acc")
    total = Wire(Word, name="sum")

    @combinational(reads=(acc,), writes=(total,))
    def adder(cycle):
        total.drive().val = acc.read().val + STEP

    @combinational(reads=(total,), writes=(acc,))
    def clamp(cycle):
        acc.write().val = min(total.sample().val, LIMIT)

    sim = Simulator()
    sim.register(clamp, adder)
    print("Evaluation order:", [u.name for u in sim.evaluation_order])

    sim.simulate(10)
    print("acc over time:", sim.trace.series(acc, "val").tolist())

    output_dir = Path("output/demo_wired_alu")
    output_dir.mkdir(parents=True, exist_ok=True)
    fig, _ = plot_waveform(sim.trace, acc, "val", show_values=True)
    save_figure(fig, output_dir / "waveforms.png")
    print(f"Saved {output_dir / 'waveforms.png'}")


if __name__ == "__main__":
    main()
