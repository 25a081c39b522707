#!/usr/bin/env python3
"""
Demo: Fetch/Decode front end of a dual-issue pipeline

Two logic units separated by registers:

    pc --> Fetch --> fedec --> Decode --> deex
     ^       |
     +-------+

Fetch reads one instruction word pair per cycle. When the high bit of
the first word is set, the pair is a dual-issue bundle and both slots are
valid; the program counter then advances by two instead of one.

Decode sees what Fetch staged one cycle later: the register between them
is what makes this a pipeline.

Output: output/demo_fetch_decode/waveforms.png
"""

import logging
from pathlib import Path

import numpy as np

from rtlsim.core import Logic, Port, Register, Simulator, SimulatorConfig, port, slots
from rtlsim.viz import plot_waveforms, save_figure

ISSUE_SLOTS = 2
BUNDLE_BIT = 0x8000_0000


@port
class PcPort(Port):
    val: int = 0


@port
class FeDePort(Port):
    ia: int = 0
    ib: int = 0
    pc: int = 0
    valid: np.ndarray = slots(ISSUE_SLOTS)


@port
class DeExPort(Port):
    pass


class Fetch(Logic):
    """Reads the instruction memory at pc and feeds the decode stage."""

    MEM = [
        0xABCD0000, 0x12345678,
        0x00000022, 0x00000033,
        0x80000001, 0x00000002,
        0x00000003, 0x00000004,
        0, 0, 0, 0, 0, 0, 0,
    ]

    def __init__(self, pc: Register, fedec: Register):
        super().__init__(reads=pc, writes=(pc, fedec))
        self.pc = pc
        self.fedec = fedec

    def calculate(self, cycle: int) -> None:
        pc_out = self.pc.read()
        pc_in = self.pc.write()
        instr = self.fedec.write()

        if not 0 <= pc_out.val < len(self.MEM) - 1:
            raise IndexError(f"pc {pc_out.val} outside instruction memory")

        instr.ia = self.MEM[pc_out.val]
        instr.ib = self.MEM[pc_out.val + 1]
        instr.pc = pc_out.val
        instr.valid[0] = True
        if instr.ia & BUNDLE_BIT:
            instr.valid[1] = True
            pc_in.val = pc_out.val + 2
        else:
            instr.valid[1] = False
            pc_in.val = pc_out.val + 1

        self.log.debug("cycle %d: fetch: %s %#x", cycle, bool(instr.valid[1]), instr.ia)


class Decode(Logic):
    """Consumes fetched bundles."""

    def __init__(self, fedec: Register, deex: Register):
        super().__init__(reads=fedec, writes=deex)
        self.fedec = fedec
        self.deex = deex

    def calculate(self, cycle: int) -> None:
        dec_in = self.fedec.read()
        self.deex.write()
        self.log.debug("cycle %d: decode: %s", cycle, bool(dec_in.valid[1]))


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("  FETCH / DECODE PIPELINE")
    print("=" * 60)

    pc = Register(PcPort(), name="pc")
    fedec = Register(FeDePort(), name="fedec")
    deex = Register(DeExPort(), name="deex")

    sim = Simulator(SimulatorConfig(name="patsim"))
    sim.register(Fetch(pc, fedec), Decode(fedec, deex))

    stats = sim.simulate(6)
    print(f"\nRan {stats['cycle']} cycles, final pc = {pc.read().val}")

    output_dir = Path("output/demo_fetch_decode")
    output_dir.mkdir(parents=True, exist_ok=True)

    fig = plot_waveforms(
        sim.trace,
        [(pc, "val"), (fedec, "pc"), (fedec, "valid")],
        title="Fetch/Decode pipeline",
    )
    save_figure(fig, output_dir / "waveforms.png")
    print(f"Saved {output_dir / 'waveforms.png'}")


if __name__ == "__main__":
    main()
