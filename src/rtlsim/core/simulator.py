"""
Simulator: the cycle-driven scheduler.

Each cycle has two phases:
1. Evaluate: every logic unit runs once, in a fixed order, reading
   committed register values and writing staged ones.
2. Commit: every register moves staged -> committed.

Because all writes of a cycle land in staged values, no unit can see
another unit's output before the cycle boundary, and the result does not
depend on evaluation order. The only exception is wires, which the order
accounts for.

A Simulator is an explicit run object. Create one per run; several can
coexist in one process.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import Union

from rtlsim.core.errors import (
    LogicError,
    RegistrationError,
    RegistrationOrderError,
    ReentrancyError,
    RtlSimError,
    SimulationHaltedError,
    WiringError,
)
from rtlsim.core.logic import Logic
from rtlsim.core.register import Register
from rtlsim.core.schedule import compute_order
from rtlsim.core.trace import Trace
from rtlsim.core.wire import Wire

logger = logging.getLogger(__name__)

Component = Union[Register, Wire, Logic]


class SimulatorState(enum.Enum):
    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"
    DONE = "done"
    HALTED = "halted"


class Phase(enum.Enum):
    """Where the simulator is within a cycle."""

    IDLE = "idle"
    EVALUATE = "evaluate"
    COMMIT = "commit"


@dataclass
class SimulatorConfig:
    """Configuration for a simulation run."""

    name: str = "sim"
    record_trace: bool = True              # Keep committed values of every cycle
    max_cycles: int | None = None          # Upper bound on cycles for the whole run
    reset_staged_each_cycle: bool = True   # Explicit stage-reset before evaluate


@dataclass
class Simulator:
    """
    Two-phase synchronous scheduler.

    Usage:
        sim = Simulator()
        sim.register(fetch, decode)   # registers they use come along
        sim.simulate(6)
    """

    config: SimulatorConfig = field(default_factory=SimulatorConfig)

    state: SimulatorState = field(default=SimulatorState.IDLE, init=False)
    phase: Phase = field(default=Phase.IDLE, init=False)
    cycle: int = field(default=0, init=False)
    trace: Trace | None = field(default=None, init=False)

    _registers: list[Register] = field(default_factory=list, init=False, repr=False)
    _wires: list[Wire] = field(default_factory=list, init=False, repr=False)
    _logic: list[Logic] = field(default_factory=list, init=False, repr=False)
    _order: list[Logic] | None = field(default=None, init=False, repr=False)
    _active: Logic | None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if self.config.record_trace:
            self.trace = Trace()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, *components: Component) -> "Simulator":
        """
        Add registers, wires and logic units to this run.

        Logic units bring along the registers and wires they declare.
        Registering a component twice is a no-op.

        Raises:
            RegistrationOrderError: if a cycle has already run
            RegistrationError: if a register or wire belongs to another simulator
        """
        self._ensure_not_halted()
        if self.cycle > 0 or self.state is SimulatorState.RUNNING:
            raise RegistrationOrderError(
                f"{self.config.name}: cannot register after simulation started"
            )
        for comp in components:
            if isinstance(comp, Logic):
                self._add_logic(comp)
            elif isinstance(comp, (Register, Wire)):
                self._adopt(comp)
            else:
                raise TypeError(f"cannot register {comp!r}")

        # The graph changed: the order must be recomputed
        self._order = None
        self.state = SimulatorState.IDLE
        return self

    def _add_logic(self, unit: Logic) -> None:
        if any(u is unit for u in self._logic):
            return
        for comp in unit.reads + unit.writes:
            self._adopt(comp)
        self._logic.append(unit)

    def _adopt(self, comp: Register | Wire) -> None:
        if comp._owner is self:
            return
        if comp._owner is not None:
            raise RegistrationError(f"{comp.name} already belongs to another simulator")
        comp._owner = self
        if isinstance(comp, Register):
            self._registers.append(comp)
        else:
            self._wires.append(comp)

    @property
    def registers(self) -> tuple[Register, ...]:
        return tuple(self._registers)

    @property
    def wires(self) -> tuple[Wire, ...]:
        return tuple(self._wires)

    @property
    def logic_units(self) -> tuple[Logic, ...]:
        return tuple(self._logic)

    @property
    def evaluation_order(self) -> tuple[Logic, ...]:
        """Order in which logic units are evaluated each cycle."""
        self.prepare()
        return tuple(self._order)

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------

    def prepare(self) -> None:
        """
        Compute and validate the evaluation order.

        A combinational loop or a multiply-driven wire halts the run.
        """
        self._ensure_not_halted()
        if self._order is not None:
            return
        try:
            self._order = compute_order(self._logic)
        except RtlSimError:
            self.state = SimulatorState.HALTED
            raise
        if self.cycle == 0:
            self.state = SimulatorState.READY
            if self.trace is not None:
                self.trace = Trace()
                self.trace.record(self._registers)
        logger.debug(
            "%s: ready with %d registers, %d wires, %d logic units",
            self.config.name, len(self._registers), len(self._wires), len(self._logic),
        )

    def simulate(self, n_cycles: int) -> dict:
        """
        Run n_cycles cycles.

        simulate(0) only validates the evaluation order. Repeated calls
        continue the same run: simulate(n) then simulate(m) is the same
        as simulate(n + m).

        Args:
            n_cycles: Number of cycles to run (>= 0)

        Returns:
            Statistics dictionary

        Raises:
            ValueError: if n_cycles is negative or exceeds max_cycles
            CombinationalLoopError: if logic units form a loop
            LogicError: if a logic unit raised; that cycle is not committed
            SimulationHaltedError: if an earlier structural error halted the run
        """
        if n_cycles < 0:
            raise ValueError(f"cycle count must be non-negative, got {n_cycles}")
        max_cycles = self.config.max_cycles
        if max_cycles is not None and self.cycle + n_cycles > max_cycles:
            raise ValueError(
                f"{self.config.name}: {self.cycle} + {n_cycles} cycles exceeds "
                f"max_cycles={max_cycles}"
            )

        self.prepare()
        logger.info("%s: simulating %d cycles from cycle %d",
                    self.config.name, n_cycles, self.cycle)

        for _ in range(n_cycles):
            self.state = SimulatorState.RUNNING
            self._step()

        if self.cycle > 0:
            self.state = SimulatorState.DONE

        return {
            "n_cycles": n_cycles,
            "cycle": self.cycle,
            "state": self.state.value,
            "n_registers": len(self._registers),
            "n_logic": len(self._logic),
        }

    def _step(self) -> None:
        """One evaluate-then-commit cycle."""
        cycle = self.cycle

        if self.config.reset_staged_each_cycle:
            for reg in self._registers:
                reg.reset_staged()
        for w in self._wires:
            w.reset()

        self.phase = Phase.EVALUATE
        try:
            for unit in self._order:
                self._active = unit
                unit.calculate(cycle)
        except RtlSimError:
            self._abort_cycle()
            self.state = SimulatorState.HALTED
            raise
        except Exception as exc:
            self._abort_cycle()
            self.state = SimulatorState.READY if cycle == 0 else SimulatorState.DONE
            logger.warning("%s: cycle %d aborted by %s", self.config.name, cycle, unit.name)
            raise LogicError(cycle, unit, exc) from exc
        finally:
            self._active = None

        self.phase = Phase.COMMIT
        for reg in self._registers:
            reg.commit()
        self.phase = Phase.IDLE

        self.cycle += 1
        if self.trace is not None:
            self.trace.record(self._registers)

    def _abort_cycle(self) -> None:
        self.phase = Phase.IDLE
        for reg in self._registers:
            reg.reset_staged()
        for w in self._wires:
            w.reset()

    def _ensure_not_halted(self) -> None:
        if self.state is SimulatorState.HALTED:
            raise SimulationHaltedError(f"{self.config.name}: run was halted")

    # ------------------------------------------------------------------
    # Phase guards, called by registers and wires
    # ------------------------------------------------------------------

    def _check_write(self, comp: Register | Wire) -> None:
        if self.phase is not Phase.EVALUATE:
            raise ReentrancyError(f"{comp.name} written outside the evaluate phase")
        if self._active is not None and not any(c is comp for c in self._active.writes):
            raise WiringError(f"{self._active.name} writes undeclared {comp.name}")

    def _check_sample(self, wire: Wire) -> None:
        if self.phase is not Phase.EVALUATE:
            raise ReentrancyError(f"{wire.name} sampled outside the evaluate phase")
        if self._active is not None and not any(c is wire for c in self._active.reads):
            raise WiringError(f"{self._active.name} reads undeclared {wire.name}")

    def _check_read(self, reg: Register) -> None:
        # Reads from the assembling code between cycles are always fine
        if self.phase is Phase.EVALUATE and self._active is not None:
            if not any(c is reg for c in self._active.reads):
                raise WiringError(f"{self._active.name} reads undeclared {reg.name}")

    def _check_commit(self, reg: Register) -> None:
        if self.phase is not Phase.COMMIT:
            raise ReentrancyError(
                f"{reg.name} committed outside the commit phase ({self.phase.value})"
            )
