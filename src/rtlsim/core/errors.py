"""
Exception hierarchy for the simulation engine.

Structural errors (registration order, combinational loops, reentrancy,
wiring) are detected by the engine and halt the run. LogicError wraps a
domain error raised from inside a Logic unit's calculate().
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from rtlsim.core.logic import Logic


class RtlSimError(Exception):
    """Base class for all engine errors."""


class RegistrationError(RtlSimError):
    """A component cannot be added to this simulator."""


class RegistrationOrderError(RegistrationError):
    """A component was registered after the first cycle ran."""


class CombinationalLoopError(RtlSimError):
    """Logic units feed each other through wires without a register."""

    def __init__(self, members: Sequence[str]):
        self.members = tuple(members)
        super().__init__(
            "combinational loop between logic units: " + " -> ".join(self.members)
        )


class ReentrancyError(RtlSimError):
    """A register or wire was touched in the wrong phase of a cycle."""


class WiringError(RtlSimError):
    """A logic unit accessed a component it did not declare."""


class SimulationHaltedError(RtlSimError):
    """The run was halted by an earlier structural error."""


class LogicError(RtlSimError):
    """A logic unit failed while evaluating a cycle."""

    def __init__(self, cycle: int, logic: "Logic", cause: BaseException):
        self.cycle = cycle
        self.logic = logic
        super().__init__(f"cycle {cycle}: {logic.name} failed: {cause!r}")
