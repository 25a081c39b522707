"""
Core engine primitives.

This layer knows NOTHING about any particular pipeline or instruction set.
It only knows:
- Ports: bundles of signals, copied by value
- Registers: committed vs staged port values, swapped at the cycle boundary
- Wires: same-cycle channels between logic units
- Logic: units evaluated once per cycle
- The Simulator: evaluate all logic, then commit all registers
"""

from rtlsim.core.errors import (
    RtlSimError,
    RegistrationError,
    RegistrationOrderError,
    CombinationalLoopError,
    ReentrancyError,
    WiringError,
    SimulationHaltedError,
    LogicError,
)
from rtlsim.core.port import Port, port, slots
from rtlsim.core.register import Register
from rtlsim.core.wire import Wire
from rtlsim.core.logic import Logic, FunctionLogic, combinational
from rtlsim.core.schedule import compute_order
from rtlsim.core.trace import Trace
from rtlsim.core.simulator import Simulator, SimulatorConfig, SimulatorState, Phase

__all__ = [
    "RtlSimError",
    "RegistrationError",
    "RegistrationOrderError",
    "CombinationalLoopError",
    "ReentrancyError",
    "WiringError",
    "SimulationHaltedError",
    "LogicError",
    "Port",
    "port",
    "slots",
    "Register",
    "Wire",
    "Logic",
    "FunctionLogic",
    "combinational",
    "compute_order",
    "Trace",
    "Simulator",
    "SimulatorConfig",
    "SimulatorState",
    "Phase",
]
