"""
Trace: committed register values, cycle by cycle.

Index 0 holds the values before the first cycle; index k holds the
values committed at the end of cycle k.

History is kept per register object, not per name: two registers may
share a name (unnamed registers of one variant all default to
reg_<Variant>). Looking a register up by name only works when the name
is unique within the trace.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np

from rtlsim.core.port import Port

if TYPE_CHECKING:
    from rtlsim.core.register import Register


class Trace:
    """Per-register history of committed port values."""

    def __init__(self):
        self._registers: list["Register"] = []
        self._index: dict[int, int] = {}
        self._history: list[list[Port]] = []

    def record(self, registers: Sequence["Register"]) -> None:
        """Append the current committed value of every register."""
        for reg in registers:
            i = self._index.get(id(reg))
            if i is None:
                i = self._index[id(reg)] = len(self._registers)
                self._registers.append(reg)
                self._history.append([])
            self._history[i].append(reg.read())

    @property
    def names(self) -> list[str]:
        """Register names in recording order (for display; may repeat)."""
        return [reg.name for reg in self._registers]

    @property
    def n_cycles(self) -> int:
        """Number of recorded cycle boundaries (initial snapshot excluded)."""
        if not self._history:
            return 0
        return max(len(h) for h in self._history) - 1

    def values(self, register: "Register | str") -> list[Port]:
        """Committed values of one register, starting with the initial one."""
        return [p.duplicate() for p in self._history[self._lookup(register)]]

    def at(self, k: int) -> list[Port]:
        """Committed values of every register at snapshot k, in recording order."""
        return [h[k].duplicate() for h in self._history]

    def series(self, register: "Register | str", field: str) -> np.ndarray:
        """
        One field of one register over time.

        Returns:
            Array of shape [n_cycles + 1] for scalar fields, or
            [n_cycles + 1, n_slots] for slot fields
        """
        history = self._history[self._lookup(register)]
        return np.array([getattr(p, field) for p in history])

    def equals(self, other: "Trace") -> bool:
        """True if both traces hold the same registers, in order, with the same values."""
        if self.names != other.names:
            return False
        return all(a == b for a, b in zip(self._history, other._history))

    def _lookup(self, register: "Register | str") -> int:
        if not isinstance(register, str):
            return self._index[id(register)]
        matches = [i for i, reg in enumerate(self._registers) if reg.name == register]
        if not matches:
            raise KeyError(register)
        if len(matches) > 1:
            raise KeyError(f"register name {register!r} is ambiguous; pass the register")
        return matches[0]

    def __len__(self) -> int:
        return self.n_cycles
