"""
Wire: a same-cycle, unregistered channel between logic units.

A wire lets one logic unit hand a value to another within the same
evaluate phase. The driver must then be evaluated before its readers,
which is what gives the scheduler a dependency graph to sort. Wires are
reset to the variant default at the start of every cycle and are never
committed.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Generic, TypeVar

from rtlsim.core.port import Port

if TYPE_CHECKING:
    from rtlsim.core.simulator import Simulator

P = TypeVar("P", bound=Port)


class Wire(Generic[P]):
    """Combinational channel carrying one port variant."""

    def __init__(self, variant: type[P], name: str | None = None):
        if not (isinstance(variant, type) and issubclass(variant, Port)):
            raise TypeError("wire needs a Port subclass")
        self.variant = variant
        self.name = name or f"wire_{variant.__name__}"
        self._value: P = variant.default()
        self._owner: "Simulator | None" = None

    def drive(self) -> P:
        """Mutable handle for the driving logic unit."""
        if self._owner is not None:
            self._owner._check_write(self)
        return self._value

    def sample(self) -> P:
        """Current value as driven so far this cycle (a duplicate)."""
        if self._owner is not None:
            self._owner._check_sample(self)
        return self._value.duplicate()

    def reset(self) -> None:
        """Back to the variant default."""
        self._value = self.variant.default()

    def __repr__(self) -> str:
        return f"Wire({self.name!r}, {self.variant.__name__})"
