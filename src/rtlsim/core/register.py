"""
Register: a clocked storage element.

A register holds two values of one port variant:
- committed: what every reader sees during the current cycle
- staged: what the writer is assembling for the next cycle

Only the cycle boundary moves staged into committed. Readers can never
observe a write made in the same cycle.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Generic, TypeVar

from rtlsim.core.port import Port

if TYPE_CHECKING:
    from rtlsim.core.simulator import Simulator

P = TypeVar("P", bound=Port)


class Register(Generic[P]):
    """
    Clocked register parameterized by a port variant.

    Standalone registers (not registered with a Simulator) can be driven
    by hand, which is convenient in tests. Once a Simulator owns the
    register, it enforces the phase rules on write() and commit().
    """

    def __init__(self, initial: P, name: str | None = None):
        if not isinstance(initial, Port):
            raise TypeError(f"register needs a Port value, got {type(initial).__name__}")
        self.variant: type[P] = type(initial)
        self.name = name or f"reg_{self.variant.__name__}"
        self._committed: P = initial.duplicate()
        self._staged: P = self.variant.default()
        self._owner: "Simulator | None" = None

    def read(self) -> P:
        """
        Committed value (a duplicate; mutating it has no effect).

        During the evaluate phase only units that declared this register
        in their reads may call it.
        """
        if self._owner is not None:
            self._owner._check_read(self)
        return self._committed.duplicate()

    def write(self) -> P:
        """Staged value for the next cycle, mutable in place."""
        if self._owner is not None:
            self._owner._check_write(self)
        return self._staged

    def commit(self) -> None:
        """
        Cycle boundary: staged becomes committed, staged goes back to default.

        Called by the Simulator once per cycle. Once the register belongs
        to a Simulator, any call outside its commit phase raises
        ReentrancyError.
        """
        if self._owner is not None:
            self._owner._check_commit(self)
        self._committed = self._staged.duplicate()
        self._staged = self.variant.default()

    def reset_staged(self) -> None:
        """Discard anything staged this cycle."""
        self._staged = self.variant.default()

    @property
    def staged(self) -> P:
        """Duplicate of the staged value, for inspection only."""
        return self._staged.duplicate()

    def __repr__(self) -> str:
        return f"Register({self.name!r}, committed={self._committed!r})"
