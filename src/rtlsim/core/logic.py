"""
Logic: combinational units evaluated once per cycle.

A logic unit reads committed values from the registers it declares in
`reads` and writes staged values to the registers in `writes`. It may
also exchange same-cycle values through wires. It keeps no simulation
state between cycles; anything it wants to remember must go through a
register.

Two ways to define one:
- subclass Logic and implement calculate(cycle)
- wrap a plain function with FunctionLogic or the @combinational decorator
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Union

from rtlsim.core.register import Register
from rtlsim.core.wire import Wire

Connection = Union[Register, Wire]


def _as_tuple(items: Iterable[Connection] | Connection) -> tuple[Connection, ...]:
    if isinstance(items, (Register, Wire)):
        items = (items,)
    out = tuple(items)
    for item in out:
        if not isinstance(item, (Register, Wire)):
            raise TypeError(f"logic can only connect to registers and wires, got {item!r}")
    return out


class Logic(ABC):
    """
    Base class for combinational units.

    Subclasses call super().__init__ with the components they read and
    write, then implement calculate(). Diagnostic lines go through
    self.log, which is a regular logging.Logger.
    """

    def __init__(
        self,
        reads: Iterable[Connection] | Connection = (),
        writes: Iterable[Connection] | Connection = (),
        name: str | None = None,
    ):
        self.reads = _as_tuple(reads)
        self.writes = _as_tuple(writes)
        self.name = name or type(self).__name__
        self.log = logging.getLogger(f"rtlsim.logic.{self.name}")

    @abstractmethod
    def calculate(self, cycle: int) -> None:
        """
        Evaluate one cycle.

        Args:
            cycle: Zero-based index of the cycle being evaluated
                   (for diagnostics only)
        """
        ...

    @property
    def wires_in(self) -> tuple[Wire, ...]:
        return tuple(c for c in self.reads if isinstance(c, Wire))

    @property
    def wires_out(self) -> tuple[Wire, ...]:
        return tuple(c for c in self.writes if isinstance(c, Wire))

    def depends_on(self, other: "Logic") -> bool:
        """True if other drives a wire this unit reads."""
        driven = other.wires_out
        return any(w in driven for w in self.wires_in)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class FunctionLogic(Logic):
    """Logic unit backed by a plain function fn(cycle)."""

    def __init__(
        self,
        fn: Callable[[int], None],
        reads: Iterable[Connection] | Connection = (),
        writes: Iterable[Connection] | Connection = (),
        name: str | None = None,
    ):
        super().__init__(reads, writes, name or getattr(fn, "__name__", None))
        self.fn = fn

    def calculate(self, cycle: int) -> None:
        self.fn(cycle)


def combinational(
    reads: Iterable[Connection] | Connection = (),
    writes: Iterable[Connection] | Connection = (),
    name: str | None = None,
) -> Callable[[Callable[[int], None]], FunctionLogic]:
    """
    Decorator form of FunctionLogic.

        @combinational(reads=pc, writes=pc)
        def increment(cycle):
            pc.write().val = pc.read().val + 1
    """

    def wrap(fn: Callable[[int], None]) -> FunctionLogic:
        return FunctionLogic(fn, reads=reads, writes=writes, name=name)

    return wrap
