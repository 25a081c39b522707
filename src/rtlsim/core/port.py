"""
Ports: the signal bundles exchanged at one interconnection point.

A port variant is a dataclass subclass of Port decorated with @port.
The class itself is the variant's tag. Fields are scalars or numpy
arrays; multi-slot fields (e.g. one valid flag per issue slot) are
declared with slots(n).

Example:
    @port
    class FeDePort(Port):
        ia: int = 0
        ib: int = 0
        pc: int = 0
        valid: np.ndarray = slots(2)

The all-zero value of a variant is simply FeDePort().
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

import numpy as np

P = TypeVar("P", bound="Port")


def slots(n: int, dtype=bool):
    """
    Declare a per-slot array field with n entries, zero-initialized.

    Args:
        n: Slot count (any non-negative size)
        dtype: numpy dtype of the slots

    Returns:
        A dataclass field with a fresh zero array per instance
    """
    if n < 0:
        raise ValueError(f"slot count must be non-negative, got {n}")
    return field(default_factory=lambda: np.zeros(n, dtype=dtype))


def port(cls: type[P]) -> type[P]:
    """Class decorator turning a Port subclass into a port variant."""
    if not issubclass(cls, Port):
        raise TypeError(f"{cls.__name__} must subclass Port")
    # keep the array-aware __eq__ and __repr__ of Port
    return dataclass(eq=False, repr=False)(cls)


def _copy_value(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return value.copy()
    return copy.deepcopy(value)


def _values_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    return a == b


@dataclass(eq=False)
class Port:
    """Base class for all port variants."""

    @property
    def tag(self) -> str:
        """Name of the variant."""
        return type(self).__name__

    @classmethod
    def default(cls: type[P]) -> P:
        """The variant's all-zero/false value."""
        return cls()

    def duplicate(self: P) -> P:
        """
        Return an independent copy.

        Arrays are copied with ndarray.copy(), every other field with
        copy.deepcopy (nested ports, bytearrays, containers), so mutating
        the copy never changes the source and vice versa.
        """
        new = copy.copy(self)
        for f in fields(self):
            setattr(new, f.name, _copy_value(getattr(self, f.name)))
        return new

    def as_dict(self) -> dict[str, Any]:
        """Plain snapshot of the field values (arrays become lists)."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.tolist() if isinstance(value, np.ndarray) else value
        return out

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            _values_equal(getattr(self, f.name), getattr(other, f.name))
            for f in fields(self)
        )

    __hash__ = None

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"{self.tag}({body})"
