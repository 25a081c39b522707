"""Unit tests for evaluation order computation."""

import pytest

from rtlsim.core import (
    CombinationalLoopError,
    FunctionLogic,
    Register,
    Wire,
    WiringError,
    compute_order,
)
from rtlsim.core.schedule import dependency_matrix, find_loops

from circuits import Count


def unit(name, reads=(), writes=()):
    return FunctionLogic(lambda cycle: None, reads=reads, writes=writes, name=name)


class TestOrder:
    """Tests for topological ordering."""

    def test_empty(self):
        assert compute_order([]) == []

    def test_register_separated_keeps_registration_order(self):
        r1, r2 = Register(Count()), Register(Count())
        a = unit("a", reads=r2, writes=r1)
        b = unit("b", reads=r1, writes=r2)
        c = unit("c", reads=r1)
        assert compute_order([c, a, b]) == [c, a, b]

    def test_wire_driver_first(self):
        w = Wire(Count)
        reader = unit("reader", reads=w)
        driver = unit("driver", writes=w)
        assert compute_order([reader, driver]) == [driver, reader]

    def test_chain(self):
        w1, w2 = Wire(Count), Wire(Count)
        a = unit("a", writes=w1)
        b = unit("b", reads=w1, writes=w2)
        c = unit("c", reads=w2)
        assert compute_order([c, b, a]) == [a, b, c]

    def test_ties_broken_by_position(self):
        w = Wire(Count)
        driver = unit("driver", writes=w)
        x = unit("x", reads=w)
        y = unit("y", reads=w)
        free = unit("free")
        assert compute_order([y, free, x, driver]) == [free, driver, y, x]

    def test_parallel_wires_count_once(self):
        w1, w2 = Wire(Count), Wire(Count)
        a = unit("a", writes=(w1, w2))
        b = unit("b", reads=(w1, w2))
        assert compute_order([b, a]) == [a, b]
        adj = dependency_matrix([b, a])
        assert adj[1, 0] == 1

    def test_undriven_wire_is_not_a_dependency(self):
        w = Wire(Count)
        a = unit("a", reads=w)
        assert compute_order([a]) == [a]


class TestLoops:
    """Tests for combinational loop detection."""

    def test_two_unit_loop(self):
        w1, w2 = Wire(Count, name="w1"), Wire(Count, name="w2")
        a = unit("a", reads=w2, writes=w1)
        b = unit("b", reads=w1, writes=w2)
        with pytest.raises(CombinationalLoopError) as excinfo:
            compute_order([a, b])
        assert set(excinfo.value.members) == {"a", "b"}

    def test_self_loop(self):
        w = Wire(Count)
        a = unit("a", reads=w, writes=w)
        with pytest.raises(CombinationalLoopError):
            compute_order([a])

    def test_loop_found_among_acyclic_units(self):
        w1, w2, w3 = Wire(Count), Wire(Count), Wire(Count)
        head = unit("head", writes=w3)
        a = unit("a", reads=(w2, w3), writes=w1)
        b = unit("b", reads=w1, writes=w2)
        loops = find_loops([head, a, b], dependency_matrix([head, a, b]))
        assert len(loops) == 1
        assert {u.name for u in loops[0]} == {"a", "b"}

    def test_register_feedback_is_not_a_loop(self):
        r = Register(Count())
        a = unit("a", reads=r, writes=r)
        assert compute_order([a]) == [a]


class TestDrivers:
    """Tests for wire driver validation."""

    def test_two_drivers_rejected(self):
        w = Wire(Count, name="bus")
        with pytest.raises(WiringError, match="bus"):
            compute_order([unit("a", writes=w), unit("b", writes=w)])
