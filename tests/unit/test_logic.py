"""Unit tests for Logic units."""

import pytest

from rtlsim.core import FunctionLogic, Register, Wire, combinational

from circuits import Count, Incrementer


class TestLogic:
    """Tests for Logic declarations."""

    def test_single_component_accepted(self, counter):
        reg, inc = counter
        assert inc.reads == (reg,)
        assert inc.writes == (reg,)

    def test_default_name(self, counter):
        _, inc = counter
        assert inc.name == "Incrementer"

    def test_logger_name(self):
        inc = Incrementer(Register(Count()), name="stage1")
        assert inc.log.name == "rtlsim.logic.stage1"

    def test_rejects_non_components(self):
        with pytest.raises(TypeError):
            FunctionLogic(lambda cycle: None, reads=[42])

    def test_wire_split(self):
        reg = Register(Count())
        w_in, w_out = Wire(Count), Wire(Count)
        unit = FunctionLogic(lambda cycle: None, reads=(reg, w_in), writes=w_out)
        assert unit.wires_in == (w_in,)
        assert unit.wires_out == (w_out,)

    def test_depends_on(self):
        w = Wire(Count)
        a = FunctionLogic(lambda cycle: None, writes=w, name="a")
        b = FunctionLogic(lambda cycle: None, reads=w, name="b")
        assert b.depends_on(a)
        assert not a.depends_on(b)

    def test_registers_never_create_dependencies(self):
        reg = Register(Count())
        a = FunctionLogic(lambda cycle: None, writes=reg, name="a")
        b = FunctionLogic(lambda cycle: None, reads=reg, name="b")
        assert not b.depends_on(a)


class TestFunctionLogic:
    """Tests for closure-style logic."""

    def test_calls_function_with_cycle(self):
        seen = []
        unit = FunctionLogic(seen.append)
        unit.calculate(3)
        assert seen == [3]

    def test_decorator(self):
        reg = Register(Count())

        @combinational(reads=reg, writes=reg)
        def bump(cycle):
            pass

        assert isinstance(bump, FunctionLogic)
        assert bump.name == "bump"
        assert bump.reads == (reg,)
