"""Unit tests for Register."""

import pytest

from rtlsim.core import Register

from circuits import Bundle, Count


class TestStandaloneRegister:
    """Register behavior without a simulator."""

    def test_initial_value_committed(self):
        reg = Register(Count(val=4))
        assert reg.read().val == 4

    def test_initial_value_is_copied(self):
        init = Bundle()
        reg = Register(init)
        init.valid[0] = True
        assert not reg.read().valid[0]

    def test_staged_starts_at_default(self):
        reg = Register(Count(val=4))
        assert reg.staged == Count.default()

    def test_write_invisible_until_commit(self):
        reg = Register(Count())
        reg.write().val = 3
        assert reg.read().val == 0
        reg.commit()
        assert reg.read().val == 3

    def test_commit_resets_staged(self):
        reg = Register(Bundle())
        staged = reg.write()
        staged.ia = 10
        staged.valid[1] = True
        reg.commit()
        assert reg.staged == Bundle.default()
        assert reg.read().valid[1]

    def test_commit_does_not_alias_staged(self):
        reg = Register(Bundle())
        staged = reg.write()
        staged.valid[0] = True
        reg.commit()
        # the old staged handle is stale; touching it must not leak
        staged.valid[1] = True
        assert not reg.read().valid[1]

    def test_read_returns_copy(self):
        reg = Register(Bundle())
        reg.read().valid[0] = True
        assert not reg.read().valid[0]

    def test_unwritten_register_commits_default(self):
        reg = Register(Count(val=8))
        reg.commit()
        assert reg.read().val == 0

    def test_variant(self):
        assert Register(Bundle()).variant is Bundle

    def test_requires_port(self):
        with pytest.raises(TypeError):
            Register(5)

    def test_default_name(self):
        assert Register(Count()).name == "reg_Count"
