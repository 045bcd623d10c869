"""Tests for ALU operations (8xxx)."""

import pytest
from chipcore import execute


def with_registers(state, **registers):
    """Set registers given as v0=..., vf=..."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = with_registers(fresh_state, v1=0x42, v2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = with_registers(fresh_state, v1=0xF0, v2=0x0F)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = with_registers(fresh_state, v1=0xF0, v2=0xF1)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = with_registers(fresh_state, v1=0xFF, v2=0xF0)

        state = execute(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0x0F

    @pytest.mark.parametrize("instruction", [0x8120, 0x8121, 0x8122, 0x8123])
    def test_logic_operations_leave_vf_alone(self, fresh_state, instruction):
        """8XY0-8XY3 never write the flag register."""
        state = with_registers(fresh_state, v1=0x0F, v2=0xF0, vf=0x5A)

        state = execute(state, instruction)

        assert state.V[15] == 0x5A


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    @pytest.mark.parametrize("vx, vy", [
        (0x00, 0x00), (0x10, 0x20), (0x7F, 0x80), (0xFF, 0x00),
        (0xFF, 0x01), (0x80, 0x80), (0xC8, 0x64), (0xFF, 0xFF),
    ])
    def test_add_carry_flag(self, fresh_state, vx, vy):
        """8XY4 - VF = 1 iff VX + VY > 255, VX = sum mod 256."""
        state = with_registers(fresh_state, v1=vx, v2=vy)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == (vx + vy) % 256
        assert state.V[15] == int(vx + vy > 255)

    @pytest.mark.parametrize("vx, vy", [
        (0x30, 0x10), (0x10, 0x30), (0x42, 0x42), (0x00, 0xFF),
        (0xFF, 0x00), (0x01, 0x00), (0x00, 0x01),
    ])
    def test_sub_borrow_flag(self, fresh_state, vx, vy):
        """8XY5 - VF = 1 iff VX > VY, VX = (VX - VY) mod 256."""
        state = with_registers(fresh_state, v3=vx, v4=vy)

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == (vx - vy) % 256
        assert state.V[15] == int(vx > vy)

    def test_sub_equal_values_clears_flag(self, fresh_state):
        """8XY5 - Equal operands give zero and VF = 0."""
        state = with_registers(fresh_state, v1=0x42, v2=0x42, vf=1)

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 0

    @pytest.mark.parametrize("vx, vy", [(0x10, 0x30), (0x30, 0x10), (0x55, 0x55)])
    def test_subn_borrow_flag(self, fresh_state, vx, vy):
        """8XY7 - VF = 1 iff VY > VX, VX = (VY - VX) mod 256."""
        state = with_registers(fresh_state, v1=vx, v2=vy)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == (vy - vx) % 256
        assert state.V[15] == int(vy > vx)


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - 0b11 shifts to 1 with VF = 1."""
        state = with_registers(fresh_state, v3=0x03, v4=0xFF)

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x01
        assert state.V[15] == 1

    def test_shift_right_even(self, fresh_state):
        """8XY6 - 0b10 shifts to 1 with VF = 0."""
        state = with_registers(fresh_state, v3=0x02, vf=1)

        state = execute(state, 0x8346)

        assert state.V[3] == 0x01
        assert state.V[15] == 0

    def test_shift_right_ignores_vy(self, fresh_state):
        """8XY6 - VY plays no part in the shift."""
        state = with_registers(fresh_state, v1=0x08, v2=0x03)

        state = execute(state, 0x8126)

        assert state.V[1] == 0x04
        assert state.V[2] == 0x03

    def test_shift_left_overflow(self, fresh_state):
        """8XYE - Shift left with MSB set."""
        state = with_registers(fresh_state, v3=0x81)  # 10000001

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02  # 129 << 1 = 258 → 2
        assert state.V[15] == 1

    def test_shift_left_no_overflow(self, fresh_state):
        """8XYE - Shift left with MSB clear."""
        state = with_registers(fresh_state, v3=0x41, vf=1)

        state = execute(state, 0x834E)

        assert state.V[3] == 0x82
        assert state.V[15] == 0


class TestALUEdgeCases:
    """Test edge cases involving the flag register."""

    def test_alu_self_operations(self, fresh_state):
        """Operations where VX and VY are the same register."""
        state = with_registers(fresh_state, v5=0xAA)

        state = execute(state, 0x8553)  # V5 ^= V5
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = with_registers(state, v5=0x80)
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_as_source(self, fresh_state):
        """VF read as an operand, then overwritten by the flag."""
        state = with_registers(fresh_state, vf=0x42, v1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF

        assert state.V[1] == 0x52
        assert state.V[15] == 0

    def test_vf_as_destination_keeps_flag(self, fresh_state):
        """When X is F the flag overwrites the result."""
        state = with_registers(fresh_state, vf=0xFF, v1=0x01)

        state = execute(state, 0x8F14)  # VF += V1 → 0x00 with carry

        assert state.V[15] == 1
