"""CHIP-8 register-to-register ALU operations (8XYN)."""

import jax.numpy as jnp
from chipcore.state import EmulatorState
from chipcore.decode import DecodedInstruction
from chipcore.constants import FLAG_REGISTER


def _store(state: EmulatorState, instruction: DecodedInstruction, result) -> EmulatorState:
    return state.replace(V=state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8)))


def _store_with_flag(state: EmulatorState, instruction: DecodedInstruction, result, flag) -> EmulatorState:
    # VF is written last so the flag wins when X is F
    new_V = state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8))
    new_V = new_V.at[FLAG_REGISTER].set(jnp.astype(flag, jnp.uint8))
    return state.replace(V=new_V)


def execute_alu_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY0 - Set: VX = VY."""
    return _store(state, instruction, state.V[instruction.y])


def execute_alu_or(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY1 - Binary OR: VX |= VY."""
    return _store(state, instruction, state.V[instruction.x] | state.V[instruction.y])


def execute_alu_and(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY2 - Binary AND: VX &= VY."""
    return _store(state, instruction, state.V[instruction.x] & state.V[instruction.y])


def execute_alu_xor(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY3 - Logical XOR: VX ^= VY."""
    return _store(state, instruction, state.V[instruction.x] ^ state.V[instruction.y])


def execute_alu_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY4 - Add: VX += VY, VF = carry."""
    total = jnp.astype(state.V[instruction.x], jnp.int32) + jnp.astype(state.V[instruction.y], jnp.int32)
    return _store_with_flag(state, instruction, total & 0xFF, total > 255)


def execute_alu_sub(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY5 - Subtract: VX -= VY, VF = 1 if VX > VY beforehand."""
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]
    return _store_with_flag(state, instruction, vx - vy, vx > vy)


def execute_alu_shift_right(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY6 - Shift right: VX >>= 1, VF = shifted-out bit."""
    vx = state.V[instruction.x]
    return _store_with_flag(state, instruction, vx >> 1, vx & 1)


def execute_alu_subn(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 if VY > VX beforehand."""
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]
    return _store_with_flag(state, instruction, vy - vx, vy > vx)


def execute_alu_shift_left(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYE - Shift left: VX <<= 1, VF = shifted-out bit."""
    vx = state.V[instruction.x]
    return _store_with_flag(state, instruction, (vx << 1) & 0xFF, (vx & 0x80) >> 7)
