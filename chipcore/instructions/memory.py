"""CHIP-8 register load and immediate instructions."""

import jax.numpy as jnp
from chipcore.state import EmulatorState
from chipcore.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XKK - Set VX = KK."""
    return state.replace(V=state.V.at[instruction.x].set(jnp.astype(instruction.kk, jnp.uint8)))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XKK - Add KK to VX. Wraps, VF untouched."""
    result = (jnp.astype(state.V[instruction.x], jnp.int32) + instruction.kk) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8)))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))


def execute_random(state: EmulatorState, instruction: DecodedInstruction, random_byte) -> EmulatorState:
    """CXKK - Set VX = random byte & KK."""
    value = jnp.astype(random_byte, jnp.uint8) & jnp.astype(instruction.kk, jnp.uint8)
    return state.replace(V=state.V.at[instruction.x].set(value))
