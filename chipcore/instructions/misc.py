"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chipcore.state import EmulatorState
from chipcore.decode import DecodedInstruction
from chipcore.constants import FONT_START, FONT_GLYPH_SIZE, MEMORY_SIZE, NUM_REGISTERS, PROGRAM_START


def _writable(indices: jnp.ndarray) -> jnp.ndarray:
    """Redirect writes aimed at the interpreter area out of range so they are dropped."""
    return jnp.where(indices < PROGRAM_START, MEMORY_SIZE, indices)


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register. No flag."""
    return state.replace(I=state.I + jnp.astype(state.V[instruction.x], jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    The fetch already moved pc past this instruction; with no key down pc is
    moved back so the same instruction runs again on the next step.
    """
    def key_pressed_action(state):
        pressed_key = jnp.argmax(state.keypad)  # lowest pressed index
        return state.replace(V=state.V.at[instruction.x].set(jnp.astype(pressed_key, jnp.uint8)))

    def wait_action(state):
        return state.replace(pc=state.pc - 2)

    return jax.lax.cond(jnp.any(state.keypad), key_pressed_action, wait_action, state)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of the glyph for the low nibble of VX."""
    digit = jnp.astype(state.V[instruction.x], jnp.uint16) & 0xF
    return state.replace(I=jnp.astype(FONT_START + digit * FONT_GLYPH_SIZE, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = jnp.arange(3) + jnp.astype(state.I, jnp.int32)
    new_memory = state.memory.at[_writable(indices)].set(digits, mode="drop")
    return state.replace(memory=new_memory)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    offsets = jnp.arange(NUM_REGISTERS)
    # Registers past X are sent out of range and dropped by the scatter
    indices = jnp.where(offsets <= instruction.x, jnp.astype(state.I, jnp.int32) + offsets, MEMORY_SIZE)
    new_memory = state.memory.at[_writable(indices)].set(state.V, mode="drop")
    return state.replace(memory=new_memory)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    offsets = jnp.arange(NUM_REGISTERS)
    memory_values = state.memory.at[jnp.astype(state.I, jnp.int32) + offsets].get(mode="fill", fill_value=0)
    new_V = jnp.where(offsets <= instruction.x, memory_values, state.V)
    return state.replace(V=new_V)
