"""CHIP-8 memory image: font preload, program load and byte access."""

from typing import TYPE_CHECKING

import jax.numpy as jnp

from chipcore.constants import FONT_START, FONT_DATA, PROGRAM_START, MAX_PROGRAM_SIZE
from chipcore.errors import ProgramTooLarge

if TYPE_CHECKING:
    from chipcore.state import EmulatorState


def load_font(memory: jnp.ndarray) -> jnp.ndarray:
    """Copy the 80-byte hexadecimal font into the reserved area at 0x050."""
    return memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)


def load_program(state: "EmulatorState", program: bytes) -> "EmulatorState":
    """Copy a program image into memory starting at 0x200.

    Raises:
        ProgramTooLarge: if the image does not fit below 0x1000. Nothing is
            copied in that case.
    """
    program = bytes(program)
    if len(program) > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(len(program), MAX_PROGRAM_SIZE)

    program_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(program_array)
    return state.replace(memory=new_memory)


def read8(state: "EmulatorState", address: int) -> int:
    """Read one byte. The address is not range-checked."""
    return int(state.memory[address])


def write8(state: "EmulatorState", address: int, value: int) -> "EmulatorState":
    """Write one byte. The address is not range-checked."""
    return state.replace(memory=state.memory.at[address].set(value & 0xFF))
