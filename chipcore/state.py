"""CHIP-8 machine state structures."""

import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode

from chipcore.constants import (
    MEMORY_SIZE, PROGRAM_START, SCREEN_WIDTH, SCREEN_HEIGHT,
    STACK_SIZE, NUM_REGISTERS, NUM_KEYS,
)
from chipcore.memory import load_font


@dataclass(frozen=True)
class StackState:
    """Return-address stack for subroutine calls."""
    data: jnp.ndarray
    pointer: jnp.ndarray


class EmulatorState(PyTreeNode):
    """Everything an instruction can read or write.

    The display is indexed ``display[x, y]`` and holds one byte per pixel
    (0 or 1). ``pc`` and ``I`` are 16 bits wide so no address above 0xFF is
    ever truncated.
    """
    memory: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray
    pc: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    display: jnp.ndarray


def create_stack() -> StackState:
    """Create an empty stack."""
    return StackState(
        data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16),
        pointer=jnp.zeros((), dtype=jnp.uint8),
    )


def create_state() -> EmulatorState:
    """Create initial machine state with font data loaded and pc at 0x200."""
    return EmulatorState(
        memory=load_font(jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        stack=create_stack(),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        display=jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.uint8),
    )
