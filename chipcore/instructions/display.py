"""CHIP-8 display operations."""

import jax.numpy as jnp
from chipcore.state import EmulatorState
from chipcore.decode import DecodedInstruction
from chipcore.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw an N-row sprite from memory[I] at (VX, VY).

    Columns wrap around the right edge, rows past the bottom edge are
    dropped. VF is set when any lit pixel is turned off.
    """
    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % SCREEN_WIDTH
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % SCREEN_HEIGHT

    col_offset = (xx - sprite_x) % SCREEN_WIDTH
    row_offset = yy - sprite_y
    in_sprite = (col_offset < 8) & (row_offset >= 0) & (row_offset < instruction.n)

    sprite_rows = state.memory.at[jnp.astype(state.I, jnp.int32) + row_offset].get(mode="fill", fill_value=0)
    bit_shift = jnp.clip(7 - col_offset, 0, 7)
    sprite = jnp.astype((sprite_rows >> bit_shift) & 1, jnp.uint8) & in_sprite

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )
