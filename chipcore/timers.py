"""CHIP-8 delay and sound timers, decremented at 60 Hz by the driving loop."""

import jax
import jax.numpy as jnp
from chipcore.state import EmulatorState

TIMER_FREQUENCY = 60


def _count_down(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer)


@jax.jit
def tick(state: EmulatorState) -> EmulatorState:
    """Decrement both timers by one, stopping at zero."""
    return state.replace(
        delay_timer=_count_down(state.delay_timer),
        sound_timer=_count_down(state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether a tone should currently be playing."""
    return bool(state.sound_timer > 0)
