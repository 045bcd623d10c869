"""Test configuration and fixtures for CHIP-8 core tests."""

import pytest
import jax.numpy as jnp
from chipcore import create_state, Machine, MachineConfig, SequenceByteSource
from chipcore.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return create_state()


@pytest.fixture
def machine():
    """Provide a machine with a deterministic random source and a quiet logger."""
    return Machine(
        config=MachineConfig(instruction_frequency=120, fps=60),
        source=SequenceByteSource([0xAB, 0x3C]),
        logger=ConsoleLogger("test", log_level="CRITICAL", use_colors=False),
    )


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def assemble(*words):
    """Helper to turn instruction words into a big-endian program image."""
    return b"".join(word.to_bytes(2, "big") for word in words)
