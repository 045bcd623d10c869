"""Mutable facade over the functional CHIP-8 core.

``Machine`` owns the current ``EmulatorState`` for a driving loop and exposes
the collaborator-facing surface: program load, keypad input, framebuffer and
sound-timer views, and the ``step``/``tick`` entry points.
"""

from typing import Optional

import jax.numpy as jnp
import numpy as np
from flax.struct import dataclass, field
from tqdm import tqdm

from chipcore.constants import NUM_KEYS
from chipcore.decode import disassemble
from chipcore.emulator import step
from chipcore.errors import Chip8Error
from chipcore.logging import ConsoleLogger
from chipcore.memory import load_program
from chipcore.rng import PRNGByteSource, RandomByteSource
from chipcore.state import EmulatorState, create_state
from chipcore.timers import TIMER_FREQUENCY, tick, sound_active


@dataclass
class MachineConfig:
    """Machine parameters.

    Attributes:
        instruction_frequency: CHIP-8 CPU frequency in Hz (typically 700)
        fps: Frames per second; timers tick once per frame
        seed: Seed for the default random source, clock-derived when None
        log_level: Minimum level printed by the machine logger
    """
    instruction_frequency: int = field(pytree_node=False, default=700)
    fps: int = field(pytree_node=False, default=TIMER_FREQUENCY)
    seed: Optional[int] = field(pytree_node=False, default=None)
    log_level: str = field(pytree_node=False, default="WARNING")

    @property
    def instructions_per_frame(self) -> int:
        """Number of instructions executed between two timer ticks."""
        return max(1, self.instruction_frequency // self.fps)


class Machine:
    """A CHIP-8 machine driven one step or one frame at a time.

    Args:
        config: Machine parameters, defaults used when None
        source: Random byte source for RND, a ``PRNGByteSource`` seeded from
            ``config.seed`` when None
        logger: Logger for loads and faults, built from ``config.log_level``
            when None
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        source: Optional[RandomByteSource] = None,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.config = config if config is not None else MachineConfig()
        self.source = source if source is not None else PRNGByteSource(self.config.seed)
        self.logger = logger or ConsoleLogger("chipcore", log_level=self.config.log_level)
        self.state: EmulatorState = create_state()
        self._program = b""

    def load_program(self, program: bytes):
        """Reset the machine and copy ``program`` to 0x200.

        Raises:
            ProgramTooLarge: if the program does not fit. The machine is left
                untouched.
        """
        program = bytes(program)
        try:
            state = load_program(create_state(), program)
        except Chip8Error as e:
            self.logger.error(str(e))
            raise
        self.state = state
        self._program = program
        self.logger.info(f"Loaded program ({len(program)} bytes)")

    def reset(self):
        """Restart the last loaded program from a clean state."""
        self.state = load_program(create_state(), self._program)
        self.logger.info("Machine reset")

    def step(self):
        """Run one fetch-decode-execute cycle."""
        if self.logger.is_enabled("DEBUG"):
            word = (int(self.state.memory[self.pc]) << 8) | int(self.state.memory[self.pc + 1])
            self.logger.debug(f"{self.pc:03X}: {disassemble(word)}")
        try:
            self.state = step(self.state, self.source)
        except Chip8Error as e:
            self.logger.error(str(e))
            raise

    def tick(self):
        """Count both timers down once (call at 60 Hz)."""
        self.state = tick(self.state)

    def run_frame(self):
        """Execute one frame worth of instructions, then tick the timers."""
        for _ in range(self.config.instructions_per_frame):
            self.step()
        self.tick()

    def run(self, frames: int, progress: bool = False):
        """Run ``frames`` consecutive frames, optionally with a progress bar."""
        for _ in tqdm(range(frames), desc="Running", unit="frame", disable=not progress):
            self.run_frame()

    def set_key(self, key: int, pressed: bool):
        """Set the state of one of the 16 keypad keys."""
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key index out of range: {key}")
        self.state = self.state.replace(keypad=self.state.keypad.at[key].set(bool(pressed)))

    def press_key(self, key: int):
        self.set_key(key, True)

    def release_key(self, key: int):
        self.set_key(key, False)

    def release_all_keys(self):
        self.state = self.state.replace(keypad=jnp.zeros_like(self.state.keypad))

    @property
    def framebuffer(self) -> np.ndarray:
        """Read-only (64, 32) array of 0/1 pixels, indexed [x, y]."""
        pixels = np.array(self.state.display, dtype=np.uint8)
        pixels.flags.writeable = False
        return pixels

    @property
    def registers(self) -> np.ndarray:
        """Read-only copy of V0..VF."""
        registers = np.array(self.state.V, dtype=np.uint8)
        registers.flags.writeable = False
        return registers

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def index(self) -> int:
        return int(self.state.I)

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is nonzero."""
        return sound_active(self.state)
