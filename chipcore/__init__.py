"""CHIP-8 virtual machine core."""

from chipcore.state import EmulatorState, StackState, create_state
from chipcore.emulator import execute, fetch, step
from chipcore.decode import DecodedInstruction, Op, decode, identify, mnemonic, disassemble
from chipcore.memory import load_font, load_program, read8, write8
from chipcore.timers import tick, sound_active
from chipcore.rng import RandomByteSource, PRNGByteSource, SequenceByteSource
from chipcore.errors import Chip8Error, ProgramTooLarge, UnknownOpcode, StackOverflow, StackUnderflow
from chipcore.machine import Machine, MachineConfig
from chipcore.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick",
    "sound_active",
    "DecodedInstruction",
    "Op",
    "decode",
    "identify",
    "mnemonic",
    "disassemble",
    "load_font",
    "load_program",
    "read8",
    "write8",
    "RandomByteSource",
    "PRNGByteSource",
    "SequenceByteSource",
    "Chip8Error",
    "ProgramTooLarge",
    "UnknownOpcode",
    "StackOverflow",
    "StackUnderflow",
    "Machine",
    "MachineConfig",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
]
