"""Main CHIP-8 execution engine."""

import jax
import jax.lax
import jax.numpy as jnp
from chipcore.state import EmulatorState
from chipcore.decode import DecodedInstruction, Op, decode, identify
from chipcore.rng import RandomByteSource
from chipcore.stack import check_push, check_pop
from chipcore.instructions.system import no_op, execute_clear_screen, execute_return
from chipcore.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chipcore.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor, execute_alu_add,
    execute_alu_sub, execute_alu_shift_right, execute_alu_subn, execute_alu_shift_left
)
from chipcore.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chipcore.instructions.display import execute_display
from chipcore.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    Op.SYS: no_op,
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_VX_KK: execute_skip_if_equal_immediate,
    Op.SNE_VX_KK: execute_skip_if_not_equal_immediate,
    Op.SE_VX_VY: execute_skip_if_equal_register,
    Op.LD_VX_KK: execute_set,
    Op.ADD_VX_KK: execute_add,
    Op.LD_VX_VY: execute_alu_set,
    Op.OR: execute_alu_or,
    Op.AND: execute_alu_and,
    Op.XOR: execute_alu_xor,
    Op.ADD_VX_VY: execute_alu_add,
    Op.SUB: execute_alu_sub,
    Op.SHR: execute_alu_shift_right,
    Op.SUBN: execute_alu_subn,
    Op.SHL: execute_alu_shift_left,
    Op.SNE_VX_VY: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_V0: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key,
    Op.SKNP: execute_skip_if_not_key,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I_VX: execute_add_to_index,
    Op.LD_F_VX: execute_font_character,
    Op.LD_B_VX: execute_bcd_conversion,
    Op.LD_I_VX: execute_store_registers,
    Op.LD_VX_I: execute_load_registers,
}


def _ignore_random(handler):
    def branch(state: EmulatorState, instruction: DecodedInstruction, random_byte) -> EmulatorState:
        return handler(state, instruction)
    return branch


# One branch per Op, in enum order; a missing handler fails at import
_BRANCHES = tuple(
    HANDLERS[op] if op is Op.RND else _ignore_random(HANDLERS[op])
    for op in Op
)


@jax.jit
def dispatch(state: EmulatorState, instruction: DecodedInstruction, op: int, random_byte: int) -> EmulatorState:
    """Apply one identified instruction. Performs no validity checks."""
    return jax.lax.switch(op, _BRANCHES, state, instruction, random_byte)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance pc past it."""
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def _run(state: EmulatorState, instruction: DecodedInstruction, draw_random, address: int | None) -> EmulatorState:
    op = identify(instruction, address)

    if op is Op.CALL:
        check_push(state.stack, instruction.nnn)
    elif op is Op.RET:
        check_pop(state.stack, address)

    random_byte = draw_random() if op is Op.RND else 0
    return dispatch(state, instruction, int(op), random_byte)


def execute(state: EmulatorState, instruction: int, random_byte: int = 0) -> EmulatorState:
    """Execute a single CHIP-8 instruction word without fetching it.

    Raises:
        UnknownOpcode, StackOverflow, StackUnderflow: before anything changes.
    """
    return _run(state, decode(int(instruction)), lambda: random_byte, None)


def step(state: EmulatorState, source: RandomByteSource) -> EmulatorState:
    """Fetch, decode and execute the instruction at pc.

    A random byte is drawn from ``source`` only for RND. On error the state
    passed in is left as it was and the exception propagates.
    """
    address = int(state.pc)
    state, instruction = fetch(state)
    return _run(state, decode(int(instruction)), source.next, address)
