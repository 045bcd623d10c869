"""CHIP-8 stack operations."""

import jax.numpy as jnp

from chipcore.constants import STACK_SIZE
from chipcore.errors import StackOverflow, StackUnderflow
from chipcore.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push a return address onto the stack."""
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop a return address from the stack."""
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def check_push(stack: StackState, target: int) -> None:
    """Raise StackOverflow if no slot is left for another return address."""
    if int(stack.pointer) >= STACK_SIZE:
        raise StackOverflow(target)


def check_pop(stack: StackState, address: int | None = None) -> None:
    """Raise StackUnderflow if there is nothing to return to."""
    if int(stack.pointer) == 0:
        raise StackUnderflow(address)
