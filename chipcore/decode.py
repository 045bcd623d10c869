"""CHIP-8 instruction decoding."""

from enum import IntEnum

from chex import dataclass

from chipcore.errors import UnknownOpcode


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    kk: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


class Op(IntEnum):
    """The 35 base CHIP-8 operations. Values index the dispatch table."""
    SYS = 0
    CLS = 1
    RET = 2
    JP = 3
    CALL = 4
    SE_VX_KK = 5
    SNE_VX_KK = 6
    SE_VX_VY = 7
    LD_VX_KK = 8
    ADD_VX_KK = 9
    LD_VX_VY = 10
    OR = 11
    AND = 12
    XOR = 13
    ADD_VX_VY = 14
    SUB = 15
    SHR = 16
    SUBN = 17
    SHL = 18
    SNE_VX_VY = 19
    LD_I = 20
    JP_V0 = 21
    RND = 22
    DRW = 23
    SKP = 24
    SKNP = 25
    LD_VX_DT = 26
    LD_VX_K = 27
    LD_DT_VX = 28
    LD_ST_VX = 29
    ADD_I_VX = 30
    LD_F_VX = 31
    LD_B_VX = 32
    LD_I_VX = 33
    LD_VX_I = 34


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        kk=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


_FIXED_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_VX_KK,
    0x4: Op.SNE_VX_KK,
    0x6: Op.LD_VX_KK,
    0x7: Op.ADD_VX_KK,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_ALU_OPS = {
    0x0: Op.LD_VX_VY,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_VX_VY,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEY_OPS = {
    0x9E: Op.SKP,
    0xA1: Op.SKNP,
}

_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_I_VX,
    0x65: Op.LD_VX_I,
}


def identify(instruction: DecodedInstruction, address: int | None = None) -> Op:
    """Map a decoded instruction onto its operation.

    Dispatches on the first nibble, then on the low byte or low nibble for the
    families that share one. ``address`` is only used to report where an unknown word was found.

    Raises:
        UnknownOpcode: if the word matches no operation.
    """
    opcode = int(instruction.opcode)

    if opcode in _FIXED_OPS:
        return _FIXED_OPS[opcode]

    op = None
    if opcode == 0x0:
        if instruction.raw == 0x00E0:
            op = Op.CLS
        elif instruction.raw == 0x00EE:
            op = Op.RET
        else:
            op = Op.SYS
    elif opcode == 0x5 and instruction.n == 0:
        op = Op.SE_VX_VY
    elif opcode == 0x9 and instruction.n == 0:
        op = Op.SNE_VX_VY
    elif opcode == 0x8:
        op = _ALU_OPS.get(int(instruction.n))
    elif opcode == 0xE:
        op = _KEY_OPS.get(int(instruction.kk))
    elif opcode == 0xF:
        op = _MISC_OPS.get(int(instruction.kk))

    if op is None:
        raise UnknownOpcode(int(instruction.raw), address)
    return op


_MNEMONICS = {
    Op.SYS: "SYS {nnn:03X}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP {nnn:03X}",
    Op.CALL: "CALL {nnn:03X}",
    Op.SE_VX_KK: "SE V{x:X}, {kk:02X}",
    Op.SNE_VX_KK: "SNE V{x:X}, {kk:02X}",
    Op.SE_VX_VY: "SE V{x:X}, V{y:X}",
    Op.LD_VX_KK: "LD V{x:X}, {kk:02X}",
    Op.ADD_VX_KK: "ADD V{x:X}, {kk:02X}",
    Op.LD_VX_VY: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_VX_VY: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_VX_VY: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, {nnn:03X}",
    Op.JP_V0: "JP V0, {nnn:03X}",
    Op.RND: "RND V{x:X}, {kk:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n:X}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I_VX: "ADD I, V{x:X}",
    Op.LD_F_VX: "LD F, V{x:X}",
    Op.LD_B_VX: "LD B, V{x:X}",
    Op.LD_I_VX: "LD [I], V{x:X}",
    Op.LD_VX_I: "LD V{x:X}, [I]",
}


def mnemonic(instruction: DecodedInstruction) -> str:
    """Render an instruction as assembly text, e.g. ``ADD V1, V2``."""
    template = _MNEMONICS[identify(instruction)]
    return template.format(
        x=int(instruction.x), y=int(instruction.y), n=int(instruction.n),
        kk=int(instruction.kk), nnn=int(instruction.nnn),
    )


def disassemble(word: int) -> str:
    """Render a raw instruction word, falling back to a data directive."""
    instruction = decode(word)
    try:
        return mnemonic(instruction)
    except UnknownOpcode:
        return f"DW {word:04X}"
