"""Fatal conditions raised by the CHIP-8 core."""


class Chip8Error(Exception):
    """Base class for every error raised by the core."""


class ProgramTooLarge(Chip8Error):
    """Program image does not fit above the reserved interpreter area."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Program of {size} bytes exceeds the {limit} bytes available")


class UnknownOpcode(Chip8Error):
    """Fetched instruction word matches no operation."""

    def __init__(self, word: int, address: int | None = None):
        self.word = word
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown opcode 0x{word:04X}{where}")


class StackOverflow(Chip8Error):
    """CALL executed with all stack slots in use."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack overflow calling 0x{address:03X}")


class StackUnderflow(Chip8Error):
    """RET executed with an empty stack."""

    def __init__(self, address: int | None = None):
        self.address = address
        where = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Stack underflow{where}")
