import time

import numpy as np

from chipcore import Machine, MachineConfig


def assemble(*words):
    return b"".join(word.to_bytes(2, "big") for word in words)


# Draws the digits of V2 (a random byte) in decimal, then spins forever
PROGRAM = assemble(
    0xC2FF,  # RND V2, FF
    0xA300,  # LD I, 300
    0xF233,  # LD B, V2
    0xF265,  # LD V2, [I]  -> V0, V1, V2 = hundreds, tens, ones
    0x6308,  # LD V3, 08   x
    0x6408,  # LD V4, 08   y
    0xF029,  # LD F, V0
    0xD345,  # DRW V3, V4, 5
    0x7306,  # ADD V3, 06
    0xF129,  # LD F, V1
    0xD345,  # DRW V3, V4, 5
    0x7306,  # ADD V3, 06
    0xF229,  # LD F, V2
    0xD345,  # DRW V3, V4, 5
    0x121C,  # JP 21C
)


def print_framebuffer(framebuffer: np.ndarray):
    for y in range(framebuffer.shape[1]):
        print("".join("#" if framebuffer[x, y] else "." for x in range(framebuffer.shape[0])))


if __name__ == "__main__":
    machine = Machine(MachineConfig(seed=0, log_level="INFO"))
    machine.load_program(PROGRAM)

    start = time.time()
    machine.run(30, progress=True)
    end = time.time()

    print("Execution time (s):", end - start)
    print("Random byte:", int(machine.registers[0]) * 100 + int(machine.registers[1]) * 10 + int(machine.registers[2]))
    print_framebuffer(machine.framebuffer)
