from amaranth import *


__all__ = ["Adder"]


class Adder(Elaboratable):
    def __init__(self):
        self.src1   = Signal(32)
        self.src2   = Signal(32)

        self.add    = Signal(32)
        self.sub    = Signal(32)
        self.borrow = Signal()

    def elaborate(self, platform):
        m = Module()

        m.d.comb += [
            self.add.eq(self.src1 + self.src2),
            # bit 32 of the difference is set iff src1 < src2 (unsigned)
            Cat(self.sub, self.borrow).eq(self.src1 - self.src2),
        ]

        return m
