from amaranth import *

from ..isa import ALUOp


__all__ = ["CompareUnit"]


class CompareUnit(Elaboratable):
    def __init__(self):
        self.op = Signal(ALUOp)
        self.src1_sign = Signal()
        self.src2_sign = Signal()
        self.negative = Signal()
        self.borrow = Signal()

        self.condition_met = Signal()

    def elaborate(self, platform):
        m = Module()

        with m.Switch(self.op):
            with m.Case(ALUOp.SLT):
                # the sign of the difference is only meaningful if the operands have the same sign
                with m.If(self.src1_sign != self.src2_sign):
                    m.d.comb += self.condition_met.eq(self.src1_sign)
                with m.Else():
                    m.d.comb += self.condition_met.eq(self.negative)
            with m.Case(ALUOp.SLTU):
                m.d.comb += self.condition_met.eq(self.borrow)

        return m
