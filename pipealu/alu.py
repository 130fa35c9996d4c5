from amaranth import *
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from .isa import *
from .units.adder import *
from .units.compare import *
from .units.logic import *


__all__ = ["ALU"]


class ALU(wiring.Component):
    """Single-cycle ALU.

    Operands are registered on the first clock edge, the result on the next one.
    There is no valid flag: every cycle is assumed to carry a request.

    Members
    -------
    op : ``In(ALUOp)``
        Operation. Undefined encodings pass ``src1`` through.
    src1 : ``In(32)``
        Operand A.
    src2 : ``In(32)``
        Operand B. Shifts only use ``src2[:5]``.
    result : ``Out(32)``
        Result, 1 cycle after the operands were sampled.
    """
    op:     In(ALUOp)
    src1:   In(32)
    src2:   In(32)

    result: Out(32)

    def elaborate(self, platform):
        m = Module()

        m.submodules.adder   = adder   = Adder()
        m.submodules.logic   = logic   = LogicUnit()
        m.submodules.compare = compare = CompareUnit()

        x_op   = Signal(ALUOp)
        x_src1 = Signal(32)
        x_src2 = Signal(32)

        m.d.sync += [
            x_op  .eq(self.op),
            x_src1.eq(self.src1),
            x_src2.eq(self.src2),
        ]

        x_shamt = Signal(5)
        m.d.comb += x_shamt.eq(x_src2[:5])

        m.d.comb += [
            adder.src1.eq(x_src1),
            adder.src2.eq(x_src2),

            logic.op  .eq(x_op),
            logic.src1.eq(x_src1),
            logic.src2.eq(x_src2),

            compare.op       .eq(x_op),
            compare.src1_sign.eq(x_src1[-1]),
            compare.src2_sign.eq(x_src2[-1]),
            compare.negative .eq(adder.sub[-1]),
            compare.borrow   .eq(adder.borrow),
        ]

        x_result = Signal(32)

        with m.Switch(x_op):
            with m.Case(ALUOp.ADD):
                m.d.comb += x_result.eq(adder.add)
            with m.Case(ALUOp.SUB):
                m.d.comb += x_result.eq(adder.sub)
            with m.Case(ALUOp.AND, ALUOp.OR, ALUOp.XOR):
                m.d.comb += x_result.eq(logic.result)
            with m.Case(ALUOp.SLL):
                m.d.comb += x_result.eq(x_src1 << x_shamt)
            with m.Case(ALUOp.SRL):
                m.d.comb += x_result.eq(x_src1 >> x_shamt)
            with m.Case(ALUOp.SRA):
                m.d.comb += x_result.eq(x_src1.as_signed() >> x_shamt)
            with m.Case(ALUOp.SLT, ALUOp.SLTU):
                m.d.comb += x_result.eq(compare.condition_met)
            with m.Default():
                m.d.comb += x_result.eq(x_src1)

        m.d.sync += self.result.eq(x_result)

        return m
