from amaranth import *
from amaranth.lib import wiring
from amaranth.lib.data import StructLayout
from amaranth.lib.wiring import In, Out

from .isa import *
from .units.adder import *
from .units.compare import *
from .units.logic import *
from .units.shifter import *


__all__ = ["PipelinedALU"]


_x_layout = StructLayout({
    "op":     ALUOp,
    "src1":   32,
    "src2":   32,
    "valid":   1,
})

_m_layout = StructLayout({
    "op":        ALUOp,
    "src1":      32,
    "src2_sign":  1,
    "add":       32,
    "sub":       32,
    "borrow":     1,
    "logic":     32,
    "valid":      1,
})


class PipelinedALU(wiring.Component):
    """Two-stage pipelined ALU.

    The x stage registers the operands and computes everything but the upper
    half of the barrel shifter, which is left to the m stage. The result is
    registered at the end of the m stage, 2 cycles after the operands were
    sampled, along with their valid flag.

    Members
    -------
    op : ``In(ALUOp)``
        Operation. Undefined encodings pass ``src1`` through.
    src1 : ``In(32)``
        Operand A.
    src2 : ``In(32)``
        Operand B. Shifts only use ``src2[:5]``.
    valid : ``In(1)``
        High if the operands belong to a request, low for a bubble.
    result : ``Out(32)``
        Result.
    result_valid : ``Out(1)``
        High if ``result`` belongs to a request.
    """
    op:           In(ALUOp)
    src1:         In(32)
    src2:         In(32)
    valid:        In(1)

    result:       Out(32)
    result_valid: Out(1)

    def elaborate(self, platform):
        m = Module()

        m.submodules.adder   = adder   = Adder()
        m.submodules.logic   = logic   = LogicUnit()
        m.submodules.shifter = shifter = Shifter()
        m.submodules.compare = compare = CompareUnit()

        # x stage

        x_stage = Signal(_x_layout)

        m.d.sync += [
            x_stage.op   .eq(self.op),
            x_stage.src1 .eq(self.src1),
            x_stage.src2 .eq(self.src2),
            x_stage.valid.eq(self.valid),
        ]

        m.d.comb += [
            adder.src1.eq(x_stage.src1),
            adder.src2.eq(x_stage.src2),

            logic.op  .eq(x_stage.op),
            logic.src1.eq(x_stage.src1),
            logic.src2.eq(x_stage.src2),

            shifter.x_sext .eq(x_stage.op == ALUOp.SRA),
            shifter.x_shamt.eq(x_stage.src2[:5]),
            shifter.x_src1 .eq(x_stage.src1),
        ]

        # m stage

        m_stage = Signal(_m_layout)

        m.d.sync += [
            m_stage.op       .eq(x_stage.op),
            m_stage.src1     .eq(x_stage.src1),
            m_stage.src2_sign.eq(x_stage.src2[-1]),
            m_stage.add      .eq(adder.add),
            m_stage.sub      .eq(adder.sub),
            m_stage.borrow   .eq(adder.borrow),
            m_stage.logic    .eq(logic.result),
            m_stage.valid    .eq(x_stage.valid),
        ]

        m.d.comb += [
            compare.op       .eq(m_stage.op),
            compare.src1_sign.eq(m_stage.src1[-1]),
            compare.src2_sign.eq(m_stage.src2_sign),
            compare.negative .eq(m_stage.sub[-1]),
            compare.borrow   .eq(m_stage.borrow),
        ]

        m_result = Signal(32)

        with m.Switch(m_stage.op):
            with m.Case(ALUOp.ADD):
                m.d.comb += m_result.eq(m_stage.add)
            with m.Case(ALUOp.SUB):
                m.d.comb += m_result.eq(m_stage.sub)
            with m.Case(ALUOp.AND, ALUOp.OR, ALUOp.XOR):
                m.d.comb += m_result.eq(m_stage.logic)
            with m.Case(ALUOp.SLL):
                m.d.comb += m_result.eq(shifter.m_left)
            with m.Case(ALUOp.SRL, ALUOp.SRA):
                m.d.comb += m_result.eq(shifter.m_right)
            with m.Case(ALUOp.SLT, ALUOp.SLTU):
                m.d.comb += m_result.eq(compare.condition_met)
            with m.Default():
                m.d.comb += m_result.eq(m_stage.src1)

        m.d.sync += [
            self.result      .eq(m_result),
            self.result_valid.eq(m_stage.valid),
        ]

        return m
