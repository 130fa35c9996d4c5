import unittest

from amaranth import *
from amaranth.sim import *

from pipealu.alu import *
from pipealu.isa import ALUOp


def test_op(op, src1, src2, result):
    def test(self):
        sim = Simulator(self.dut)

        async def testbench(ctx):
            ctx.set(self.dut.op.as_value(), op.value if isinstance(op, ALUOp) else op)
            ctx.set(self.dut.src1, src1)
            ctx.set(self.dut.src2, src2)
            await ctx.tick()
            ctx.set(self.dut.src1, 0xdeadbeef)
            ctx.set(self.dut.src2, 0xdeadbeef)
            await ctx.tick()
            self.assertEqual(ctx.get(self.dut.result), result)

        sim.add_clock(1e-6)
        sim.add_testbench(testbench)
        sim.run()

    return test


test_op.__test__ = False


class ALUTestCase(unittest.TestCase):
    def setUp(self):
        self.dut = ALU()

    # ADD ------------------------------------------------------------------------

    test_add_0    = test_op(ALUOp.ADD,  0x00000000, 0x00000000, result=0x00000000)
    test_add_1    = test_op(ALUOp.ADD,  0x00000003, 0x00000007, result=0x0000000a)
    test_add_2    = test_op(ALUOp.ADD,  0xffffffff, 0x00000001, result=0x00000000)
    test_add_3    = test_op(ALUOp.ADD,  0x7fffffff, 0x00000001, result=0x80000000)
    test_add_4    = test_op(ALUOp.ADD,  0x80000000, 0x80000000, result=0x00000000)

    # SUB ------------------------------------------------------------------------

    test_sub_0    = test_op(ALUOp.SUB,  0x00000000, 0x00000000, result=0x00000000)
    test_sub_1    = test_op(ALUOp.SUB,  0x0000000d, 0x0000000b, result=0x00000002)
    test_sub_2    = test_op(ALUOp.SUB,  0x00000000, 0x00000001, result=0xffffffff)
    test_sub_3    = test_op(ALUOp.SUB,  0x80000000, 0x00000001, result=0x7fffffff)

    # AND, OR, XOR ---------------------------------------------------------------

    test_and_0    = test_op(ALUOp.AND,  0xff00ff00, 0x0f0f0f0f, result=0x0f000f00)
    test_or_0     = test_op(ALUOp.OR,   0xff00ff00, 0x0f0f0f0f, result=0xff0fff0f)
    test_xor_0    = test_op(ALUOp.XOR,  0xff00ff00, 0x0f0f0f0f, result=0xf00ff00f)

    # SLL ------------------------------------------------------------------------

    test_sll_0    = test_op(ALUOp.SLL,  0x00000001, 0x00000000, result=0x00000001)
    test_sll_1    = test_op(ALUOp.SLL,  0x00000001, 0x00000007, result=0x00000080)
    test_sll_2    = test_op(ALUOp.SLL,  0x00000001, 0x0000001f, result=0x80000000)
    test_sll_3    = test_op(ALUOp.SLL,  0xffffffff, 0x0000000e, result=0xffffc000)
    test_sll_4    = test_op(ALUOp.SLL,  0x21212121, 0xffffffe1, result=0x42424242)

    # SRL ------------------------------------------------------------------------

    test_srl_0    = test_op(ALUOp.SRL,  0x80000000, 0x00000000, result=0x80000000)
    test_srl_1    = test_op(ALUOp.SRL,  0x80000000, 0x00000001, result=0x40000000)
    test_srl_2    = test_op(ALUOp.SRL,  0x80000000, 0x0000001f, result=0x00000001)
    test_srl_3    = test_op(ALUOp.SRL,  0x21212121, 0xffffffee, result=0x00008484)

    # SRA ------------------------------------------------------------------------

    test_sra_0    = test_op(ALUOp.SRA,  0x80000000, 0x00000000, result=0x80000000)
    test_sra_1    = test_op(ALUOp.SRA,  0x80000000, 0x00000001, result=0xc0000000)
    test_sra_2    = test_op(ALUOp.SRA,  0x80000000, 0x0000001f, result=0xffffffff)
    test_sra_3    = test_op(ALUOp.SRA,  0x7fffffff, 0x0000001f, result=0x00000000)
    test_sra_4    = test_op(ALUOp.SRA,  0x81818181, 0xffffffe7, result=0xff030303)

    # SLTU -----------------------------------------------------------------------

    test_sltu_0   = test_op(ALUOp.SLTU, 0x00000000, 0x00000000, result=0)
    test_sltu_1   = test_op(ALUOp.SLTU, 0x00000000, 0x00000001, result=1)
    test_sltu_2   = test_op(ALUOp.SLTU, 0xffffffff, 0x00000001, result=0)
    test_sltu_3   = test_op(ALUOp.SLTU, 0x7fffffff, 0x80000000, result=1)

    # SLT ------------------------------------------------------------------------

    test_slt_0    = test_op(ALUOp.SLT,  0x00000000, 0x00000000, result=0)
    test_slt_1    = test_op(ALUOp.SLT,  0xffffffff, 0x00000001, result=1)
    test_slt_2    = test_op(ALUOp.SLT,  0x00000001, 0xffffffff, result=0)
    test_slt_3    = test_op(ALUOp.SLT,  0x80000000, 0x7fffffff, result=1)
    test_slt_4    = test_op(ALUOp.SLT,  0xfffffffe, 0xffffffff, result=1)
    test_slt_5    = test_op(ALUOp.SLT,  0x00000005, 0x00000003, result=0)

    # Undefined operations --------------------------------------------------------

    test_undef_0  = test_op(0b1001,     0x12345678, 0x9abcdef0, result=0x12345678)
    test_undef_1  = test_op(0b1010,     0x12345678, 0x9abcdef0, result=0x12345678)
    test_undef_2  = test_op(0b1111,     0xffffffff, 0x00000001, result=0xffffffff)

    def test_latency(self):
        sim = Simulator(self.dut)

        async def testbench(ctx):
            ctx.set(self.dut.op.as_value(), ALUOp.ADD.value)
            ctx.set(self.dut.src1, 1)
            ctx.set(self.dut.src2, 2)
            await ctx.tick()
            self.assertEqual(ctx.get(self.dut.result), 0)
            ctx.set(self.dut.src1, 10)
            ctx.set(self.dut.src2, 20)
            await ctx.tick()
            self.assertEqual(ctx.get(self.dut.result), 3)
            await ctx.tick()
            self.assertEqual(ctx.get(self.dut.result), 30)

        sim.add_clock(1e-6)
        sim.add_testbench(testbench)
        sim.run()
