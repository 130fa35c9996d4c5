import logging
import random
from typing import NamedTuple

from amaranth import *
from amaranth.sim import Simulator

from .alu import *
from .isa import *
from .model import *
from .pipeline import *


__all__ = ["Mismatch", "random_requests", "check_equivalence"]


logger = logging.getLogger(__name__)


_corner_operands = [
    0x00000000, 0x00000001, 0x0000001f, 0x00000020, 0x7fffffff,
    0x80000000, 0x80000001, 0xfffffffe, 0xffffffff,
]

# 4-bit encodings that do not belong to ALUOp
_undefined_ops = [op for op in range(16) if op not in {member.value for member in ALUOp}]


def random_requests(count, seed=None, *, bubble_rate=0.125, undefined_rate=0.0625):
    """Generate ``count`` random :class:`Request` s.

    Operands are drawn from corner values half of the time.
    """
    rng = random.Random(seed)

    def operand():
        if rng.random() < 0.5:
            return rng.choice(_corner_operands)
        return rng.getrandbits(32)

    requests = []
    for _ in range(count):
        if rng.random() < undefined_rate:
            op = rng.choice(_undefined_ops)
        else:
            op = rng.choice(list(ALUOp)).value
        requests.append(Request(op, operand(), operand(), valid=rng.random() >= bubble_rate))
    return requests


class Mismatch(NamedTuple):
    cycle:    int
    source:   str
    expected: int
    actual:   int

    def __repr__(self):
        return (f"Mismatch(cycle={self.cycle}, source={self.source!r}, "
                f"expected={self.expected:#010x}, actual={self.actual:#010x})")


def check_equivalence(requests, resets=(), vcd_file=None):
    """Simulate both ALU variants with the same inputs.

    On every cycle, each variant is compared against its reference model, and
    the pipelined ALU is compared against the single-cycle ALU one cycle
    earlier. Bubbles are not compared across variants.

    Arguments
    ---------
    requests : iterable of :class:`Request`
        Inputs presented before each clock edge.
    resets : collection of int
        Indices of the requests during which reset is asserted.
    vcd_file : str
        Write a waveform of the simulation to this file.

    Returns a list of :class:`Mismatch`.
    """
    requests = list(requests)
    resets   = set(resets)

    m = Module()
    m.domains.sync = cd_sync = ClockDomain("sync")
    m.submodules.single    = single    = ALU()
    m.submodules.pipelined = pipelined = PipelinedALU()

    mismatches = []

    def compare(cycle, source, expected, actual):
        if expected != actual:
            mismatch = Mismatch(cycle, source, expected, actual)
            logger.warning("%r", mismatch)
            mismatches.append(mismatch)

    async def testbench(ctx):
        single_state    = SingleCycleState()
        pipelined_state = PipelinedState()
        single_results  = []

        for cycle, request in enumerate(requests):
            reset = cycle in resets

            ctx.set(cd_sync.rst, reset)
            op = request.op.value if isinstance(request.op, ALUOp) else request.op
            for dut in (single, pipelined):
                ctx.set(dut.op.as_value(), op)
                ctx.set(dut.src1, request.src1)
                ctx.set(dut.src2, request.src2)
            ctx.set(pipelined.valid, request.valid)

            await ctx.tick()

            single_state    = single_cycle_step(single_state, reset, request)
            pipelined_state = pipelined_step(pipelined_state, reset, request)

            single_result    = ctx.get(single.result)
            pipelined_result = ctx.get(pipelined.result)
            pipelined_valid  = ctx.get(pipelined.result_valid)

            compare(cycle, "single", single_state.result, single_result)
            compare(cycle, "pipelined", pipelined_state.result, pipelined_result)
            compare(cycle, "pipelined valid", int(pipelined_state.result_valid), pipelined_valid)

            single_results.append(single_result)
            if pipelined_valid and cycle >= 1:
                compare(cycle, "pipelined vs single", single_results[cycle - 1], pipelined_result)

            logger.debug("cycle %d: single=%#010x pipelined=%#010x valid=%d",
                         cycle, single_result, pipelined_result, pipelined_valid)

    sim = Simulator(m)
    sim.add_clock(1e-6)
    sim.add_testbench(testbench)
    if vcd_file is not None:
        with sim.write_vcd(vcd_file=vcd_file):
            sim.run()
    else:
        sim.run()

    logger.info("%d cycles simulated, %d mismatches", len(requests), len(mismatches))
    return mismatches
