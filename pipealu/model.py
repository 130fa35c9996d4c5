"""Cycle model of the ALUs.

Both variants are described as a state record and a ``step`` function that
computes the state after the next clock edge from the current state, the
reset flag and the request presented during the cycle. The functions are
pure: the records are immutable and reset simply substitutes the initial
state.
"""

from typing import NamedTuple

from .isa import ALUOp


__all__ = [
    "MASK32", "SINGLE_CYCLE_LATENCY", "PIPELINED_LATENCY",
    "execute", "shift_left", "shift_right",
    "Request", "SingleCycleState", "XStage", "MStage", "PipelinedState",
    "single_cycle_step", "pipelined_step",
]


MASK32 = 0xffffffff

SINGLE_CYCLE_LATENCY = 1
PIPELINED_LATENCY    = 2


def _check_operand(name, value):
    if not isinstance(value, int) or not 0 <= value <= MASK32:
        raise ValueError(f"Operand {name} must be a 32-bit unsigned integer, not {value!r}")


def _sign(value):
    return value >> 31 & 1


def _decode(op):
    try:
        return ALUOp(op)
    except ValueError:
        return None


def shift_left(value, shamt, start=0, width=5):
    """Shift ``value`` left by the ``width`` bits of ``shamt`` starting at bit ``start``."""
    for i in range(start, start + width):
        if shamt >> i & 1:
            value = value << (1 << i) & MASK32
    return value


def shift_right(value, filler, shamt, start=0, width=5):
    """Shift ``value`` right like :func:`shift_left`, filling vacated bits with ``filler``."""
    for i in range(start, start + width):
        if shamt >> i & 1:
            n = 1 << i
            value = value >> n | (((1 << n) - 1) << (32 - n) if filler else 0)
    return value


def execute(op, src1, src2):
    """Compute the result of ``op`` applied to ``src1`` and ``src2``.

    ``op`` may be an :class:`ALUOp` or any integer; undefined encodings return
    ``src1``.
    """
    _check_operand("src1", src1)
    _check_operand("src2", src2)

    if not isinstance(op, ALUOp):
        op = _decode(op)
    shamt = src2 & 0x1f

    if op is ALUOp.ADD:
        return (src1 + src2) & MASK32
    if op is ALUOp.SUB:
        return (src1 - src2) & MASK32
    if op is ALUOp.AND:
        return src1 & src2
    if op is ALUOp.OR:
        return src1 | src2
    if op is ALUOp.XOR:
        return src1 ^ src2
    if op is ALUOp.SLL:
        return (src1 << shamt) & MASK32
    if op is ALUOp.SRL:
        return src1 >> shamt
    if op is ALUOp.SRA:
        signed_src1 = src1 - (1 << 32) if _sign(src1) else src1
        return (signed_src1 >> shamt) & MASK32
    if op is ALUOp.SLTU:
        return int(src1 < src2)
    if op is ALUOp.SLT:
        if _sign(src1) != _sign(src2):
            return _sign(src1)
        return _sign((src1 - src2) & MASK32)
    return src1


class Request(NamedTuple):
    op:    int  = ALUOp.ADD.value
    src1:  int  = 0
    src2:  int  = 0
    valid: bool = True


# Single-cycle ALU

class SingleCycleState(NamedTuple):
    x_op:   int = 0
    x_src1: int = 0
    x_src2: int = 0
    result: int = 0


def single_cycle_step(state, reset, request):
    if reset:
        return SingleCycleState()
    _check_operand("src1", request.src1)
    _check_operand("src2", request.src2)
    return SingleCycleState(
        x_op   = request.op,
        x_src1 = request.src1,
        x_src2 = request.src2,
        result = execute(state.x_op, state.x_src1, state.x_src2),
    )


# Pipelined ALU

class XStage(NamedTuple):
    op:    int  = 0
    src1:  int  = 0
    src2:  int  = 0
    valid: bool = False


class MStage(NamedTuple):
    op:        int  = 0
    src1:      int  = 0
    src2_sign: int  = 0
    add:       int  = 0
    sub:       int  = 0
    borrow:    int  = 0
    logic:     int  = 0
    left:      int  = 0
    right:     int  = 0
    filler:    int  = 0
    shamt:     int  = 0
    valid:     bool = False


class PipelinedState(NamedTuple):
    x:            XStage = XStage()
    m:            MStage = MStage()
    result:       int    = 0
    result_valid: bool   = False


def _x_stage(x):
    op = _decode(x.op)

    if op is ALUOp.AND:
        logic = x.src1 & x.src2
    elif op is ALUOp.OR:
        logic = x.src1 | x.src2
    elif op is ALUOp.XOR:
        logic = x.src1 ^ x.src2
    else:
        logic = 0

    shamt  = x.src2 & 0x1f
    filler = _sign(x.src1) if op is ALUOp.SRA else 0

    return MStage(
        op        = x.op,
        src1      = x.src1,
        src2_sign = _sign(x.src2),
        add       = (x.src1 + x.src2) & MASK32,
        sub       = (x.src1 - x.src2) & MASK32,
        borrow    = int(x.src1 < x.src2),
        logic     = logic,
        left      = shift_left (x.src1,         shamt, width=3),
        right     = shift_right(x.src1, filler, shamt, width=3),
        filler    = filler,
        shamt     = shamt >> 3,
        valid     = x.valid,
    )


def _m_stage(m):
    op = _decode(m.op)

    if op is ALUOp.ADD:
        return m.add
    if op is ALUOp.SUB:
        return m.sub
    if op in (ALUOp.AND, ALUOp.OR, ALUOp.XOR):
        return m.logic
    if op is ALUOp.SLL:
        return shift_left(m.left, m.shamt << 3, start=3, width=2)
    if op in (ALUOp.SRL, ALUOp.SRA):
        return shift_right(m.right, m.filler, m.shamt << 3, start=3, width=2)
    if op is ALUOp.SLTU:
        return m.borrow
    if op is ALUOp.SLT:
        if _sign(m.src1) != m.src2_sign:
            return _sign(m.src1)
        return _sign(m.sub)
    return m.src1


def pipelined_step(state, reset, request):
    if reset:
        return PipelinedState()
    _check_operand("src1", request.src1)
    _check_operand("src2", request.src2)
    return PipelinedState(
        x            = XStage(request.op, request.src1, request.src2, bool(request.valid)),
        m            = _x_stage(state.x),
        result       = _m_stage(state.m),
        result_valid = state.m.valid,
    )
