from amaranth import *
from amaranth.lib import wiring
from amaranth.lib.data import StructLayout
from amaranth.lib.wiring import In, Out


__all__ = ["shift_left", "shift_right", "Shifter"]


def shift_left(value, shamt, start=0):
    """Shift ``value`` left by ``shamt << start``, one mux level per bit of ``shamt``.

    Arguments
    ---------
    value : :class:`Value`
        Operand. The result has the same width.
    shamt : :class:`Value`
        Shift amount bits. Bit ``i`` shifts by ``2 ** (start + i)`` positions.
    start : int
        Weight of the least significant bit of ``shamt``.
    """
    for i in range(len(shamt)):
        n = 1 << (start + i)
        value = Mux(shamt[i], Cat(C(0, n), value[:-n]), value)
    return value


def shift_right(value, filler, shamt, start=0):
    """Shift ``value`` right by ``shamt << start``, filling vacated bits with ``filler``.

    See :func:`shift_left`.
    """
    for i in range(len(shamt)):
        n = 1 << (start + i)
        value = Mux(shamt[i], Cat(value[n:], filler.replicate(n)), value)
    return value


_partial_layout = StructLayout({
    "left":   32,
    "right":  32,
    "filler":  1,
    "shamt":   2,
})


class Shifter(wiring.Component):
    """Barrel shifter split across two pipeline stages.

    The x stage shifts by bits 0 to 2 of the shift amount, the m stage by bits
    3 and 4. Both directions are computed in parallel.

    Members
    -------
    x_sext : ``In(1)``
        Fill right shifts with the sign bit of ``x_src1`` instead of zeroes.
    x_shamt : ``In(5)``
        Shift amount.
    x_src1 : ``In(32)``
        Operand.
    m_left : ``Out(32)``
        ``x_src1`` shifted left, one cycle later.
    m_right : ``Out(32)``
        ``x_src1`` shifted right, one cycle later.
    """
    x_sext:  In(1)
    x_shamt: In(5)
    x_src1:  In(32)

    m_left:  Out(32)
    m_right: Out(32)

    def elaborate(self, platform):
        m = Module()

        x_filler = Signal()
        m.d.comb += x_filler.eq(self.x_sext & self.x_src1[-1])

        m_partial = Signal(_partial_layout)

        # the sign bit of the operand is not available anymore in the m stage
        m.d.sync += [
            m_partial.left  .eq(shift_left (self.x_src1,           self.x_shamt[:3])),
            m_partial.right .eq(shift_right(self.x_src1, x_filler, self.x_shamt[:3])),
            m_partial.filler.eq(x_filler),
            m_partial.shamt .eq(self.x_shamt[3:]),
        ]

        m.d.comb += [
            self.m_left .eq(shift_left (m_partial.left,                   m_partial.shamt, start=3)),
            self.m_right.eq(shift_right(m_partial.right, m_partial.filler, m_partial.shamt, start=3)),
        ]

        return m
