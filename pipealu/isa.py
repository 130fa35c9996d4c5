from amaranth.lib import enum


__all__ = ["Funct3", "Funct7", "ALUOp"]


class Funct3:
    ADD = SUB = 0b000
    SLL       = 0b001
    SLT       = 0b010
    SLTU      = 0b011
    XOR       = 0b100
    SR        = 0b101
    OR        = 0b110
    AND       = 0b111


class Funct7:
    SRL = ADD = 0b0000000
    SRA = SUB = 0b0100000


class ALUOp(enum.Enum, shape=4):
    """ALU operation code, encoded as ``{funct7[5], funct3}``.

    Values outside of this set are not errors: the ALU passes ``src1``
    through unchanged.
    """
    ADD  = (Funct7.ADD >> 2) | Funct3.ADD
    SUB  = (Funct7.SUB >> 2) | Funct3.SUB
    AND  = (Funct7.ADD >> 2) | Funct3.AND
    OR   = (Funct7.ADD >> 2) | Funct3.OR
    XOR  = (Funct7.ADD >> 2) | Funct3.XOR
    SLL  = (Funct7.ADD >> 2) | Funct3.SLL
    SRL  = (Funct7.SRL >> 2) | Funct3.SR
    SRA  = (Funct7.SRA >> 2) | Funct3.SR
    SLTU = (Funct7.ADD >> 2) | Funct3.SLTU
    SLT  = (Funct7.ADD >> 2) | Funct3.SLT
