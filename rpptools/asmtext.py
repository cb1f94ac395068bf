"""Parsing of textual assembly instructions into typed operands."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from rpptools.bytestr import get, hex_to_dec, is_number_str, scan_uint

_UINT_MASK = 0xFFFFFFFF

REGISTERS = ("eax", "ebx", "ecx", "edx", "esi", "edi", "esp", "ebp", "eip")
REG_WIDTH = 4
REG_SIZE = REG_WIDTH * len(REGISTERS)

JUMP_INSTRUCTIONS = frozenset({"jmp", "jebxz", "jebxnz"})

_SIMPLE_ESCAPES = {"b": "\b", "n": "\n", "r": "\r", "\0": "\0"}


class OperandType(enum.IntEnum):
    """Kind of an instruction operand."""

    NULL = 0
    IMME = 1
    REG = 2
    ADDR = 3


@dataclass
class Operand:
    """An operand: immediate value, register, or register-relative address.

    ``off`` is the register's offset in the register block and ``val`` the
    immediate value or displacement (the decoded text for a string constant).
    """

    type: OperandType = OperandType.NULL
    val: Union[int, str] = 0
    off: int = 0


@dataclass
class Instruction:
    """An instruction code with up to two operands."""

    type: int = 0
    first: Operand = field(default_factory=Operand)
    second: Operand = field(default_factory=Operand)

    def empty(self) -> bool:
        """True when the instruction has not been resolved."""
        return self.type == 0

    def clear(self) -> None:
        """Reset to the unresolved state."""
        self.type = 0
        self.first = Operand()
        self.second = Operand()


def trans_cstr(src: str) -> str:
    """Decode a quoted string constant and append the terminating NUL.

    Escapes ``\\b``, ``\\n``, ``\\r``, ``\\xHH`` and a backslash before a NUL
    are translated; any other escaped character stands for itself. Input
    shorter than two characters is returned unchanged.
    """
    if len(src) < 2:
        return src
    out = []
    i = 1
    end = len(src) - 1
    while i < end:
        ch = src[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        nxt = get(src, i + 1)
        if nxt == "x":
            out.append(chr(int(hex_to_dec(src[i + 2 : i + 4])) & 0xFF))
            i += 4
            continue
        out.append(_SIMPLE_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out) + "\0"


def find_comma(tokens: Sequence[str]) -> int:
    """Index of the comma separating the two operands, or ``len(tokens)``.

    Scanning starts after the mnemonic; commas inside parentheses or square
    brackets are skipped.
    """
    paren = 0
    bracket = 0
    for i in range(1, len(tokens)):
        token = tokens[i]
        if token == "(":
            paren += 1
        elif token == ")":
            paren -= 1
        elif token == "[":
            bracket += 1
        elif token == "]":
            bracket -= 1
        elif paren == 0 and bracket == 0 and token == ",":
            return i
    return max(len(tokens), 1)


_ONE_OPERAND = {
    OperandType.NULL: 0,
    OperandType.IMME: 0,
    OperandType.REG: 1,
    OperandType.ADDR: 2,
}

_TWO_OPERANDS = {
    (OperandType.REG, OperandType.IMME): 0,
    (OperandType.ADDR, OperandType.IMME): 1,
    (OperandType.REG, OperandType.REG): 2,
    (OperandType.ADDR, OperandType.REG): 3,
    (OperandType.REG, OperandType.ADDR): 4,
    (OperandType.ADDR, OperandType.ADDR): 5,
}


def obtain_qrun_type(ins: Instruction) -> int:
    """Add the operand-form variant to ``ins.type`` and return the new type.

    Raises ValueError for an operand combination with no variant.
    """
    first, second = ins.first.type, ins.second.type
    if second == OperandType.NULL:
        variant = _ONE_OPERAND.get(first)
    else:
        variant = _TWO_OPERANDS.get((first, second))
    if variant is None:
        raise ValueError(
            f"unsupported operand combination {first.name}, {second.name}"
        )
    ins.type += variant
    return ins.type


def is_jmp_ins(name: str) -> bool:
    """True for the jump instructions whose target is a line number."""
    return name in JUMP_INSTRUCTIONS


def get_reg_off(name: str) -> int:
    """Offset of register ``name`` in the register block, or ``REG_SIZE``."""
    try:
        return REGISTERS.index(name) * REG_WIDTH
    except ValueError:
        return REG_SIZE


def parse_operand(tokens: Sequence[str]) -> Optional[Operand]:
    """Parse one operand's tokens.

    Accepts ``123``, ``"text"``, ``reg``, ``[ reg ]`` and ``[ reg + n ]`` /
    ``[ reg - n ]``. Returns None for a function address (``& ...`` in seven
    tokens), which must be resolved later. Raises ValueError otherwise.
    """
    n = len(tokens)
    if n == 0:
        return Operand()
    if n == 1:
        token = tokens[0]
        if is_number_str(token):
            operand = Operand(OperandType.IMME, scan_uint(token))
        elif get(token, 0) == '"':
            operand = Operand(OperandType.IMME, trans_cstr(token))
        else:
            operand = Operand(OperandType.REG, 0, get_reg_off(token))
    elif n == 3:
        if tokens[0] != "[" or tokens[-1] != "]":
            raise ValueError(f"bad operand {' '.join(tokens)}")
        operand = Operand(OperandType.ADDR, 0, get_reg_off(tokens[1]))
    elif n == 5:
        val = scan_uint(tokens[3])
        if tokens[2] == "-":
            val = (-val) & _UINT_MASK
        operand = Operand(OperandType.ADDR, val, get_reg_off(tokens[1]))
    elif n == 7 and tokens[1] == "&":
        return None
    else:
        raise ValueError(f"bad operand {' '.join(tokens)}")
    if operand.off >= REG_SIZE:
        raise ValueError(f"unknown register in operand {' '.join(tokens)}")
    return operand