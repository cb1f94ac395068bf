"""Helpers for emitting NASM assembly text from the compiler's instruction tokens."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Union

from rpptools.bytestr import get_bottom, is_alpha, is_number, is_number_str, scan_int

_NASM_JUMPS = frozenset(
    {"call", "je", "jne", "jg", "jge", "jl", "jle", "ja", "jae", "jb", "jbe"}
)

_FRAME_REGISTERS = ("esp", "ebp")
_MIN_FRAME_OFFSET = 4


def _at(tokens: Sequence[str], i: int) -> str:
    return tokens[i] if 0 <= i < len(tokens) else ""


def _to_int(token: str) -> int:
    try:
        return scan_int(token)
    except ValueError:
        return 0


def _char_bytes(s: Union[str, bytes]) -> bytes:
    if isinstance(s, (bytes, bytearray)):
        return bytes(s)
    out = bytearray()
    for ch in s:
        code = ord(ch)
        if code < 256:
            out.append(code)
        else:
            out.extend(ch.encode("utf-8"))
    return bytes(out)


def _is_const_str(token: str) -> bool:
    return get_bottom(token) == '"' and len(token) >= 2


def symbol_trans(s: str) -> str:
    """Make a NASM-safe symbol: letters and digits stay, other bytes become hex."""
    parts = []
    for byte in s.encode("utf-8"):
        if is_alpha(byte) or is_number(byte):
            parts.append(chr(byte))
        else:
            parts.append(f"{byte:02X}")
    return "".join(parts)


def add_str_one(index: int, s: Union[str, bytes]) -> str:
    """Data line for string constant ``index``; ``s`` ends with its NUL."""
    data = _char_bytes(s)
    body = "".join(f"{byte}," for byte in data[:-1])
    return f"_RC_{index}: db {body}0\n"


def is_jmp_ins_nasm(s: str) -> bool:
    """True for native jump and call mnemonics whose target is a line label."""
    return s in _NASM_JUMPS


def link_vstr(tokens: Iterable[str]) -> str:
    """Join tokens with single spaces."""
    return " ".join(tokens)


def _operand_split(tokens: Sequence[str]) -> int:
    depth = 0
    for i in range(1, len(tokens)):
        token = tokens[i]
        if token == "(":
            depth += 1
        elif token == ")":
            depth -= 1
        elif depth == 0 and token == ",":
            return i
    return max(len(tokens), 1)


def get_opnd1_v(tokens: Sequence[str]) -> List[str]:
    """Tokens of the first operand (after the mnemonic, before the comma)."""
    return list(tokens[1:_operand_split(tokens)])


def get_opnd2_v(tokens: Sequence[str]) -> List[str]:
    """Tokens of the second operand (after the separating comma)."""
    return list(tokens[_operand_split(tokens) + 1 :])


def get_opnd1(tokens: Sequence[str]) -> str:
    """First operand as text."""
    return link_vstr(get_opnd1_v(tokens))


def get_opnd2(tokens: Sequence[str]) -> str:
    """Second operand as text."""
    return link_vstr(get_opnd2_v(tokens))


def count_mbk_l(tokens: Iterable[str]) -> int:
    """Number of '[' tokens, i.e. memory operands."""
    return sum(1 for token in tokens if token == "[")


def proc_const_str(tokens: Sequence[str], consts: List[str]) -> List[str]:
    """Replace string constants by ``_RC_n`` labels, collecting them in ``consts``."""
    result = []
    for token in tokens:
        if _is_const_str(token):
            consts.append(token)
            result.append(f"_RC_{len(consts) - 1}")
        else:
            result.append(token)
    return result


def have_single_esp(tokens: Sequence[str]) -> bool:
    """True when the instruction uses esp/ebp other than as ``[reg + n]`` with n >= 4,
    or holds a string constant; such instructions cannot be inlined."""
    for i, token in enumerate(tokens):
        if token in _FRAME_REGISTERS:
            if _at(tokens, i - 1) != "[":
                return True
            if _to_int(_at(tokens, i + 2)) < _MIN_FRAME_OFFSET:
                return True
            if _at(tokens, i + 1) != "+":
                return True
        if _is_const_str(token):
            return True
    return False


def fix_esp(tokens: Sequence[str]) -> List[str]:
    """Lower every numeric esp/ebp displacement by 4, for inlined code."""
    result = list(tokens)
    for i, token in enumerate(tokens):
        if token not in _FRAME_REGISTERS:
            continue
        if len(result) > i + 2 and is_number_str(result[i + 2]):
            result[i + 2] = str(scan_int(result[i + 2]) - _MIN_FRAME_OFFSET)
    return result