"""Byte and character helpers for the compiler's token strings.

Functions accept either ``str`` or ``bytes``. Single characters may be
given as an ``int`` code, a one-character ``str`` or a one-byte ``bytes``.
"""

from __future__ import annotations

import re
from typing import Iterable, Union

Char = Union[int, str, bytes]
Text = Union[str, bytes]

_UINT_MASK = 0xFFFFFFFF

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")


def _code(ch: Char) -> int:
    if isinstance(ch, int):
        return ch
    if isinstance(ch, str) and len(ch) == 1:
        return ord(ch)
    if isinstance(ch, (bytes, bytearray)) and len(ch) == 1:
        return ch[0]
    raise TypeError(f"expected a single character, got {ch!r}")


def _same_kind(template: Char, code: int) -> Char:
    if isinstance(template, int):
        return code
    if isinstance(template, str):
        return chr(code)
    return bytes([code])


def _text(s: Text) -> str:
    if isinstance(s, (bytes, bytearray)):
        return bytes(s).decode("latin-1")
    return s


def _wrap_int32(value: int) -> int:
    value &= _UINT_MASK
    return value - (1 << 32) if value >= 1 << 31 else value


def is_alpha(ch: Char) -> bool:
    """True for an ASCII letter."""
    code = _code(ch)
    return ord("a") <= code <= ord("z") or ord("A") <= code <= ord("Z")


def is_number(ch: Char) -> bool:
    """True for an ASCII decimal digit."""
    return ord("0") <= _code(ch) <= ord("9")


def char_to_upper(ch: Char) -> Char:
    """Upper-case an ASCII lower-case letter; other characters are unchanged."""
    code = _code(ch)
    if ord("a") <= code <= ord("z"):
        code -= 32
    return _same_kind(ch, code)


def upper_char_to_num(ch: Char) -> int:
    """Value of a digit or upper-case hex letter."""
    code = _code(ch)
    if code >= ord("A"):
        return code - ord("A") + 10
    return code - ord("0")


def char_to_num(ch: Char) -> int:
    """Value of a digit or hex letter of either case."""
    return upper_char_to_num(char_to_upper(ch))


def is_number_str(s: Text) -> bool:
    """True when ``s`` is non-empty and made of decimal digits only."""
    return len(s) > 0 and all(is_number(c) for c in s)


def get(s: Text, i: int):
    """Character at ``i``, or a NUL (``0`` for bytes) when out of range."""
    if 0 <= i < len(s):
        return s[i]
    return 0 if isinstance(s, (bytes, bytearray)) else "\0"


def get_top(s: Text):
    """Last character, or NUL when empty."""
    return get(s, len(s) - 1)


def get_bottom(s: Text):
    """First character, or NUL when empty."""
    return get(s, 0)


def scan_int(s: Text) -> int:
    """Read a leading signed decimal integer, wrapped to 32 bits."""
    match = _INT_RE.match(_text(s))
    if match is None:
        raise ValueError(f"no integer in {s!r}")
    return _wrap_int32(int(match.group(1)))


def scan_uint(s: Text) -> int:
    """Read a leading decimal integer as an unsigned 32-bit value."""
    match = _INT_RE.match(_text(s))
    if match is None:
        raise ValueError(f"no integer in {s!r}")
    return int(match.group(1)) & _UINT_MASK


def scan_double(s: Text) -> float:
    """Read a leading floating-point number."""
    match = _FLOAT_RE.match(_text(s))
    if match is None:
        raise ValueError(f"no number in {s!r}")
    return float(match.group(1))


def hex_to_dec(s: Text) -> str:
    """Convert a hexadecimal string to its unsigned 32-bit decimal text."""
    match = _HEX_RE.match(_text(s))
    if match is None:
        raise ValueError(f"no hexadecimal number in {s!r}")
    value = int(match.group(2), 16)
    if match.group(1) == "-":
        value = -value
    return str(value & _UINT_MASK)


def bin_to_dec(s: Text) -> str:
    """Convert a string of binary digits to decimal text; non-'1' counts as 0."""
    text = _text(s)
    total = sum(1 << k for k, c in enumerate(reversed(text)) if c == "1")
    return str(total & _UINT_MASK)


def join(items: Iterable, sep: Text) -> Text:
    """Join the string forms of ``items`` with ``sep``."""
    if isinstance(sep, (bytes, bytearray)):
        parts = [
            bytes(x) if isinstance(x, (bytes, bytearray)) else str(x).encode()
            for x in items
        ]
        return bytes(sep).join(parts)
    return sep.join(str(x) for x in items)