"""Token, declaration and function records shared by the compiler passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from rpptools.bytestr import get, get_bottom, get_top, is_alpha, is_number, is_number_str


def _byte(ch: Union[int, bytes]) -> int:
    if isinstance(ch, int):
        return ch
    if isinstance(ch, (bytes, bytearray)) and len(ch) == 1:
        return ch[0]
    raise TypeError(f"expected a byte, got {ch!r}")


def is_utf8_2(ch: Union[int, bytes]) -> bool:
    """True for the lead byte of a two-byte UTF-8 sequence."""
    return (_byte(ch) & 0xE0) == 0xC0


def is_utf8_3(ch: Union[int, bytes]) -> bool:
    """True for the lead byte of a three-byte UTF-8 sequence."""
    return (_byte(ch) & 0xF0) == 0xE0


@dataclass
class Pos:
    """A source position: line number and the file it belongs to."""

    line: int = 0
    file: Optional[Any] = None


@dataclass(eq=False)
class Word:
    """One token; ``multi`` holds a replacement token sequence."""

    val: str = ""
    multi: List[str] = field(default_factory=list)
    pos: Pos = field(default_factory=Pos)
    pos_src: Pos = field(default_factory=Pos)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Word):
            return self.val == other.val
        if isinstance(other, str):
            return self.val == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def empty(self) -> bool:
        """True when the word has neither a value nor replacement tokens."""
        return not self.val and not self.multi

    def is_multi(self) -> bool:
        """True when only replacement tokens are present."""
        return bool(self.multi) and not self.val

    def is_name(self) -> bool:
        """True for an identifier: letters, digits, '_', '.' and UTF-8 characters."""
        data = self.val.encode("utf-8")
        if not data:
            return False
        first = data[0]
        if is_alpha(first) or first == ord("_"):
            i = 1
        elif is_utf8_3(first) and get(data, 1) and get(data, 2):
            i = 3
        elif is_utf8_2(first) and get(data, 1):
            i = 2
        else:
            return False
        while i < len(data):
            c = data[i]
            if is_number(c) or is_alpha(c) or c in (ord("_"), ord(".")):
                i += 1
            elif is_utf8_3(c) and get(data, i + 1) and get(data, i + 2):
                i += 3
            elif is_utf8_2(c) and get(data, i + 1):
                i += 2
            else:
                return False
        return True

    def is_cint(self) -> bool:
        """True for an integer constant such as ``123``."""
        return is_number_str(self.val)

    def is_cuint(self) -> bool:
        """True for an unsigned constant such as ``123u``."""
        return is_number_str(self.val[:-1]) and get_top(self.val) == "u"

    def is_caddr(self) -> bool:
        """True for a function address constant such as ``&A.f(int)``."""
        if get(self.val, 0) != "&" or get_top(self.val) != ")":
            return False
        return "." in self.val[: len(self.val) - 2]

    def is_cdouble(self) -> bool:
        """True for a floating constant with exactly one dot."""
        if not is_number(get_bottom(self.val)) or not is_number(get_top(self.val)):
            return False
        return self.val[1:].count(".") == 1

    def is_cpoint(self) -> bool:
        """True for a pointer constant such as ``0p`` or an address constant."""
        return (
            is_number_str(self.val[:-1]) and get_top(self.val) == "p"
        ) or self.is_caddr()

    def is_cstr(self) -> bool:
        """True for a string constant."""
        return get_bottom(self.val) == '"'

    def is_const(self) -> bool:
        """True for any constant token."""
        first = get(self.val, 0)
        return is_number(first) or first == '"' or self.is_caddr()


@dataclass
class Macro:
    """A macro: name, parameter names and body tokens."""

    name: str = ""
    param: List[str] = field(default_factory=list)
    vstr: List[str] = field(default_factory=list)
    is_super: bool = False

    def __lt__(self, other: "Macro") -> bool:
        return self.name < other.name


@dataclass(eq=False)
class Data:
    """A variable or member declaration."""

    type: str = ""
    name: str = ""
    size: int = 0
    count: int = 0
    off: int = 0
    param: List[Word] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Data):
            return self.name == other.name
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


@dataclass
class Sentence:
    """A statement: its tokens, result type and position."""

    vword: List[Word] = field(default_factory=list)
    type: str = ""
    pos: Pos = field(default_factory=Pos)

    def sub(self, begin: int, end: int) -> "Sentence":
        """Tokens ``begin:end`` with the same position and no type."""
        return Sentence(vword=list(self.vword[begin:end]), pos=self.pos)

    def empty(self) -> bool:
        """True when there are no tokens."""
        return not self.vword


@dataclass(eq=False)
class Func:
    """A function with its signature, body and compiled forms."""

    name: str = ""
    name_dec: str = ""
    retval: Data = field(default_factory=Data)
    is_macro: bool = False
    is_cfunc: bool = False
    is_dynamic: bool = False
    is_friend: bool = False
    lambda_data: str = ""
    vtl: List[Tuple[str, str]] = field(default_factory=list)
    param: List[Data] = field(default_factory=list)
    local: List[Data] = field(default_factory=list)
    vword: List[Word] = field(default_factory=list)
    vsent: List[Sentence] = field(default_factory=list)
    vasm: List[Any] = field(default_factory=list)
    first_pos: Pos = field(default_factory=Pos)
    last_pos: Pos = field(default_factory=Pos)
    count: int = 0
    ptci: Optional["ClassInfo"] = None

    def get_dec(self) -> str:
        """Declaration key: name followed by the parameter types."""
        return f"{self.name}({','.join(p.type for p in self.param)})"

    def __lt__(self, other: "Func") -> bool:
        return self.name_dec < other.name_dec


@dataclass(eq=False)
class ClassInfo:
    """A class: macros, data members, functions and template parameters."""

    name: str = ""
    vmac: Dict[str, Macro] = field(default_factory=dict)
    vdata: List[Data] = field(default_factory=list)
    vfunc: List[Func] = field(default_factory=list)
    vfunctl: List[Func] = field(default_factory=list)
    vword: List[Word] = field(default_factory=list)
    vtl: List[Tuple[str, str]] = field(default_factory=list)
    vfather: List[Sentence] = field(default_factory=list)
    size: int = 0
    is_friend: bool = False

    def __lt__(self, other: "ClassInfo") -> bool:
        return self.name < other.name