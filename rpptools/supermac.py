"""Pattern macros: matching token sequences and expanding templates."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from rpptools.bytestr import get_bottom, is_number_str, scan_int
from rpptools.words import Word

MAX_DEPTH = 100


def find_symm_sbk(tokens: Sequence, start: int) -> int:
    """Index of the ')' matching the '(' at ``start``, or ``len(tokens)``."""
    depth = 0
    for i in range(start, len(tokens)):
        if tokens[i] == "(":
            depth += 1
        elif tokens[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return len(tokens)


def match_here(reg: Sequence[str], src: Sequence[str], arr: List[Word]) -> bool:
    """Match pattern ``reg`` against ``src``, appending captures to ``arr``.

    ``_word`` captures one token and ``_mword`` any number of tokens.
    """
    if not reg:
        return not src
    if reg[0] == "_mword":
        return match_multi(reg[1:], src, arr)
    if not src:
        return False
    if reg[0] == "_word":
        arr.append(Word(multi=[src[0]]))
        if match_here(reg[1:], src[1:], arr):
            return True
        arr.pop()
        return False
    if reg[0] != src[0]:
        return False
    if src[0] == "(":
        right_r = find_symm_sbk(reg, 0)
        if right_r >= len(reg):
            return False
        right_s = find_symm_sbk(src, 0)
        if right_s >= len(src):
            return False
        return match_here(reg[1:right_r], src[1:right_s], arr) and match_here(
            reg[right_r + 1 :], src[right_s + 1 :], arr
        )
    return match_here(reg[1:], src[1:], arr)


def match_multi(reg: Sequence[str], src: Sequence[str], arr: List[Word]) -> bool:
    """Capture the shortest prefix of ``src`` after which ``reg`` matches."""
    for i in range(len(src) + 1):
        arr.append(Word(multi=list(src[:i])))
        if match_here(reg, src[i:], arr):
            return True
        arr.pop()
    return False


def _at(tokens: Sequence[str], i: int) -> str:
    return tokens[i] if 0 <= i < len(tokens) else ""


def replace_super_word(word: Word, vstr: Sequence[str], arr: Sequence[Word]) -> None:
    """Expand template ``vstr`` into ``word.multi`` using the captures ``arr``.

    ``$N`` inserts capture N, ``$N => K`` its K-th token. Raises ValueError
    for a reference to a capture or token that does not exist.
    """
    word.val = ""
    i = 0
    while i < len(vstr):
        token = vstr[i]
        if token == "$" and is_number_str(_at(vstr, i + 1)):
            num = scan_int(vstr[i + 1])
            if num >= len(arr):
                raise ValueError(f"macro capture ${num} does not exist")
            if _at(vstr, i + 2) == "=>" and is_number_str(_at(vstr, i + 3)):
                index = scan_int(vstr[i + 3])
                if index >= len(arr[num].multi):
                    raise ValueError(f"macro capture ${num} has no token {index}")
                word.multi.append(arr[num].multi[index])
                i += 4
            else:
                word.multi.extend(arr[num].multi)
                i += 2
        else:
            word.multi.append(token)
            i += 1
    word.multi = link_sharp(word.multi)


def del_quote(s: str) -> str:
    """Strip the surrounding quotes from a string constant."""
    if get_bottom(s) == '"':
        return s[1 : len(s) - 1]
    return s


def add_quote(s: str) -> str:
    """Quote ``s`` as a string constant, escaping inner quotes."""
    return '"' + s.replace('"', '\\"') + '"'


def link_sharp(tokens: Sequence[str]) -> List[str]:
    """Apply ``##`` pasting and ``#`` quoting until nothing changes."""
    result = list(tokens)
    for _ in range(MAX_DEPTH):
        result, changed = link_sharp_one(result)
        if not changed:
            break
    return result


def link_sharp_one(tokens: Sequence[str]) -> Tuple[List[str], bool]:
    """One pass of ``##`` pasting and ``#`` quoting; reports whether it pasted."""
    dst: List[str] = []
    pasted = False
    n = len(tokens)
    i = 0
    while i < n:
        if i < n - 2 and tokens[i + 1] == "##":
            left, right = tokens[i], tokens[i + 2]
            joined = del_quote(left) + del_quote(right)
            if get_bottom(left) == '"' or get_bottom(right) == '"':
                joined = add_quote(joined)
            dst.append(joined)
            i += 3
            pasted = True
        elif i < n - 1 and tokens[i] == "#":
            dst.append(add_quote(tokens[i + 1]))
            i += 2
        else:
            dst.append(tokens[i])
            i += 1
    return dst, pasted