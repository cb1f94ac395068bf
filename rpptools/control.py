"""Statement assembly for function bodies: splitting tokens into sentences,
jump insertion and label replacement."""

from __future__ import annotations

from typing import List, Sequence

from rpptools.words import Pos, Sentence, Word

SEMI = ";"
JMP = "jmp"
JEBXZ = "jebxz"
JEBXNZ = "jebxnz"


def need_part(sentences: Sequence[Sentence]) -> bool:
    """True when some sentence is empty or still contains a ';' token."""
    for sent in sentences:
        if not sent.vword:
            return True
        if any(word.val == SEMI for word in sent.vword):
            return True
    return False


def _split_words(words: Sequence[Word]) -> List[List[Word]]:
    parts: List[List[Word]] = []
    current: List[Word] = []
    for word in words:
        if word.val == SEMI:
            if current:
                parts.append(current)
            current = []
        else:
            current.append(word)
    if current:
        parts.append(current)
    return parts


def part_vsent(sentences: Sequence[Sentence]) -> List[Sentence]:
    """Split sentences at ';' tokens and drop empty ones.

    Each piece keeps the position of the sentence it came from; its type
    is left empty.
    """
    if not need_part(sentences):
        return list(sentences)
    result: List[Sentence] = []
    for sent in sentences:
        for piece in _split_words(sent.vword):
            result.append(
                Sentence(vword=piece, pos=Pos(sent.pos.line, sent.pos.file))
            )
    return result


def _make_sentence(words: List[Word]) -> Sentence:
    first = words[0].pos
    return Sentence(vword=words, pos=Pos(first.line, first.file))


def obtain_sent(words: Sequence[Word]) -> List[Sentence]:
    """Group a function's tokens into sentences.

    A sentence ends at a ';' token or where the line number changes. Tokens
    after the last boundary are not collected, so the body is expected to
    end with a ';'.
    """
    sentences: List[Sentence] = []
    start = 0
    for i, word in enumerate(words):
        if word.val == SEMI:
            piece = list(words[start:i])
            if piece:
                sentences.append(_make_sentence(piece))
            start = i + 1
        elif i > 0 and words[i - 1].pos.line != word.pos.line:
            piece = list(words[start:i])
            if piece:
                sentences.append(_make_sentence(piece))
            start = i
    return sentences


def insert_jmp_asm(word: Word, target: Word) -> None:
    """Append an unconditional jump to ``target``'s line to ``word.multi``."""
    word.multi.extend([SEMI, JMP, str(target.pos.line)])


def insert_cond_true_asm(multi: List[str], target: Word) -> None:
    """Append a jump to ``target``'s line taken when ebx is non-zero."""
    multi.extend([SEMI, JEBXNZ, str(target.pos.line)])


def insert_cond_false_asm(multi: List[str], target: Word) -> None:
    """Append a jump to ``target``'s line taken when ebx is zero."""
    multi.extend([SEMI, JEBXZ, str(target.pos.line)])


def tag_replace_word(word: Word, tags: Sequence[Word]) -> None:
    """Replace a label name in ``word`` with the line number of its tag."""
    for tag in tags:
        if word.val == tag.val:
            word.val = str(tag.pos.line)