import pytest

from rpptools.control import (
    insert_cond_false_asm,
    insert_cond_true_asm,
    insert_jmp_asm,
    need_part,
    obtain_sent,
    part_vsent,
    tag_replace_word,
)
from rpptools.words import Pos, Sentence, Word


def w(val, line=1):
    return Word(val=val, pos=Pos(line=line))


def vals(sentence):
    return [word.val for word in sentence.vword]


def test_need_part_false_for_plain_sentences():
    sents = [Sentence(vword=[w("a"), w("b")]), Sentence(vword=[w("c")])]
    assert need_part(sents) is False


def test_need_part_true_for_semicolon():
    sents = [Sentence(vword=[w("a"), w(";"), w("b")])]
    assert need_part(sents) is True


def test_need_part_true_for_empty_sentence():
    assert need_part([Sentence(vword=[w("a")]), Sentence()]) is True


def test_part_vsent_unchanged_when_no_split_needed():
    sents = [Sentence(vword=[w("a"), w("b")], type="int")]
    result = part_vsent(sents)
    assert len(result) == 1
    assert vals(result[0]) == ["a", "b"]
    assert result[0].type == "int"


def test_part_vsent_splits_and_keeps_position():
    sents = [
        Sentence(vword=[w("a"), w(";"), w("b"), w("c")], pos=Pos(line=7)),
        Sentence(vword=[w("d")], pos=Pos(line=9)),
    ]
    result = part_vsent(sents)
    assert [vals(s) for s in result] == [["a"], ["b", "c"], ["d"]]
    assert [s.pos.line for s in result] == [7, 7, 9]


def test_part_vsent_drops_empty_pieces():
    sents = [
        Sentence(vword=[w(";"), w(";")]),
        Sentence(),
        Sentence(vword=[w("x"), w(";")]),
    ]
    result = part_vsent(sents)
    assert [vals(s) for s in result] == [["x"]]
    assert not need_part(result)


def test_obtain_sent_splits_on_semicolon():
    words = [w("a"), w("="), w("1"), w(";"), w("b"), w(";")]
    result = obtain_sent(words)
    assert [vals(s) for s in result] == [["a", "=", "1"], ["b"]]


def test_obtain_sent_splits_on_line_change():
    words = [w("a", 1), w("b", 1), w("c", 2), w("d", 3), w(";", 3)]
    result = obtain_sent(words)
    assert [vals(s) for s in result] == [["a", "b"], ["c"], ["d"]]
    assert [s.pos.line for s in result] == [1, 2, 3]


def test_obtain_sent_semicolon_on_new_line_joins_previous():
    words = [w("a", 1), w(";", 2)]
    result = obtain_sent(words)
    assert [vals(s) for s in result] == [["a"]]


def test_obtain_sent_drops_unterminated_tail():
    words = [w("a", 1), w(";", 1), w("b", 1)]
    result = obtain_sent(words)
    assert [vals(s) for s in result] == [["a"]]


def test_obtain_sent_keeps_word_lines():
    words = [w("a", 1), w("b", 2), w(";", 2)]
    obtain_sent(words)
    assert [word.pos.line for word in words] == [1, 2, 2]


def test_insert_jmp_asm():
    word = w("x")
    insert_jmp_asm(word, w("y", 12))
    assert word.multi == [";", "jmp", "12"]
    assert word.val == "x"


def test_insert_cond_true_asm():
    multi = ["a", "<", "b"]
    insert_cond_true_asm(multi, w("z", 5))
    assert multi == ["a", "<", "b", ";", "jebxnz", "5"]


def test_insert_cond_false_asm():
    multi = ["c"]
    insert_cond_false_asm(multi, w("z", 8))
    assert multi == ["c", ";", "jebxz", "8"]


def test_tag_replace_word_replaces_matching_label():
    word = w("next")
    tag_replace_word(word, [w("end", 20), w("next", 14)])
    assert word.val == "14"


def test_tag_replace_word_leaves_other_words():
    word = w("push")
    tag_replace_word(word, [w("end", 20)])
    assert word.val == "push"


@pytest.mark.parametrize("line", [0, 3, 100])
def test_jump_target_uses_target_line(line):
    word = w("x")
    insert_jmp_asm(word, w("t", line))
    assert word.multi[-1] == str(line)