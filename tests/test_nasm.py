import pytest

from rpptools.nasm import (
    add_str_one,
    count_mbk_l,
    fix_esp,
    get_opnd1,
    get_opnd1_v,
    get_opnd2,
    get_opnd2_v,
    have_single_esp,
    is_jmp_ins_nasm,
    link_vstr,
    proc_const_str,
    symbol_trans,
)

MOV_MEM = ["mov", "[", "ebp", "+", "8", "]", ",", "eax"]


def test_symbol_trans_main():
    assert symbol_trans("main.main()") == "main2Emain2829"


def test_symbol_trans_underscore():
    assert symbol_trans("rf.init_heap()") == "rf2Einit5Fheap2829"


def test_symbol_trans_keeps_alnum():
    assert symbol_trans("abc123XYZ") == "abc123XYZ"


def test_symbol_trans_is_alnum_only():
    out = symbol_trans("A.f(int,rstr&)")
    assert out.isalnum()


def test_add_str_one_layout():
    line = add_str_one(3, "ab\0")
    assert line.startswith("_RC_3: db ")
    assert line.endswith("0\n")
    numbers = line[len("_RC_3: db ") : -1].split(",")
    assert [int(n) for n in numbers[:-1]] == [ord(c) for c in "ab"]
    assert numbers[-1] == "0"


def test_add_str_one_empty_string():
    assert add_str_one(0, "\0") == "_RC_0: db 0\n"


def test_add_str_one_bytes_high():
    line = add_str_one(1, b"\xff\x00")
    assert line == "_RC_1: db 255,0\n"


@pytest.mark.parametrize("name", ["call", "je", "jne", "jg", "jbe"])
def test_is_jmp_ins_nasm_true(name):
    assert is_jmp_ins_nasm(name) is True


@pytest.mark.parametrize("name", ["mov", "jmp", "", "push"])
def test_is_jmp_ins_nasm_false(name):
    assert is_jmp_ins_nasm(name) is False


def test_link_vstr():
    assert link_vstr(["a", "b", "c"]) == "a b c"
    assert link_vstr([]) == ""


def test_operands_split():
    assert get_opnd1_v(MOV_MEM) == ["[", "ebp", "+", "8", "]"]
    assert get_opnd2_v(MOV_MEM) == ["eax"]
    assert get_opnd1(MOV_MEM) == "[ ebp + 8 ]"
    assert get_opnd2(MOV_MEM) == "eax"


def test_operands_skip_parenthesised_comma():
    tokens = ["mov", "f", "(", "a", ",", "b", ")", ",", "c"]
    assert get_opnd1_v(tokens) == ["f", "(", "a", ",", "b", ")"]
    assert get_opnd2_v(tokens) == ["c"]


def test_operands_without_comma():
    tokens = ["push", "eax"]
    assert get_opnd1_v(tokens) == ["eax"]
    assert get_opnd2_v(tokens) == []


def test_count_mbk_l():
    assert count_mbk_l(MOV_MEM) == 1
    assert count_mbk_l(["mov", "[", "esi", "]", ",", "[", "edi", "]"]) == 2
    assert count_mbk_l(["nop"]) == 0


def test_proc_const_str():
    consts = []
    out = proc_const_str(["push", '"abc"'], consts)
    assert out == ["push", "_RC_0"]
    assert consts == ['"abc"']
    out = proc_const_str(["mov", "eax", ",", '"x"'], consts)
    assert out == ["mov", "eax", ",", "_RC_1"]
    assert consts == ['"abc"', '"x"']


def test_proc_const_str_ignores_lone_quote():
    consts = []
    assert proc_const_str(['"', "eax"], consts) == ['"', "eax"]
    assert consts == []


def test_have_single_esp_true_cases():
    assert have_single_esp(["mov", "esp", ",", "4"]) is True
    assert have_single_esp(["mov", "[", "ebp", "+", "2", "]", ",", "eax"]) is True
    assert have_single_esp(["mov", "[", "ebp", "-", "8", "]", ",", "eax"]) is True
    assert have_single_esp(["push", '"x"']) is True


def test_have_single_esp_false_cases():
    assert have_single_esp(MOV_MEM) is False
    assert have_single_esp(["mov", "eax", ",", "1"]) is False


def test_fix_esp_lowers_displacement():
    out = fix_esp(MOV_MEM)
    assert out[4] == "4"
    assert out[:4] == MOV_MEM[:4]
    assert out[5:] == MOV_MEM[5:]
    assert MOV_MEM[4] == "8"


def test_fix_esp_leaves_other_tokens():
    tokens = ["mov", "eax", ",", "8"]
    assert fix_esp(tokens) == tokens
    tokens = ["mov", "[", "esp", "+", "x", "]"]
    assert fix_esp(tokens) == tokens