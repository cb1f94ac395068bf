# rpptools

Pure-Python building blocks for the toolchain of a small compiled language.
The package has no dependencies beyond the standard library.

## Modules

- `rpptools.bytestr` – helpers for `str` or `bytes` token text: character
  classes (`is_alpha`, `is_number`, `char_to_upper`, `char_to_num`),
  `is_number_str`, safe indexing that yields NUL out of range (`get`,
  `get_top`, `get_bottom`), scanf-style number reading (`scan_int` wraps to
  32 bits, `scan_uint`, `scan_double`), `hex_to_dec`, `bin_to_dec` and
  `join`.
- `rpptools.recordfile` – `RecordFile`, a single file of numbered
  variable-length records. It is created empty when the path does not
  exist, supports `append`, `read` / indexing, `write` (which marks the old
  copy dead and appends a new one), `find`, iteration and use as a context
  manager, and grows its index area in place with `extend`. Malformed files
  raise `RecordFileError`.
- `rpptools.words` – the compiler's data records: `Pos`, `Word` (with
  constant and identifier tests such as `is_name`, `is_cint`, `is_cdouble`,
  `is_cstr`), `Macro`, `Data`, `Sentence`, `Func` (with `get_dec`) and
  `ClassInfo`, plus the UTF-8 lead-byte tests `is_utf8_2` and `is_utf8_3`.
- `rpptools.supermac` – pattern macros: `match_here` / `match_multi`
  match token sequences with `_word` and `_mword` captures,
  `replace_super_word` expands `$N` and `$N => K` references, and
  `link_sharp` applies `#` quoting and `##` pasting.
- `rpptools.asmtext` – `OperandType`, `Operand` and `Instruction`;
  `parse_operand` reads immediates, string constants, registers and
  `[ reg ± n ]` addresses; `trans_cstr` decodes string-constant escapes;
  `find_comma`, `obtain_qrun_type`, `is_jmp_ins` and `get_reg_off`.
- `rpptools.nasm` – helpers for NASM text: `symbol_trans`, `add_str_one`,
  operand extraction (`get_opnd1`, `get_opnd2` and their `_v` forms),
  `link_vstr`, `count_mbk_l`, `proc_const_str`, `is_jmp_ins_nasm`,
  `have_single_esp` and `fix_esp`.
- `rpptools.control` – grouping a function's words into sentences
  (`obtain_sent`, `part_vsent`, `need_part`), appending jump tokens
  (`insert_jmp_asm`, `insert_cond_true_asm`, `insert_cond_false_asm`) and
  replacing label names with line numbers (`tag_replace_word`).

## Example

```python
from rpptools.recordfile import RecordFile

with RecordFile("data.rdb") as db:
    db.append(b"hello")
    db.append(b"world")
    print(db[1])              # b'world'
    print(db.find(b"hello"))  # 0
```

```python
from rpptools.supermac import match_here, replace_super_word
from rpptools.words import Word

captures = []
match_here(["_word", "(", "_mword", ")"], ["f", "(", "1", ",", "2", ")"], captures)
word = Word()
replace_super_word(word, ["call", "$", "0", "$", "1"], captures)
print(word.multi)  # ['call', 'f', '1', ',', '2']
```

## What this package does not do

It provides the pieces listed above, not a complete compiler: there is no
command-line program, no reading or tokenising of source files, no
ordinary macro substitution, no code generation of whole functions, no
virtual machine and no way to run compiled programs.

## Running the tests

```
pip install -e .[test]
pytest
```