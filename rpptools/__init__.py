"""Compiler toolchain pieces: byte strings, record files, tokens, pattern macros, assembly text and sentence splitting."""

__version__ = "0.1.0"