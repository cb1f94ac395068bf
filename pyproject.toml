[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpptools"
version = "0.1.0"
description = "Building blocks of a small compiler toolchain: byte-string helpers, an indexed record file, token structures, pattern macros, assembly operand parsing, NASM text helpers and sentence splitting."
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "macro", "nasm", "assembler", "tokens"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rpptools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
