"""Ninja build-file parsing for cmakespec."""

from .assembler import (
    BuildGraphAssembler,
    BuildGraphError,
    BuildRecord,
    iter_build_records,
    read_build_records,
)
from .tokenizer import first_output, logical_lines, parse_assignment, parse_build_header

__all__ = [
    "BuildGraphAssembler",
    "BuildGraphError",
    "BuildRecord",
    "iter_build_records",
    "read_build_records",
    "first_output",
    "logical_lines",
    "parse_assignment",
    "parse_build_header",
]
