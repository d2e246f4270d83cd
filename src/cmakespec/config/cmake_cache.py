"""
CMakeCache.txt reader and compiler-family detection.

This module reads the persisted `KEY:TYPE=VALUE` state written by a CMake
configure step and classifies the active C++ toolchain.

Example CMakeCache.txt lines:
    // Path to a program.
    CMAKE_CXX_COMPILER:FILEPATH=/usr/bin/g++
    CMAKE_BUILD_TYPE:STRING=Debug
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from ..spec.models import file_stem

CXX_COMPILER_KEY = "CMAKE_CXX_COMPILER"


class CMakeCacheError(Exception):
    """Exception raised when CMakeCache.txt cannot be read."""

    pass


class CompilerFamily(Enum):
    """Flag syntax family of the active C++ compiler."""

    GENERIC = "generic"
    MSVC_STYLE = "msvc"

    @classmethod
    def from_compiler_path(cls, compiler_path: str) -> "CompilerFamily":
        """
        Classify a compiler executable by its file stem.

        Args:
            compiler_path: Path to the C++ compiler executable

        Returns:
            MSVC_STYLE if the stem is `cl` (any case), GENERIC otherwise
        """
        if file_stem(compiler_path.strip()).lower() == "cl":
            return cls.MSVC_STYLE
        return cls.GENERIC


def find_cxx_compiler(lines: Iterable[str]) -> Optional[str]:
    """
    Return the value of the first `CMAKE_CXX_COMPILER*` entry.

    Scanning stops at the first line whose key starts with
    CMAKE_CXX_COMPILER, so later entries such as CMAKE_CXX_COMPILER_AR are
    never consulted once the compiler itself was seen.

    Args:
        lines: Lines of a CMakeCache.txt file

    Returns:
        Trimmed value right of `=`, or None if no such line exists
    """
    for raw in lines:
        line = raw.rstrip("\r\n")
        key, sep, value = line.partition("=")
        if not sep:
            continue
        if key.startswith(CXX_COMPILER_KEY):
            return value.strip()
    return None


def detect_compiler_family(lines: Iterable[str]) -> CompilerFamily:
    """
    Classify the compiler family from CMakeCache.txt lines.

    Returns:
        CompilerFamily, GENERIC when no compiler entry is present
    """
    compiler = find_cxx_compiler(lines)
    if compiler is None:
        logging.debug("No CMAKE_CXX_COMPILER entry found, assuming generic compiler")
        return CompilerFamily.GENERIC
    return CompilerFamily.from_compiler_path(compiler)


def read_compiler_family(cache_path: Path) -> CompilerFamily:
    """
    Read CMakeCache.txt and classify its C++ compiler.

    Args:
        cache_path: Path to CMakeCache.txt

    Returns:
        Detected CompilerFamily

    Raises:
        CMakeCacheError: If the file doesn't exist or cannot be read
    """
    if not cache_path.is_file():
        raise CMakeCacheError(f"CMake cache file not found: {cache_path}")

    try:
        with open(cache_path, "r", encoding="utf-8", errors="replace") as f:
            family = detect_compiler_family(f)
    except OSError as e:
        raise CMakeCacheError(f"Failed to read {cache_path}: {e}") from e

    logging.debug(f"Compiler family from {cache_path}: {family.value}")
    return family
