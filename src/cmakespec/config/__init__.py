"""Configuration modules for cmakespec."""

from .cmake_cache import CMakeCacheError, CompilerFamily, detect_compiler_family, read_compiler_family
from .extraction_config import ExtractionConfig

__all__ = [
    "CMakeCacheError",
    "CompilerFamily",
    "detect_compiler_family",
    "read_compiler_family",
    "ExtractionConfig",
]
