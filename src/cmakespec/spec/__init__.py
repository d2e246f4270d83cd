"""
Target specification components for cmakespec.

This module provides:
- The TargetSpec data model and target key derivation
- Flag classification per compiler family
- Text and JSON emission
"""

from .models import PROBE_PREFIX, TargetSpec, file_stem, target_key

__all__ = [
    "PROBE_PREFIX",
    "TargetSpec",
    "file_stem",
    "target_key",
]
