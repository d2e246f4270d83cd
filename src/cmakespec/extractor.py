"""Extraction entry point.

This module runs the whole extraction pipeline for one configured build tree:

    build.ninja    -> tokenizer -> assembler --+
                                               +-> flag classifier -> specs
    CMakeCache.txt -> compiler family ---------+

Either the complete mapping of target specifications is returned or an
ExtractionError is raised; there is no partial result.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from .config.cmake_cache import CMakeCacheError, read_compiler_family
from .config.extraction_config import ExtractionConfig
from .ninja.assembler import BuildGraphError, read_build_records
from .spec.flag_classifier import FlagClassifier
from .spec.models import TargetSpec


class ExtractionError(Exception):
    """Raised when a required input of the extraction is missing or unreadable."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


def extract(config: ExtractionConfig) -> Dict[str, TargetSpec]:
    """Extract per-target compiler/linker specifications.

    Args:
        config: Input paths and options of this run

    Returns:
        Mapping of target key to TargetSpec, sorted by key

    Raises:
        ExtractionError: If the cache or the build graph is missing or unreadable
    """
    try:
        family = read_compiler_family(config.cache_path)
    except CMakeCacheError as e:
        raise ExtractionError(str(e), config.cache_path) from e

    try:
        records = read_build_records(config.build_graph_path, config.probe_prefix)
    except BuildGraphError as e:
        raise ExtractionError(str(e), config.build_graph_path) from e

    if config.verbose:
        print(f"Compiler family: {family.value}", file=sys.stderr)
        print(f"Probe build statements: {len(records)}", file=sys.stderr)
        for record in records:
            print(f"  {record.target_name}", file=sys.stderr)
            for key, value in record.variables.items():
                print(f"    {key} = {value}", file=sys.stderr)

    classifier = FlagClassifier(family, posix=config.posix)
    classifier.add_records(records)
    specs = classifier.specs()

    if config.verbose:
        print(f"Targets: {', '.join(specs) or 'none'}", file=sys.stderr)

    return specs
