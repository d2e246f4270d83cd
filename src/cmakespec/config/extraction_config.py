"""Extraction run configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..spec.models import PROBE_PREFIX

BUILD_GRAPH_FILE_NAME = "build.ninja"
CMAKE_CACHE_FILE_NAME = "CMakeCache.txt"


@dataclass(frozen=True)
class ExtractionConfig:
    """Inputs and options of one extraction run.

    Attributes:
        build_graph_path: Path to the generated build.ninja
        cache_path: Path to the CMakeCache.txt of the same build tree
        verbose: Echo intermediate parse state (never alters results)
        probe_prefix: Output stem prefix marking probe targets
        posix: Command-line splitting convention (None = host convention)
    """

    build_graph_path: Path
    cache_path: Path
    verbose: bool = False
    probe_prefix: str = PROBE_PREFIX
    posix: Optional[bool] = None

    @classmethod
    def from_build_dir(cls, build_dir: Path, verbose: bool = False) -> "ExtractionConfig":
        """Create a config for a configured CMake/Ninja build directory."""
        return cls(
            build_graph_path=build_dir / BUILD_GRAPH_FILE_NAME,
            cache_path=build_dir / CMAKE_CACHE_FILE_NAME,
            verbose=verbose,
        )
