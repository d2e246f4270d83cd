"""Probe project staging.

This module prepares the temporary CMake project that hosts the probe
targets: it recreates the staging directory and writes the bundled
CMakeLists.txt and TestTargets.cmake templates into it.
"""

import shutil
from pathlib import Path
from typing import List

ASSETS_DIR = Path(__file__).parent.parent / "assets"
TEMPLATE_FILES = ("CMakeLists.txt", "TestTargets.cmake")


class StagingError(Exception):
    """Raised when the probe project cannot be staged."""
    pass


class ProjectStager:
    """Writes the probe CMake project into a staging directory."""

    def __init__(self, staging_dir: Path, assets_dir: Path = ASSETS_DIR):
        """Initialize project stager.

        Args:
            staging_dir: Directory to (re)create for the probe project
            assets_dir: Directory holding the template files
        """
        self.staging_dir = staging_dir
        self.assets_dir = assets_dir

    def stage(self, script: Path) -> List[Path]:
        """Recreate the staging directory and write the templates.

        Any existing staging directory is removed first.

        Args:
            script: User CMake script that declares the probe targets

        Returns:
            Paths of the written template files

        Raises:
            StagingError: If the script is missing or a file cannot be written
        """
        if self.staging_dir.exists():
            shutil.rmtree(self.staging_dir)
        self.staging_dir.mkdir(parents=True)

        if not script.is_file():
            raise StagingError(f"failed to read file: {script}")

        written = []
        for name in TEMPLATE_FILES:
            source = self.assets_dir / name
            target = self.staging_dir / name
            try:
                target.write_bytes(source.read_bytes())
            except OSError as e:
                raise StagingError(f"failed to open file: {target}: {e}") from e
            written.append(target)
        return written
