"""CMake configure step.

This module runs `cmake` with the Ninja generator inside the staging
directory, producing build/build.ninja and build/CMakeCache.txt.

Design:
    - Output is streamed to stderr in verbose mode, captured otherwise
    - Captured output is attached to the error when configuration fails
    - On KeyboardInterrupt the whole cmake process tree is terminated
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from .process_utils import format_command, kill_process_tree

BUILD_SUBDIR = "build"


class CMakeRunError(Exception):
    """Raised when the CMake configure step fails."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class CMakeRunner:
    """Configures the staged probe project with CMake and Ninja."""

    def __init__(
        self,
        cmake_path: Path,
        ninja_path: Path,
        staging_dir: Path,
        verbose: bool = False
    ):
        """Initialize CMake runner.

        Args:
            cmake_path: CMake executable
            ninja_path: Ninja executable, passed as CMAKE_MAKE_PROGRAM
            staging_dir: Staged probe project directory
            verbose: Print the command and stream cmake output
        """
        self.cmake_path = cmake_path
        self.ninja_path = ninja_path
        self.staging_dir = staging_dir
        self.verbose = verbose

    @property
    def build_dir(self) -> Path:
        return self.staging_dir / BUILD_SUBDIR

    def build_command(self, script: Path, extra_args: Optional[List[str]] = None) -> List[str]:
        """Build the cmake configure command line."""
        cmd = [
            str(self.cmake_path),
            "-S",
            ".",
            "-B",
            BUILD_SUBDIR,
            "-G",
            "Ninja",
            f"-DCMAKE_MAKE_PROGRAM:FILEPATH={self.ninja_path}",
            f"-DCMAKESPEC_FIND_SCRIPT:FILEPATH={script}",
        ]
        cmd.extend(extra_args or [])
        return cmd

    def configure(self, script: Path, extra_args: Optional[List[str]] = None) -> Path:
        """Run the configure step.

        Args:
            script: User CMake script declaring the probe targets
            extra_args: Extra arguments appended to the cmake command

        Returns:
            Path to the generated build directory

        Raises:
            CMakeRunError: If cmake cannot be started or exits with non-zero code
        """
        cmd = self.build_command(script, extra_args)
        if self.verbose:
            print(format_command(cmd), file=sys.stderr)

        try:
            proc = subprocess.Popen(
                cmd,
                cwd=self.staging_dir,
                stdout=sys.stderr if self.verbose else subprocess.PIPE,
                stderr=None if self.verbose else subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise CMakeRunError(f"execute cmake failed: {e}") from e

        try:
            output, _ = proc.communicate()
        except KeyboardInterrupt:
            killed = kill_process_tree(proc.pid)
            logging.info(f"Interrupted cmake, terminated {killed} processes")
            raise

        if proc.returncode != 0:
            raise CMakeRunError(
                f"execute cmake failed: process exits with code {proc.returncode}",
                output or "",
            )

        logging.info(f"Configured probe project in {self.build_dir}")
        return self.build_dir
