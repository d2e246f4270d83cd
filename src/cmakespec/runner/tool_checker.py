"""External tool checks.

This module verifies that the CMake and Ninja executables can be launched
and reports their versions.
"""

import re
import subprocess
import sys
from pathlib import Path
from typing import List

from .process_utils import format_command

_CMAKE_VERSION_RE = re.compile(r"cmake version (.+)")


class ToolCheckError(Exception):
    """Raised when an external tool is missing or misbehaves."""
    pass


class ToolChecker:
    """Checks the CMake and Ninja executables before a run.

    Usage:
        checker = ToolChecker(Path("cmake"), Path("ninja"), verbose=True)
        cmake_version = checker.check_cmake()
        ninja_version = checker.check_ninja()
    """

    def __init__(self, cmake_path: Path, ninja_path: Path, verbose: bool = False, timeout: int = 60):
        """Initialize tool checker.

        Args:
            cmake_path: CMake executable (name on PATH or full path)
            ninja_path: Ninja executable (name on PATH or full path)
            verbose: Print the commands run and the versions found
            timeout: Seconds to wait for each `--version` call
        """
        self.cmake_path = cmake_path
        self.ninja_path = ninja_path
        self.verbose = verbose
        self.timeout = timeout

    def _version_output(self, tool: str, cmd: List[str]) -> str:
        if self.verbose:
            print(format_command(cmd), file=sys.stderr)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            raise ToolCheckError(f"check {tool} failed: timed out after {self.timeout}s")
        except OSError as e:
            raise ToolCheckError(f"check {tool} failed: {e}") from e

        if result.returncode != 0:
            raise ToolCheckError(
                f"check {tool} failed: process exits with code {result.returncode}"
            )
        return result.stdout

    def check_cmake(self) -> str:
        """Run `cmake --version` and return the version string.

        Expected output:
            cmake version 3.28.1

            CMake suite maintained and supported by Kitware (kitware.com/cmake).

        Raises:
            ToolCheckError: If cmake cannot be run or prints no version
        """
        output = self._version_output("cmake", [str(self.cmake_path), "--version"])
        first_line = output.splitlines()[0] if output else ""
        match = _CMAKE_VERSION_RE.search(first_line)
        if not match:
            raise ToolCheckError("check cmake failed: failed to get version")

        version = match.group(1).strip()
        if self.verbose:
            print(f"cmake version: {version}", file=sys.stderr)
        return version

    def check_ninja(self) -> str:
        """Run `ninja --version` and return its first output line.

        Raises:
            ToolCheckError: If ninja cannot be run or prints nothing
        """
        output = self._version_output("ninja", [str(self.ninja_path), "--version"])
        for line in output.splitlines():
            if line.strip():
                version = line.strip()
                if self.verbose:
                    print(f"ninja version: {version}", file=sys.stderr)
                return version
        raise ToolCheckError("check ninja failed: failed to get version")
