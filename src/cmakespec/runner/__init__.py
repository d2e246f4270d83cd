"""External tool orchestration for cmakespec."""

from .cmake_runner import CMakeRunError, CMakeRunner
from .project_stager import ProjectStager, StagingError
from .tool_checker import ToolCheckError, ToolChecker

__all__ = [
    "CMakeRunError",
    "CMakeRunner",
    "ProjectStager",
    "StagingError",
    "ToolCheckError",
    "ToolChecker",
]
