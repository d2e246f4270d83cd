"""cmakespec - dump compiler/linker specifications of CMake packages."""

__version__ = "0.1.0"
