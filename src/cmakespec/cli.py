"""
Command-line interface for cmakespec.

This module provides the `cmakespec` CLI tool for dumping the compiler and
linker specification of CMake packages.
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from cmakespec import __version__
from cmakespec.cli_utils import ErrorFormatter, PathValidator, setup_logging
from cmakespec.config import ExtractionConfig
from cmakespec.extractor import ExtractionError, extract
from cmakespec.runner import (
    CMakeRunError,
    CMakeRunner,
    ProjectStager,
    StagingError,
    ToolCheckError,
    ToolChecker,
)
from cmakespec.spec.emitter import FORMATS, EmitterError, emit


@dataclass
class RunContext:
    """Arguments for the dump command."""

    script: Path
    cmake_path: Path = Path("cmake")
    ninja_path: Path = Path("ninja")
    staging_dir: Path = field(default_factory=lambda: Path.cwd() / "build")
    output: Optional[Path] = None
    output_format: str = "text"
    extra_args: List[str] = field(default_factory=list)
    verbose: bool = False


@dataclass
class ParseArgs:
    """Arguments for the parse command."""

    build_dir: Path
    output: Optional[Path] = None
    output_format: str = "text"
    verbose: bool = False


def _extract_and_emit(config: ExtractionConfig, output: Optional[Path], output_format: str) -> None:
    specs = extract(config)
    emit(specs, output=output, fmt=output_format)
    if output is not None:
        ErrorFormatter.print_success(f"Wrote {len(specs)} targets to {output}")


def dump_command(ctx: RunContext) -> None:
    """Configure a probe project and dump the specification of its targets.

    Examples:
        cmakespec dump find_zlib.cmake                 # Print to stdout
        cmakespec dump find_zlib.cmake -o zlib.json --format json
        cmakespec dump find_zlib.cmake -- -DCMAKE_BUILD_TYPE=Release
    """
    try:
        checker = ToolChecker(ctx.cmake_path, ctx.ninja_path, verbose=ctx.verbose)
        checker.check_cmake()
        checker.check_ninja()

        script = ctx.script.resolve()
        ProjectStager(ctx.staging_dir).stage(script)

        runner = CMakeRunner(ctx.cmake_path, ctx.ninja_path, ctx.staging_dir, verbose=ctx.verbose)
        build_dir = runner.configure(script, ctx.extra_args)

        config = ExtractionConfig.from_build_dir(build_dir, verbose=ctx.verbose)
        _extract_and_emit(config, ctx.output, ctx.output_format)
        sys.exit(0)

    except ToolCheckError as e:
        ErrorFormatter.handle_failure("Tool check failed", e)
    except StagingError as e:
        ErrorFormatter.handle_file_not_found(e)
    except CMakeRunError as e:
        ErrorFormatter.handle_failure("CMake configure failed", e, verbose=True)
    except ExtractionError as e:
        ErrorFormatter.handle_file_not_found(e)
    except EmitterError as e:
        ErrorFormatter.handle_failure("Output failed", e)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, ctx.verbose)


def parse_command(args: ParseArgs) -> None:
    """Dump the specification from an already configured build directory.

    Examples:
        cmakespec parse build/build            # Directory with build.ninja
        cmakespec parse build/build --format json -o spec.json
    """
    try:
        config = ExtractionConfig.from_build_dir(args.build_dir, verbose=args.verbose)
        _extract_and_emit(config, args.output, args.output_format)
        sys.exit(0)

    except ExtractionError as e:
        ErrorFormatter.handle_file_not_found(e)
    except EmitterError as e:
        ErrorFormatter.handle_failure("Output failed", e)
    except PermissionError as e:
        ErrorFormatter.handle_permission_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        type=Path,
        help="Output file path (default: standard output)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=FORMATS,
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show commands and intermediate parse state",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmakespec",
        description="Dump CMake package specification.",
        epilog="Arguments after -- are passed to cmake by the dump command.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cmakespec {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Dump command
    dump_parser = subparsers.add_parser(
        "dump",
        help="Configure a probe project and dump its target specification",
    )
    dump_parser.add_argument(
        "script",
        type=Path,
        help="Template CMake script declaring the probe targets",
    )
    dump_parser.add_argument(
        "--cmake",
        dest="cmake_path",
        default=Path("cmake"),
        type=Path,
        help="Path to CMake executable",
    )
    dump_parser.add_argument(
        "--ninja",
        dest="ninja_path",
        default=Path("ninja"),
        type=Path,
        help="Path to Ninja executable",
    )
    dump_parser.add_argument(
        "--dir",
        dest="staging_dir",
        default=None,
        type=Path,
        help="Path to the temporary directory for CMake configuration (default: ./build)",
    )
    _add_output_arguments(dump_parser)

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Dump the target specification of a configured build directory",
    )
    parse_parser.add_argument(
        "build_dir",
        type=Path,
        help="Build directory containing build.ninja and CMakeCache.txt",
    )
    _add_output_arguments(parse_parser)

    return parser


def split_extra_args(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Split argv at the first `--` into own arguments and extra CMake arguments.

    Example:
        >>> split_extra_args(["dump", "find.cmake", "--", "-DFOO=1"])
        (['dump', 'find.cmake'], ['-DFOO=1'])
    """
    if "--" not in argv:
        return list(argv), []
    index = argv.index("--")
    return list(argv[:index]), list(argv[index + 1:])


def main(argv: Optional[List[str]] = None) -> None:
    """cmakespec - dump compiler/linker specifications of CMake packages."""
    own_args, extra_args = split_extra_args(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    parsed_args = parser.parse_args(own_args)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(parsed_args.verbose)

    if parsed_args.command == "dump":
        PathValidator.validate_file(parsed_args.script)
        staging_dir = parsed_args.staging_dir
        ctx = RunContext(
            script=parsed_args.script,
            cmake_path=parsed_args.cmake_path,
            ninja_path=parsed_args.ninja_path,
            staging_dir=staging_dir.resolve() if staging_dir else Path.cwd() / "build",
            output=parsed_args.output,
            output_format=parsed_args.output_format,
            extra_args=extra_args,
            verbose=parsed_args.verbose,
        )
        dump_command(ctx)
    elif parsed_args.command == "parse":
        if extra_args:
            parser.error(f"arguments after -- are only accepted by dump: {' '.join(extra_args)}")
        PathValidator.validate_dir(parsed_args.build_dir)
        parse_args = ParseArgs(
            build_dir=parsed_args.build_dir,
            output=parsed_args.output,
            output_format=parsed_args.output_format,
            verbose=parsed_args.verbose,
        )
        parse_command(parse_args)


if __name__ == "__main__":
    main()
