"""Build-Graph Assembler.

This module groups the variable assignments of a ninja build file under
their owning build statement and keeps only the probe-target statements.

Design:
    - Two-state machine: Idle, or InStatement(target, accumulator)
    - Statements for untracked outputs are absorbed without being stored
    - A blank line, an unindented line, a malformed indented line, or the
      next header closes the open statement
    - Records are produced lazily, in input order
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from ..spec.models import PROBE_PREFIX, file_stem
from .tokenizer import first_output, logical_lines, parse_assignment, parse_build_header


class BuildGraphError(Exception):
    """Raised when a build graph file cannot be read."""
    pass


@dataclass(frozen=True)
class BuildRecord:
    """One closed build statement belonging to a probe target.

    Records compare by value and are not hashable.
    """

    __hash__ = None  # type: ignore[assignment]

    target_name: str
    variables: Mapping[str, str]


@dataclass(frozen=True)
class Idle:
    """No statement is open, or the open statement is not tracked."""

    pass


@dataclass(frozen=True)
class InStatement:
    """A tracked statement is open and collecting variables."""

    target_name: str
    accumulator: Dict[str, str] = field(default_factory=dict)


AssemblerState = Union[Idle, InStatement]

_IDLE = Idle()


class BuildGraphAssembler:
    """Streams build-file lines into BuildRecord objects.

    Usage:
        assembler = BuildGraphAssembler()
        for line in lines:
            record = assembler.feed(line)
            ...
        record = assembler.flush()
    """

    def __init__(self, probe_prefix: str = PROBE_PREFIX):
        """Initialize assembler.

        Args:
            probe_prefix: Output stem prefix marking tracked statements
        """
        self.probe_prefix = probe_prefix
        self.state: AssemblerState = _IDLE

    def is_tracked(self, output_path: str) -> bool:
        return bool(output_path) and file_stem(output_path).startswith(self.probe_prefix)

    def feed(self, line: str) -> Optional[BuildRecord]:
        """Consume one logical line.

        Args:
            line: Logical line without its line ending

        Returns:
            The statement closed by this line, if it carried any variables
        """
        output_list = parse_build_header(line)
        if output_list is not None:
            record = self.flush()
            output_path = first_output(output_list)
            if self.is_tracked(output_path):
                self.state = InStatement(output_path)
            return record

        state = self.state
        if isinstance(state, InStatement):
            assignment = parse_assignment(line)
            if assignment is not None:
                key, value = assignment
                state.accumulator[key] = value
                return None
            return self.flush()

        return None

    def flush(self) -> Optional[BuildRecord]:
        """Close the open statement and return it if it has variables."""
        state = self.state
        self.state = _IDLE
        if isinstance(state, InStatement) and state.accumulator:
            return BuildRecord(
                target_name=state.target_name,
                variables=MappingProxyType(dict(state.accumulator)),
            )
        return None


def iter_build_records(
    lines: Iterable[str],
    probe_prefix: str = PROBE_PREFIX
) -> Iterator[BuildRecord]:
    """Yield probe-target build records from physical build-file lines.

    Args:
        lines: Physical lines of a ninja build file
        probe_prefix: Output stem prefix marking tracked statements

    Yields:
        BuildRecord objects in input order
    """
    assembler = BuildGraphAssembler(probe_prefix)
    for line in logical_lines(lines):
        record = assembler.feed(line)
        if record is not None:
            yield record
    record = assembler.flush()
    if record is not None:
        yield record


def read_build_records(
    build_graph_path: Path,
    probe_prefix: str = PROBE_PREFIX
) -> List[BuildRecord]:
    """Read all probe-target build records from a build.ninja file.

    Args:
        build_graph_path: Path to build.ninja
        probe_prefix: Output stem prefix marking tracked statements

    Returns:
        BuildRecord objects in file order

    Raises:
        BuildGraphError: If the file does not exist or cannot be read
    """
    if not build_graph_path.is_file():
        raise BuildGraphError(f"Build graph file not found: {build_graph_path}")

    try:
        with open(build_graph_path, "r", encoding="utf-8", errors="replace") as f:
            records = list(iter_build_records(f, probe_prefix))
    except OSError as e:
        raise BuildGraphError(f"Failed to read {build_graph_path}: {e}") from e

    logging.debug(f"Collected {len(records)} probe build records from {build_graph_path}")
    return records
