"""
Unit tests for the build-graph assembler.
"""

import pytest

from cmakespec.ninja.assembler import (
    BuildGraphAssembler,
    BuildGraphError,
    BuildRecord,
    Idle,
    InStatement,
    iter_build_records,
    read_build_records,
)

SAMPLE_NINJA = """\
# CMAKE generated file: DO NOT EDIT!
ninja_required_version = 1.5

rule CXX_COMPILER___AUX_LIB_foo_
  command = /usr/bin/c++ $DEFINES $INCLUDES $FLAGS -o $out -c $in
  description = Building CXX object $out

build CMakeFiles/_AUX_LIB_foo.dir/_AUX_LIB_foo.cpp.o: CXX_COMPILER___AUX_LIB_foo_ /tmp/_AUX_LIB_foo.cpp || cmake_object_order_depends_target__AUX_LIB_foo
  DEFINES = -DFOO -DBAR=1
  DEP_FILE = CMakeFiles/_AUX_LIB_foo.dir/_AUX_LIB_foo.cpp.o.d
  FLAGS = -O2 -std=gnu++17
  INCLUDES = -I/opt/foo/include -isystem /opt/foo/sys
  OBJECT_DIR = CMakeFiles/_AUX_LIB_foo.dir

build main.o: CXX_COMPILER__main_ main.cpp
  DEFINES = -DMAIN
  FLAGS = -O0

build _AUX_LIB_foo: CXX_EXECUTABLE_LINKER___AUX_LIB_foo_ CMakeFiles/_AUX_LIB_foo.dir/_AUX_LIB_foo.cpp.o
  LINK_LIBRARIES = -lfoo -lbar baz.a
  LINK_PATH = -L/opt/foo/lib
  TARGET_FILE = _AUX_LIB_foo

build all: phony _AUX_LIB_foo main
"""


def _records(text, prefix="_AUX_LIB_"):
    return list(iter_build_records(text.splitlines(keepends=True), prefix))


class TestBuildGraphAssembler:
    """Test suite for the assembler state machine."""

    def test_initial_state_is_idle(self):
        assert isinstance(BuildGraphAssembler().state, Idle)

    def test_tracked_header_opens_statement(self):
        """Test a probe header moves to InStatement."""
        assembler = BuildGraphAssembler()
        assert assembler.feed("build _AUX_LIB_a.o: CXX a.cpp") is None
        assert isinstance(assembler.state, InStatement)
        assert assembler.state.target_name == "_AUX_LIB_a.o"

    def test_untracked_header_stays_idle(self):
        """Test a non-probe header is absorbed."""
        assembler = BuildGraphAssembler()
        assembler.feed("build main.o: CXX main.cpp")
        assert isinstance(assembler.state, Idle)
        assert assembler.feed("  DEFINES = -DX") is None
        assert assembler.flush() is None

    def test_blank_line_closes_statement(self):
        """Test a blank line emits the open statement."""
        assembler = BuildGraphAssembler()
        assembler.feed("build _AUX_LIB_a.o: CXX a.cpp")
        assembler.feed("  DEFINES = -DX")
        record = assembler.feed("")
        assert record == BuildRecord("_AUX_LIB_a.o", {"DEFINES": "-DX"})
        assert isinstance(assembler.state, Idle)

    def test_malformed_indented_line_closes_statement(self):
        """Test an indented non-assignment closes the statement."""
        assembler = BuildGraphAssembler()
        assembler.feed("build _AUX_LIB_a.o: CXX a.cpp")
        assembler.feed("  DEFINES = -DX")
        record = assembler.feed("  not an assignment")
        assert record is not None
        assert assembler.feed("  FLAGS = -O2") is None
        assert assembler.flush() is None

    def test_next_header_closes_statement(self):
        """Test a header emits the previous statement."""
        assembler = BuildGraphAssembler()
        assembler.feed("build _AUX_LIB_a.o: CXX a.cpp")
        assembler.feed("  FLAGS = -O2")
        record = assembler.feed("build _AUX_LIB_a: LINK _AUX_LIB_a.o")
        assert record.target_name == "_AUX_LIB_a.o"
        assert assembler.state.target_name == "_AUX_LIB_a"

    def test_statement_without_variables_is_dropped(self):
        assembler = BuildGraphAssembler()
        assembler.feed("build _AUX_LIB_a.o: CXX a.cpp")
        assert assembler.feed("") is None

    def test_repeated_key_last_write_wins(self):
        assembler = BuildGraphAssembler()
        assembler.feed("build _AUX_LIB_a.o: CXX a.cpp")
        assembler.feed("  FLAGS = -O0")
        assembler.feed("  FLAGS = -O3")
        assert assembler.flush().variables["FLAGS"] == "-O3"

    def test_record_variables_are_read_only(self):
        assembler = BuildGraphAssembler()
        assembler.feed("build _AUX_LIB_a.o: CXX a.cpp")
        assembler.feed("  FLAGS = -O0")
        record = assembler.flush()
        with pytest.raises(TypeError):
            record.variables["FLAGS"] = "-O3"

    def test_records_are_not_hashable(self):
        record = BuildRecord("_AUX_LIB_a.o", {"FLAGS": "-O0"})
        with pytest.raises(TypeError, match="unhashable"):
            hash(record)

    def test_custom_prefix(self):
        assembler = BuildGraphAssembler(probe_prefix="probe_")
        assert assembler.is_tracked("out/probe_x.o")
        assert not assembler.is_tracked("out/_AUX_LIB_x.o")
        assert not assembler.is_tracked("")


class TestIterBuildRecords:
    """Test suite for record streaming over whole files."""

    def test_scenario_single_define_statement(self):
        """Test one compile statement followed by a blank line."""
        text = "build _AUX_LIB_foo.cpp.obj: CXX_COMPILER x\n  DEFINES = -DFOO -DBAR=1\n\n"
        assert _records(text) == [
            BuildRecord("_AUX_LIB_foo.cpp.obj", {"DEFINES": "-DFOO -DBAR=1"})
        ]

    def test_sample_graph(self):
        """Test only probe statements are collected, in input order."""
        records = _records(SAMPLE_NINJA)
        assert [r.target_name for r in records] == [
            "CMakeFiles/_AUX_LIB_foo.dir/_AUX_LIB_foo.cpp.o",
            "_AUX_LIB_foo",
        ]
        assert records[0].variables["INCLUDES"] == "-I/opt/foo/include -isystem /opt/foo/sys"
        assert records[1].variables["LINK_LIBRARIES"] == "-lfoo -lbar baz.a"

    def test_untracked_statement_contributes_nothing(self):
        """Test main.exe with full variables yields no record."""
        text = (
            "build main.exe: CXX_EXECUTABLE_LINKER__main main.o\n"
            "  LINK_LIBRARIES = -lfoo\n"
            "  LINK_PATH = -L/lib\n"
            "  LINK_FLAGS = -static\n"
        )
        assert _records(text) == []

    def test_flush_at_end_of_stream(self):
        """Test a statement open at EOF is emitted."""
        text = "build _AUX_LIB_a: LINK a.o\n  LINK_FLAGS = -s"
        assert _records(text) == [BuildRecord("_AUX_LIB_a", {"LINK_FLAGS": "-s"})]

    def test_continuation_lines(self):
        text = "build _AUX_LIB_a.o: CXX a.cpp\n  FLAGS = -O2 $\n    -g\n"
        assert _records(text)[0].variables["FLAGS"] == "-O2 -g"

    def test_comment_ending_in_dollar_keeps_next_statement(self):
        text = "# comment ending in $\nbuild _AUX_LIB_a.o: CXX a.cpp\n  DEFINES = -DX\n"
        assert _records(text) == [BuildRecord("_AUX_LIB_a.o", {"DEFINES": "-DX"})]

    def test_idempotent(self):
        """Test two passes over the same input agree."""
        assert _records(SAMPLE_NINJA) == _records(SAMPLE_NINJA)

    def test_rule_variables_are_ignored(self):
        """Test indented lines under `rule` blocks are not collected."""
        text = "rule _AUX_LIB_rule\n  command = cc $in\n"
        assert _records(text) == []


class TestReadBuildRecords:
    """Test suite for reading build.ninja files."""

    def test_reads_file(self, write_file):
        path = write_file("build.ninja", SAMPLE_NINJA)
        records = read_build_records(path)
        assert len(records) == 2

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "build.ninja"
        with pytest.raises(BuildGraphError, match="not found"):
            read_build_records(missing)
