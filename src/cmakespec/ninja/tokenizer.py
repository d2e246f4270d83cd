"""Build-Statement Tokenizer.

This module classifies single lines of a ninja build file.

Design:
    - Linear character scanning only, no regular expressions
    - Recognizes `build <outputs>: ...` statement headers
    - Recognizes indented `key = value` variable assignments
    - Joins `$`-continued physical lines into logical lines
"""

from typing import Iterable, Iterator, Optional, Tuple

_WHITESPACE = " \t"
_BUILD_KEYWORD = "build"


def _is_identifier_char(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9")


def parse_build_header(line: str) -> Optional[str]:
    """Return the raw output list of a build statement header.

    The output list is everything between the whitespace following the
    `build` keyword and the first unescaped colon. `$:` and `$$` escapes are
    skipped over, never treated as terminators.

    Args:
        line: One logical line of the build file

    Returns:
        The output-list substring, or None if the line is not a header

    Example:
        >>> parse_build_header("build foo.o: CXX_COMPILER foo.cpp")
        'foo.o'
    """
    keyword_len = len(_BUILD_KEYWORD)
    if not line.startswith(_BUILD_KEYWORD):
        return None
    if len(line) <= keyword_len or line[keyword_len] not in _WHITESPACE:
        return None

    start = keyword_len
    length = len(line)
    while start < length and line[start] in _WHITESPACE:
        start += 1

    i = start
    while i < length:
        ch = line[i]
        if ch == "$":
            # Escaped character, never a terminator
            i += 2
            continue
        if ch == ":":
            return line[start:i].rstrip(_WHITESPACE)
        i += 1
    return None


def parse_assignment(line: str) -> Optional[Tuple[str, str]]:
    """Split an indented `key = value` line.

    Args:
        line: One logical line of the build file

    Returns:
        (key, value) with surrounding whitespace trimmed, or None if the line
        is not indented, has no `=`, or its key is not a plain identifier
    """
    if not line or line[0] not in _WHITESPACE:
        return None

    length = len(line)
    i = 0
    while i < length and line[i] in _WHITESPACE:
        i += 1
    key_start = i
    while i < length and _is_identifier_char(line[i]):
        i += 1
    key_end = i
    if key_end == key_start:
        return None
    while i < length and line[i] in _WHITESPACE:
        i += 1
    if i >= length or line[i] != "=":
        return None

    value = line[i + 1:].strip(_WHITESPACE)
    return line[key_start:key_end], value


def first_output(output_list: str) -> str:
    """Return the first path of a build statement output list, unescaped.

    Args:
        output_list: Raw output list as returned by parse_build_header()

    Returns:
        First output path with `$$`, `$ ` and `$:` escapes resolved (may be empty)
    """
    chars = []
    length = len(output_list)
    i = 0
    while i < length and output_list[i] in _WHITESPACE:
        i += 1
    while i < length:
        ch = output_list[i]
        if ch == "$" and i + 1 < length:
            chars.append(output_list[i + 1])
            i += 2
            continue
        if ch in _WHITESPACE or ch == "|":
            break
        chars.append(ch)
        i += 1
    return "".join(chars)


def _is_comment(line: str) -> bool:
    # Comments run to the end of the physical line; a trailing `$` is literal
    return line.lstrip(_WHITESPACE).startswith("#")


def _continues(line: str) -> bool:
    # An odd run of trailing `$` escapes the newline
    count = 0
    i = len(line) - 1
    while i >= 0 and line[i] == "$":
        count += 1
        i -= 1
    return count % 2 == 1


def logical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield logical lines with line endings removed and continuations joined.

    Args:
        lines: Physical lines, typically an open text file

    Yields:
        Logical lines of the build file
    """
    pending: Optional[str] = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        if pending is not None:
            line = pending + line.lstrip(_WHITESPACE)
            pending = None
        elif _is_comment(line):
            yield line
            continue
        if _continues(line):
            pending = line[:-1]
            continue
        yield line
    if pending is not None:
        yield pending
