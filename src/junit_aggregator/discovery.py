"""
Discovery of JUnit report files under a project directory.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import List, Set, Union

from .exceptions import InvalidPatternError, ReportReadError

logger = logging.getLogger(__name__)

REPORT_EXTENSION = ".xml"
RECURSIVE_WILDCARD = "**"


def validate_pattern(pattern: str) -> List[str]:
    """
    Check a report glob pattern and split it into path segments.

    Args:
        pattern: Pattern relative to the project directory, e.g.
            ``**/target/test-reports`` or ``build/**/TEST-*.xml``

    Returns:
        The non-empty segments of the pattern

    Raises:
        InvalidPatternError: If the pattern cannot be used for discovery
    """
    if not pattern or not pattern.strip():
        raise InvalidPatternError(pattern, "pattern is empty")
    if pattern.startswith("/"):
        raise InvalidPatternError(pattern, "pattern must be relative to the project directory")

    segments = [s for s in pattern.split("/") if s and s != "."]
    if not segments:
        raise InvalidPatternError(pattern, "pattern has no path segments")

    for segment in segments:
        if segment == "..":
            raise InvalidPatternError(pattern, "pattern must not leave the project directory")
        if RECURSIVE_WILDCARD in segment and segment != RECURSIVE_WILDCARD:
            raise InvalidPatternError(
                pattern, f"recursive wildcards must form a single path component: '{segment}'"
            )
        _check_character_classes(pattern, segment)

    return segments


def _check_character_classes(pattern: str, segment: str) -> None:
    i = 0
    while i < len(segment):
        if segment[i] != "[":
            i += 1
            continue
        j = i + 1
        if j < len(segment) and segment[j] == "!":
            j += 1
        # a leading ']' is part of the class
        if j < len(segment) and segment[j] == "]":
            j += 1
        end = segment.find("]", j)
        if end == -1:
            raise InvalidPatternError(pattern, f"unclosed character class in '{segment}'")
        i = end + 1


def discover_reports(base_dir: Union[str, Path], pattern: str) -> List[Path]:
    """
    Find the report files matching a pattern under a base directory.

    Matching is case-sensitive and done one path segment at a time, so a
    wildcard never matches a separator. Names starting with a dot only match
    a segment that starts with a literal dot, and ``**`` does not descend into
    hidden directories. A matched file is kept when it has the ``.xml``
    extension; a matched directory contributes the ``.xml`` files it directly
    contains.

    Args:
        base_dir: Project directory the pattern is anchored at
        pattern: Glob pattern, see validate_pattern

    Returns:
        Sorted list of report file paths

    Raises:
        InvalidPatternError: If the pattern is malformed (before any I/O)
        ReportReadError: If the base directory or a traversed directory
            cannot be listed
    """
    segments = validate_pattern(pattern)
    base = Path(base_dir)
    if not base.is_dir():
        raise ReportReadError(base, NotADirectoryError(f"not a directory: {base}"))

    matches: Set[Path] = set()
    _match(base, segments, matches)

    report_files: Set[Path] = set()
    for path in matches:
        if path.is_file():
            if path.suffix == REPORT_EXTENSION:
                report_files.add(path)
        elif path.is_dir():
            for entry in _list_dir(path):
                if entry.is_file() and entry.name.endswith(REPORT_EXTENSION):
                    report_files.add(Path(entry.path))

    files = sorted(report_files)
    logger.info("%d report files found under %s matching '%s'", len(files), base, pattern)
    return files


def _match(directory: Path, segments: List[str], matches: Set[Path]) -> None:
    if not segments:
        matches.add(directory)
        return

    head, rest = segments[0], segments[1:]
    if head == RECURSIVE_WILDCARD:
        _match(directory, rest, matches)
        for entry in _list_dir(directory):
            if entry.is_dir(follow_symlinks=False) and not entry.name.startswith("."):
                _match(Path(entry.path), segments, matches)
        return

    for entry in _list_dir(directory):
        if not _segment_matches(entry.name, head):
            continue
        if rest:
            if entry.is_dir():
                _match(Path(entry.path), rest, matches)
        else:
            matches.add(Path(entry.path))


def _segment_matches(name: str, segment: str) -> bool:
    if name.startswith(".") and not segment.startswith("."):
        return False
    return fnmatch.fnmatchcase(name, segment)


def _list_dir(directory: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda e: e.name)
    except OSError as e:
        raise ReportReadError(directory, e)
