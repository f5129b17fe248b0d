"""
Decoding of JUnit XML report files into test suites.
"""

import logging
import xml.etree.ElementTree as ET
from datetime import timedelta
from pathlib import Path
from typing import List, Optional, Union

from .durations import parse_seconds
from .exceptions import ReportDecodeError, ReportReadError
from .models import SuiteResult, TestCase, TestFailure, TestSuite
from .results import with_summary

logger = logging.getLogger(__name__)

SUITE_TAG = "testsuite"
SUITES_TAG = "testsuites"


def decode_suites(
    content: bytes, source: Optional[Union[str, Path]] = None
) -> List[SuiteResult]:
    """
    Decode the content of one report file.

    The root is either a single <testsuite> or a <testsuites> element wrapping
    any number of them. Counters embedded in the document (tests, failures,
    errors, skipped) are ignored; summaries are derived from the test cases.

    Args:
        content: Raw bytes of the report file
        source: Path of the file, used in error messages

    Returns:
        One SuiteResult per suite, in document order

    Raises:
        ReportDecodeError: If the content is not well-formed XML, has an
            unexpected root element or lacks a required attribute
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ReportDecodeError(source, f"malformed XML: {e}")

    if root.tag == SUITE_TAG:
        elements = [root]
    elif root.tag == SUITES_TAG:
        elements = root.findall(SUITE_TAG)
    else:
        raise ReportDecodeError(
            source,
            f"expected <{SUITE_TAG}> or <{SUITES_TAG}> root element, got <{root.tag}>",
        )

    return [with_summary(_decode_suite(element, source)) for element in elements]


def read_report(path: Union[str, Path]) -> List[SuiteResult]:
    """
    Read and decode a report file.

    Raises:
        ReportReadError: If the file cannot be opened or read
        ReportDecodeError: If the file content cannot be decoded
    """
    path = Path(path)
    logger.debug("Parsing JUnit report: %s", path)
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ReportReadError(path, e)
    return decode_suites(content, source=path)


def _decode_suite(element: ET.Element, source: Optional[Union[str, Path]]) -> TestSuite:
    name = _required(element, "name", source)
    return TestSuite(
        name=name,
        time=_time(element, source, f"testsuite '{name}'"),
        timestamp=element.get("timestamp"),
        testcases=tuple(_decode_case(e, source) for e in element.findall("testcase")),
    )


def _decode_case(element: ET.Element, source: Optional[Union[str, Path]]) -> TestCase:
    name = _required(element, "name", source)
    return TestCase(
        name=name,
        classname=element.get("classname", ""),
        time=_time(element, source, f"testcase '{name}'"),
        failure=_decode_failure(element.find("failure")),
        error=_decode_failure(element.find("error")),
        skipped=element.find("skipped") is not None,
    )


def _decode_failure(element: Optional[ET.Element]) -> Optional[TestFailure]:
    if element is None:
        return None
    return TestFailure(
        message=element.get("message"),
        type=element.get("type", ""),
        stack_trace=element.text or "",
    )


def _required(
    element: ET.Element, attribute: str, source: Optional[Union[str, Path]]
) -> str:
    value = element.get(attribute)
    if value is None:
        raise ReportDecodeError(
            source, f"<{element.tag}> is missing the '{attribute}' attribute"
        )
    return value


def _time(element: ET.Element, source: Optional[Union[str, Path]], what: str) -> timedelta:
    raw = element.get("time")
    if raw is None:
        return timedelta(0)
    try:
        return parse_seconds(raw)
    except ValueError:
        raise ReportDecodeError(source, f"{what} has an invalid time: '{raw}'")
