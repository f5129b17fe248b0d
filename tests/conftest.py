"""Shared fixtures: sample JUnit reports and report directory trees."""

from pathlib import Path

import pytest

SUCCESS_TESTSUITE_XML = """
<testsuite hostname="lenstop" name="com.example.LiveTopicCounterTest" tests="1" errors="0" failures="0" skipped="0" time="2.137" timestamp="2020-06-07T14:18:12">
  <properties></properties>
  <testcase classname="com.example.LiveTopicCounterTest" name="LiveTopicCounter should raise an error when the supplied topic does not exist" time="0.079">
  </testcase>
  <testcase classname="com.example.LiveTopicCounterTest" name="LiveTopicCounter should skip this test" time="0.001">
    <skipped/>
  </testcase>
</testsuite>
"""

FAILED_TESTSUITE_XML = """
<testsuite hostname="lenstop" name="com.example.LiveTopicCounterTest" tests="5" errors="0" failures="1" skipped="0" time="2.137" timestamp="2020-06-07T14:18:13">
  <properties></properties>
  <testcase classname="com.example.LiveTopicCounterTest" name="LiveTopicCounter should raise an error when the supplied topic does not exist" time="0.079">
  </testcase><testcase classname="com.example.LiveTopicCounterTest" name="TopicCounter should return a one element stream when called on an empty topic" time="0.466">
  </testcase><testcase classname="com.example.LiveTopicCounterTest" name="TopicCounter should return a running count of the records in a topic, terminating when the topic endOffset is reached" time="0.571">
com.example
  </testcase><testcase classname="com.example.LiveTopicCounterTest" name="TopicCounter should count a compacted topic and return a lower number than the total records produced" time="0.56">
  </testcase><testcase classname="com.example.LiveTopicCounterTest" name="TopicCounter should count a partitioned topic" time="0.461">
    <failure message="100 did not equal 101" type="org.scalatest.exceptions.TestFailedException">stack-trace...</failure>
  </testcase>
  <system-out><![CDATA[]]></system-out>
  <system-err><![CDATA[]]></system-err>
</testsuite>
"""


def create_report_tree(
    base_dir: Path,
    report_dirname: str = "testreports",
    directories: int = 3,
    depth: int = 2,
    successful: int = 7,
    failed: int = 3,
) -> None:
    """Create ``directories`` report directories, each ``depth`` levels deep."""
    for d in range(directories):
        reports_path = base_dir / f"module-{d}"
        for n in range(depth):
            reports_path = reports_path / str(n)
        reports_path = reports_path / report_dirname
        reports_path.mkdir(parents=True)

        for n in range(successful):
            (reports_path / f"{n}.xml").write_text(SUCCESS_TESTSUITE_XML)
        for n in range(successful, successful + failed):
            (reports_path / f"{n}.xml").write_text(FAILED_TESTSUITE_XML)


@pytest.fixture
def success_xml():
    return SUCCESS_TESTSUITE_XML.encode()


@pytest.fixture
def failed_xml():
    return FAILED_TESTSUITE_XML.encode()


@pytest.fixture
def report_tree(tmp_path):
    """Three report directories holding 7 passing and 3 failing suites each."""
    create_report_tree(tmp_path)
    return tmp_path
