"""Run the example fixtures programmatically and print the XML result tree."""
import xml.etree.ElementTree as ET
from pathlib import Path

from casekit import ExecutionContext, TestRunner, load_fixtures
from casekit.reporting import build_report


def main() -> None:
    fixtures = load_fixtures(Path(__file__).with_name("fixtures.py"))
    cases = [case for fixture in fixtures for case in fixture.tests]
    results = TestRunner(ExecutionContext()).run(cases)
    root = build_report(fixtures, results)
    ET.indent(root)
    print(ET.tostring(root, encoding="unicode"))


if __name__ == "__main__":
    main()
