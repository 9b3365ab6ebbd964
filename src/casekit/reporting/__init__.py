"""Reporting exports."""
from .base import ReportManager, Reporter, summarize
from .terminal import TerminalReporter
from .xml_report import XmlReporter, build_report

__all__ = [
    "ReportManager",
    "Reporter",
    "TerminalReporter",
    "XmlReporter",
    "build_report",
    "summarize",
]
