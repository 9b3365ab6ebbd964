"""Exception types raised by casekit itself.

Faults raised by the code under test are never represented here: they are
captured by the runner and turned into verdicts.
"""
from __future__ import annotations


class CasekitError(Exception):
    """Base class for errors raised by casekit."""


class InvalidArgument(CasekitError, ValueError):
    """Bad input supplied when constructing a descriptor."""


class ConfigError(CasekitError, ValueError):
    """Settings file could not be parsed or failed validation."""


class DiscoveryError(CasekitError):
    """A fixture source could not be imported or inspected."""
