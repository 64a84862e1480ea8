"""
Errors raised while generating a report.
"""


class ReportError(Exception):
    """Base class for failures that abort a report run."""


class ConfigurationMissing(ReportError):
    """The category configuration is unreachable or empty."""


class ExternalFetchFailure(ReportError):
    """The event source or the report store failed."""
