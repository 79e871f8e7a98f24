"""
Failure kinds of the analysis run.

Every stage raises a subclass of `AnalysisError` so `run_analysis.py` can
report which stage aborted the run and with what value.
"""


class AnalysisError(Exception):
    stage = "analysis"

    def __init__(self, message, stage=None):
        super().__init__(message)
        if stage:
            self.stage = stage


class FetchError(AnalysisError):
    """The remote dataset could not be downloaded."""
    stage = "load"

    def __init__(self, url, cause):
        super().__init__(f"Unable to download {url}: {cause}")
        self.url = url
        self.cause = cause


class ParseError(AnalysisError):
    """A date or time value does not match its expected format."""
    stage = "clean"

    def __init__(self, column, value, row, fmt):
        super().__init__(f"Cannot parse {column}={value!r} at row {row} (expected {fmt})")
        self.column = column
        self.value = value
        self.row = row


class InsufficientDataError(AnalysisError):
    stage = "regression"


class DivisionByZeroError(AnalysisError, ZeroDivisionError):
    stage = "regression"
