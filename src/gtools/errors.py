"""
Exception hierarchy for gtools.

All errors derive from GtoolsError. It is deliberately not a ValueError so
that it propagates unchanged out of pydantic validators instead of being
folded into a ValidationError.
"""

from pathlib import Path

__all__ = [
    "GtoolsError",
    "InputFileNotFoundError",
    "InvalidIntervalError",
    "InvalidWindowSizeError",
    "MalformedLineError",
    "UnknownChromosomeError",
    "UnreadableFileError",
]


class GtoolsError(Exception):
    """Base class for all gtools errors."""

    def __init__(self, message: str):
        super().__init__(message)
        # Set by multi-file readers to the results of files parsed before the failing one
        self.completed: list = []


class InvalidIntervalError(GtoolsError):
    """Raised when an interval is constructed with start > stop."""

    def __init__(self, chrom: str, start: int, stop: int):
        self.chrom = chrom
        self.start = start
        self.stop = stop
        super().__init__(f"Invalid interval {chrom}:{start}-{stop}: start must be <= stop")

    def __reduce__(self):
        return (type(self), (self.chrom, self.start, self.stop))


class InvalidWindowSizeError(GtoolsError):
    """Raised when a window size is not a positive integer."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(f"Window size must be a positive integer, got {size}")

    def __reduce__(self):
        return (type(self), (self.size,))


class MalformedLineError(GtoolsError):
    """A data line does not match the grammar of its format."""

    def __init__(self, path: Path | str, line_number: int, reason: str):
        self.path = Path(path)
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{self.path}:{line_number}: {reason}")

    def __reduce__(self):
        return (type(self), (self.path, self.line_number, self.reason))


class InputFileNotFoundError(GtoolsError, FileNotFoundError):
    """An input file does not exist."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Input file not found: {self.path}")

    def __reduce__(self):
        return (type(self), (self.path,))


class UnreadableFileError(GtoolsError, OSError):
    """An input file exists but cannot be read or decoded."""

    def __init__(self, path: Path | str, cause: Exception | None = None):
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot read input file {self.path}{detail}")

    def __reduce__(self):
        return (type(self), (self.path, self.cause))


class UnknownChromosomeError(GtoolsError):
    """A chromosome is missing from an explicit chromosome ordering table."""

    def __init__(self, chrom: str):
        self.chrom = chrom
        super().__init__(f"Chromosome '{chrom}' is not in the chromosome ordering table")

    def __reduce__(self):
        return (type(self), (self.chrom,))
