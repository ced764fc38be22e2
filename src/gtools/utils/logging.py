"""
Logging setup for gtools.

Log records go to stderr through rich so that stdout stays free for data
written by the CLI (window BED lines, tables). htslib, which pysam uses to
decode VCFs, prints its own warnings straight to stderr; they are muted
unless verbose logging is requested.
"""

import logging
import time
from collections.abc import Callable
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any

import pysam
from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "setup_logging",
    "timed",
    "log_call",
]

_console = Console(stderr=True)

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# htslib log levels: 0 off, 2 warnings, 3 info
_HTS_QUIET = 0
_HTS_VERBOSE = 3


def setup_logging(verbose: bool = False, log_file: str | Path | None = None) -> None:
    """
    Route gtools logging to the terminal and, optionally, a file.

    Args:
        verbose: DEBUG level and htslib diagnostics when True, INFO otherwise.
        log_file: Also append plain-text records to this file.
    """
    handlers: list[logging.Handler] = [
        RichHandler(console=_console, markup=False, show_path=verbose, rich_tracebacks=verbose)
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
    pysam.set_verbosity(_HTS_VERBOSE if verbose else _HTS_QUIET)


@contextmanager
def timed(operation: str, logger: logging.Logger | None = None):
    """
    Log the wall-clock time of a block at DEBUG.

    Example:
        with timed(f"Merging {path}", logger):
            merged = merge_by_chromosome(parse_bed(path))
    """
    log = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    try:
        yield
    finally:
        log.debug("%s took %.3fs", operation, time.perf_counter() - start)


def log_call(logger: logging.Logger | None = None) -> Callable:
    """
    Decorate a file parser so its input and duration are logged at DEBUG,
    and its failure at ERROR.

    The first positional argument is taken to be the input path.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = logger or logging.getLogger(func.__module__)
            source = args[0] if args else kwargs.get("path", "")
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error("%s(%s) failed: %s", func.__name__, source, e)
                raise
            log.debug("%s(%s) done in %.3fs", func.__name__, source, time.perf_counter() - start)
            return result

        return wrapper

    return decorator
