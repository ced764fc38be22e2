"""
Utility modules for gtools.
"""

from .logging import log_call, setup_logging, timed

__all__ = [
    "log_call",
    "setup_logging",
    "timed",
]
