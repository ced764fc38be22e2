"""
Line-oriented text reading shared by the format parsers.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from ..errors import InputFileNotFoundError, UnreadableFileError


@contextmanager
def open_text(path: Path | str) -> Iterator[TextIO]:
    """
    Open a UTF-8 input file, translating OS and decoding errors into
    gtools errors.
    """
    path = Path(path)
    if not path.exists():
        raise InputFileNotFoundError(path)
    try:
        handle = open(path, encoding="utf-8")
    except OSError as e:
        raise UnreadableFileError(path, e) from e
    with handle:
        try:
            yield handle
        except UnicodeDecodeError as e:
            # Lines are decoded lazily while the caller iterates
            raise UnreadableFileError(path, e) from e


def iter_fields(
    handle: TextIO,
    comment_prefixes: tuple[str, ...] = ("#",),
    delimiter: str | None = None,
) -> Iterator[tuple[int, list[str]]]:
    """
    Yield (1-based line number, fields) for every data line.

    Blank lines and lines starting with any of `comment_prefixes` are
    skipped. With delimiter=None, fields are split on any whitespace.
    """
    for line_number, line in enumerate(handle, start=1):
        stripped = line.rstrip("\r\n")
        if not stripped.strip() or stripped.startswith(comment_prefixes):
            continue
        if delimiter is None:
            yield line_number, stripped.split()
        else:
            yield line_number, stripped.split(delimiter)
