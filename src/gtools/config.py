"""Environment access and runtime settings for gtools."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

__all__ = ["Environment", "GtoolsSettings"]


class Environment:
    """
    Read-only view of environment variables.

    Components receive an Environment instead of reading os.environ
    directly, so tests can pass a plain dict.
    """

    def __init__(self, variables: Mapping[str, str] | None = None):
        self._variables = os.environ if variables is None else variables

    def get(self, name: str) -> str:
        """Return the value of `name`, or an empty string if it is unset."""
        return self._variables.get(name, "")


class GtoolsSettings(BaseModel):
    """
    Runtime settings, normally read from GTOOLS_* environment variables.
    """

    threads: int = Field(default=1, ge=1)
    window_size: int = Field(default=10, ge=1)
    data_dir: Path | None = None
    log_file: Path | None = None
    verbose: bool = False

    @field_validator("data_dir")
    @classmethod
    def validate_data_dir(cls, v: Path | None) -> Path | None:
        if v is not None and v.exists() and not v.is_dir():
            raise ValueError(f"Data directory must be a directory, not a file: {v}")
        return v

    @classmethod
    def from_environment(cls, env: Environment | None = None) -> "GtoolsSettings":
        """
        Build settings from GTOOLS_THREADS, GTOOLS_WINDOW_SIZE,
        GTOOLS_DATA_DIR, GTOOLS_LOG_FILE and GTOOLS_VERBOSE. Unset or empty
        variables keep their defaults.
        """
        env = env or Environment()
        values: dict[str, str] = {}
        for name in ("threads", "window_size", "data_dir", "log_file", "verbose"):
            raw = env.get(f"GTOOLS_{name.upper()}")
            if raw:
                values[name] = raw
        try:
            return cls(**values)
        except ValidationError:
            logger.error("Invalid GTOOLS_* environment settings: %s", values)
            raise

    def resolve(self, path: Path | str) -> Path:
        """Resolve a relative input path against data_dir, if one is set."""
        path = Path(path)
        if self.data_dir is None or path.is_absolute() or path.exists():
            return path
        return self.data_dir / path
