"""CouchPatch settings."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(
    BaseSettings,
    case_sensitive=False,
    env_prefix="COUCHPATCH_",
    env_file=".env",
    extra="ignore",
):
    """Settings."""

    log_level: str = "WARNING"
    """Level handed to :func:`logging.basicConfig` by the command line."""

    log_file: Path | None = None
    """Write log records to this file instead of stderr."""

    indent: int | None = 2
    """Indentation of JSON written by the command line, ``None`` for compact."""

    ensure_ascii: bool = False
    """Escape non-ASCII characters in JSON output."""


settings = Settings()  # type: ignore
