"""Configuration for environment variables and runtime knobs.

Provides a simple config object with data paths, OpenAI settings and
ingestion parameters. This keeps the rest of the codebase decoupled from
direct env access.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from cowriter.errors import InvalidInput

load_dotenv()

ALLOWED_ENVS = ("dev", "test", "production")


def env_number(name: str, default: str, cast=float):
    """Read a numeric env var, raising InvalidInput when it does not parse."""
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        raise InvalidInput(f"{cast.__name__} {name}", raw) from None


class Config:
    # Base
    COWRITER_ENV = os.getenv("COWRITER_ENV", "dev")
    DATA_DIR = os.getenv("COWRITER_DATA_DIR", os.path.abspath(os.path.join(os.getcwd(), "data")))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Subdirs
    DB_DIR = os.path.join(DATA_DIR, "db")

    # OpenAI
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    SHARED_VECTOR_STORE_NAME = os.getenv("SHARED_VECTOR_STORE_NAME", "Shared files")

    # Vector store ingestion
    VECTOR_STORE_POLL_INTERVAL = env_number("VECTOR_STORE_POLL_INTERVAL", "2.5", float)
    # Only the first page of files is listed
    VECTOR_STORE_FILES_LIMIT = env_number("VECTOR_STORE_FILES_LIMIT", "100", int)
    MAX_UPLOAD_MB = env_number("MAX_UPLOAD_MB", "50", int)

    # Export; the reference doc controls DOCX styles, not content
    PANDOC_REFERENCE_DOC = os.getenv(
        "PANDOC_REFERENCE_DOC", os.path.join(os.getcwd(), "templates", "reference.docx")
    )


def ensure_data_dirs(cfg: Config = Config) -> None:
    """Ensure required data directories exist."""
    for p in [cfg.DATA_DIR, cfg.DB_DIR]:
        os.makedirs(p, exist_ok=True)


def validate_config(cfg: Config = Config) -> None:
    """Fail fast on malformed static configuration."""
    if cfg.COWRITER_ENV not in ALLOWED_ENVS:
        raise InvalidInput(f"COWRITER_ENV in {', '.join(ALLOWED_ENVS)}", cfg.COWRITER_ENV)
    if not (cfg.OPENAI_MODEL or "").strip():
        raise InvalidInput("non-empty OPENAI_MODEL", repr(cfg.OPENAI_MODEL))
    if not (cfg.SHARED_VECTOR_STORE_NAME or "").strip():
        raise InvalidInput("non-empty SHARED_VECTOR_STORE_NAME", repr(cfg.SHARED_VECTOR_STORE_NAME))
    if cfg.VECTOR_STORE_POLL_INTERVAL <= 0:
        raise InvalidInput("positive VECTOR_STORE_POLL_INTERVAL", cfg.VECTOR_STORE_POLL_INTERVAL)
