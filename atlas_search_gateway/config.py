"""Environment-driven configuration for the search gateway."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE = "sample_mflix"
DEFAULT_COLLECTION = "movies"
DEFAULT_INDEX = "default"
DEFAULT_ROUTE = "/search"


class ConfigError(RuntimeError):
    """Raised when required environment configuration is missing."""


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v not in (None, "") else default


def required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigError(f"{name} must be specified")
    return value


@dataclass(frozen=True)
class Cfg:
    atlas_uri: str

    # namespace and Atlas Search index
    database: str
    collection: str
    index: str

    # http surface
    route: str
    host: str
    port: int

    server_selection_timeout_ms: int
    log_level: str


def load_cfg() -> Cfg:
    load_dotenv()
    return Cfg(
        atlas_uri=required_env("ATLAS_URI"),
        database=_env("SEARCH_DATABASE", DEFAULT_DATABASE),
        collection=_env("SEARCH_COLLECTION", DEFAULT_COLLECTION),
        index=_env("SEARCH_INDEX", DEFAULT_INDEX),
        route=_env("SEARCH_ROUTE", DEFAULT_ROUTE),
        host=_env("HOST", "127.0.0.1"),
        port=int(_env("PORT", "8000")),
        server_selection_timeout_ms=int(_env("SERVER_SELECTION_TIMEOUT_MS", "10000")),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
