#!/usr/bin/env python3
"""Start the search gateway under uvicorn."""

import sys

import uvicorn

from .app import create_app
from .config import ConfigError, load_cfg
from .logs import setup_logging


def main() -> int:
    try:
        cfg = load_cfg()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    setup_logging(cfg.log_level)
    uvicorn.run(create_app(cfg), host=cfg.host, port=cfg.port, log_level=cfg.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
