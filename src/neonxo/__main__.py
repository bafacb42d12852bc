"""Entry point for running NeonXO via ``python -m neonxo``."""

from __future__ import annotations

import logging
import os

import uvicorn


def resolve_log_level(name: str | None) -> int:
    """Map a level name like ``"debug"`` to its value, falling back to INFO."""

    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def main() -> None:
    """Start the FastAPI-powered NeonXO host."""

    host = os.environ.get("NEONXO_HOST", "0.0.0.0")
    port = int(os.environ.get("NEONXO_PORT", "8000"))
    logging.basicConfig(level=resolve_log_level(os.environ.get("NEONXO_LOG_LEVEL")))
    uvicorn.run("neonxo.ui:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
