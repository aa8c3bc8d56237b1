"""Uvicorn entrypoint: ``uvicorn fairway.api.main:app``."""

from __future__ import annotations

import uvicorn

from fairway.api.api_config import get_api_config
from fairway.api.app import app

__all__ = ["app", "run"]


def run() -> None:
    config = get_api_config()
    uvicorn.run("fairway.api.main:app", host=config.host, port=config.port)


if __name__ == "__main__":
    run()
