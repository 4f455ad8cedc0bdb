from __future__ import annotations

import argparse

import structlog
import uvicorn

from jokeapi.config import get_settings
from jokeapi.observability.logging import configure_logging


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Multilingual random joke API")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    args = parser.parse_args()

    configure_logging(settings.log_level, json_logs=settings.log_json)
    structlog.get_logger("server").info("server_starting", host=args.host, port=args.port)
    uvicorn.run("jokeapi.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
