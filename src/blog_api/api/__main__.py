"""
blog_api.api.__main__

Entrypoint for running the API via `python -m blog_api.api` (or the `blog-api` script).

Responsibilities:
- Load settings from the environment; `--host`/`--port` override them.
- Create the app and serve it with uvicorn, leaving logging to structlog.
"""

from __future__ import annotations

import argparse

import uvicorn

from blog_api.api.app import create_app
from blog_api.settings import get_settings


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="blog-api", description="Serve the Blog API.")
    parser.add_argument("--host", default=settings.api_host)
    parser.add_argument("--port", type=int, default=settings.api_port)
    args = parser.parse_args(argv)

    uvicorn.run(
        create_app(settings=settings),
        host=args.host,
        port=args.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
