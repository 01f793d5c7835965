"""Run the API with uvicorn: ``python -m bookstore``.

uvicorn traps SIGINT and SIGTERM, runs the lifespan shutdown (which closes
the store connection) and exits with status 0.
"""

import logging

import uvicorn

from bookstore.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "bookstore.main:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
