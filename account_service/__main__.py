"""Run the Account Service under uvicorn."""

import argparse

import uvicorn

from .config import get_settings
from .main import create_app


def main() -> None:
    """Run the FastAPI application using Uvicorn.

    Uvicorn stops accepting connections on SIGINT/SIGTERM, lets in-flight
    requests finish and then runs the lifespan shutdown, which closes the
    database connection.
    """
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Run the Account Service FastAPI application.",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=settings.HOST,
        help="Host to run the FastAPI application on.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help="Port to run the FastAPI application on.",
    )
    args = parser.parse_args()

    settings = settings.model_copy(update={"HOST": args.host, "PORT": args.port})
    app = create_app(settings)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
