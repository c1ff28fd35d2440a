"""Console entry point that serves the API with uvicorn."""

import uvicorn

from foodlog.config import Settings


def main() -> None:
    """Run the API on the configured host and port."""
    settings = Settings()
    uvicorn.run("foodlog.api.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
