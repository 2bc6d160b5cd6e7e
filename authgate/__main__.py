"""Run the API server with uvicorn."""

import uvicorn

from authgate.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "authgate.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
