"""Process entry — `python -m bank_api` serves the app with uvicorn."""

import uvicorn

from bank_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "bank_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
