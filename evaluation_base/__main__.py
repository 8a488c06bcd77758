"""Run the API with uvicorn: ``python -m evaluation_base``."""

import uvicorn

from evaluation_base.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "evaluation_base.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
