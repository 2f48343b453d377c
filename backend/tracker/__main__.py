"""Run the tracker API with uvicorn: `python -m tracker`."""

import uvicorn

from .config import Settings
from .main import create_app


def main():
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
