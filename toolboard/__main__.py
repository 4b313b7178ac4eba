# toolboard/__main__.py
import logging
import os

import uvicorn

from .config import get_settings


def main():
    """Serve the directory API and pages."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("toolboard.main:app", host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
