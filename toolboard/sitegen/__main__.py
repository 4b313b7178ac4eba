# toolboard/sitegen/__main__.py
import logging
import sys

from ..config import get_settings
from ..errors import ToolboardError
from .generator import generate


def main() -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    logger = logging.getLogger("toolboard.sitegen")
    try:
        generate(settings)
    except ToolboardError as exc:
        logger.error("Site generation aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
