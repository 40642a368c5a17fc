"""
Run the Amnii API server:

  python -m amnii

Exits with status 1 if the configuration is invalid, in particular when
JWT_PRIVATE_KEY is absent or blank.
"""

import logging
import sys

import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

from amnii.core.config import get_settings
from amnii.main import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger("amnii")


def main() -> int:
    load_dotenv()
    try:
        settings = get_settings()
    except ValidationError as e:
        invalid = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
        if "JWT_PRIVATE_KEY" in invalid:
            logger.critical("Fatal error: JWT_PRIVATE_KEY is not defined")
        else:
            logger.critical("Fatal error: invalid configuration for %s", ", ".join(sorted(invalid)))
        return 1

    logging.getLogger().setLevel(settings.LOG_LEVEL)
    app = create_app(settings)
    logger.info("App running on port %s", settings.PORT)
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
