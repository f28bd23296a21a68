import asyncio
import logging
import sys

from config import settings
from cli.app import run


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
