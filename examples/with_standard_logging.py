"""
Example of using LogglyHandler with Python's standard logging module.
"""

import logging
import os

from logglyclient import LogglyHandler


def main():
    handler = LogglyHandler(
        token=os.environ.get("LOGGLY_TOKEN", "your-customer-token"),
        tags="standard-logging",
    )
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )

    logger = logging.getLogger("my_app")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    # Also log to console
    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    logger.addHandler(console)

    try:
        logger.debug("Debug message")
        logger.info("Application started")
        logger.warning("Low disk space", extra={"free_gb": 2})

        try:
            1 / 0
        except ZeroDivisionError:
            logger.exception("Division failed")
    finally:
        # Waits for the background posts
        handler.close()


if __name__ == "__main__":
    main()
