"""
Standard logging handler for integration with Python's logging module.
"""

import logging
from typing import Iterable, Optional, Union

from .client import LogglyClient

_PACKAGE = __name__.split(".")[0]


def _skip_own_records(record: logging.LogRecord) -> bool:
    return not (record.name == _PACKAGE or record.name.startswith(_PACKAGE + "."))


class LogglyHandler(logging.Handler):
    """
    Python logging handler that sends each record to Loggly.

    Can be used with Python's standard logging module for easy integration
    with existing applications.

    Example:
        import logging
        from logglyclient import LogglyHandler

        handler = LogglyHandler(token="your-customer-token", tags="my-app")
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))

        logger = logging.getLogger("my_app")
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

        logger.info("Hello from standard logging!")

        # Don't forget to close on shutdown
        handler.close()
    """

    def __init__(
        self,
        token: Optional[str] = None,
        client: Optional[LogglyClient] = None,
        tags: Union[str, Iterable[str], None] = None,
        blocking: bool = False,
        level: int = logging.NOTSET,
    ):
        """
        Initialize LogglyHandler.

        Args:
            token: Loggly customer token, used when no client is given
            client: Existing LogglyClient to send through
            tags: Tags for the handler's own client
            blocking: Wait for each post instead of sending in the background
            level: Minimum log level to process
        """
        super().__init__(level)

        if client is None and not token:
            raise ValueError("token or client is required")

        self._owns_client = client is None
        self.client = client or LogglyClient(token, tags=tags)
        self.blocking = blocking

        # Records from this package would be sent back through the handler
        self.addFilter(_skip_own_records)

    def emit(self, record: logging.LogRecord) -> None:
        """Process a log record."""
        try:
            message = self.format(record)
            if self.blocking:
                self.client.log(message)
            else:
                self.client.log_async(message)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the handler."""
        if self._owns_client:
            self.client.close()
        super().close()
