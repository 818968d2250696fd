"""
Loggly client.
"""

import logging
import re
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Union

from .config import LogglyConfig
from .sender import DEFAULT_ENDPOINT, HttpTransport, Transport

logger = logging.getLogger(__name__)

INPUTS_ENDPOINT = "inputs"
BULK_ENDPOINT = "bulk"

_LINE_BREAK = re.compile(r"[\r\n]")


class Callback(Protocol):
    """Receives the outcome of an asynchronous post."""

    def success(self) -> None:
        ...

    def failure(self, error: str) -> None:
        ...


@dataclass(frozen=True, slots=True)
class LogResult:
    """Outcome of a single request. Truthy when Loggly accepted it."""

    ok: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


def join_messages(messages: Iterable[str]) -> str:
    """
    Combine messages into one bulk payload.

    Loggly splits bulk payloads on newlines, so line breaks inside a
    message are replaced with ``\\r`` (which Loggly strips) and each
    message is terminated with ``\\n``.
    """
    return "".join(_LINE_BREAK.sub("\r", message) + "\n" for message in messages)


class LogglyClient:
    """
    Sends log messages to Loggly over HTTP.

    Example:
        client = LogglyClient("your-customer-token")

        client.log("Application started")
        client.log_bulk(["first event", "second\nevent"])

        class Printer:
            def success(self):
                print("sent")

            def failure(self, error):
                print("failed:", error)

        client.log_async("fire and forget", Printer())

        # Waits for pending asynchronous posts
        client.close()
    """

    def __init__(
        self,
        token: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 10.0,
        tags: Union[str, Iterable[str], None] = None,
        transport: Optional[Transport] = None,
        max_workers: int = 4,
    ):
        """
        Initialize LogglyClient.

        Args:
            token: Loggly customer token (required)
            endpoint: Base URL of the Loggly HTTP API
            timeout: Request timeout in seconds
            tags: Tags attached to every event (list or comma-separated)
            transport: Replacement for the HTTP transport, used in tests
            max_workers: Threads available to asynchronous posts
        """
        self.config = LogglyConfig(
            token=token,
            endpoint=endpoint,
            timeout=timeout,
            tags=tags or (),
            max_workers=max_workers,
        )
        self.token = self.config.token

        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpTransport(
            base_url=self.config.endpoint,
            tags=self.config.tags,
            timeout=self.config.timeout,
        )

        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @classmethod
    def from_config(
        cls, config: LogglyConfig, transport: Optional[Transport] = None
    ) -> "LogglyClient":
        """Create a client from a LogglyConfig."""
        return cls(
            token=config.token,
            endpoint=config.endpoint,
            timeout=config.timeout,
            tags=config.tags,
            transport=transport,
            max_workers=config.max_workers,
        )

    @classmethod
    def from_env(cls, transport: Optional[Transport] = None) -> "LogglyClient":
        """Create a client configured from LOGGLY_* environment variables."""
        return cls.from_config(LogglyConfig.from_env(), transport=transport)

    def _post(self, endpoint: str, body: str) -> LogResult:
        """Send a body and normalize every outcome into a LogResult."""
        try:
            ok = self._transport.send(endpoint, self.token, body)
        except Exception as exc:
            logger.warning("Failed to post to Loggly %s endpoint: %s", endpoint, exc)
            return LogResult(ok=False, error=str(exc))

        if not ok:
            logger.warning("Loggly %s endpoint did not accept the request", endpoint)
            return LogResult(ok=False, error="request was not accepted")
        return LogResult(ok=True)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers,
                    thread_name_prefix="loggly",
                )
            return self._executor

    def _submit(
        self, endpoint: str, body: str, callback: Optional[Callback]
    ) -> "Future[LogResult]":
        def notify(result: LogResult) -> LogResult:
            if callback is not None:
                try:
                    if result.ok:
                        callback.success()
                    else:
                        callback.failure(result.error or "")
                except Exception:
                    logger.exception("Loggly callback raised")
            return result

        try:
            return self._get_executor().submit(
                lambda: notify(self._post(endpoint, body))
            )
        except RuntimeError as exc:
            # Executor already shut down (close() or interpreter exit)
            logger.warning("Could not schedule Loggly %s post: %s", endpoint, exc)
            future: "Future[LogResult]" = Future()
            future.set_result(notify(LogResult(ok=False, error=str(exc))))
            return future

    def log(self, message: Optional[str]) -> bool:
        """
        Post a log message to Loggly.

        Returns:
            True if Loggly accepted the message, False otherwise
        """
        if message is None:
            return False
        return bool(self._post(INPUTS_ENDPOINT, message))

    def log_async(
        self, message: Optional[str], callback: Optional[Callback] = None
    ) -> "Optional[Future[LogResult]]":
        """
        Post a log message to Loggly without blocking.

        ``callback.success()`` or ``callback.failure(error)`` is invoked
        exactly once from a worker thread. A ``None`` message is ignored.

        Returns:
            Future resolving to the LogResult, or None if nothing was sent
        """
        if message is None:
            return None
        return self._submit(INPUTS_ENDPOINT, message, callback)

    def log_bulk(self, messages: Union[str, Iterable[str], None]) -> bool:
        """
        Post several log messages to Loggly in one request.

        Returns:
            True if Loggly accepted the messages, False otherwise
        """
        if messages is None:
            return False
        if isinstance(messages, str):
            messages = [messages]
        return bool(self._post(BULK_ENDPOINT, join_messages(messages)))

    def log_bulk_async(
        self,
        messages: Union[str, Iterable[str], None],
        callback: Optional[Callback] = None,
    ) -> "Optional[Future[LogResult]]":
        """Post several log messages in one request without blocking."""
        if messages is None:
            return None
        if isinstance(messages, str):
            messages = [messages]
        return self._submit(BULK_ENDPOINT, join_messages(messages), callback)

    def close(self) -> None:
        """Wait for pending asynchronous posts and release resources."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

        if self._owns_transport and isinstance(self._transport, HttpTransport):
            self._transport.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
