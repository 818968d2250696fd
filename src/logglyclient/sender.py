"""
HTTP transport for the Loggly event API.
"""

import logging
import threading
from typing import Dict, Iterable, Optional, Protocol

import requests

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://logs-01.loggly.com/"


class Transport(Protocol):
    """Anything that can deliver a request body to a Loggly endpoint."""

    def send(self, endpoint: str, token: str, body: str) -> bool:
        ...


class HttpTransport:
    """
    Posts raw text to Loggly via HTTP.

    Non-2xx responses and network failures are raised as
    ``requests.RequestException`` so callers see the library's message.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_ENDPOINT,
        tags: Iterable[str] = (),
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize HttpTransport.

        Args:
            base_url: Loggly endpoint, e.g. http://logs-01.loggly.com
            tags: Tags appended to every request URL
            headers: Additional headers to send with requests
            timeout: Request timeout in seconds
            session: Custom requests.Session to use (e.g., shared by application)
        """
        self.base_url = base_url.rstrip("/")
        self.tags = tuple(tags)
        self.headers = headers or {}
        self.timeout = timeout
        self._owns_session = session is None
        self._session_lock = threading.RLock()
        self._session = (
            self._build_session()
            if session is None
            else self._prepare_session(session)
        )

    def _build_session(self) -> requests.Session:
        return self._prepare_session(requests.Session())

    def _prepare_session(self, session: requests.Session) -> requests.Session:
        # Ensure required headers while preserving caller-provided ones
        session.headers.update(
            {
                "Content-Type": "text/plain",
                **self.headers,
            }
        )
        return session

    def reset_session(
        self, new_session: Optional[requests.Session] = None
    ) -> None:
        """Replace the current HTTP session.

        Passing ``new_session`` allows callers to swap in their own session
        instance, otherwise a fresh internal session is created. Existing
        internally-owned sessions are closed before replacement.

        The session is shared by every thread posting through this
        transport; the swap happens under a lock.
        """
        with self._session_lock:
            if self._owns_session and self._session:
                self._session.close()

            if new_session is not None:
                self._session = self._prepare_session(new_session)
                self._owns_session = False
            else:
                self._session = self._build_session()
                self._owns_session = True

    def url_for(self, endpoint: str, token: str) -> str:
        """Build the request URL, e.g. ``<base>/bulk/<token>/tag/a,b/``."""
        url = f"{self.base_url}/{endpoint}/{token}/"
        if self.tags:
            url += "tag/" + ",".join(self.tags) + "/"
        return url

    def send(self, endpoint: str, token: str, body: str) -> bool:
        """
        Post a request body to a Loggly endpoint.

        Args:
            endpoint: ``inputs`` for a single event, ``bulk`` for many
            token: Loggly customer token
            body: Raw text payload

        Returns:
            True once Loggly has accepted the request

        Raises:
            requests.RequestException: on network failure or non-2xx status
        """
        url = self.url_for(endpoint, token)
        logger.debug("POST %s/%s (%d bytes)", self.base_url, endpoint, len(body))
        session = self._session
        try:
            response = session.post(
                url,
                data=body.encode("utf-8"),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException:
            with self._session_lock:
                # Another worker may already have replaced the failed session
                if self._owns_session and self._session is session:
                    self.reset_session()
            raise
        return True

    def close(self) -> None:
        """Close the HTTP session."""
        if self._owns_session:
            self._session.close()
