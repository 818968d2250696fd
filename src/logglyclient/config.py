"""
Configuration for LogglyClient.
"""

import os
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple, Union

from .sender import DEFAULT_ENDPOINT


def _split_tags(tags: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    if not tags:
        return ()
    if isinstance(tags, str):
        tags = tags.split(",")
    return tuple(str(tag).strip() for tag in tags if str(tag).strip())


@dataclass(slots=True)
class LogglyConfig:
    """Runtime configuration for LogglyClient."""

    token: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = 10.0
    tags: Tuple[str, ...] = field(default_factory=tuple)
    max_workers: int = 4

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("token cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if self.endpoint.endswith("/"):
            self.endpoint = self.endpoint[:-1]
        self.tags = _split_tags(self.tags)

    @classmethod
    def from_env(cls, token: Optional[str] = None) -> "LogglyConfig":
        """
        Build a configuration from environment variables.

        Reads LOGGLY_TOKEN, LOGGLY_ENDPOINT, LOGGLY_TAGS (comma-separated)
        and LOGGLY_TIMEOUT. An explicit ``token`` wins over LOGGLY_TOKEN.
        """
        return cls(
            token=token or os.environ.get("LOGGLY_TOKEN", ""),
            endpoint=os.environ.get("LOGGLY_ENDPOINT", DEFAULT_ENDPOINT),
            timeout=float(os.environ.get("LOGGLY_TIMEOUT", "10.0")),
            tags=_split_tags(os.environ.get("LOGGLY_TAGS")),
        )
