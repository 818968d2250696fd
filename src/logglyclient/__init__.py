"""
Python client for sending log messages to Loggly via HTTP.
"""

from .client import Callback, LogglyClient, LogResult, join_messages
from .config import LogglyConfig
from .handler import LogglyHandler
from .sender import HttpTransport, Transport

__version__ = "0.1.0"
__all__ = [
    "LogglyClient",
    "LogglyConfig",
    "LogglyHandler",
    "LogResult",
    "Callback",
    "HttpTransport",
    "Transport",
    "join_messages",
]
