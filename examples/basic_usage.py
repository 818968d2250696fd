"""
Basic usage example for logglyclient.
"""

import os

from logglyclient import LogglyClient


def main():
    client = LogglyClient(
        token=os.environ.get("LOGGLY_TOKEN", "your-customer-token"),
        tags=["example", "basic"],
        timeout=5.0,
    )

    try:
        # Single events
        print("log:", client.log("Application starting..."))
        print("log:", client.log("Stack trace\n  line 1\n  line 2"))

        # One request, one event per message
        print("bulk:", client.log_bulk([
            "User logged in",
            "Configuration loaded\nfrom config.yaml",
            "Cache warmed",
        ]))
    finally:
        client.close()


if __name__ == "__main__":
    main()
