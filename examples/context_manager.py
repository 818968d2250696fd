"""
Example of using LogglyClient as a context manager with asynchronous posts.
"""

from logglyclient import LogglyClient


class PrintCallback:
    def __init__(self, label):
        self.label = label

    def success(self):
        print(f"{self.label}: sent")

    def failure(self, error):
        print(f"{self.label}: failed ({error})")


def main():
    # Reads LOGGLY_TOKEN, LOGGLY_TAGS, ... from the environment
    with LogglyClient.from_env() as client:
        client.log_async("Processing started", PrintCallback("start"))

        for i in range(3):
            client.log_bulk_async(
                [f"item {i} received", f"item {i} stored"],
                PrintCallback(f"batch {i}"),
            )

        future = client.log_async("Processing finished")
        print("finished ok:", future.result().ok)

    # Exiting the block waits for all pending posts


if __name__ == "__main__":
    main()
