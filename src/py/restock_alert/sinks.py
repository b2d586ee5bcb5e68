from typing import Protocol


class Sink(Protocol):
    """
    Minimal transport interface a subscriber delivers through.

    Real deployments plug in an SMTP or SMS gateway client; the core only
    relies on this one coroutine.
    """

    async def send(self, target: str, message: str) -> bool:
        """
        Deliver `message` to `target`. Returns False when delivery failed.
        """
        ...


class ConsoleEmailSink:
    """Stand-in email transport that writes to stdout."""

    async def send(self, target: str, message: str) -> bool:
        print(f"Email sent to {target} : {message}")
        return True


class ConsoleSmsSink:
    """Stand-in SMS transport that writes to stdout."""

    async def send(self, target: str, message: str) -> bool:
        print(f"SMS sent to {target} : {message}")
        return True


class RecordingSink:
    """
    Keeps every `(target, message)` pair it is asked to send.

    `fail_for` lists targets whose sends report failure.
    """

    def __init__(self, fail_for: tuple[str, ...] = ()) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail_for = set(fail_for)

    async def send(self, target: str, message: str) -> bool:
        if target in self.fail_for:
            return False
        self.sent.append((target, message))
        return True
