from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SubjectPolicy:
    """
    Tunables for a `StockSubject`.

    - deduplicate: ignore a `register` of a subscriber that is already in the
      list. Off by default, so a subscriber registered twice is alerted twice.
    - delivery_timeout: seconds allowed for one subscriber's `receive()`;
      None waits forever. A timeout counts as a failed delivery.
    - background_delivery: run batches in an asyncio task so `set_count`
      returns before subscribers are alerted. Use `StockSubject.drain()` to
      wait for them.
    """

    deduplicate: bool = False
    delivery_timeout: Optional[float] = None
    background_delivery: bool = False

    def __post_init__(self) -> None:
        if self.delivery_timeout is not None and self.delivery_timeout <= 0:
            raise ValueError(
                f"delivery_timeout must be positive or None, got {self.delivery_timeout!r}"
            )


DEFAULT_POLICY = SubjectPolicy()
