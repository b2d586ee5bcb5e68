import asyncio
from collections import deque
from contextvars import ContextVar
from typing_extensions import override
import logging

from .config import DEFAULT_POLICY, SubjectPolicy
from .exceptions import InvalidCountError
from .rwlock import RwLock

# subjects whose delivery loop the current task is already running
_delivering: ContextVar[tuple[object, ...]] = ContextVar("_delivering", default=())


class IAlertReceiver:
    async def receive(self) -> None:
        """
        Deliver one restock alert.
        """
        raise NotImplementedError


class IStockObservable:
    async def register(self, subscriber: IAlertReceiver) -> None:
        """
        Add a subscriber to the notification list.
        """
        raise NotImplementedError

    async def unregister(self, subscriber: IAlertReceiver) -> None:
        """
        Remove a subscriber from the notification list.
        """
        raise NotImplementedError

    async def notify_subscribers(self) -> None:
        """
        Alert every registered subscriber.
        """
        raise NotImplementedError

    async def set_count(self, new_count: int) -> None:
        raise NotImplementedError

    async def get_count(self) -> int:
        raise NotImplementedError


class _StockState:
    def __init__(self) -> None:
        self.count = 0
        self.subscribers: list[IAlertReceiver] = []


class StockSubject(IStockObservable):
    """
    Tracks the stock level of one resource and alerts subscribers when it
    comes back in stock.

    Only a change from exactly 0 to a positive count alerts; dropping back to
    0 re-arms the trigger. Subscribers are alerted in registration order, and
    each alert is delivered outside the state lock so a slow sink never holds
    up `register` or `set_count` from other tasks.

    The subject keeps ordinary (strong) references to its subscribers, so a
    subscriber built inline in a `register(...)` call stays registered until
    it is unregistered.
    """

    def __init__(
        self, name: str = "stock", policy: SubjectPolicy = DEFAULT_POLICY
    ) -> None:
        self.name = name
        self.policy = policy
        self._state: RwLock[_StockState] = RwLock(_StockState())
        # batches waiting for delivery, in transition order
        self._pending: deque[tuple[IAlertReceiver, ...]] = deque()
        self._delivery_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[None]] = set()

    @override
    async def register(self, subscriber: IAlertReceiver) -> None:
        async with self._state.write() as writer:
            subscribers = writer.get_value().subscribers
            if self.policy.deduplicate and any(
                existing is subscriber for existing in subscribers
            ):
                logging.getLogger(__name__).debug(
                    "%s: %r already registered, ignoring", self.name, subscriber
                )
                return
            subscribers.append(subscriber)

    @override
    async def unregister(self, subscriber: IAlertReceiver) -> None:
        """
        Remove the first registration of `subscriber`. Unknown subscribers
        are ignored.
        """
        async with self._state.write() as writer:
            subscribers = writer.get_value().subscribers
            for i, existing in enumerate(subscribers):
                if existing is subscriber:
                    del subscribers[i]
                    return

    @override
    async def notify_subscribers(self) -> None:
        """
        Alert the current subscribers without touching the count.
        """
        async with self._state.write() as writer:
            self._pending.append(tuple(writer.get_value().subscribers))
        await self._dispatch()

    @override
    async def set_count(self, new_count: int) -> None:
        """
        Record a new stock level.

        Raises InvalidCountError for negative or non-integer values, leaving
        the previous count in place. Alerts are delivered before this returns
        unless the policy asks for background delivery.
        """
        if isinstance(new_count, bool) or not isinstance(new_count, int):
            raise InvalidCountError(new_count)
        if new_count < 0:
            raise InvalidCountError(new_count)

        async with self._state.write() as writer:
            state = writer.get_value()
            old_count = state.count
            restocked = old_count == 0 and new_count > 0
            if restocked:
                self._pending.append(tuple(state.subscribers))
            state.count = new_count

        logging.getLogger(__name__).debug(
            "%s: count %d -> %d", self.name, old_count, new_count
        )
        if restocked:
            await self._dispatch()

    @override
    async def get_count(self) -> int:
        async with self._state.read() as state:
            return state.count

    async def is_in_stock(self) -> bool:
        return await self.get_count() > 0

    async def subscribers(self) -> tuple[IAlertReceiver, ...]:
        async with self._state.read() as state:
            return tuple(state.subscribers)

    async def drain(self) -> None:
        """
        Wait until every batch handed to a background task has been delivered.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _dispatch(self) -> None:
        if self.policy.background_delivery:
            task = asyncio.create_task(self._deliver_pending())
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        else:
            await self._deliver_pending()

    async def _deliver_pending(self) -> None:
        # A subscriber calling back into this subject from receive() leaves
        # its batch queued; the loop already running below picks it up.
        if self in _delivering.get():
            return
        # Whoever holds the delivery lock drains the whole queue, so batches
        # go out in the order they were queued even when tasks race.
        async with self._delivery_lock:
            token = _delivering.set(_delivering.get() + (self,))
            try:
                while self._pending:
                    batch = self._pending.popleft()
                    await self._deliver_batch(batch)
            finally:
                _delivering.reset(token)

    async def _deliver_batch(self, batch: tuple[IAlertReceiver, ...]) -> None:
        logger = logging.getLogger(__name__)
        logger.info(
            "%s: alerting %d subscriber(s)", self.name, len(batch)
        )
        for subscriber in batch:
            try:
                if self.policy.delivery_timeout is None:
                    await subscriber.receive()
                else:
                    await asyncio.wait_for(
                        subscriber.receive(), timeout=self.policy.delivery_timeout
                    )
            except Exception:
                logger.exception(
                    "%s: delivery to %r failed.", self.name, subscriber
                )
