from typing import Optional
from typing_extensions import override
import logging

from .core import IAlertReceiver, IStockObservable
from .exceptions import DeliveryFailure
from .sinks import ConsoleEmailSink, ConsoleSmsSink, Sink


class SinkSubscriber(IAlertReceiver):
    """
    Subscriber that forwards each alert to a sink, addressed to `target`.

    `subject` is the observable this subscriber watches. It is optional and
    only used by `unsubscribe()`; the subject drives delivery on its own.
    """

    default_message = "Item is back in stock!"

    def __init__(
        self,
        target: str,
        sink: Sink,
        subject: Optional[IStockObservable] = None,
        message: Optional[str] = None,
    ) -> None:
        self.target = target
        self.sink = sink
        self.subject = subject
        self.message = message if message is not None else self.default_message

    @override
    async def receive(self) -> None:
        delivered = await self.sink.send(self.target, self.message)
        if not delivered:
            raise DeliveryFailure(self.target)
        logging.getLogger(__name__).debug("Alert delivered to %s", self.target)

    async def unsubscribe(self) -> None:
        if self.subject is not None:
            await self.subject.unregister(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.target!r})"


class EmailSubscriber(SinkSubscriber):
    default_message = "product is back in stock!!!"

    def __init__(
        self,
        email: str,
        subject: Optional[IStockObservable] = None,
        sink: Optional[Sink] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(email, sink or ConsoleEmailSink(), subject, message)


class SmsSubscriber(SinkSubscriber):
    default_message = "Stock is back again!!!"

    def __init__(
        self,
        phone_number: str,
        subject: Optional[IStockObservable] = None,
        sink: Optional[Sink] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(phone_number, sink or ConsoleSmsSink(), subject, message)
