"""Restock alerts: notify subscribers once when stock goes from 0 to positive.

All subject operations are coroutines; deliveries happen outside the subject's
lock, in registration order, and a failing sink never reaches the caller that
changed the count.
"""

from .config import SubjectPolicy
from .core import IAlertReceiver, IStockObservable, StockSubject
from .exceptions import DeliveryFailure, InvalidCountError, RestockAlertError
from .rwlock import RwLock
from .sinks import ConsoleEmailSink, ConsoleSmsSink, RecordingSink, Sink
from .subscribers import EmailSubscriber, SinkSubscriber, SmsSubscriber

__all__ = [
    "RwLock",
    "SubjectPolicy",
    "IAlertReceiver",
    "IStockObservable",
    "StockSubject",
    "SinkSubscriber",
    "EmailSubscriber",
    "SmsSubscriber",
    "Sink",
    "ConsoleEmailSink",
    "ConsoleSmsSink",
    "RecordingSink",
    "RestockAlertError",
    "InvalidCountError",
    "DeliveryFailure",
]
