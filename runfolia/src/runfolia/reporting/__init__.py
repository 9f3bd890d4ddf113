from .fakes import EventCall, FakeRunEvents
from .logging_events import LoggingRunEvents, human_readable_size

__all__ = [
    "EventCall",
    "FakeRunEvents",
    "LoggingRunEvents",
    "human_readable_size",
]
