"""Editor host boundary and an in-memory implementation."""

from host.base import EditorHost, Notifier, Subscription
from host.collection import OverrideCollection
from host.memory import InMemoryHost, LoggingNotifier

__all__ = [
    "EditorHost",
    "InMemoryHost",
    "LoggingNotifier",
    "Notifier",
    "OverrideCollection",
    "Subscription",
]
