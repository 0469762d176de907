"""Notification primitives: the value type, observers and the notifier base."""

from .notification import Notification
from .notifier import Notifier
from .observer import Observer

__all__ = [
    "Notification",
    "Notifier",
    "Observer",
]
