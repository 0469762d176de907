"""Notification value type."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from mvcore.core.errors import ValidationError


class Notification:
    """
    A named event broadcast through the view.

    The name is fixed at construction; body and type may be reassigned by
    commands that enrich the notification before passing it on.

    Usage Example:
        note = Notification("user/selected", body=user, type="click")
        view.notify_observers(note)
    """

    def __init__(self, name: str, body: Any = None, type: str | None = None):
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Notification name must be a non-empty string", field="name")

        self._name = name
        self.body = body
        self.type = type

        self.notification_id = uuid4()
        self.created_at = datetime.utcnow()

    @property
    def name(self) -> str:
        return self._name

    def to_dict(self) -> dict[str, Any]:
        """Convert notification to dictionary for logging."""
        return {
            "notification_id": str(self.notification_id),
            "name": self._name,
            "body": self.body,
            "type": self.type,
            "created_at": self.created_at.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self._name!r}, "
            f"body={self.body!r}, type={self.type!r})"
        )

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self._name})"
