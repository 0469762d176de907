"""Observer wrapping a notification callback and its context."""

import weakref
from collections.abc import Callable
from typing import Any

from mvcore.core.errors import ValidationError
from mvcore.core.interfaces import INotification


class Observer:
    """
    Pairs a callback with the object it was registered on behalf of.

    The context is held through a weak reference when the object supports
    it, so an observer left in a view never keeps its mediator alive.
    Objects that cannot be weakly referenced are compared by identity
    through a strong reference instead.
    """

    def __init__(
        self,
        notify_method: Callable[[INotification], None],
        notify_context: Any,
    ):
        if not callable(notify_method):
            raise ValidationError(
                f"Observer callback must be callable, got {type(notify_method).__name__}",
                field="notify_method",
            )

        self._notify_method = notify_method
        try:
            self._context_ref = weakref.ref(notify_context)
        except TypeError:
            strong = notify_context
            self._context_ref = lambda: strong

    @property
    def notify_method(self) -> Callable[[INotification], None]:
        return self._notify_method

    @property
    def notify_context(self) -> Any:
        """The context object, or None once it has been garbage collected."""
        return self._context_ref()

    def notify_observer(self, notification: INotification) -> None:
        self._notify_method(notification)

    def compare_notify_context(self, obj: Any) -> bool:
        context = self._context_ref()
        return context is not None and context is obj

    def __repr__(self) -> str:
        method_name = getattr(self._notify_method, "__qualname__", repr(self._notify_method))
        return f"Observer(method={method_name}, context={self.notify_context!r})"
