"""View: mediator registry and synchronous notification delivery.

Keeps two maps under one lock:

- notification name -> observers, in registration order
- mediator name -> registration record (mediator, interest snapshot, context)

Delivery is synchronous and in registration order. An observer removed while
a notification is being delivered is skipped for the rest of that delivery.
"""

import threading
from dataclasses import dataclass
from typing import Any

from mvcore.core.errors import ValidationError
from mvcore.core.interfaces import (
    IMediator,
    INotification,
    IObserver,
    has_notification_handler,
)
from mvcore.core.logging import get_logger, log_context
from mvcore.core.observer import Observer

logger = get_logger(__name__)


@dataclass(frozen=True)
class MediatorRegistration:
    """What the view recorded when a mediator was registered."""

    mediator: IMediator
    interests: tuple[str, ...]
    context: Any
    handles_notifications: bool


def _validate_notification_name(notification_name: Any) -> str:
    if not isinstance(notification_name, str) or not notification_name.strip():
        raise ValidationError(
            f"Notification name must be a non-empty string, got {notification_name!r}",
            field="notification_name",
        )
    return notification_name


class View:
    """
    Registry of mediators and observers.

    Usage Example:
        view = View()
        view.register_mediator(UserListMediator(view_component=user_list))
        view.notify_observers(Notification("user/added", body=user))
        view.remove_mediator(UserListMediator.NAME)
    """

    def __init__(self) -> None:
        self._observer_map: dict[str, list[IObserver]] = {}
        self._mediator_map: dict[str, MediatorRegistration] = {}
        self._lock = threading.RLock()

    # ---------------------------------------------------------------------------------
    # Observers
    # ---------------------------------------------------------------------------------

    def register_observer(self, notification_name: str, observer: IObserver) -> None:
        """
        Register an observer for a notification name.

        Raises:
            ValidationError: If the name is empty or observer lacks notify_observer
        """
        _validate_notification_name(notification_name)
        if not callable(getattr(observer, "notify_observer", None)):
            raise ValidationError(
                f"Observer must provide notify_observer(), got {type(observer).__name__}",
                field="observer",
            )

        with self._lock:
            self._observer_map.setdefault(notification_name, []).append(observer)

        logger.debug("Observer registered", notification_name=notification_name)

    def remove_observer(self, notification_name: str, notify_context: Any) -> None:
        """Remove every observer for the name registered on behalf of notify_context."""
        with self._lock:
            observers = self._observer_map.get(notification_name)
            if not observers:
                return

            remaining = [
                o for o in observers if not o.compare_notify_context(notify_context)
            ]
            removed = len(observers) - len(remaining)

            if remaining:
                self._observer_map[notification_name] = remaining
            else:
                del self._observer_map[notification_name]

        if removed:
            logger.debug(
                "Observer removed",
                notification_name=notification_name,
                removed=removed,
            )

    def notify_observers(self, notification: INotification) -> None:
        """
        Deliver a notification to every observer registered for its name.

        Exceptions raised by an observer are logged and propagated; observers
        after the failing one do not run.
        """
        notification_name = notification.name

        with self._lock:
            snapshot = list(self._observer_map.get(notification_name, ()))

        if not snapshot:
            logger.debug("No observers for notification", notification_name=notification_name)
            return

        with log_context(notification_name=notification_name):
            for observer in snapshot:
                with self._lock:
                    still_registered = any(
                        o is observer
                        for o in self._observer_map.get(notification_name, ())
                    )
                if not still_registered:
                    continue

                try:
                    observer.notify_observer(notification)
                except Exception as e:
                    logger.exception(
                        "Observer failed to handle notification",
                        observer=repr(observer),
                        error=str(e),
                    )
                    raise

    def observer_count(self, notification_name: str) -> int:
        with self._lock:
            return len(self._observer_map.get(notification_name, ()))

    # ---------------------------------------------------------------------------------
    # Mediators
    # ---------------------------------------------------------------------------------

    def register_mediator(self, mediator: IMediator) -> None:
        """
        Register a mediator.

        The mediator's interests are read once and snapshotted. ``on_register``
        runs before observers are attached, so it always precedes the first
        ``handle_notification``. A mediator without ``handle_notification``
        is registered normally and simply receives nothing. Registering a
        second mediator under a taken name is ignored.

        Raises:
            ValidationError: If the mediator has no name, lists a bad interest
                or returns its interests as a single string
        """
        mediator_name = mediator.name
        if not isinstance(mediator_name, str) or not mediator_name:
            raise ValidationError(
                f"Mediator name must be a non-empty string to register, got {mediator_name!r}",
                field="name",
            )

        interests_listed = mediator.list_notification_interests() or ()
        if isinstance(interests_listed, str):
            raise ValidationError(
                "list_notification_interests() must return a sequence of names, "
                f"got the string {interests_listed!r}",
                field="interests",
            )
        listed = list(interests_listed)
        for interest in listed:
            _validate_notification_name(interest)
        interests = tuple(dict.fromkeys(listed))

        registration = MediatorRegistration(
            mediator=mediator,
            interests=interests,
            context=mediator.context(),
            handles_notifications=has_notification_handler(mediator),
        )

        with self._lock:
            if mediator_name in self._mediator_map:
                logger.warning(
                    "Mediator already registered, ignoring",
                    mediator_name=mediator_name,
                )
                return
            self._mediator_map[mediator_name] = registration

        try:
            mediator.on_register()
        except Exception:
            with self._lock:
                if self._mediator_map.get(mediator_name) is registration:
                    del self._mediator_map[mediator_name]
            raise

        with self._lock:
            # on_register may have removed the mediator again
            if self._mediator_map.get(mediator_name) is not registration:
                logger.debug(
                    "Mediator removed during on_register, not attaching observers",
                    mediator_name=mediator_name,
                )
                return

            if registration.handles_notifications:
                observer = Observer(mediator.handle_notification, registration.context)
                for interest in interests:
                    self.register_observer(interest, observer)

        logger.info(
            "Mediator registered",
            mediator_name=mediator_name,
            interests=list(interests),
            handles_notifications=registration.handles_notifications,
        )

    def retrieve_mediator(self, mediator_name: str) -> IMediator | None:
        with self._lock:
            registration = self._mediator_map.get(mediator_name)
        return registration.mediator if registration else None

    def has_mediator(self, mediator_name: str) -> bool:
        with self._lock:
            return mediator_name in self._mediator_map

    def remove_mediator(self, mediator_name: str) -> IMediator | None:
        """
        Remove a mediator and detach its observers.

        ``on_remove`` runs after the observers are gone, so no
        ``handle_notification`` follows it.

        Returns:
            The removed mediator, or None if no mediator has that name
        """
        with self._lock:
            registration = self._mediator_map.pop(mediator_name, None)
            if registration is None:
                return None

            for interest in registration.interests:
                self.remove_observer(interest, registration.context)

        registration.mediator.on_remove()

        logger.info("Mediator removed", mediator_name=mediator_name)
        return registration.mediator

    def get_registration(self, mediator_name: str) -> MediatorRegistration | None:
        with self._lock:
            return self._mediator_map.get(mediator_name)
