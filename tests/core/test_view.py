"""
Tests for the View

Covers mediator registration, interest snapshots, lifecycle ordering and
notification delivery.
"""

import pytest
import structlog

from mvcore.core.errors import ValidationError
from mvcore.core.interfaces import IView
from mvcore.core.observer import Notification, Observer


@pytest.mark.unit
class TestObservers:
    """Test raw observer registration and delivery."""

    def test_view_satisfies_protocol(self, view):
        assert isinstance(view, IView)

    def test_notify_calls_observers_in_order(self, view):
        received = []

        class Context:
            pass

        first, second = Context(), Context()
        view.register_observer("tick", Observer(lambda n: received.append("first"), first))
        view.register_observer("tick", Observer(lambda n: received.append("second"), second))

        view.notify_observers(Notification("tick"))

        assert received == ["first", "second"]

    def test_notify_without_observers_is_noop(self, view):
        view.notify_observers(Notification("nobody/listens"))

    def test_remove_observer_by_context(self, view):
        received = []

        class Context:
            pass

        keep, drop = Context(), Context()
        view.register_observer("tick", Observer(lambda n: received.append("keep"), keep))
        view.register_observer("tick", Observer(lambda n: received.append("drop"), drop))

        view.remove_observer("tick", drop)
        view.notify_observers(Notification("tick"))

        assert received == ["keep"]
        assert view.observer_count("tick") == 1

    def test_remove_observer_unknown_name_is_noop(self, view):
        view.remove_observer("unknown", object())

    def test_register_observer_rejects_bad_observer(self, view):
        with pytest.raises(ValidationError):
            view.register_observer("tick", object())

    def test_observer_error_propagates(self, view):
        class Context:
            pass

        ctx = Context()

        def explode(notification):
            raise RuntimeError("handler failed")

        view.register_observer("tick", Observer(explode, ctx))

        with pytest.raises(RuntimeError, match="handler failed"):
            view.notify_observers(Notification("tick"))


@pytest.mark.unit
class TestMediatorRegistration:
    """Test register / retrieve / has / remove."""

    def test_register_and_retrieve(self, view, mediator_cls):
        mediator = mediator_cls(["A"])

        view.register_mediator(mediator)

        assert view.has_mediator("RecordingMediator")
        assert view.retrieve_mediator("RecordingMediator") is mediator

    def test_retrieve_unknown_returns_none(self, view):
        assert view.retrieve_mediator("missing") is None
        assert not view.has_mediator("missing")

    def test_remove_returns_mediator(self, view, mediator_cls):
        mediator = mediator_cls(["A"])
        view.register_mediator(mediator)

        assert view.remove_mediator("RecordingMediator") is mediator
        assert not view.has_mediator("RecordingMediator")

    def test_remove_unknown_returns_none(self, view):
        assert view.remove_mediator("missing") is None

    def test_duplicate_name_is_ignored(self, view, mediator_cls):
        first = mediator_cls(["A"])
        second = mediator_cls(["A"])

        view.register_mediator(first)
        view.register_mediator(second)

        assert view.retrieve_mediator("RecordingMediator") is first
        assert "on_register" not in second.call_names()

    def test_mediator_without_name_is_rejected(self, view, mediator_cls):
        mediator = mediator_cls(["A"], mediator_name="")

        with pytest.raises(ValidationError):
            view.register_mediator(mediator)

    def test_bad_interest_is_rejected(self, view, mediator_cls):
        mediator = mediator_cls(["A", ""])

        with pytest.raises(ValidationError):
            view.register_mediator(mediator)

        assert not view.has_mediator("RecordingMediator")
        assert "on_register" not in mediator.call_names()

    def test_string_interests_are_rejected(self, view, mediator_cls):
        class StringInterestsMediator(mediator_cls):
            def list_notification_interests(self):
                super().list_notification_interests()
                return "AB"

        mediator = StringInterestsMediator()

        with pytest.raises(ValidationError):
            view.register_mediator(mediator)

        assert not view.has_mediator("RecordingMediator")
        assert view.observer_count("A") == 0
        assert view.observer_count("B") == 0
        assert "on_register" not in mediator.call_names()

    def test_failing_on_register_rolls_back(self, view, mediator_cls):
        class BrokenMediator(mediator_cls):
            def on_register(self):
                raise RuntimeError("cannot start")

        with pytest.raises(RuntimeError):
            view.register_mediator(BrokenMediator(["A"]))

        assert not view.has_mediator("RecordingMediator")
        assert view.observer_count("A") == 0


@pytest.mark.unit
class TestMediatorDelivery:
    """Test interest matching and lifecycle ordering."""

    def test_receives_only_interests(self, view, mediator_cls):
        mediator = mediator_cls(["A", "B"])
        view.register_mediator(mediator)

        for name in ["A", "C", "B", "A", "D"]:
            view.notify_observers(Notification(name))

        assert mediator.handled() == ["A", "B", "A"]

    def test_duplicate_interests_deliver_once(self, view, mediator_cls):
        mediator = mediator_cls(["A", "A"])
        view.register_mediator(mediator)

        view.notify_observers(Notification("A"))

        assert mediator.handled() == ["A"]

    def test_interests_are_snapshotted(self, view, mediator_cls):
        mediator = mediator_cls(["A"])
        view.register_mediator(mediator)

        mediator.interests.append("B")
        view.notify_observers(Notification("B"))

        assert mediator.handled() == []
        assert mediator.call_names().count("list_notification_interests") == 1
        assert view.get_registration("RecordingMediator").interests == ("A",)

    def test_on_register_precedes_handling(self, view, mediator_cls):
        mediator = mediator_cls(["A"])
        view.register_mediator(mediator)
        view.notify_observers(Notification("A"))

        assert mediator.call_names() == [
            "list_notification_interests",
            "on_register",
            "handle_notification",
        ]

    def test_notification_sent_from_on_register_is_not_handled_by_self(
        self, view, mediator_cls
    ):
        class EagerMediator(mediator_cls):
            def on_register(self):
                super().on_register()
                view.notify_observers(Notification("A"))

        mediator = EagerMediator(["A"])
        view.register_mediator(mediator)

        assert mediator.handled() == []

    def test_no_handling_after_remove(self, view, mediator_cls):
        mediator = mediator_cls(["A"])
        view.register_mediator(mediator)
        view.remove_mediator("RecordingMediator")

        view.notify_observers(Notification("A"))

        assert mediator.call_names() == [
            "list_notification_interests",
            "on_register",
            "on_remove",
        ]
        assert view.observer_count("A") == 0

    def test_removed_during_on_register_gets_no_observers(self, view, mediator_cls):
        class SelfRemovingMediator(mediator_cls):
            def on_register(self):
                super().on_register()
                view.remove_mediator(self.name)

        mediator = SelfRemovingMediator(["A"])
        view.register_mediator(mediator)
        view.notify_observers(Notification("A"))

        assert mediator.call_names() == [
            "list_notification_interests",
            "on_register",
            "on_remove",
        ]
        assert not view.has_mediator("RecordingMediator")
        assert view.observer_count("A") == 0

    def test_reregistered_during_on_register_keeps_one_observer(
        self, view, mediator_cls
    ):
        replacement = mediator_cls(["A"])

        class HandOffMediator(mediator_cls):
            def on_register(self):
                super().on_register()
                view.remove_mediator(self.name)
                view.register_mediator(replacement)

        original = HandOffMediator(["A"])
        view.register_mediator(original)
        view.notify_observers(Notification("A"))

        assert view.retrieve_mediator("RecordingMediator") is replacement
        assert view.observer_count("A") == 1
        assert replacement.handled() == ["A"]
        assert original.handled() == []

    def test_on_remove_fires_once(self, view, mediator_cls):
        mediator = mediator_cls(["A"])
        view.register_mediator(mediator)

        view.remove_mediator("RecordingMediator")
        view.remove_mediator("RecordingMediator")

        assert mediator.call_names().count("on_remove") == 1

    def test_removed_during_dispatch_is_skipped(self, view, mediator_cls):
        remover = mediator_cls(["A"], mediator_name="remover")
        target = mediator_cls(["A"], mediator_name="target")

        def remove_target(notification):
            remover.calls.append(("handle_notification", notification.name))
            view.remove_mediator("target")

        remover.handle_notification = remove_target

        view.register_mediator(remover)
        view.register_mediator(target)
        view.notify_observers(Notification("A"))

        assert remover.handled() == ["A"]
        assert target.handled() == []
        assert target.call_names()[-1] == "on_remove"

    def test_mediator_without_handler_does_not_break_dispatch(self, view, mediator_cls):
        class SilentMediator:
            view_component = None

            def __init__(self):
                self.registered = False
                self.removed = False

            @property
            def name(self):
                return "SilentMediator"

            def context(self):
                return self

            def list_notification_interests(self):
                return ["A"]

            def on_register(self):
                self.registered = True

            def on_remove(self):
                self.removed = True

        silent = SilentMediator()
        listener = mediator_cls(["A"])
        view.register_mediator(silent)
        view.register_mediator(listener)

        view.notify_observers(Notification("A"))

        assert silent.registered
        assert listener.handled() == ["A"]
        assert not view.get_registration("SilentMediator").handles_notifications

        view.remove_mediator("SilentMediator")
        assert silent.removed

    def test_notification_name_bound_during_delivery(self, view, mediator_cls):
        seen = []
        mediator = mediator_cls(["A"])
        mediator.handle_notification = lambda n: seen.append(
            structlog.contextvars.get_contextvars().get("notification_name")
        )
        view.register_mediator(mediator)

        view.notify_observers(Notification("A"))

        assert seen == ["A"]
        assert "notification_name" not in structlog.contextvars.get_contextvars()
