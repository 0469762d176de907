"""
Global pytest configuration and fixtures for all tests.

Provides:
- Settings built from a controlled environment
- Fresh View / Controller / Facade instances
- Recording commands and mediators
"""

import pytest

from mvcore.core.command import SimpleCommand
from mvcore.core.config import Settings
from mvcore.core.controller import Controller
from mvcore.core.facade import Facade
from mvcore.core.mediator import Mediator
from mvcore.core.view import View

_SETTING_KEYS = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "COMMAND_REGISTRATION_POLICY",
    "STRICT_DISPATCH",
)


@pytest.fixture
def make_settings(monkeypatch):
    """Build Settings from the given MVCORE_* values only."""

    def _make(**values: str) -> Settings:
        for key in _SETTING_KEYS:
            monkeypatch.delenv(f"MVCORE_{key}", raising=False)
        for key, value in values.items():
            monkeypatch.setenv(f"MVCORE_{key.upper()}", value)
        return Settings(env_file="")

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def view() -> View:
    return View()


@pytest.fixture
def controller(view, settings) -> Controller:
    return Controller(view=view, settings=settings)


@pytest.fixture
def facade(settings) -> Facade:
    return Facade(settings=settings)


@pytest.fixture
def executed():
    """Shared log of (command class name, notification) pairs."""
    return []


@pytest.fixture
def recording_command(executed):
    """Command class that appends to the ``executed`` log."""

    class RecordingCommand(SimpleCommand):
        def execute(self, notification):
            executed.append((self.__class__.__name__, notification))

    return RecordingCommand


class RecordingMediator(Mediator):
    """Mediator that records every lifecycle call in order."""

    NAME = "RecordingMediator"

    def __init__(self, interests=None, mediator_name=None, view_component=None):
        super().__init__(mediator_name, view_component)
        self.interests = list(interests or [])
        self.calls: list[tuple[str, object]] = []

    def list_notification_interests(self):
        self.calls.append(("list_notification_interests", None))
        return self.interests

    def handle_notification(self, notification):
        self.calls.append(("handle_notification", notification.name))

    def on_register(self):
        self.calls.append(("on_register", None))

    def on_remove(self):
        self.calls.append(("on_remove", None))

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def handled(self) -> list[str]:
        return [arg for name, arg in self.calls if name == "handle_notification"]


@pytest.fixture
def mediator_cls():
    """The RecordingMediator class."""
    return RecordingMediator
