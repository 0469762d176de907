"""Command base classes."""

from .base import MacroCommand, SimpleCommand

__all__ = [
    "MacroCommand",
    "SimpleCommand",
]
