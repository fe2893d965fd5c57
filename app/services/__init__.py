"""Service package public API definitions.

Service implementations depend on ``app.clients`` which in turn imports
``app.services.exceptions``. Importing the implementations eagerly here would
run this module first and create a circular import, so they are resolved
lazily on first attribute access.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

__all__ = [
    "CalendarSlotService",
    "NotificationDispatcher",
    "ReviewService",
]

_SERVICE_MODULES = {
    "CalendarSlotService": "calendar_slots",
    "NotificationDispatcher": "notifications",
    "ReviewService": "reviews",
}


def __getattr__(name: str) -> Any:
    if name not in _SERVICE_MODULES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = import_module(f".{_SERVICE_MODULES[name]}", __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


if TYPE_CHECKING:  # pragma: no cover - import for static analysis only
    from .calendar_slots import CalendarSlotService as CalendarSlotService
    from .notifications import NotificationDispatcher as NotificationDispatcher
    from .reviews import ReviewService as ReviewService
