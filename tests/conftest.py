"""Shared fixtures: every dispatcher test runs against both construction paths."""

from __future__ import annotations

import pytest

from eventdispatch import EventDispatcher, compose
from tests.mocks import Recorder, Widget

ALLOWED_EVENTS = ["allowed-event-1", "allowed-event-2"]


@pytest.fixture(params=["direct", "composed"])
def dispatcher(request):
    """Unrestricted dispatcher, built directly or composed onto a Widget."""
    if request.param == "direct":
        return EventDispatcher()
    return compose(Widget())


@pytest.fixture(params=["direct", "composed"])
def restricted(request):
    """Dispatcher limited to ALLOWED_EVENTS."""
    if request.param == "direct":
        return EventDispatcher(ALLOWED_EVENTS)
    return compose(Widget(), ALLOWED_EVENTS)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
