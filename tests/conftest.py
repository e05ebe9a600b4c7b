# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def handler_mocks():
    """Spies for every kind of hook and action."""
    return SimpleNamespace(
        state_enter_handler=MagicMock(name="state_enter_handler"),
        state_exit_handler=MagicMock(name="state_exit_handler"),
        transition_handler=MagicMock(name="transition_handler"),
        unhandled_event_handler=MagicMock(name="unhandled_event_handler"),
        entry_action=MagicMock(name="entry_action"),
        exit_action=MagicMock(name="exit_action"),
        transition_action=MagicMock(name="transition_action"),
    )


@pytest.fixture
def reset_mocks(handler_mocks):
    def _reset():
        for mock in vars(handler_mocks).values():
            mock.reset_mock()

    return _reset


@pytest.fixture
def trace():
    """A list plus a factory for handlers that append a label to it."""
    calls = []

    def record(label):
        return lambda *args: calls.append(label)

    return SimpleNamespace(calls=calls, record=record)


@pytest.fixture
def machine_ref():
    """Holder used by handlers that need the machine they run in."""
    return SimpleNamespace(machine=None)
