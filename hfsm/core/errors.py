# hfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class HSMError(Exception):
    """
    Base exception class for errors within the hierarchical state machine library.
    """


class ConfigurationError(HSMError):
    """
    Raised when a configuration is missing, malformed, or fails validation.
    No machine instance is created when this is raised from ``start``.
    """


class UnhandledEventError(HSMError):
    """
    Raised when no machine in the reachable hierarchy (the instance itself and
    its active submachines) can handle an event.
    """

    def __init__(self, event: str, state: str) -> None:
        """
        :param event: Name of the event that could not be handled.
        :param state: Current state of the instance ``handle`` was called on.
        """
        super().__init__(f"State '{state}' cannot handle event '{event}'.")
        self.event = event
        self.state = state
