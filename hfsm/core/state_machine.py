# hfsm/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
import weakref
from typing import Any, List, Optional

from hfsm.core.config import Configuration, TransitionKind
from hfsm.core.errors import UnhandledEventError
from hfsm.core.hooks import HookInvoker
from hfsm.core.transitions import ResolvedTransition, has_transitions, resolve
from hfsm.core.validations import Validator
from hfsm.interfaces.types import EventName, StateName
from hfsm.runtime.event_queue import EventQueue

logger = logging.getLogger(__name__)


def start(config: Any, validator: Optional[Validator] = None) -> "StateMachine":
    """
    Validate ``config`` and start a new machine instance in its initial state.

    :param config: The configuration to run.
    :param validator: Optional validator, defaults to the built-in rules.
    :raises ConfigurationError: If the configuration is missing or invalid.
    """
    (validator or Validator()).validate_configuration(config)
    return StateMachine._start(config, parent=None)


class StateMachine:
    """
    A running instance of a configuration.

    Events passed to :meth:`handle` are queued and processed one at a time.
    An event raised from inside a hook or action of the same instance is only
    queued; it runs once the in-flight transition has completed, before the
    outer :meth:`handle` call returns.

    Each state may declare a submachine. The instance owns the submachine of
    its current state, starting it when the state is entered and discarding
    it when the state is left. Events that the current state cannot resolve
    are delegated downward to the submachine.
    """

    def __init__(self, config: Configuration, parent: Optional["StateMachine"] = None) -> None:
        """
        Use :func:`start` rather than constructing instances directly; the
        constructor does not validate ``config`` or enter the initial state.

        :param config: The configuration this instance runs.
        :param parent: The instance owning this one as a submachine.
        """
        self._config = config
        self._hooks = HookInvoker(config.global_hooks)
        self._validator = Validator()
        self._current_state: StateName = config.initial_state
        self._submachine: Optional[StateMachine] = None
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._queue = EventQueue()
        self._dispatching = False

    @classmethod
    def _start(cls, config: Configuration, parent: Optional["StateMachine"]) -> "StateMachine":
        machine = cls(config, parent)
        logger.debug("Starting machine in state '%s'", config.initial_state)
        machine._run_guarded(machine._enter_state, config.initial_state)
        return machine

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def current_state(self) -> StateName:
        """Name of the current state."""
        return self._current_state

    @property
    def submachine(self) -> Optional["StateMachine"]:
        """The live submachine of the current state, if it declares one."""
        return self._submachine

    @property
    def parent(self) -> Optional["StateMachine"]:
        """The instance owning this one, or None for a root machine."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def get_current_state(self) -> StateName:
        return self._current_state

    def get_submachine(self) -> Optional["StateMachine"]:
        return self._submachine

    def get_state_hierarchy(self) -> List[StateName]:
        """Current state names from this instance down through every active submachine."""
        hierarchy = []
        machine: Optional[StateMachine] = self
        while machine is not None:
            hierarchy.append(machine._current_state)
            machine = machine._submachine
        return hierarchy

    def can_handle(self, event: EventName) -> bool:
        """
        True if the current state, an active descendant, or an ancestor (in its
        own current state) declares a transition for ``event``. Guard
        conditions are not evaluated.
        """
        self._validator.validate_event(event)
        if self._can_handle_downward(event):
            return True
        ancestor = self.parent
        while ancestor is not None:
            if ancestor._can_handle_locally(event):
                return True
            ancestor = ancestor.parent
        return False

    def handle(self, event: EventName) -> "StateMachine":
        """
        Queue ``event`` and, unless this instance is already dispatching,
        process the queue until it is empty.

        :param event: Name of the event.
        :return: This instance.
        :raises UnhandledEventError: If neither this instance nor any active
            submachine can handle an event it processes.
        """
        self._validator.validate_event(event)
        self._queue.enqueue(event)
        if self._dispatching:
            logger.debug("Queued event '%s' raised during dispatch", event)
            return self
        self._run_guarded(self._drain_queue)
        return self

    def _run_guarded(self, fn, *args) -> Any:
        """
        Run ``fn`` with the dispatching flag set, then drain anything queued
        meanwhile. The pending queue is abandoned if anything raises.
        """
        self._dispatching = True
        try:
            result = fn(*args)
            self._drain_queue()
            return result
        except Exception:
            self._queue.clear()
            raise
        finally:
            self._dispatching = False

    def _drain_queue(self) -> None:
        while self._queue:
            event = self._queue.dequeue()
            if not self._dispatch(event):
                logger.debug("State '%s' cannot handle event '%s'", self._current_state, event)
                self._hooks.invoke_on_unhandled(event, self._current_state)
                raise UnhandledEventError(event, self._current_state)

    def _dispatch(self, event: EventName) -> bool:
        """Resolve ``event`` locally, then through the submachine. Returns whether it was handled."""
        resolved = resolve(self._config.get_state(self._current_state), event)
        if resolved is not None:
            self._execute_transition(event, resolved)
            return True
        submachine = self._submachine
        if submachine is not None:
            logger.debug("Delegating event '%s' from state '%s' to submachine", event, self._current_state)
            return submachine._handle_delegated(event)
        return False

    def _handle_delegated(self, event: EventName) -> bool:
        if self._dispatching:
            # Resolution has to wait for the in-flight transition, so only
            # events some level below can handle are queued here.
            if not self._can_handle_downward(event):
                return False
            self._queue.enqueue(event)
            return True
        return self._run_guarded(self._dispatch, event)

    def _execute_transition(self, event: EventName, resolved: ResolvedTransition) -> None:
        transition, guard = resolved
        if transition.kind is TransitionKind.IGNORE:
            logger.debug("Ignoring event '%s' in state '%s'", event, self._current_state)
            return

        source = self._current_state
        target = transition.target_from(source)
        logger.debug("Event '%s': %s transition '%s' -> '%s'", event, transition.kind.value, source, target)

        if transition.kind is TransitionKind.INTERNAL:
            self._hooks.invoke_on_transition(source, target, guard)
            return

        self._exit_state(source)
        self._hooks.invoke_on_transition(source, target, guard)
        self._enter_state(target)

    def _exit_state(self, state: StateName) -> None:
        self._hooks.invoke_on_exit(state, self._config.get_state(state))
        submachine = self._submachine
        if submachine is not None:
            self._submachine = None
            submachine._parent_ref = None

    def _enter_state(self, state: StateName) -> None:
        self._current_state = state
        state_def = self._config.get_state(state)
        self._hooks.invoke_on_enter(state, state_def)
        if state_def.submachine is not None:
            self._submachine = StateMachine._start(state_def.submachine, parent=self)

    def _can_handle_locally(self, event: EventName) -> bool:
        return has_transitions(self._config.get_state(self._current_state), event)

    def _can_handle_downward(self, event: EventName) -> bool:
        machine: Optional[StateMachine] = self
        while machine is not None:
            if machine._can_handle_locally(event):
                return True
            machine = machine._submachine
        return False

    def __repr__(self) -> str:
        return f"StateMachine(current_state={self._current_state!r})"
