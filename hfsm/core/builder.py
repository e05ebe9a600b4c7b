# hfsm/core/builder.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Fluent builder producing immutable :class:`Configuration` values.

Every nested builder forwards unknown attributes to its parent, so a chain can
move from a transition back to its state, and from a state back to the root::

    config = (
        configure()
        .global_hooks()
            .on_state_enter(log_enter)
        .initial_state("idle")
            .on("start").transition("running").with_condition(is_ready)
        .state("running")
            .on_enter(spin_up)
            .on("stop").transition("idle")
        .get_config()
    )
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Optional

from hfsm.core.config import Configuration, Guard, HookSet, StateDef, TransitionDef, TransitionKind
from hfsm.core.errors import ConfigurationError
from hfsm.core.state_machine import StateMachine, start
from hfsm.interfaces.types import (
    Condition,
    EventName,
    StateAction,
    StateHook,
    StateName,
    TransitionAction,
    TransitionHook,
    UnhandledEventHook,
)


def configure() -> "ConfigurationBuilder":
    """Begin a new configuration."""
    return ConfigurationBuilder()


class _ChildBuilder:
    """Base for nested builders: unknown attributes resolve on the parent builder."""

    def __init__(self, parent: Any) -> None:
        self._parent = parent

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._parent, name)


class ConfigurationBuilder:
    def __init__(self) -> None:
        self._initial_state: Optional[StateName] = None
        self._states: Dict[StateName, StateBuilder] = {}
        self._global = GlobalHooksBuilder(self)

    def global_hooks(self) -> "GlobalHooksBuilder":
        return self._global

    def initial_state(self, name: StateName) -> "StateBuilder":
        if self._initial_state is not None:
            raise ConfigurationError(f"Initial state is already set to '{self._initial_state}'.")
        self._initial_state = name
        return self.state(name)

    def state(self, name: StateName) -> "StateBuilder":
        """Return the builder for ``name``, registering the state on first use."""
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"State name must be a non-empty string, got {name!r}.")
        if name not in self._states:
            self._states[name] = StateBuilder(self, name)
        return self._states[name]

    def get_config(self) -> Configuration:
        """
        Freeze everything declared so far into a :class:`Configuration`.

        :raises ConfigurationError: If no initial state was declared.
        """
        if self._initial_state is None:
            raise ConfigurationError("Initial state must be specified.")
        states = {name: builder._build() for name, builder in self._states.items()}
        return Configuration(
            initial_state=self._initial_state,
            states=MappingProxyType(states),
            global_hooks=self._global._build(),
        )

    def start(self) -> StateMachine:
        """Build the configuration and start an instance of it."""
        return start(self.get_config())


class GlobalHooksBuilder(_ChildBuilder):
    def __init__(self, parent: ConfigurationBuilder) -> None:
        super().__init__(parent)
        self._on_state_enter: List[StateHook] = []
        self._on_state_exit: List[StateHook] = []
        self._on_transition: List[TransitionHook] = []
        self._on_unhandled_event: List[UnhandledEventHook] = []

    def on_state_enter(self, hook: StateHook) -> "GlobalHooksBuilder":
        self._on_state_enter.append(hook)
        return self

    def on_state_exit(self, hook: StateHook) -> "GlobalHooksBuilder":
        self._on_state_exit.append(hook)
        return self

    def on_transition(self, hook: TransitionHook) -> "GlobalHooksBuilder":
        self._on_transition.append(hook)
        return self

    def on_unhandled_event(self, hook: UnhandledEventHook) -> "GlobalHooksBuilder":
        self._on_unhandled_event.append(hook)
        return self

    def _build(self) -> HookSet:
        return HookSet(
            on_state_enter=tuple(self._on_state_enter),
            on_state_exit=tuple(self._on_state_exit),
            on_transition=tuple(self._on_transition),
            on_unhandled_event=tuple(self._on_unhandled_event),
        )


class StateBuilder(_ChildBuilder):
    def __init__(self, parent: ConfigurationBuilder, name: StateName) -> None:
        super().__init__(parent)
        self._name = name
        self._entry_actions: List[StateAction] = []
        self._exit_actions: List[StateAction] = []
        self._triggers: Dict[EventName, TriggerBuilder] = {}
        self._any_trigger: Optional[TriggerBuilder] = None
        self._submachine: Optional[Configuration] = None

    def on_enter(self, action: StateAction) -> "StateBuilder":
        self._entry_actions.append(action)
        return self

    def on_exit(self, action: StateAction) -> "StateBuilder":
        self._exit_actions.append(action)
        return self

    def submachine(self, config: Configuration) -> "StateBuilder":
        if not isinstance(config, Configuration):
            raise ConfigurationError("Submachine must be a Configuration instance.")
        self._submachine = config
        return self

    def on(self, event: EventName) -> "TriggerBuilder":
        """Declare transitions for ``event``; repeated calls extend the same list."""
        if not isinstance(event, str) or not event:
            raise ConfigurationError(f"Event name must be a non-empty string, got {event!r}.")
        if event not in self._triggers:
            self._triggers[event] = TriggerBuilder(self)
        return self._triggers[event]

    def on_any(self) -> "TriggerBuilder":
        """Declare transitions for any event this state has no named transitions for."""
        if self._any_trigger is None:
            self._any_trigger = TriggerBuilder(self)
        return self._any_trigger

    def _build(self) -> StateDef:
        transitions = {event: trigger._build() for event, trigger in self._triggers.items()}
        return StateDef(
            entry_actions=tuple(self._entry_actions),
            exit_actions=tuple(self._exit_actions),
            transitions=MappingProxyType(transitions),
            any_transitions=self._any_trigger._build() if self._any_trigger else (),
            submachine=self._submachine,
        )


class TriggerBuilder(_ChildBuilder):
    def __init__(self, parent: StateBuilder) -> None:
        super().__init__(parent)
        self._transitions: List[TransitionBuilder] = []

    def transition(self, target: StateName) -> "TransitionBuilder":
        if target == self._parent._name:
            raise ConfigurationError(f"State '{target}' cannot transition to itself, use self_transition().")
        # Undeclared targets become states with no actions or transitions.
        self._parent._parent.state(target)
        return self._add(TransitionKind.EXTERNAL, target)

    def self_transition(self) -> "TransitionBuilder":
        return self._add(TransitionKind.SELF)

    def internal_transition(self) -> "TransitionBuilder":
        return self._add(TransitionKind.INTERNAL)

    def ignore(self) -> "TransitionBuilder":
        return self._add(TransitionKind.IGNORE)

    def _add(self, kind: TransitionKind, target: Optional[StateName] = None) -> "TransitionBuilder":
        builder = TransitionBuilder(self, kind, target)
        self._transitions.append(builder)
        return builder

    def _build(self) -> tuple:
        return tuple(t._build() for t in self._transitions)


class TransitionBuilder(_ChildBuilder):
    def __init__(self, parent: TriggerBuilder, kind: TransitionKind, target: Optional[StateName]) -> None:
        super().__init__(parent)
        self._kind = kind
        self._target = target
        self._condition: Optional[Condition] = None
        self._actions: List[TransitionAction] = []

    def with_condition(self, condition: Condition) -> "TransitionBuilder":
        if self._condition is not None:
            raise ConfigurationError("Transition already has a condition.")
        self._condition = condition
        return self

    def with_action(self, action: TransitionAction) -> "TransitionBuilder":
        if self._kind is TransitionKind.IGNORE:
            raise ConfigurationError("Ignored events cannot have actions.")
        self._actions.append(action)
        return self

    def _build(self) -> TransitionDef:
        return TransitionDef(
            kind=self._kind,
            target=self._target,
            guards=(Guard(condition=self._condition, actions=tuple(self._actions)),),
        )
