# hfsm/core/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

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

_EMPTY: Mapping = MappingProxyType({})


class TransitionKind(Enum):
    """How a fired transition treats the current state."""

    EXTERNAL = "external"
    SELF = "self"
    INTERNAL = "internal"
    IGNORE = "ignore"


@dataclass(frozen=True)
class Guard:
    """
    A (condition, actions) rule attached to a transition. A missing condition
    always matches.
    """

    condition: Optional[Condition] = None
    actions: Tuple[TransitionAction, ...] = ()


@dataclass(frozen=True)
class TransitionDef:
    """
    Declarative description of a transition registered for one event on one
    state.

    :param kind: External, self, internal or ignore.
    :param target: Target state name, only meaningful for external transitions.
    :param guards: Ordered guard rules; the first matching rule is selected.
    """

    kind: TransitionKind = TransitionKind.EXTERNAL
    target: Optional[StateName] = None
    guards: Tuple[Guard, ...] = ()

    def target_from(self, source: StateName) -> StateName:
        """Return the state this transition leads to when fired from ``source``."""
        if self.kind is TransitionKind.EXTERNAL:
            return self.target
        return source


@dataclass(frozen=True)
class StateDef:
    """Entry/exit actions, transitions and optional submachine of one state."""

    entry_actions: Tuple[StateAction, ...] = ()
    exit_actions: Tuple[StateAction, ...] = ()
    transitions: Mapping[EventName, Tuple[TransitionDef, ...]] = field(default_factory=lambda: _EMPTY)
    any_transitions: Tuple[TransitionDef, ...] = ()
    submachine: Optional["Configuration"] = None


@dataclass(frozen=True)
class HookSet:
    """Global hooks invoked for every state and transition of a machine."""

    on_state_enter: Tuple[StateHook, ...] = ()
    on_state_exit: Tuple[StateHook, ...] = ()
    on_transition: Tuple[TransitionHook, ...] = ()
    on_unhandled_event: Tuple[UnhandledEventHook, ...] = ()


@dataclass(frozen=True)
class Configuration:
    """
    Immutable description of a state machine. A single configuration may be
    shared by any number of running instances.
    """

    initial_state: StateName
    states: Mapping[StateName, StateDef] = field(default_factory=lambda: _EMPTY)
    global_hooks: HookSet = field(default_factory=HookSet)

    def get_state(self, name: StateName) -> StateDef:
        """Return the definition of ``name``."""
        return self.states[name]
