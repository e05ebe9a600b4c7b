# hfsm/core/hooks.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Optional

from hfsm.core.config import Guard, HookSet, StateDef
from hfsm.interfaces.types import EventName, StateName


class HookInvoker:
    """
    Runs the global hooks of one machine together with the per-state and
    per-transition actions, each phase in a fixed order:

    - exit: global ``on_state_exit`` hooks, then the state's exit actions
    - transition: global ``on_transition`` hooks, then the guard's actions
    - enter: global ``on_state_enter`` hooks, then the state's entry actions

    Exceptions raised by hooks or actions are not caught; they abort the
    remainder of the phase and propagate to the caller.
    """

    def __init__(self, hooks: HookSet) -> None:
        self._hooks = hooks

    def invoke_on_enter(self, state: StateName, state_def: StateDef) -> None:
        for hook in self._hooks.on_state_enter:
            hook(state)
        for action in state_def.entry_actions:
            action(state)

    def invoke_on_exit(self, state: StateName, state_def: StateDef) -> None:
        for hook in self._hooks.on_state_exit:
            hook(state)
        for action in state_def.exit_actions:
            action(state)

    def invoke_on_transition(self, source: StateName, target: StateName, guard: Optional[Guard]) -> None:
        for hook in self._hooks.on_transition:
            hook(source, target)
        if guard is not None:
            for action in guard.actions:
                action(source, target)

    def invoke_on_unhandled(self, event: EventName, state: StateName) -> None:
        for hook in self._hooks.on_unhandled_event:
            hook(event, state)
