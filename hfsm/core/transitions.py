# hfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

from hfsm.core.config import Guard, StateDef, TransitionDef
from hfsm.interfaces.types import EventName


class ResolvedTransition(NamedTuple):
    """The transition selected for an event together with the guard that matched."""

    transition: TransitionDef
    guard: Optional[Guard]


def candidate_transitions(state_def: StateDef, event: EventName) -> Tuple[TransitionDef, ...]:
    """
    Return the transitions registered for ``event`` on ``state_def``, falling
    back to the catch-all transitions when none are registered by name.
    """
    transitions = state_def.transitions.get(event)
    if transitions:
        return transitions
    return state_def.any_transitions


def has_transitions(state_def: StateDef, event: EventName) -> bool:
    """True if at least one transition exists for ``event``, regardless of guards."""
    return bool(candidate_transitions(state_def, event))


def resolve(state_def: StateDef, event: EventName) -> Optional[ResolvedTransition]:
    """
    Select the first transition for ``event`` whose guard matches.

    :param state_def: Definition of the current state.
    :param event: Name of the event being handled.
    :return: The selected transition and guard, or None if nothing matches.
    """
    for transition in candidate_transitions(state_def, event):
        if not transition.guards:
            return ResolvedTransition(transition, None)
        guard = _GuardEvaluator().first_match(transition.guards)
        if guard is not None:
            return ResolvedTransition(transition, guard)
    return None


class _GuardEvaluator:
    """
    Internal helper to evaluate guard conditions in declared order.
    """

    def first_match(self, guards: Tuple[Guard, ...]) -> Optional[Guard]:
        """
        Return the first guard whose condition is absent or true. Conditions
        after the match are not evaluated.
        """
        for g in guards:
            if g.condition is None or g.condition():
                return g
        return None
