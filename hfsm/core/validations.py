# hfsm/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, List, Mapping

from hfsm.core.config import Configuration, HookSet, StateDef, TransitionDef, TransitionKind
from hfsm.core.errors import ConfigurationError


class Validator:
    """
    Performs construction-time validation of configurations and runtime
    validation of event names.
    """

    def __init__(self) -> None:
        self._rules_engine = _ValidationRulesEngine()

    def validate_configuration(self, config: Any) -> None:
        """
        Check that ``config`` is a well-formed configuration, including every
        nested submachine configuration.

        :param config: The object passed to ``start``.
        :raises ConfigurationError: If validation fails.
        """
        self._rules_engine.validate_configuration(config)

    def validate_event(self, event: Any) -> None:
        """
        :raises ValueError: If ``event`` is not a non-empty string.
        """
        self._rules_engine.validate_event(event)


class _ValidationRulesEngine:
    """
    Internal engine applying the default rule set and collecting configuration
    problems into a single error.
    """

    def __init__(self) -> None:
        self._default_rules = _DefaultValidationRules

    def validate_configuration(self, config: Any) -> None:
        if config is None:
            raise ConfigurationError("Configuration must be specified.")
        if not isinstance(config, Configuration):
            raise ConfigurationError("Configuration must be a Configuration instance.")

        errors: List[str] = []
        self._default_rules.check_configuration(config, errors, path="")
        if errors:
            raise ConfigurationError("Invalid configuration:\n" + "\n".join(errors))

    def validate_event(self, event: Any) -> None:
        self._default_rules.validate_event(event)


class _DefaultValidationRules:
    """
    Built-in structural rules:
    - the initial state is declared;
    - states and transitions are mappings and sequences of the model types;
    - every external transition names a declared target other than its source;
    - event names are non-empty strings;
    - submachine configurations are themselves valid.
    """

    @staticmethod
    def validate_event(event: Any) -> None:
        if not isinstance(event, str) or not event:
            raise ValueError(f"Event name must be a non-empty string, got {event!r}")

    @staticmethod
    def check_configuration(config: Configuration, errors: List[str], path: str) -> None:
        if not isinstance(config.global_hooks, HookSet):
            errors.append(f"{path}global_hooks must be a HookSet")

        if not isinstance(config.states, Mapping):
            errors.append(f"{path}states must be a mapping of state names to StateDef")
            return

        if config.initial_state not in config.states:
            errors.append(f"{path}Initial state '{config.initial_state}' is not declared")

        for name, state_def in config.states.items():
            where = f"{path}{name}"
            if not isinstance(state_def, StateDef):
                errors.append(f"{where}: state definition must be a StateDef")
                continue

            if not isinstance(state_def.transitions, Mapping):
                errors.append(f"{where}: transitions must be a mapping of event names to transition sequences")
            else:
                for event, transitions in state_def.transitions.items():
                    if not isinstance(event, str) or not event:
                        errors.append(f"{where}: event name must be a non-empty string, got {event!r}")
                    _DefaultValidationRules.check_transitions(config, name, transitions, errors, f"{where} on '{event}'")

            _DefaultValidationRules.check_transitions(config, name, state_def.any_transitions, errors, f"{where} on any")

            if state_def.submachine is not None:
                if not isinstance(state_def.submachine, Configuration):
                    errors.append(f"{where}: submachine must be a Configuration")
                else:
                    _DefaultValidationRules.check_configuration(state_def.submachine, errors, path=f"{where}/")

    @staticmethod
    def check_transitions(config: Configuration, source: str, transitions: Any, errors: List[str], where: str) -> None:
        if not isinstance(transitions, (tuple, list)):
            errors.append(f"{where}: transitions must be a tuple or list of TransitionDef")
            return
        for transition in transitions:
            _DefaultValidationRules.check_transition(config, source, transition, errors, where)

    @staticmethod
    def check_transition(config: Configuration, source: str, transition: Any, errors: List[str], where: str) -> None:
        if not isinstance(transition, TransitionDef):
            errors.append(f"{where}: transition must be a TransitionDef")
            return
        if transition.kind is TransitionKind.EXTERNAL:
            if transition.target is None:
                errors.append(f"{where}: external transition requires a target state")
            elif transition.target not in config.states:
                errors.append(f"{where}: target state '{transition.target}' is not declared")
            elif transition.target == source:
                errors.append(f"{where}: external transition cannot target its own state, use a self transition")
