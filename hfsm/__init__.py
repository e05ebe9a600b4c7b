"""hfsm: hierarchical finite state machine engine

Runs immutable, declarative state machine configurations: states with entry
and exit actions, guarded transitions, global lifecycle hooks and nested
submachines.

Responsibilities:
    - Selecting the transition that fires for an event
    - Running hooks and actions in a deterministic order
    - Queueing events raised from within hooks until the current transition completes
    - Delegating events to, and answering queries across, nested submachines

Cross-cutting Concerns:
    Thread Safety:
        - Instances are single-threaded; configurations are immutable and shareable

    Error Handling:
        - ConfigurationError and UnhandledEventError derive from HSMError
        - Exceptions raised by hooks and actions propagate unchanged

    Logging:
        - Debug records on the ``hfsm`` logger hierarchy, no handlers installed
"""

from hfsm.core.builder import configure
from hfsm.core.config import Configuration, Guard, HookSet, StateDef, TransitionDef, TransitionKind
from hfsm.core.errors import ConfigurationError, HSMError, UnhandledEventError
from hfsm.core.state_machine import StateMachine, start

__version__ = "0.1.0"

__all__ = [
    "configure",
    "start",
    "StateMachine",
    # Configuration model
    "Configuration",
    "StateDef",
    "TransitionDef",
    "TransitionKind",
    "Guard",
    "HookSet",
    # Errors
    "HSMError",
    "ConfigurationError",
    "UnhandledEventError",
]
