# hfsm/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Callable

StateName = str
EventName = str

# Callback Types
StateAction = Callable[[StateName], None]
TransitionAction = Callable[[StateName, StateName], None]
Condition = Callable[[], bool]
StateHook = Callable[[StateName], None]
TransitionHook = Callable[[StateName, StateName], None]
UnhandledEventHook = Callable[[EventName, StateName], None]
