"""chatmachine - per-session state machines for turn-based chat."""

from .errors import (
    ChatMachineError,
    HookError,
    InvalidStateError,
    StateChange,
    TransitionError,
    TransitionLimitExceeded,
)
from .hookspecs import hookimpl
from .machine import ChatMachine
from .session import Session, Transition
from .state import BaseState, State

__version__ = "0.1.0"

__all__ = [
    "BaseState",
    "ChatMachine",
    "ChatMachineError",
    "HookError",
    "InvalidStateError",
    "Session",
    "State",
    "StateChange",
    "Transition",
    "TransitionError",
    "TransitionLimitExceeded",
    "hookimpl",
]
