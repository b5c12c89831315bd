"""Exception types for chatmachine."""

from __future__ import annotations


class ChatMachineError(Exception):
    """Base exception for chatmachine."""


class InvalidStateError(ChatMachineError):
    """Raised when a state argument is missing or unusable."""


class TransitionError(ChatMachineError):
    """Raised when the transition protocol is misused."""


class TransitionLimitExceeded(TransitionError):
    """Raised when one turn chains more transitions than allowed."""

    def __init__(self, session_id: str, limit: int) -> None:
        super().__init__(f"session {session_id!r} exceeded {limit} chained transitions in one turn")
        self.session_id = session_id
        self.limit = limit


class HookError(ChatMachineError):
    """Raised when a global hook implementation cannot be run synchronously."""


class StateChange(BaseException):  # noqa: N818
    """Control-flow signal raised by ``Session.change_state``.

    Derives from ``BaseException`` so ``except Exception`` blocks in state
    callbacks let it through. Only the machine dispatch loop catches it.
    """
