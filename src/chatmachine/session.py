"""Per-conversation session data and the callback-facing mutation API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chatmachine.errors import InvalidStateError, StateChange
from chatmachine.state import State


@dataclass(frozen=True)
class Transition:
    """Explicit transition request returned from ``on_enter``/``on_update``."""

    state: State

    def __post_init__(self) -> None:
        if self.state is None:
            raise InvalidStateError("transition target must not be None")


@dataclass
class Session:
    """One ongoing conversation.

    ``input`` and ``output`` are only meaningful during the current turn.
    ``data`` belongs to the application and is never read by the machine.
    """

    session_id: str
    input: str = ""
    output: str = ""
    next_state: State | None = None
    data: Any = None
    current_state: State | None = None
    _end_requested: bool = field(default=False, init=False, repr=False)

    @property
    def end_requested(self) -> bool:
        return self._end_requested

    @property
    def is_new(self) -> bool:
        return self.current_state is None

    def add_output(self, text: Any) -> None:
        """Append one trimmed line to this turn's output."""

        self.output += str(text).strip() + "\n"

    def change_state(self, state: State) -> None:
        """Request a transition and abort the running callback."""

        if state is None:
            raise InvalidStateError("change_state() requires a state")
        self.next_state = state
        raise StateChange

    def end(self) -> None:
        """Mark the session for removal once the current turn finishes."""

        self._end_requested = True
