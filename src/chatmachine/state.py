"""State contract for session machines."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chatmachine.session import Session, Transition

UNSET_STATE_NAME = "<unset>"


@runtime_checkable
class State(Protocol):
    """Behavior of a session while it is in one state.

    Each callback receives the owning session. A callback continues by
    returning ``None`` and requests a transition either by calling
    ``session.change_state(...)`` or by returning ``Transition(...)``.
    """

    def on_enter(self, session: Session) -> Transition | None: ...

    def on_update(self, session: Session) -> Transition | None: ...

    def on_exit(self, session: Session) -> None: ...


class BaseState:
    """State with no-op callbacks; subclasses override what they need."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def on_enter(self, session: Session) -> Transition | None:
        return None

    def on_update(self, session: Session) -> Transition | None:
        return None

    def on_exit(self, session: Session) -> None:
        return None

    def __repr__(self) -> str:
        return f"<{self.name}>"


def state_name(state: Any) -> str:
    """Display name for any state object."""

    if state is None:
        return UNSET_STATE_NAME
    name = getattr(state, "name", None)
    if isinstance(name, str) and name:
        return name
    return type(state).__name__
