"""Two-state greeting machine used by the ``demo`` command."""

from __future__ import annotations

from chatmachine.config import Settings
from chatmachine.machine import ChatMachine
from chatmachine.plugins import TraceHooks
from chatmachine.session import Session
from chatmachine.state import BaseState


class HelloState(BaseState):
    """Waits for ``next`` and then moves on to ``WorldState``."""

    def on_enter(self, session: Session) -> None:
        session.add_output("Entered Hello State")

    def on_update(self, session: Session) -> None:
        if session.input.strip() == "next":
            session.change_state(WorldState())
        session.add_output("Waiting for 'next' input...")

    def on_exit(self, session: Session) -> None:
        session.add_output("Exiting Hello State")


class WorldState(BaseState):
    """Greets once and ends the session."""

    def on_enter(self, session: Session) -> None:
        session.add_output("Hello, World!")
        session.end()


def build_demo_machine(settings: Settings | None = None, *, trace: bool = False) -> ChatMachine:
    machine = ChatMachine(HelloState(), settings=settings)
    if trace:
        machine.register_plugin(TraceHooks(), name="trace")
    return machine
