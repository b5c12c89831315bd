"""Builtin global hook plugins."""

from __future__ import annotations

from loguru import logger

from chatmachine.hookspecs import hookimpl
from chatmachine.session import Session
from chatmachine.state import State, state_name


class TraceHooks:
    """Logs every callback the machine is about to run."""

    def __init__(self, level: str = "INFO") -> None:
        self.level = level

    @hookimpl
    def on_enter(self, session: Session, state: State) -> None:
        logger.log(self.level, "state.enter session={} state={}", session.session_id, state_name(state))

    @hookimpl
    def on_update(self, session: Session, state: State) -> None:
        logger.log(
            self.level,
            "state.update session={} state={} input={!r}",
            session.session_id,
            state_name(state),
            session.input,
        )

    @hookimpl
    def on_exit(self, session: Session, state: State) -> None:
        logger.log(self.level, "state.exit session={} state={}", session.session_id, state_name(state))
