"""Session registry and per-turn dispatch."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pluggy
from loguru import logger

from chatmachine.config import Settings
from chatmachine.errors import InvalidStateError, StateChange, TransitionError, TransitionLimitExceeded
from chatmachine.hook_runtime import FunctionHook, HookRuntime
from chatmachine.hookspecs import CHATMACHINE_HOOK_NAMESPACE, GLOBAL_HOOKS, ChatMachineHookSpecs
from chatmachine.session import Session, Transition
from chatmachine.state import State, state_name

SessionHook = Callable[[Session], Any]


class ChatMachine:
    """Owns every live session and advances one of them per call to ``run``.

    Not safe for concurrent use: callers serialize ``run``, at least per
    session id.
    """

    def __init__(self, start_state: State, *, settings: Settings | None = None) -> None:
        if start_state is None:
            raise InvalidStateError("a start state is required")
        self._start_state = start_state
        self._settings = settings or Settings()
        self._sessions: dict[str, Session] = {}
        self._plugin_manager = pluggy.PluginManager(CHATMACHINE_HOOK_NAMESPACE)
        self._plugin_manager.add_hookspecs(ChatMachineHookSpecs)
        self._hook_runtime = HookRuntime(self._plugin_manager)

    @property
    def start_state(self) -> State:
        return self._start_state

    @property
    def settings(self) -> Settings:
        return self._settings

    # Global hooks

    def set_on_enter_hook(self, fn: SessionHook | None) -> None:
        """Replace the function run before every ``on_enter``."""

        self._set_function_hook("on_enter", fn)

    def set_on_update_hook(self, fn: SessionHook | None) -> None:
        """Replace the function run before every ``on_update``."""

        self._set_function_hook("on_update", fn)

    def set_on_exit_hook(self, fn: SessionHook | None) -> None:
        """Replace the function run before every ``on_exit`` of a transition."""

        self._set_function_hook("on_exit", fn)

    def register_plugin(self, plugin: object, name: str | None = None) -> str:
        """Register a pluggy plugin implementing any of the global hooks."""

        plugin_name = self._plugin_manager.register(plugin, name=name)
        if plugin_name is None:
            raise ValueError(f"plugin {name or plugin!r} is blocked")
        logger.debug("hooks.registered plugin={}", plugin_name)
        return plugin_name

    def unregister_plugin(self, name: str) -> object | None:
        if not self._plugin_manager.has_plugin(name):
            return None
        return self._plugin_manager.unregister(name=name)

    def hook_report(self) -> dict[str, list[str]]:
        """Return hook implementation summary for diagnostics."""

        return self._hook_runtime.hook_report()

    # Registry

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def session_ids(self) -> list[str]:
        return list(self._sessions)

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def current_state(self, session_id: str) -> State | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        return session.current_state

    def is_in(self, session_id: str, state_type: type) -> bool:
        """Whether the session's active state is an instance of ``state_type``."""

        return isinstance(self.current_state(session_id), state_type)

    def end_session(self, session_id: str) -> bool:
        """Drop a session without running any callbacks."""

        removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.debug("session.dropped session={}", session_id)
        return removed

    # Dispatch

    def run(self, input: str, session_id: str) -> str:  # noqa: A002
        """Feed one input to a session and return the text produced this turn."""

        session = self._session_for(session_id)
        session.input = input
        session.output = ""

        with logger.contextualize(session=session_id):
            try:
                if session.current_state is None:
                    session.current_state = self._start_state
                    logger.debug("turn.start state={} first=true", state_name(session.current_state))
                    requested = self._invoke(session, "on_enter")
                else:
                    logger.debug("turn.start state={}", state_name(session.current_state))
                    requested = self._invoke(session, "on_update")

                transitions = 0
                while requested:
                    transitions += 1
                    if transitions > self._settings.max_transitions_per_turn:
                        raise TransitionLimitExceeded(session_id, self._settings.max_transitions_per_turn)
                    requested = self._transition(session)
            finally:
                session.next_state = None

            output = session.output
            if session.end_requested:
                self._sessions.pop(session_id, None)
                logger.debug("session.ended state={}", state_name(session.current_state))
            return output

    def _session_for(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            session = Session(session_id=session_id)
            self._sessions[session_id] = session
            logger.debug("session.created session={}", session_id)
        return session

    def _invoke(self, session: Session, hook_name: str) -> bool:
        """Run the global hook and the state callback; report a transition request."""

        state = session.current_state
        try:
            self._hook_runtime.call_many_sync(hook_name, session=session, state=state)
            result = getattr(state, hook_name)(session)
        except StateChange:
            if session.next_state is None:
                raise TransitionError(f"{state_name(state)}.{hook_name} signalled a transition without a target") from None
            return True
        if isinstance(result, Transition):
            session.next_state = result.state
            return True
        return False

    def _transition(self, session: Session) -> bool:
        previous = session.current_state
        target = session.next_state
        try:
            self._hook_runtime.call_many_sync("on_exit", session=session, state=previous)
            previous.on_exit(session)
        except StateChange:
            raise TransitionError(f"{state_name(previous)}.on_exit cannot request a transition") from None

        session.current_state = target
        session.next_state = None
        logger.debug("machine.transition from={} to={}", state_name(previous), state_name(target))
        return self._invoke(session, "on_enter")

    def _set_function_hook(self, hook_name: str, fn: SessionHook | None) -> None:
        if hook_name not in GLOBAL_HOOKS:
            raise ValueError(f"unknown global hook: {hook_name}")
        plugin_name = f"global:{hook_name}"
        if self._plugin_manager.has_plugin(plugin_name):
            self._plugin_manager.unregister(name=plugin_name)
        if fn is None:
            return
        self._plugin_manager.register(FunctionHook(hook_name, fn), name=plugin_name)
