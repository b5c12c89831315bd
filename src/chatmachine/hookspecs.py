"""Pluggy hook namespace and global hook specifications."""

from __future__ import annotations

import pluggy

from chatmachine.session import Session
from chatmachine.state import State

CHATMACHINE_HOOK_NAMESPACE = "chatmachine"
hookspec = pluggy.HookspecMarker(CHATMACHINE_HOOK_NAMESPACE)
hookimpl = pluggy.HookimplMarker(CHATMACHINE_HOOK_NAMESPACE)

GLOBAL_HOOKS = ("on_enter", "on_update", "on_exit")


class ChatMachineHookSpecs:
    """Hooks invoked around every state's callbacks, whatever the state."""

    @hookspec
    def on_enter(self, session: Session, state: State) -> None:
        """Run right before ``state.on_enter``."""

    @hookspec
    def on_update(self, session: Session, state: State) -> None:
        """Run right before ``state.on_update``."""

    @hookspec
    def on_exit(self, session: Session, state: State) -> None:
        """Run right before ``state.on_exit`` during a transition."""
