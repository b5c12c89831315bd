"""Synchronous hook execution on top of pluggy."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

import pluggy

from chatmachine.errors import HookError
from chatmachine.hookspecs import hookimpl
from chatmachine.session import Session


class HookRuntime:
    """Runs hook implementations in precedence order and lets faults propagate."""

    def __init__(self, plugin_manager: pluggy.PluginManager) -> None:
        self._plugin_manager = plugin_manager

    def call_many_sync(self, hook_name: str, **kwargs: Any) -> list[Any]:
        """Run all implementations of one hook and collect their return values."""

        results: list[Any] = []
        for impl in self._iter_hookimpls(hook_name):
            value = impl.function(**self._kwargs_for_impl(impl, kwargs))
            if inspect.isawaitable(value):
                close = getattr(value, "close", None)
                if callable(close):
                    close()
                raise HookError(f"hook {hook_name} from {impl.plugin_name or '<unknown>'} returned an awaitable")
            results.append(value)
        return results

    def hook_report(self) -> dict[str, list[str]]:
        """Build a hook->plugins mapping for diagnostics."""

        report: dict[str, list[str]] = {}
        for hook_name, hook_caller in sorted(self._plugin_manager.hook.__dict__.items()):
            if hook_name.startswith("_") or not hasattr(hook_caller, "get_hookimpls"):
                continue
            plugin_names = [impl.plugin_name for impl in reversed(hook_caller.get_hookimpls())]
            if plugin_names:
                report[hook_name] = plugin_names
        return report

    def _iter_hookimpls(self, hook_name: str) -> list[Any]:
        hook = getattr(self._plugin_manager.hook, hook_name, None)
        if hook is None or not hasattr(hook, "get_hookimpls"):
            return []
        return list(reversed(hook.get_hookimpls()))

    @staticmethod
    def _kwargs_for_impl(impl: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
        return {name: kwargs[name] for name in impl.argnames if name in kwargs}


class FunctionHook:
    """Plugin exposing a plain ``fn(session)`` callable as one global hook."""

    def __init__(self, hook_name: str, fn: Callable[[Session], Any]) -> None:
        self.hook_name = hook_name
        self.fn = fn

        def _call(session: Session) -> None:
            fn(session)

        _call.__name__ = hook_name
        setattr(self, hook_name, hookimpl(_call))

    def __repr__(self) -> str:
        return f"FunctionHook({self.hook_name}={self.fn!r})"
