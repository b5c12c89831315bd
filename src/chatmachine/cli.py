"""chatmachine command line interface."""

from __future__ import annotations

from typing import Any

import typer
from loguru import logger
from pydantic import ValidationError
from rich import get_console

from chatmachine.config import Settings, get_settings
from chatmachine.demo import build_demo_machine
from chatmachine.errors import ChatMachineError

app = typer.Typer(name="chatmachine", help="Per-session state machines for turn-based chat", add_completion=False)


def _load_settings(**overrides: Any) -> Settings:
    try:
        return get_settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def demo(
    session_id: str = typer.Option("local", "--session", "-s", help="Session id used for every turn"),
    trace: bool = typer.Option(False, "--trace", help="Log every state callback"),
    log_profile: str | None = typer.Option(None, "--log-profile", help="Log profile: default or chat"),
    log_level: str | None = typer.Option(None, "--log-level", help="Override CHATMACHINE_LOG_LEVEL"),
) -> None:
    """Chat with the greeting machine over stdin until the session ends."""

    settings = _load_settings(log_profile=log_profile, log_level=log_level)
    machine = build_demo_machine(settings, trace=trace)
    console = get_console()

    line = ""
    while True:
        try:
            output = machine.run(line, session_id)
        except ChatMachineError as exc:
            logger.error("demo.turn_failed session={} error={}", session_id, exc)
            raise typer.Exit(code=1) from exc
        console.print(output, end="", markup=False, highlight=False, soft_wrap=True)
        if session_id not in machine:
            return
        try:
            line = input()
        except EOFError:
            return


@app.command()
def hooks(
    trace: bool = typer.Option(False, "--trace", help="Include the tracing plugin"),
) -> None:
    """Show global hook implementations of the demo machine."""

    machine = build_demo_machine(_load_settings(), trace=trace)
    report = machine.hook_report()
    if not report:
        typer.echo("(no hooks)")
        return
    for hook_name, plugins in report.items():
        typer.echo(f"{hook_name}: {', '.join(plugins)}")
