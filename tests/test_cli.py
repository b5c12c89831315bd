from __future__ import annotations

import importlib

from typer.testing import CliRunner

from chatmachine.demo import HelloState, WorldState, build_demo_machine

cli_module = importlib.import_module("chatmachine.cli")


def test_demo_machine_greets_and_ends() -> None:
    machine = build_demo_machine()

    assert machine.run("hi", "local") == "Entered Hello State\n"
    assert machine.run("later", "local") == "Waiting for 'next' input...\n"
    assert machine.is_in("local", HelloState)
    assert machine.run("next", "local") == "Exiting Hello State\nHello, World!\n"
    assert "local" not in machine


def test_world_state_ends_session_on_enter() -> None:
    machine = build_demo_machine()
    machine.run("", "local")
    session = machine.get_session("local")

    WorldState().on_enter(session)

    assert session.end_requested is True


def test_demo_command_runs_until_session_ends() -> None:
    runner = CliRunner()

    result = runner.invoke(cli_module.app, ["demo"], input="hello\nnext\nignored\n")

    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "Entered Hello State",
        "Waiting for 'next' input...",
        "Exiting Hello State",
        "Hello, World!",
    ]


def test_demo_command_stops_at_eof() -> None:
    runner = CliRunner()

    result = runner.invoke(cli_module.app, ["demo", "--session", "abc"], input="")

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["Entered Hello State"]


def test_demo_command_rejects_bad_log_profile() -> None:
    runner = CliRunner()

    result = runner.invoke(cli_module.app, ["demo", "--log-profile", "loud"], input="")

    assert result.exit_code != 0


def test_hooks_command_reports_trace_plugin() -> None:
    runner = CliRunner()

    plain = runner.invoke(cli_module.app, ["hooks"])
    traced = runner.invoke(cli_module.app, ["hooks", "--trace"])

    assert plain.exit_code == 0
    assert "(no hooks)" in plain.stdout
    assert traced.exit_code == 0
    assert "on_enter: trace" in traced.stdout
    assert "on_exit: trace" in traced.stdout
