from typing import Any

import pytest
from click.testing import CliRunner

import rulehash.cli.main as cli_main
from rulehash.types import CycleError


@pytest.mark.parametrize(
    "argv, target",
    [
        (["hash", "query.json"], "rulehash.cli.commands.hash.hash_command"),
        (["hash", "-", "--strict", "--ignore-attr", "tags"], "rulehash.cli.commands.hash.hash_command"),
        (["sources", "query.json", "-o", "out.json"], "rulehash.cli.commands.sources.sources_command"),
        (["show", "query.json", "--limit", "5"], "rulehash.cli.commands.show.show_command"),
    ],
)
def test_click_command_wrappers_delegate(
    monkeypatch: Any, argv: list[str], target: str
) -> None:
    calls: list[Any] = []

    def fake_command(*args: Any) -> int:
        calls.append(args)
        return 0

    monkeypatch.setattr(target, fake_command)

    runner = CliRunner()
    result = runner.invoke(cli_main.cli, argv)

    assert result.exit_code == 0, result.output
    assert len(calls) == 1
    assert calls[0][0] == argv[1]


def test_hash_passes_options(monkeypatch: Any) -> None:
    calls: list[Any] = []

    def fake_command(*args: Any) -> int:
        calls.append(args)
        return 0

    monkeypatch.setattr("rulehash.cli.commands.hash.hash_command", fake_command)

    result = CliRunner().invoke(
        cli_main.cli,
        ["hash", "q.json", "-o", "out.json", "--include-external", "--ignore-attr", "a",
         "--ignore-attr", "b", "--strict"],
    )

    assert result.exit_code == 0, result.output
    assert calls == [("q.json", "out.json", True, ("a", "b"), True)]


def test_hash_nonzero_status_exits(monkeypatch: Any) -> None:
    monkeypatch.setattr("rulehash.cli.commands.hash.hash_command", lambda *args: 1)

    result = CliRunner().invoke(cli_main.cli, ["hash", "q.json"])
    assert result.exit_code == 1


def test_fatal_errors_become_click_errors(monkeypatch: Any) -> None:
    def failing(*args: Any) -> None:
        raise CycleError(("//:a", "//:b", "//:a"))

    monkeypatch.setattr("rulehash.cli.commands.sources.sources_command", failing)

    result = CliRunner().invoke(cli_main.cli, ["sources", "q.json"])

    assert result.exit_code == 1
    assert "Error: Circular dependency detected: //:a -> //:b -> //:a" in result.output


def test_debug_flag_configures_logging(monkeypatch: Any) -> None:
    levels: list[int] = []
    monkeypatch.setattr(cli_main, "configure_logging", levels.append)
    monkeypatch.setattr("rulehash.cli.commands.sources.sources_command", lambda *a: None)
    monkeypatch.delenv("RULEHASH_DEBUG", raising=False)
    monkeypatch.delenv("RULEHASH_LOG_LEVEL", raising=False)

    runner = CliRunner()
    runner.invoke(cli_main.cli, ["--debug", "sources", "q.json"])
    runner.invoke(cli_main.cli, ["sources", "q.json"])

    assert levels == [10, 30]


def test_main_invokes_cli_entrypoint(monkeypatch: Any) -> None:
    called = {"value": False}

    def fake_cli() -> None:
        called["value"] = True

    monkeypatch.setattr(cli_main, "cli", fake_cli)
    cli_main.main()

    assert called["value"] is True
