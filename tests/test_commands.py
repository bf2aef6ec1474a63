"""Tests for hustle.commands module (the command catalog)."""

from __future__ import annotations

from pathlib import Path

import pytest

from hustle.commands import (
    Command,
    Mode,
    Verb,
    build_command,
    detect_mode,
    link_flag,
)
from hustle.run_config import RunConfig


def _args(verb: Verb, mode: Mode = Mode.DIRECT, config: RunConfig | None = None, **kw) -> str:
    command = build_command(verb, mode, config or RunConfig(), "foo", **kw)
    return " ".join(command.args)


class TestCommand:
    def test_str_quotes_arguments(self) -> None:
        command = Command("docker", ("exec", "foo", "sh", "-c", "ls -la"))
        assert str(command) == "docker exec foo sh -c 'ls -la'"

    def test_empty(self) -> None:
        assert Command("docker-compose").is_empty is True
        assert Command("docker", ("ps",)).is_empty is False


class TestDetectMode:
    def test_direct(self, tmp_path: Path) -> None:
        assert detect_mode(tmp_path) is Mode.DIRECT

    def test_compose(self, tmp_path: Path) -> None:
        (tmp_path / "docker-compose.yaml").write_text("services: {}\n")
        assert detect_mode(tmp_path) is Mode.COMPOSE


class TestDirectTemplates:
    """Direct-mode commands."""

    def test_stop(self) -> None:
        assert _args(Verb.STOP) == "stop foo"

    def test_build(self) -> None:
        assert _args(Verb.BUILD) == "build . --no-cache=true -t foo"

    def test_remove(self) -> None:
        assert _args(Verb.REMOVE) == "rm foo"

    def test_remove_image(self) -> None:
        assert _args(Verb.REMOVE_IMAGE) == "rmi foo"

    def test_force(self) -> None:
        config = RunConfig(force=True)
        assert _args(Verb.REMOVE, config=config) == "rm -f foo"
        assert _args(Verb.REMOVE_IMAGE, config=config) == "rmi -f foo"

    def test_debug(self) -> None:
        assert _args(Verb.DEBUG) == "run -it --entrypoint=/bin/bash foo -s"

    def test_shell(self) -> None:
        command = build_command(Verb.SHELL, Mode.DIRECT, RunConfig(), "foo")
        assert command.args == ("exec", "-i", "-t", "foo", "sh", "-c", "/bin/bash")

    def test_exec_joins_command(self) -> None:
        command = build_command(Verb.EXEC, Mode.DIRECT, RunConfig(), "foo", cmd=["npm", "test"])
        assert command.args == ("exec", "-i", "-t", "foo", "sh", "-c", "npm test")

    def test_exec_quotes_arguments(self) -> None:
        command = build_command(Verb.EXEC, Mode.DIRECT, RunConfig(), "foo", cmd=["echo", "a b"])
        assert command.args[-1] == "echo 'a b'"

    def test_start_defaults(self, tmp_path: Path) -> None:
        """Default start maps ports and mounts $(pwd)/myapp."""
        assert _args(Verb.START, cwd=tmp_path) == (
            f"run -p 3000:3000 -v {tmp_path}/myapp:/myapp --name foo foo"
        )

    def test_start_daemonized_custom_link(self) -> None:
        config = RunConfig(daemonize=True, ports="8080:80", link="-v /src:/app")
        assert _args(Verb.START, config=config) == "run -p 8080:80 -v /src:/app -d --name foo foo"

    def test_start_no_links(self) -> None:
        config = RunConfig(link="")
        assert _args(Verb.START, config=config) == "run -p 3000:3000 --name foo foo"

    def test_program(self) -> None:
        assert build_command(Verb.STOP, Mode.DIRECT, RunConfig(), "foo").program == "docker"


class TestComposeTemplates:
    """Compose-mode commands and fallbacks."""

    def test_start_daemonized_ignores_ports_and_link(self) -> None:
        config = RunConfig(daemonize=True, ports="8080:80", link="-v /src:/app")
        command = build_command(Verb.START, Mode.COMPOSE, config, "foo")
        assert command.program == "docker-compose"
        assert command.args == ("up", "-d")

    def test_start_foreground(self) -> None:
        assert _args(Verb.START, Mode.COMPOSE) == "up"

    def test_stop(self) -> None:
        assert _args(Verb.STOP, Mode.COMPOSE) == "down"

    def test_build(self) -> None:
        assert _args(Verb.BUILD, Mode.COMPOSE) == "build"

    def test_remove_is_noop(self) -> None:
        assert build_command(Verb.REMOVE, Mode.COMPOSE, RunConfig(), "foo").is_empty

    @pytest.mark.parametrize("verb", [Verb.DEBUG, Verb.SHELL, Verb.REMOVE_IMAGE])
    def test_falls_back_to_direct(self, verb: Verb) -> None:
        compose = build_command(verb, Mode.COMPOSE, RunConfig(), "foo")
        direct = build_command(verb, Mode.DIRECT, RunConfig(), "foo")
        assert compose == direct


class TestLinkFlag:
    def test_expands_pwd(self, tmp_path: Path) -> None:
        config = RunConfig(link="-v $(pwd)/src:/src")
        assert link_flag(config, tmp_path) == ["-v", f"{tmp_path}/src:/src"]

    def test_pwd_with_space_stays_one_argument(self, tmp_path: Path) -> None:
        cwd = tmp_path / "my project"
        cwd.mkdir()
        assert link_flag(RunConfig(), cwd) == ["-v", f"{cwd}/myapp:/myapp"]

    def test_start_with_spaced_pwd(self, tmp_path: Path) -> None:
        cwd = tmp_path / "my project"
        command = build_command(Verb.START, Mode.DIRECT, RunConfig(), "foo", cwd=cwd)
        assert command.args == (
            "run", "-p", "3000:3000", "-v", f"{cwd}/myapp:/myapp", "--name", "foo", "foo"
        )

    def test_whitespace_only_disables(self) -> None:
        assert link_flag(RunConfig(link="   ")) == []
