"""Shared pytest fixtures for docker-setup tests.

No test touches the host: ``subprocess.run`` inside ``docker_setup.lib.command``
is replaced by :class:`FakeRunner`, and every system path in the config points
under ``tmp_path``.
"""

from __future__ import annotations

import builtins
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import pytest
import yaml

from docker_setup import logging_utils
from docker_setup.config import ProvisionConfig, load_config
from docker_setup.lib import command, osinfo

UBUNTU_NOBLE = """\
PRETTY_NAME="Ubuntu 24.04.1 LTS"
NAME="Ubuntu"
VERSION_ID="24.04"
VERSION="24.04.1 LTS (Noble Numbat)"
VERSION_CODENAME=noble
ID=ubuntu
ID_LIKE=debian
UBUNTU_CODENAME=noble
"""

DEBIAN_BOOKWORM = """\
PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"
NAME="Debian GNU/Linux"
VERSION_ID="12"
VERSION_CODENAME=bookworm
ID=debian
"""


@dataclass
class Call:
    argv: List[str]
    input: Optional[str]


Responder = Callable[[List[str]], Tuple[int, str, str]]


@dataclass
class FakeRunner:
    """Records every command; scripted results are matched by argv substring."""

    calls: List[Call] = field(default_factory=list)
    rules: List[Tuple[List[str], Responder]] = field(default_factory=list)

    def on(self, *fragment: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.rules.append((list(fragment), lambda argv: (returncode, stdout, stderr)))

    def missing(self, *fragment: str) -> None:
        """Make a command behave as if it is not installed."""

        def _raise(argv: List[str]) -> Tuple[int, str, str]:
            raise FileNotFoundError(2, "No such file or directory", argv[0])

        self.rules.append((list(fragment), _raise))

    def _match(self, argv: List[str]) -> Optional[Responder]:
        for fragment, responder in reversed(self.rules):
            n = len(fragment)
            if any(argv[i : i + n] == fragment for i in range(len(argv) - n + 1)):
                return responder
        return None

    def __call__(self, argv, input=None, **kwargs) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.calls.append(Call(argv=argv, input=input))

        responder = self._match(argv)
        if responder is not None:
            rc, out, err = responder(argv)
            return subprocess.CompletedProcess(argv, rc, out, err)

        # Behave like the real tools for the side effects tests look at.
        if "tee" in argv:
            path = Path(argv[argv.index("tee") + 1])
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(input or "", encoding="utf-8")
            return subprocess.CompletedProcess(argv, 0, input or "", "")
        if "mkdir" in argv or argv[-2:-1] == ["-d"]:
            Path(argv[-1]).mkdir(parents=True, exist_ok=True)
        if argv[:2] == ["dpkg", "--print-architecture"]:
            return subprocess.CompletedProcess(argv, 0, "amd64\n", "")
        if argv[:2] == ["docker", "--version"]:
            return subprocess.CompletedProcess(argv, 0, "Docker version 27.3.1, build ce12230\n", "")
        if argv[:3] == ["docker", "compose", "version"]:
            return subprocess.CompletedProcess(argv, 0, "Docker Compose version v2.29.7\n", "")
        if "ufw" in argv:
            return subprocess.CompletedProcess(argv, 0, "Status: active\n", "")
        return subprocess.CompletedProcess(argv, 0, "", "")

    def argvs(self) -> List[List[str]]:
        return [c.argv for c in self.calls]

    def ran(self, *fragment: str) -> bool:
        n = len(fragment)
        want = list(fragment)
        return any(argv[i : i + n] == want for argv in self.argvs() for i in range(len(argv) - n + 1))


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    logging_utils.reset_logging()
    yield
    logging_utils.reset_logging()


@pytest.fixture
def fake_runner(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr(command.subprocess, "run", runner)
    return runner


@pytest.fixture
def os_release(tmp_path: Path) -> Path:
    p = tmp_path / "etc" / "os-release"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(UBUNTU_NOBLE, encoding="utf-8")
    return p


@pytest.fixture
def sandbox_config(tmp_path: Path, os_release: Path) -> Dict[str, Any]:
    """Config overrides placing every system path under tmp_path."""

    root = tmp_path / "root"
    return {
        "platform": {"os_release": str(os_release)},
        "repository": {
            "keyrings_dir": str(root / "etc/apt/keyrings"),
            "keyring": str(root / "etc/apt/keyrings/docker.gpg"),
            "sources_list": str(root / "etc/apt/sources.list.d/docker.list"),
        },
        "docker": {"daemon_config": str(root / "etc/docker/daemon.json")},
    }


@pytest.fixture
def config_file(tmp_path: Path, sandbox_config: Dict[str, Any]) -> Path:
    p = tmp_path / "docker-setup.yaml"
    p.write_text(yaml.safe_dump(sandbox_config), encoding="utf-8")
    return p


@pytest.fixture
def cfg(config_file: Path) -> ProvisionConfig:
    return load_config(str(config_file))


@pytest.fixture
def state(cfg: ProvisionConfig) -> Dict[str, Any]:
    return {"config": cfg.to_state()}


@pytest.fixture
def regular_user(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setattr(osinfo.os, "geteuid", lambda: 1000)
    monkeypatch.setenv("USER", "alice")
    return "alice"


@pytest.fixture
def answer(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], List[str]]:
    """Script the reply to the interactive prompt; returns the prompts shown."""

    prompts: List[str] = []

    def _set(reply: str) -> List[str]:
        def _input(prompt: str = "") -> str:
            prompts.append(prompt)
            return reply

        monkeypatch.setattr(builtins, "input", _input)
        return prompts

    return _set


@pytest.fixture
def run_args(tmp_path: Path, config_file: Path) -> Dict[str, Any]:
    return {
        "config_path": str(config_file),
        "state_path": str(tmp_path / "state.json"),
        "log_path": str(tmp_path / "logs" / "docker-setup.log"),
    }
