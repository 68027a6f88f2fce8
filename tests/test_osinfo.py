from __future__ import annotations

from pathlib import Path

import pytest

from docker_setup.errors import DependencyInstallFailure
from docker_setup.lib.osinfo import OsRelease, dpkg_architecture, invoking_user, parse_os_release, read_os_release

from .conftest import DEBIAN_BOOKWORM, UBUNTU_NOBLE


def test_parse_handles_quotes_and_comments() -> None:
    fields = parse_os_release('# comment\nNAME="Ubuntu"\nID=ubuntu\nBROKEN\nPRETTY_NAME=\'Ubuntu 24.04 LTS\'\n')
    assert fields == {"NAME": "Ubuntu", "ID": "ubuntu", "PRETTY_NAME": "Ubuntu 24.04 LTS"}


def test_read_ubuntu(tmp_path: Path) -> None:
    p = tmp_path / "os-release"
    p.write_text(UBUNTU_NOBLE, encoding="utf-8")

    osr = read_os_release(str(p))

    assert osr is not None
    assert osr.id == "ubuntu"
    assert osr.version_id == "24.04"
    assert osr.codename == "noble"
    assert osr.matches("Ubuntu", "24.04")
    assert not osr.matches("ubuntu", "22.04")


def test_codename_falls_back_to_version_codename(tmp_path: Path) -> None:
    p = tmp_path / "os-release"
    p.write_text(DEBIAN_BOOKWORM, encoding="utf-8")

    osr = read_os_release(str(p))

    assert osr is not None
    assert osr.codename == "bookworm"
    assert not osr.matches("ubuntu", "24.04")


def test_missing_file(tmp_path: Path) -> None:
    assert read_os_release(str(tmp_path / "absent")) is None


def test_as_dict() -> None:
    assert OsRelease(id="ubuntu").as_dict()["id"] == "ubuntu"


def test_invoking_user(monkeypatch) -> None:
    monkeypatch.setenv("USER", "bob")
    assert invoking_user() == "bob"
    monkeypatch.delenv("USER")
    assert invoking_user() is None


def test_dpkg_architecture(fake_runner) -> None:
    fake_runner.on("dpkg", stdout="arm64\n")
    assert dpkg_architecture() == "arm64"


def test_dpkg_architecture_empty_output(fake_runner) -> None:
    fake_runner.on("dpkg", stdout="")
    with pytest.raises(DependencyInstallFailure) as exc:
        dpkg_architecture()
    assert exc.value.exit_code == 1
    assert dpkg_architecture(dry_run=True) == "amd64"
