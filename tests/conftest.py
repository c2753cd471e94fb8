"""Shared test fixtures."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from vhostup.config import VhostupConfig
from vhostup.errors import CommandError
from vhostup.services.provisioner import Provisioner


class FakeRunner:
    """Records commands and simulates the filesystem side of them under ``root``.

    Paths outside ``root`` are only recorded, never touched. Canned results
    are keyed by a tuple of tokens that must all appear in the argv; a list of
    results is consumed one per call, the last one repeating.
    """

    def __init__(self, root: Path):
        self.root = root
        self.calls: list[list[str]] = []
        self._results: list[tuple[tuple[str, ...], list[tuple[int, str, str]]]] = []

    def set_result(self, match: tuple[str, ...], *results: tuple[int, str, str]) -> None:
        self._results.insert(0, (match, list(results)))

    def fail(self, match: tuple[str, ...], returncode: int = 1, stderr: str = "boom") -> None:
        self.set_result(match, (returncode, "", stderr))

    def run(self, cmd, *, check=True, privileged=False, input=None):
        argv = [str(c) for c in cmd]
        self.calls.append(argv)

        returncode, stdout, stderr = self._canned(argv)
        if returncode == 0:
            self._simulate(argv, input)
        if check and returncode != 0:
            raise CommandError(f"Command failed: {' '.join(argv)}", stderr=stderr)
        return subprocess.CompletedProcess(argv, returncode, stdout, stderr)

    def index_of(self, *tokens: str) -> int:
        """Index of the first recorded call containing all ``tokens``; -1 if none."""
        for i, argv in enumerate(self.calls):
            if all(t in argv for t in tokens):
                return i
        return -1

    def count(self, *tokens: str) -> int:
        return sum(1 for argv in self.calls if all(t in argv for t in tokens))

    def _canned(self, argv: list[str]) -> tuple[int, str, str]:
        for match, results in self._results:
            if all(t in argv for t in match):
                return results.pop(0) if len(results) > 1 else results[0]
        return 0, "", ""

    def _inside(self, path: str) -> bool:
        return Path(path).is_relative_to(self.root)

    def _simulate(self, argv: list[str], input: str | None) -> None:
        name = Path(argv[0]).name
        if name == "mkdir" and self._inside(argv[-1]):
            Path(argv[-1]).mkdir(parents=True, exist_ok=True)
        elif name == "tee" and self._inside(argv[-1]):
            Path(argv[-1]).write_text(input or "")
        elif name == "ln" and self._inside(argv[-1]):
            link = Path(argv[-1])
            if link.is_symlink() or link.exists():
                link.unlink()
            link.symlink_to(argv[-2])
        elif name == "rm" and self._inside(argv[-1]):
            Path(argv[-1]).unlink(missing_ok=True)
        elif "--install-cert" in argv:
            for flag in ("--key-file", "--fullchain-file"):
                target = argv[argv.index(flag) + 1]
                if self._inside(target):
                    Path(target).parent.mkdir(parents=True, exist_ok=True)
                    Path(target).write_text(f"{flag} material\n")


@pytest.fixture
def tmp_config(tmp_path: Path) -> VhostupConfig:
    """Return a VhostupConfig pointing at temp directories."""
    (tmp_path / "nginx" / "sites-available").mkdir(parents=True)
    (tmp_path / "nginx" / "sites-enabled").mkdir(parents=True)
    acme_bin = tmp_path / "acme" / "acme.sh"
    acme_bin.parent.mkdir()
    acme_bin.write_text("#!/bin/sh\n")
    return VhostupConfig(
        operator_user="deploy",
        web_group="www-data",
        hostname="test-host",
        acme_bin=acme_bin,
        sites_available_dir=tmp_path / "nginx" / "sites-available",
        sites_enabled_dir=tmp_path / "nginx" / "sites-enabled",
        ssl_root=tmp_path / "nginx" / "ssl",
        use_sudo=False,
        state_dir=tmp_path / "state",
    )


@pytest.fixture
def runner(tmp_path: Path) -> FakeRunner:
    return FakeRunner(tmp_path)


@pytest.fixture
def provisioner(tmp_config: VhostupConfig, runner: FakeRunner) -> Provisioner:
    return Provisioner.from_config(
        tmp_config,
        php_socket="/var/run/php/php8.2-fpm.sock",
        runner=runner,
    )
