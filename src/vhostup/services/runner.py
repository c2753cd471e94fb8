"""Subprocess wrapper shared by every external collaborator."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from vhostup.errors import CommandError

log = logging.getLogger(__name__)


class CommandRunner:
    """Runs external commands, prefixing privileged ones with sudo."""

    def __init__(self, *, use_sudo: bool = True):
        self.use_sudo = use_sudo

    def run(
        self,
        cmd: Sequence[str],
        *,
        check: bool = True,
        privileged: bool = False,
        input: str | None = None,
    ) -> subprocess.CompletedProcess[str]:
        argv = [str(part) for part in cmd]
        if privileged and self.use_sudo:
            argv = ["sudo", *argv]
        log.debug("running: %s", " ".join(argv))
        try:
            result = subprocess.run(
                argv,
                check=False,
                capture_output=True,
                text=True,
                input=input,
            )
        except FileNotFoundError as exc:
            raise CommandError(f"Command not found: {argv[0]}") from exc

        if check and result.returncode != 0:
            raise CommandError(
                f"Command failed: {' '.join(argv)}\nstderr: {result.stderr}",
                stderr=result.stderr,
            )
        return result
