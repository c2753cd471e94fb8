"""acme.sh certificate issuance and installation."""

from __future__ import annotations

import logging
from pathlib import Path

from vhostup.constants import ACME_KEY_LENGTH
from vhostup.errors import CertificateInstallError, CertificateIssueError, CommandError, MissingDependencyError
from vhostup.models import CertPaths
from vhostup.services.runner import CommandRunner

log = logging.getLogger(__name__)

# acme.sh exits with 2 when the existing certificate is not yet due for renewal
_SKIPPED_RENEWAL = 2


class AcmeClient:
    """Thin wrapper around the operator's acme.sh install (runs unprivileged)."""

    def __init__(self, runner: CommandRunner, acme_bin: Path):
        self.runner = runner
        self.acme_bin = acme_bin

    def is_installed(self) -> bool:
        return self.acme_bin.is_file()

    def ensure_installed(self) -> None:
        if not self.is_installed():
            raise MissingDependencyError(
                f"acme.sh not found at {self.acme_bin}. Please install it first."
            )

    def _run(self, *args: str, check: bool = True):
        return self.runner.run([str(self.acme_bin), *args], check=check)

    def set_default_ca(self, server: str) -> None:
        self._run("--set-default-ca", "--server", server)

    def issue(self, domain: str, webroot: Path, *, key_length: str = ACME_KEY_LENGTH) -> None:
        """Issue a certificate via HTTP-01 webroot validation.

        Raises CertificateIssueError on failure, including the "not due for
        renewal" exit status; callers provisioning an existing domain treat
        it as non-fatal.
        """
        result = self._run(
            "--issue", "-d", domain, "-w", str(webroot), "--keylength", key_length,
            check=False,
        )
        if result.returncode == _SKIPPED_RENEWAL:
            raise CertificateIssueError(f"Certificate for {domain} is not due for renewal; skipped")
        if result.returncode != 0:
            raise CertificateIssueError(
                f"acme.sh --issue failed for {domain} (exit {result.returncode}):\n{result.stderr or result.stdout}"
            )

    def install_cert(self, domain: str, cert: CertPaths, *, reload_command: str) -> None:
        """Copy key + fullchain into place and register the renewal reload hook."""
        try:
            self._run(
                "--install-cert", "-d", domain, "--ecc",
                "--key-file", str(cert.key_file),
                "--fullchain-file", str(cert.fullchain_file),
                "--reloadcmd", reload_command,
            )
        except CommandError as exc:
            raise CertificateInstallError(f"acme.sh --install-cert failed for {domain}:\n{exc.stderr}") from exc

        if not cert.exists():
            raise CertificateInstallError(
                f"Certificate material missing after install: {cert.key_file}, {cert.fullchain_file}"
            )
        log.debug("installed certificate for %s into %s", domain, cert.directory)
