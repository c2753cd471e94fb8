"""NGINX site activation, config validation and reload."""

from __future__ import annotations

import logging
from pathlib import Path

from vhostup.errors import CommandError, NginxConfigError
from vhostup.services.filesystem import FileSystem
from vhostup.services.runner import CommandRunner

log = logging.getLogger(__name__)


class Nginx:
    """Drives the sites-available / sites-enabled layout and the nginx service."""

    def __init__(
        self,
        runner: CommandRunner,
        fs: FileSystem,
        *,
        sites_available: Path,
        sites_enabled: Path,
    ):
        self.runner = runner
        self.fs = fs
        self.sites_available = sites_available
        self.sites_enabled = sites_enabled

    def site_path(self, domain: str) -> Path:
        return self.sites_available / domain

    def enabled_path(self, domain: str) -> Path:
        return self.sites_enabled / domain

    def is_enabled(self, domain: str) -> bool:
        link = self.enabled_path(domain)
        return link.is_symlink() or link.exists()

    def validate_config(self) -> None:
        """Run nginx -t. Raises NginxConfigError on failure."""
        result = self.runner.run(["nginx", "-t"], privileged=True, check=False)
        if result.returncode != 0:
            raise NginxConfigError(f"NGINX config test failed:\n{result.stderr}")

    def reload_service(self) -> None:
        self.runner.run(["systemctl", "reload", "nginx"], privileged=True)

    def apply_site(self, domain: str, content: str) -> None:
        """Write, enable and validate a site config, then reload.

        If validation fails the previous file and enabled state are put back
        before NginxConfigError propagates, so an invalid config is never
        reloaded into the running server.
        """
        path = self.site_path(domain)
        link = self.enabled_path(domain)
        previous = self.fs.read_text(path)
        was_enabled = self.is_enabled(domain)

        self.fs.write_text(path, content)
        self.fs.symlink(path, link)
        try:
            self.validate_config()
        except NginxConfigError:
            log.warning("config for %s failed validation, restoring previous state", domain)
            self._restore(path, link, previous, was_enabled)
            raise

        self.reload_service()

    def _restore(self, path: Path, link: Path, previous: str | None, was_enabled: bool) -> None:
        """Put back the file and enabled state seen before a failed apply; never raises."""
        if not was_enabled:
            try:
                self.fs.remove(link)
            except CommandError as exc:
                log.error("could not disable %s: %s", link, exc)
        try:
            if previous is None:
                self.fs.remove(path)
            else:
                self.fs.write_text(path, previous)
        except CommandError as exc:
            log.error("could not restore %s: %s", path, exc)
