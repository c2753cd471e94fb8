"""PHP runtime probe for the PHP-FPM socket path."""

from __future__ import annotations

import logging
import re

from vhostup.constants import DEFAULT_PHP_VERSION, PHP_FPM_SOCKET_TEMPLATE
from vhostup.errors import CommandError
from vhostup.services.runner import CommandRunner

log = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^\d+\.\d+$")


def detect_php_version(runner: CommandRunner, default: str = DEFAULT_PHP_VERSION) -> str:
    """Return the installed PHP major.minor version, or ``default`` if it cannot be probed."""
    try:
        result = runner.run(
            ["php", "-r", 'echo PHP_MAJOR_VERSION.".".PHP_MINOR_VERSION;'],
            check=False,
        )
    except CommandError:
        log.debug("php binary not found, using PHP %s", default)
        return default

    version = result.stdout.strip()
    if result.returncode != 0 or not _VERSION_RE.match(version):
        log.debug("php version probe failed (rc=%s, out=%r), using PHP %s", result.returncode, version, default)
        return default
    return version


def fpm_socket_path(version: str) -> str:
    return PHP_FPM_SOCKET_TEMPLATE.format(version=version)
