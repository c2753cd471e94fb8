"""Central configuration: VhostupConfig resolved once at startup."""

from __future__ import annotations

import getpass
import os
import socket
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from vhostup.constants import (
    ACME_SERVER,
    AUDIT_DB_NAME,
    AUDIT_JSONL_NAME,
    DEFAULT_DIR_MODE,
    DEFAULT_PHP_VERSION,
    NGINX_RELOAD_COMMAND,
    NGINX_SITES_AVAILABLE,
    NGINX_SITES_ENABLED,
    NGINX_SSL_ROOT,
    STATE_DIR,
    WEB_GROUP,
)


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def _default_operator() -> str:
    return os.environ.get("VHOSTUP_USER") or getpass.getuser()


def _default_acme_bin() -> Path:
    env = os.environ.get("VHOSTUP_ACME_BIN")
    if env:
        return Path(env)
    return Path.home() / ".acme.sh" / "acme.sh"


def _default_state_dir() -> Path:
    env = os.environ.get("VHOSTUP_STATE_DIR")
    if env:
        return Path(env)
    return Path.home() / STATE_DIR


class VhostupConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    operator_user: str = Field(default_factory=_default_operator)
    web_group: str = Field(default_factory=lambda: os.environ.get("VHOSTUP_WEB_GROUP", WEB_GROUP))
    hostname: str = Field(default_factory=socket.gethostname)
    acme_bin: Path = Field(default_factory=_default_acme_bin)
    acme_server: str = Field(default_factory=lambda: os.environ.get("VHOSTUP_ACME_SERVER", ACME_SERVER))
    sites_available_dir: Path = Field(default=NGINX_SITES_AVAILABLE)
    sites_enabled_dir: Path = Field(default=NGINX_SITES_ENABLED)
    ssl_root: Path = Field(default=NGINX_SSL_ROOT)
    default_php_version: str = Field(default=DEFAULT_PHP_VERSION)
    reload_command: str = Field(default=NGINX_RELOAD_COMMAND)
    dir_mode: int = Field(default=DEFAULT_DIR_MODE)
    use_sudo: bool = Field(default_factory=lambda: _env_flag("VHOSTUP_SUDO", True))
    state_dir: Path = Field(default_factory=_default_state_dir)

    @property
    def audit_jsonl_path(self) -> Path:
        return self.state_dir / AUDIT_JSONL_NAME

    @property
    def audit_db_path(self) -> Path:
        return self.state_dir / AUDIT_DB_NAME

    def site_config_path(self, domain: str) -> Path:
        return self.sites_available_dir / domain

    def site_enabled_path(self, domain: str) -> Path:
        return self.sites_enabled_dir / domain


@lru_cache(maxsize=1)
def get_config() -> VhostupConfig:
    """Return the global VhostupConfig (resolved once, cached)."""
    return VhostupConfig()
