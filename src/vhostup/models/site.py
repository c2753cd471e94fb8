"""Site provisioning models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from vhostup.constants import CERT_FULLCHAIN_FILENAME, CERT_KEY_FILENAME


class RoutingMode(str, Enum):
    """How requests that match no file are routed."""

    SPA = "spa"
    PHP_FPM = "php"

    @classmethod
    def from_app_type(cls, app_type: str | None) -> RoutingMode:
        # Only an exact "spa" selects SPA mode; anything else is served by PHP-FPM.
        if app_type == cls.SPA.value:
            return cls.SPA
        return cls.PHP_FPM

    @property
    def fallback(self) -> str:
        if self is RoutingMode.SPA:
            return "/index.html"
        return "/index.php?$query_string"


class ProvisionRequest(BaseModel):
    """Parsed command-line input for one provisioning run."""

    model_config = ConfigDict(frozen=True)

    domain: str
    project_root: Path
    subfolder: str = ""
    app_type: str = ""


class SiteLayout(BaseModel):
    """Where a site is served from and how it routes."""

    model_config = ConfigDict(frozen=True)

    project_root: Path
    site_root: Path
    routing_mode: RoutingMode = RoutingMode.PHP_FPM

    @property
    def has_subfolder(self) -> bool:
        return self.site_root != self.project_root


class CertPaths(BaseModel):
    """Installed certificate material for a domain (ECDSA P-256)."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    key_file: Path
    fullchain_file: Path

    @classmethod
    def for_domain(cls, ssl_root: Path, domain: str) -> CertPaths:
        directory = ssl_root / domain
        return cls(
            directory=directory,
            key_file=directory / CERT_KEY_FILENAME,
            fullchain_file=directory / CERT_FULLCHAIN_FILENAME,
        )

    def exists(self) -> bool:
        return self.key_file.is_file() and self.fullchain_file.is_file()


class SiteConfig(BaseModel):
    """Everything the vhost renderer needs for one domain."""

    domain: str
    site_root: Path
    routing_mode: RoutingMode = RoutingMode.PHP_FPM
    php_socket: str

    @property
    def fallback(self) -> str:
        return self.routing_mode.fallback
