"""Two-phase vhost + certificate provisioning sequence.

Steps run strictly in order and each one is a precondition for the next:

    preflight -> prepare -> challenge_config -> issue_certificate
              -> install_certificate -> final_config

A fatal error stops the sequence and is reported on the returned
ProvisionResult; nothing created by earlier steps is rolled back. A failed
issuance is tolerated so a domain that already holds a valid certificate can
be re-provisioned; the install step then decides whether usable material
exists.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from vhostup.config import VhostupConfig
from vhostup.errors import CertificateInstallError, CertificateIssueError, VhostupError
from vhostup.models import CertPaths, ProvisionRequest, SiteConfig, SiteLayout
from vhostup.services import vhost_renderer
from vhostup.services.acme import AcmeClient
from vhostup.services.filesystem import FileSystem
from vhostup.services.nginx import Nginx
from vhostup.services.resolver import resolve_layout
from vhostup.services.runner import CommandRunner

log = logging.getLogger(__name__)


class ProvisionStep(str, Enum):
    PREFLIGHT = "preflight"
    PREPARE = "prepare"
    CHALLENGE_CONFIG = "challenge_config"
    ISSUE_CERTIFICATE = "issue_certificate"
    INSTALL_CERTIFICATE = "install_certificate"
    FINAL_CONFIG = "final_config"


class ProvisionState(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


STEP_DESCRIPTIONS = {
    ProvisionStep.PREFLIGHT: "Checking for acme.sh",
    ProvisionStep.PREPARE: "Creating project and certificate directories",
    ProvisionStep.CHALLENGE_CONFIG: "Activating HTTP-only config for ACME challenge",
    ProvisionStep.ISSUE_CERTIFICATE: "Issuing certificate (ECDSA)",
    ProvisionStep.INSTALL_CERTIFICATE: "Installing certificate",
    ProvisionStep.FINAL_CONFIG: "Activating HTTPS config",
}

StepCallback = Callable[[int, int, ProvisionStep], None]


@dataclass
class ProvisionResult:
    """Outcome of one provisioning run."""

    domain: str
    layout: SiteLayout
    cert: CertPaths
    state: ProvisionState = ProvisionState.PENDING
    completed_steps: list[ProvisionStep] = field(default_factory=list)
    failed_step: ProvisionStep | None = None
    error: VhostupError | None = None
    issued: bool = False
    issue_error: str | None = None

    @property
    def success(self) -> bool:
        return self.state is ProvisionState.COMPLETED

    @property
    def exit_code(self) -> int:
        if self.success:
            return 0
        return self.error.exit_code if self.error else 1


class Provisioner:
    """Runs the provisioning steps against injected collaborators."""

    def __init__(
        self,
        *,
        fs: FileSystem,
        nginx: Nginx,
        acme: AcmeClient,
        ssl_root: Path,
        php_socket: str,
        dir_mode: int,
        acme_server: str,
        reload_command: str,
        on_step: StepCallback | None = None,
    ):
        self.fs = fs
        self.nginx = nginx
        self.acme = acme
        self.ssl_root = ssl_root
        self.php_socket = php_socket
        self.dir_mode = dir_mode
        self.acme_server = acme_server
        self.reload_command = reload_command
        self.on_step = on_step

    @classmethod
    def from_config(
        cls,
        cfg: VhostupConfig,
        *,
        php_socket: str,
        runner: CommandRunner | None = None,
        on_step: StepCallback | None = None,
    ) -> Provisioner:
        runner = runner or CommandRunner(use_sudo=cfg.use_sudo)
        fs = FileSystem(runner, owner=cfg.operator_user, group=cfg.web_group)
        return cls(
            fs=fs,
            nginx=Nginx(
                runner,
                fs,
                sites_available=cfg.sites_available_dir,
                sites_enabled=cfg.sites_enabled_dir,
            ),
            acme=AcmeClient(runner, cfg.acme_bin),
            ssl_root=cfg.ssl_root,
            php_socket=php_socket,
            dir_mode=cfg.dir_mode,
            acme_server=cfg.acme_server,
            reload_command=cfg.reload_command,
            on_step=on_step,
        )

    def site_config(self, request: ProvisionRequest, layout: SiteLayout | None = None) -> SiteConfig:
        layout = layout or resolve_layout(request)
        return SiteConfig(
            domain=request.domain,
            site_root=layout.site_root,
            routing_mode=layout.routing_mode,
            php_socket=self.php_socket,
        )

    def run(self, request: ProvisionRequest) -> ProvisionResult:
        layout = resolve_layout(request)
        site = self.site_config(request, layout)
        result = ProvisionResult(
            domain=request.domain,
            layout=layout,
            cert=CertPaths.for_domain(self.ssl_root, request.domain),
        )

        steps: list[tuple[ProvisionStep, Callable[[SiteConfig, ProvisionResult], None]]] = [
            (ProvisionStep.PREFLIGHT, self._preflight),
            (ProvisionStep.PREPARE, self._prepare),
            (ProvisionStep.CHALLENGE_CONFIG, self._challenge_config),
            (ProvisionStep.ISSUE_CERTIFICATE, self._issue_certificate),
            (ProvisionStep.INSTALL_CERTIFICATE, self._install_certificate),
            (ProvisionStep.FINAL_CONFIG, self._final_config),
        ]
        # Preflight has no side effects and is not shown as a numbered step.
        total = len(steps) - 1

        for index, (step, handler) in enumerate(steps):
            if index and self.on_step:
                self.on_step(index, total, step)
            try:
                handler(site, result)
            except VhostupError as exc:
                log.error("%s failed for %s: %s", step.value, request.domain, exc)
                result.state = ProvisionState.FAILED
                result.failed_step = step
                result.error = exc
                return result
            result.completed_steps.append(step)

        result.state = ProvisionState.COMPLETED
        return result

    def _preflight(self, site: SiteConfig, result: ProvisionResult) -> None:
        self.acme.ensure_installed()

    def _prepare(self, site: SiteConfig, result: ProvisionResult) -> None:
        dirs = [result.layout.project_root]
        if result.layout.has_subfolder:
            dirs.append(result.layout.site_root)
        dirs.append(result.cert.directory)
        for d in dirs:
            self.fs.ensure_dir(d, self.dir_mode)

    def _challenge_config(self, site: SiteConfig, result: ProvisionResult) -> None:
        self.nginx.apply_site(site.domain, vhost_renderer.render_http_vhost(site))

    def _issue_certificate(self, site: SiteConfig, result: ProvisionResult) -> None:
        self.acme.set_default_ca(self.acme_server)
        try:
            self.acme.issue(site.domain, site.site_root)
        except CertificateIssueError as exc:
            log.warning("certificate issuance for %s did not succeed, continuing: %s", site.domain, exc)
            result.issue_error = str(exc)
            return
        result.issued = True

    def _install_certificate(self, site: SiteConfig, result: ProvisionResult) -> None:
        self.acme.install_cert(site.domain, result.cert, reload_command=self.reload_command)

    def _final_config(self, site: SiteConfig, result: ProvisionResult) -> None:
        if not result.cert.exists():
            raise CertificateInstallError(f"No installed certificate for {site.domain} in {result.cert.directory}")
        self.nginx.apply_site(site.domain, vhost_renderer.render_https_vhost(site, result.cert))
