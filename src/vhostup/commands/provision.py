"""Site provisioning command: HTTP challenge config, certificate, HTTPS config."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from vhostup.audit import audit
from vhostup.config import get_config
from vhostup.errors import MissingDependencyError, UsageError
from vhostup.models import CertPaths, ProvisionRequest
from vhostup.services import php, vhost_renderer
from vhostup.services.provisioner import STEP_DESCRIPTIONS, ProvisionStep, Provisioner
from vhostup.services.resolver import resolve_layout, resolve_request
from vhostup.services.runner import CommandRunner

console = Console()
err_console = Console(stderr=True)

USAGE = "Usage: vhostup provision <domain> <project_root> [subfolder] [type]"


def _resolve_or_exit(
    domain: str, project_root: str, arg3: Optional[str], arg4: Optional[str]
) -> ProvisionRequest:
    try:
        return resolve_request(domain, project_root, arg3, arg4)
    except UsageError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        err_console.print(USAGE, markup=False)
        raise typer.Exit(exc.exit_code)


def _print_step(index: int, total: int, step: ProvisionStep) -> None:
    console.print(f"[bold][{index}/{total}][/bold] {STEP_DESCRIPTIONS[step]}")


def provision(
    domain: str = typer.Argument("", help="Domain name (e.g., example.com)", show_default=False),
    project_root: str = typer.Argument("", help="Project root directory", show_default=False),
    arg3: Optional[str] = typer.Argument(
        None, metavar="[SUBFOLDER|TYPE]", help="Served subfolder of the project root, or the app type (spa|php)"
    ),
    arg4: Optional[str] = typer.Argument(None, metavar="[TYPE]", help="App type when a subfolder is given (spa|php)"),
) -> None:
    """Provision an nginx site for DOMAIN with a Let's Encrypt certificate."""
    request = _resolve_or_exit(domain, project_root, arg3, arg4)
    cfg = get_config()
    runner = CommandRunner(use_sudo=cfg.use_sudo)

    php_version = php.detect_php_version(runner, cfg.default_php_version)
    provisioner = Provisioner.from_config(
        cfg,
        php_socket=php.fpm_socket_path(php_version),
        runner=runner,
        on_step=_print_step,
    )
    layout = resolve_layout(request)
    console.print(f"Site root: [cyan]{layout.site_root}[/cyan] ({layout.routing_mode.name}, PHP {php_version})")

    with audit(
        "site.provision",
        target=request.domain,
        project_root=str(request.project_root),
        subfolder=request.subfolder,
        app_type=request.app_type,
    ) as event:
        result = provisioner.run(request)
        event.params["issued"] = result.issued
        if not result.success:
            event.result = "failure"
            event.error = str(result.error)
            event.params["failed_step"] = result.failed_step.value if result.failed_step else None

    if result.issue_error:
        console.print(f"[yellow]Certificate issuance skipped or failed:[/yellow] {escape(result.issue_error)}")

    if not result.success:
        err_console.print(f"[red bold]Failed[/red bold] at {result.failed_step.value}: {escape(str(result.error))}")
        if isinstance(result.error, MissingDependencyError):
            err_console.print(USAGE, markup=False)
        raise typer.Exit(result.exit_code)

    console.print(f"\n[green bold]Done![/green bold] https://{request.domain}/ → {layout.site_root}")


def render(
    domain: str = typer.Argument("", help="Domain name (e.g., example.com)", show_default=False),
    project_root: str = typer.Argument("", help="Project root directory", show_default=False),
    arg3: Optional[str] = typer.Argument(None, metavar="[SUBFOLDER|TYPE]", help="Subfolder or app type (spa|php)"),
    arg4: Optional[str] = typer.Argument(None, metavar="[TYPE]", help="App type when a subfolder is given"),
    https: bool = typer.Option(False, "--https", help="Render the final HTTPS config instead of the challenge config"),
) -> None:
    """Print the config vhostup would write for DOMAIN, without touching the system."""
    request = _resolve_or_exit(domain, project_root, arg3, arg4)
    cfg = get_config()
    runner = CommandRunner(use_sudo=cfg.use_sudo)

    php_version = php.detect_php_version(runner, cfg.default_php_version)
    provisioner = Provisioner.from_config(cfg, php_socket=php.fpm_socket_path(php_version), runner=runner)
    site = provisioner.site_config(request)

    cert = CertPaths.for_domain(cfg.ssl_root, request.domain) if https else None
    typer.echo(vhost_renderer.render_vhost(site, cert), nl=False)
