"""NGINX site inspection commands."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from vhostup.config import get_config
from vhostup.models import CertPaths

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.command(name="list")
def list_sites() -> None:
    """List sites in sites-available with their enabled and certificate status."""
    cfg = get_config()
    sites_dir = cfg.sites_available_dir

    if not sites_dir.is_dir():
        console.print(f"No sites directory found at {sites_dir}.")
        return

    table = Table(title="NGINX Sites")
    table.add_column("Domain", style="cyan")
    table.add_column("Enabled", style="green")
    table.add_column("Certificate", style="yellow")

    for conf in sorted(p for p in sites_dir.iterdir() if p.is_file()):
        domain = conf.name
        link = cfg.site_enabled_path(domain)
        enabled = link.is_symlink() or link.exists()
        has_cert = CertPaths.for_domain(cfg.ssl_root, domain).exists()
        table.add_row(domain, "yes" if enabled else "no", "yes" if has_cert else "no")

    console.print(table)


@app.command()
def show(
    domain: str = typer.Argument(help="Domain name to show config for"),
) -> None:
    """Display the NGINX config for a domain."""
    cfg = get_config()
    conf = cfg.site_config_path(domain)

    if not conf.is_file():
        console.print(f"[red]No site config found for {domain}[/red]")
        raise typer.Exit(1)

    syntax = Syntax(conf.read_text(), "nginx", theme="monokai")
    console.print(syntax)
