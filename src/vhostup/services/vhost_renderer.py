"""Jinja2-based NGINX server block renderer."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from vhostup.models import CertPaths, SiteConfig

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_http_vhost(site: SiteConfig) -> str:
    """Render an HTTP-only server block for the ACME challenge (pre-cert issuance)."""
    env = _get_env()
    template = env.get_template("vhost_http.conf.j2")
    return template.render(site=site)


def render_https_vhost(site: SiteConfig, cert: CertPaths) -> str:
    """Render the final config: HTTP redirect block + TLS server block."""
    env = _get_env()
    template = env.get_template("vhost_https.conf.j2")
    return template.render(site=site, cert=cert)


def render_vhost(site: SiteConfig, cert: CertPaths | None = None) -> str:
    """Render phase 1 without certificate paths, phase 2 with them."""
    if cert is None:
        return render_http_vhost(site)
    return render_https_vhost(site, cert)
