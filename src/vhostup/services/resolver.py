"""Resolve positional arguments into a provision request and site layout.

The third positional argument is overloaded: ``spa`` or ``php`` names the
application type (the site is served from the project root), anything else is
a subfolder of the project root and the type moves to the fourth argument.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath

from vhostup.constants import APP_TYPES, NULL_SUBFOLDER
from vhostup.errors import InvalidArgumentError, MissingArgumentError
from vhostup.models import ProvisionRequest, RoutingMode, SiteLayout

# RFC 1123 host name: dot-separated labels of letters, digits and inner hyphens
_DOMAIN_RE = re.compile(
    r"^(?=.{1,253}$)[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
)


def normalize_subfolder(subfolder: str | None) -> str:
    """Strip one leading slash; treat ``null`` and empty as no subfolder."""
    if not subfolder or subfolder == NULL_SUBFOLDER:
        return ""
    if subfolder.startswith("/"):
        subfolder = subfolder[1:]
    if subfolder == NULL_SUBFOLDER:
        return ""
    return subfolder


def resolve_request(
    domain: str | None,
    project_root: str | None,
    arg3: str | None = None,
    arg4: str | None = None,
) -> ProvisionRequest:
    """Build a ProvisionRequest from the raw positional arguments."""
    domain = (domain or "").strip()
    project_root = (project_root or "").strip()
    if not domain or not project_root:
        raise MissingArgumentError("Both <domain> and <project_root> are required.")
    if not _DOMAIN_RE.fullmatch(domain):
        raise InvalidArgumentError(f"Not a valid domain name: {domain!r}")

    arg3 = arg3 or ""
    arg4 = arg4 or ""
    if arg3 in APP_TYPES:
        subfolder, app_type = "", arg3
    else:
        subfolder, app_type = normalize_subfolder(arg3), arg4

    if subfolder:
        parts = PurePosixPath(subfolder)
        if parts.is_absolute() or ".." in parts.parts:
            raise InvalidArgumentError(f"Subfolder must stay inside the project root: {arg3!r}")

    return ProvisionRequest(
        domain=domain,
        project_root=Path(project_root).absolute(),
        subfolder=subfolder,
        app_type=app_type,
    )


def resolve_layout(request: ProvisionRequest) -> SiteLayout:
    """Derive the served directory and routing mode from a request."""
    site_root = request.project_root / request.subfolder if request.subfolder else request.project_root
    return SiteLayout(
        project_root=request.project_root,
        site_root=site_root,
        routing_mode=RoutingMode.from_app_type(request.app_type),
    )
