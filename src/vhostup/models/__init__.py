"""Shared Pydantic models."""

from vhostup.models.audit_event import AuditEvent
from vhostup.models.site import CertPaths, ProvisionRequest, RoutingMode, SiteConfig, SiteLayout

__all__ = [
    "AuditEvent",
    "CertPaths",
    "ProvisionRequest",
    "RoutingMode",
    "SiteConfig",
    "SiteLayout",
]
