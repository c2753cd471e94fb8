"""Custom exceptions for vhostup."""

from __future__ import annotations


class VhostupError(Exception):
    """Base exception for all vhostup operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class UsageError(VhostupError):
    """Command-line arguments cannot be resolved into a provision request."""


class MissingArgumentError(UsageError):
    """Domain or project root was not given."""


class InvalidArgumentError(UsageError):
    """An argument was given but cannot be used (e.g. a subfolder escaping the project root)."""


class MissingDependencyError(VhostupError):
    """A required external tool is not installed."""


class CommandError(VhostupError):
    """An external command exited with a non-zero status."""

    def __init__(self, message: str, *, stderr: str = "", exit_code: int = 1):
        super().__init__(message, exit_code=exit_code)
        self.stderr = stderr


class NginxConfigError(VhostupError):
    """NGINX configuration validation failed."""


class CertificateIssueError(VhostupError):
    """acme.sh could not issue a certificate (tolerated during provisioning)."""


class CertificateInstallError(VhostupError):
    """acme.sh could not install certificate material for the domain."""
