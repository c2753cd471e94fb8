"""Tests for shared Pydantic models."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from vhostup.models import AuditEvent, CertPaths, RoutingMode, SiteConfig, SiteLayout


class TestRoutingMode:
    def test_from_app_type(self):
        assert RoutingMode.from_app_type("spa") is RoutingMode.SPA
        assert RoutingMode.from_app_type("php") is RoutingMode.PHP_FPM
        assert RoutingMode.from_app_type("") is RoutingMode.PHP_FPM
        assert RoutingMode.from_app_type(None) is RoutingMode.PHP_FPM
        assert RoutingMode.from_app_type("vue") is RoutingMode.PHP_FPM

    def test_fallback(self):
        assert RoutingMode.SPA.fallback == "/index.html"
        assert RoutingMode.PHP_FPM.fallback == "/index.php?$query_string"


class TestCertPaths:
    def test_for_domain(self):
        cert = CertPaths.for_domain(Path("/etc/nginx/ssl"), "example.com")
        assert cert.directory == Path("/etc/nginx/ssl/example.com")
        assert cert.key_file == Path("/etc/nginx/ssl/example.com/key.pem")
        assert cert.fullchain_file == Path("/etc/nginx/ssl/example.com/fullchain.pem")

    def test_exists_needs_both_files(self, tmp_path: Path):
        cert = CertPaths.for_domain(tmp_path, "example.com")
        assert not cert.exists()
        cert.directory.mkdir()
        cert.key_file.write_text("key")
        assert not cert.exists()
        cert.fullchain_file.write_text("chain")
        assert cert.exists()


class TestSiteModels:
    def test_layout_subfolder(self):
        layout = SiteLayout(project_root=Path("/var/www/a"), site_root=Path("/var/www/a/public"))
        assert layout.has_subfolder
        assert layout.routing_mode is RoutingMode.PHP_FPM

    def test_site_config_fallback(self):
        site = SiteConfig(
            domain="a.com",
            site_root=Path("/var/www/a"),
            routing_mode=RoutingMode.SPA,
            php_socket="/run/php.sock",
        )
        assert site.fallback == "/index.html"


class TestAuditEvent:
    def test_defaults(self):
        event = AuditEvent(action="site.provision", target="example.com")
        assert event.result == "success"
        assert event.error is None
        assert isinstance(event.timestamp, datetime)

    def test_to_jsonl(self):
        event = AuditEvent(
            action="site.provision",
            target="example.com",
            actor="deploy",
            params={"subfolder": "public"},
        )
        data = json.loads(event.to_jsonl())
        assert data["action"] == "site.provision"
        assert data["params"]["subfolder"] == "public"
