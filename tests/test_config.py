"""Tests for VhostupConfig."""

from __future__ import annotations

from pathlib import Path

from vhostup.config import VhostupConfig


class TestVhostupConfig:
    def test_paths(self, tmp_config: VhostupConfig):
        assert tmp_config.site_config_path("a.com") == tmp_config.sites_available_dir / "a.com"
        assert tmp_config.site_enabled_path("a.com") == tmp_config.sites_enabled_dir / "a.com"
        assert tmp_config.audit_jsonl_path == tmp_config.state_dir / "audit.jsonl"
        assert tmp_config.audit_db_path == tmp_config.state_dir / "audit.db"

    def test_defaults(self, monkeypatch):
        for name in ("VHOSTUP_USER", "VHOSTUP_ACME_BIN", "VHOSTUP_SUDO", "VHOSTUP_WEB_GROUP"):
            monkeypatch.delenv(name, raising=False)
        cfg = VhostupConfig()
        assert cfg.sites_available_dir == Path("/etc/nginx/sites-available")
        assert cfg.sites_enabled_dir == Path("/etc/nginx/sites-enabled")
        assert cfg.ssl_root == Path("/etc/nginx/ssl")
        assert cfg.acme_bin == Path.home() / ".acme.sh" / "acme.sh"
        assert cfg.acme_server == "letsencrypt"
        assert cfg.web_group == "www-data"
        assert cfg.default_php_version == "8.2"
        assert cfg.reload_command == "sudo systemctl reload nginx"
        assert cfg.dir_mode == 0o750
        assert cfg.use_sudo is True

    def test_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VHOSTUP_USER", "deploy")
        monkeypatch.setenv("VHOSTUP_ACME_BIN", str(tmp_path / "acme.sh"))
        monkeypatch.setenv("VHOSTUP_SUDO", "0")
        monkeypatch.setenv("VHOSTUP_STATE_DIR", str(tmp_path / "state"))
        cfg = VhostupConfig()
        assert cfg.operator_user == "deploy"
        assert cfg.acme_bin == tmp_path / "acme.sh"
        assert cfg.use_sudo is False
        assert cfg.audit_jsonl_path == tmp_path / "state" / "audit.jsonl"
