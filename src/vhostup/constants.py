"""Shared constants for vhostup."""

from pathlib import Path

# NGINX layout (Debian/Ubuntu sites-available / sites-enabled convention)
NGINX_SITES_AVAILABLE = Path("/etc/nginx/sites-available")
NGINX_SITES_ENABLED = Path("/etc/nginx/sites-enabled")
NGINX_SSL_ROOT = Path("/etc/nginx/ssl")
NGINX_RELOAD_COMMAND = "sudo systemctl reload nginx"
WEB_GROUP = "www-data"

# Directory policy: owner rwx, web group r-x
DEFAULT_DIR_MODE = 0o750

# PHP-FPM
DEFAULT_PHP_VERSION = "8.2"
PHP_FPM_SOCKET_TEMPLATE = "/var/run/php/php{version}-fpm.sock"

# acme.sh
ACME_SERVER = "letsencrypt"
ACME_KEY_LENGTH = "ec-256"
CERT_KEY_FILENAME = "key.pem"
CERT_FULLCHAIN_FILENAME = "fullchain.pem"

# Argument resolution
APP_TYPES = ("spa", "php")
NULL_SUBFOLDER = "null"

# Audit / logging (relative to the operator's home directory)
STATE_DIR = Path(".local") / "state" / "vhostup"
AUDIT_JSONL_NAME = "audit.jsonl"
AUDIT_DB_NAME = "audit.db"
