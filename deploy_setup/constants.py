"""
deploy-setup Constants

Centralized constants for magic values, defaults, and configuration.
"""

import os
from pathlib import Path

# Global config location
HOME_ENV_VAR = "DEPLOY_SETUP_HOME"
DEFAULT_HOME_DIR = "~/.deploy-setup"
GLOBAL_CONFIG_FILE = "config.json"

# Per-project cache
CACHE_FILE = ".deploy-setup-cache.json"

# Project name rule
PROJECT_NAME_PATTERN = r"^[a-z0-9-]+$"

# Default SSH / server configuration
DEFAULT_SSH_USER = "root"
DEFAULT_SSH_KEY_PATH = "~/.ssh/id_rsa"
DEFAULT_DEPLOY_DIR = "/opt/apps"

# Default branches
DEFAULT_PRODUCTION_BRANCH = "main"
DEFAULT_STAGING_BRANCH = "develop"

# Container registry
DEFAULT_REGISTRY = "ghcr.io"

# Runtime versions baked into generated images
PYTHON_VERSION = "3.11"
NODE_VERSION = "20"

# Loopback port the reverse proxy targets when the app itself listens on 80
PROXY_UPSTREAM_PORT = 8080

# Port used when no archetype was detected
FALLBACK_PORT = 3000

# Env files, in priority order
ENV_FILE_CANDIDATES = (".env", ".env.example", ".env.production")

# Env keys pre-selected as secrets
SECRET_KEY_PATTERN = r"secret|password|key|token|api"

# Git / GitHub
COMMIT_MESSAGE = "add CI/CD config (deploy-setup)"
GH_INSTALL_URL = "https://cli.github.com"

# Actions run polling
RUN_POLL_INITIAL_DELAY = 5
RUN_POLL_INTERVAL = 10
RUN_POLL_MAX_ATTEMPTS = 30

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Error Messages
ERROR_CACHE_NOT_FOUND = "No cached configuration found in {path}"
ERROR_INIT_SCRIPT_NOT_FOUND = "server-init.sh not found in {path}"


def get_home_dir() -> Path:
    """Get the deploy-setup home directory (honours DEPLOY_SETUP_HOME)."""
    return Path(os.environ.get(HOME_ENV_VAR, DEFAULT_HOME_DIR)).expanduser()
