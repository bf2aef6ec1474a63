"""Constants module for hustle.

File names, config keys and defaults are defined here (SSOT).
"""

from __future__ import annotations

# === Files (relative to the working directory) ===
DOT_FILE = ".env"  # Persisted container name
RC_FILE = ".hustlerc"  # Optional overrides, also looked up in $HOME
COMPOSE_FILE = "docker-compose.yaml"  # Presence switches to compose mode

# === Config keys ===
CONTAINER_NAME_KEY = "CONTAINER_NAME"
SERVICE_KEY_SUFFIX = "_CONTAINER_NAME"  # {SERVICE}_CONTAINER_NAME
RUN_ALIASES_KEY = "RUN_ALIASES"  # Comma-separated extra run verbs in .hustlerc
RUN_ALIASES_ENV = "HUSTLE_RUN_ALIASES"  # Override for RUN_ALIASES
DEFAULT_RUN_ALIASES = "run"

# === Engine ===
ENGINE = "docker"
COMPOSE_ENGINE = "docker-compose"

# === Defaults ===
DEFAULT_ENVIRONMENT = "development"
PRODUCTION_ENVIRONMENT = "production"
PRODUCTION_SUFFIX = "-prod"
DEFAULT_PORTS = "3000:3000"
DEFAULT_LINK = "-v $(pwd)/myapp:/myapp"
PWD_TOKEN = "$(pwd)"

# === Naming ===
BASE_SUFFIX = "base"  # Stripped from base image names
APP_SUFFIX = "app"  # ...and replaced with this
NAME_TOKEN_LENGTH = 6

# === Container paths ===
APP_COPY_PATH = "/app"  # Copied out of the bootstrap container by `new`
SHELL_PATH = "/bin/bash"
