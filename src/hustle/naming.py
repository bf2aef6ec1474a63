"""Container name generation."""

from __future__ import annotations

import hashlib
import time

from .constants import APP_SUFFIX, BASE_SUFFIX, NAME_TOKEN_LENGTH
from .errors import ValidationError


def uniqueness_token(now_ns: int | None = None) -> str:
    """Derive a short hex token from the current instant.

    Collisions are unlikely, not impossible. Pass ``now_ns`` for a
    deterministic result.
    """
    if now_ns is None:
        now_ns = time.time_ns()
    digest = hashlib.sha1(str(now_ns).encode("utf-8")).hexdigest()
    return digest[:NAME_TOKEN_LENGTH]


def app_stem(base_image: str) -> str:
    """Replace a trailing ``base`` with ``app``: ``myapp-base`` -> ``myapp-app``."""
    if base_image.endswith(BASE_SUFFIX):
        return base_image[: -len(BASE_SUFFIX)] + APP_SUFFIX
    return base_image


def generate_container_name(base_image: str, *, token: str | None = None) -> str:
    """Generate a fresh container name for a base image.

    Args:
        base_image: Image the app is bootstrapped from (e.g. ``myapp-base``).
        token: Uniqueness suffix; derived from the clock when omitted.

    Returns:
        Name of the form ``{stem}-{token}``, e.g. ``myapp-app-3f9a1c``.

    Raises:
        ValidationError: If base_image is empty.
    """
    base_image = base_image.strip()
    if not base_image:
        raise ValidationError("Base image name cannot be empty")
    return f"{app_stem(base_image)}-{token or uniqueness_token()}"
