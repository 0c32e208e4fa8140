"""Runtime settings for the registry dashboard, read from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from registry_mcp.constants import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://ia.tnx1.xyz/api/v1/ia"
DEFAULT_TIMEOUT_SECONDS = 15.0

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class RegistrySettings:
    """Configuration for a dashboard session."""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    page_size: int = DEFAULT_PAGE_SIZE
    highlights_on_refetch: bool = False


def _positive_number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r; using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r; using %s", key, raw, default)
        return default
    return value


def load_settings(env: Mapping[str, str] | None = None) -> RegistrySettings:
    """Build settings from ``REGISTRY_*`` environment variables."""
    env = os.environ if env is None else env
    return RegistrySettings(
        base_url=env.get("REGISTRY_API_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        request_timeout=_positive_number(
            env, "REGISTRY_REQUEST_TIMEOUT", DEFAULT_TIMEOUT_SECONDS, float
        ),
        page_size=_positive_number(env, "REGISTRY_PAGE_SIZE", DEFAULT_PAGE_SIZE, int),
        highlights_on_refetch=(
            env.get("REGISTRY_HIGHLIGHTS_ON_REFETCH", "").strip().lower() in _TRUTHY
        ),
    )
