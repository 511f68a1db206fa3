import os
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_SESSION_KEY = "SKIN2HEAD_SESSION_KEY"
ENV_HEAD_ZOOM = "SKIN2HEAD_HEAD_ZOOM"
ENV_MODEL_ZOOM = "SKIN2HEAD_MODEL_ZOOM"
ENV_TIMEOUT = "SKIN2HEAD_TIMEOUT"

# Looked up next to this file when no key path is configured
BUNDLED_KEY_NAME = "yggdrasil_session_pubkey.der"


@dataclass(frozen=True)
class Settings:
    session_key_path: Optional[str] = None
    head_zoom: int = 8
    model_zoom: int = 2
    request_timeout: float = 10.0

    PROFILE_URL = "https://api.mojang.com/users/profiles/minecraft/{}"
    SESSION_URL = "https://sessionserver.mojang.com/session/minecraft/profile/{}?unsigned=false"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _default_key_path() -> Optional[str]:
    path = os.environ.get(ENV_SESSION_KEY)
    if path:
        return path

    base_dir = os.path.dirname(__file__)
    bundled = os.path.join(base_dir, BUNDLED_KEY_NAME)
    if os.path.exists(bundled):
        return bundled
    return None


def build_settings() -> Settings:
    """
    Reads the environment into a fresh Settings object.
    """
    settings = Settings(
        session_key_path=_default_key_path(),
        head_zoom=_int_env(ENV_HEAD_ZOOM, Settings.head_zoom),
        model_zoom=_int_env(ENV_MODEL_ZOOM, Settings.model_zoom),
        request_timeout=_float_env(ENV_TIMEOUT, Settings.request_timeout),
    )
    logger.debug("Loaded settings: %s", settings)
    return settings


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Process-wide settings, read once."""
    return build_settings()
