import logging
from typing import Optional

import requests

from .config import Settings, load_settings
from .errors import ProfileNotFound, RequestError
from .profile import GameProfile
from .textures import TextureDescriptor

logger = logging.getLogger(__name__)


class SessionClient:
    """
    Thin HTTP client for the Mojang profile and session endpoints.
    One request per call; no retries or rate limiting.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or load_settings()
        self.session = session or requests.Session()

    def _get(self, url: str) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.settings.request_timeout)
        except requests.RequestException as e:
            raise RequestError(f"Request to {url} failed: {e}")

        if resp.status_code in (204, 404):
            raise ProfileNotFound(f"Nothing found at {url}")
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise RequestError(f"Request to {url} failed: {e}")
        return resp

    def _get_json(self, url: str) -> dict:
        resp = self._get(url)
        try:
            data = resp.json()
        except ValueError as e:
            raise RequestError(f"Invalid JSON from {url}: {e}")
        if not isinstance(data, dict):
            raise RequestError(f"Unexpected response from {url}")
        return data

    def lookup_profile(self, name: str) -> GameProfile:
        """Name -> profile with id (no properties yet)."""
        data = self._get_json(self.settings.PROFILE_URL.format(name))
        if not data.get("id"):
            raise ProfileNotFound(f"Player '{name}' not found")
        return GameProfile(data["id"], data.get("name", name), legacy=bool(data.get("legacy", False)))

    def fill_profile_properties(self, profile: GameProfile) -> GameProfile:
        """
        Fetches the signed properties of profile and appends them in place.
        """
        if not profile.id:
            return profile
        data = self._get_json(self.settings.SESSION_URL.format(profile.id))
        filled = GameProfile.from_json(data)
        profile.properties.extend(filled.properties)
        if not profile.name:
            profile.name = filled.name
        return profile

    def get_profile(self, name: str) -> GameProfile:
        return self.fill_profile_properties(self.lookup_profile(name))

    def fetch_texture(self, texture: TextureDescriptor) -> bytes:
        """Raw bytes of the bitmap a texture points at."""
        try:
            return self._get(texture.url).content
        except ProfileNotFound:
            raise RequestError(f"Texture {texture.hash} not found at {texture.url}")
