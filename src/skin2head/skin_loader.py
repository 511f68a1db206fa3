import io
import os
import re
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .errors import SkinDecodeError
from .pixel_grid import PixelGrid
from .profile import resolve_textures, skin_texture
from .session_client import SessionClient
from .signature import SignatureValidator
from .textures import TextureDescriptor

logger = logging.getLogger(__name__)

USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]{3,16}$")


class SkinLoader:
    """
    Turns a file path, URL, raw bytes or player name into an RGBA PixelGrid.
    Dimensions are not checked here; compositing rejects unsupported sizes.
    """

    def __init__(self, client: Optional[SessionClient] = None, validator: Optional[SignatureValidator] = None):
        self._client = client
        self.validator = validator

    @property
    def client(self) -> SessionClient:
        if self._client is None:
            self._client = SessionClient()
        return self._client

    def load_skin(self, source: str) -> PixelGrid:
        """
        Loads a skin from a file path, URL, or Minecraft username.
        """
        if os.path.exists(source):
            return self.load_file(source)
        elif source.startswith("http://") or source.startswith("https://"):
            return self.load_texture(TextureDescriptor(source))
        elif USERNAME_RE.match(source):
            return self.load_username(source)
        else:
            raise ValueError(f"Invalid skin source: {source}")

    @staticmethod
    def load_bytes(data: bytes) -> PixelGrid:
        try:
            img = Image.open(io.BytesIO(data))
            img.load()  # Force load
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise SkinDecodeError(f"Failed to decode skin image: {e}")
        return PixelGrid.from_image(img)

    @staticmethod
    def load_file(path: str) -> PixelGrid:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise SkinDecodeError(f"Failed to load skin from file: {e}")
        return SkinLoader.load_bytes(data)

    def load_texture(self, texture: TextureDescriptor) -> PixelGrid:
        return self.load_bytes(self.client.fetch_texture(texture))

    def load_username(self, username: str) -> PixelGrid:
        # 1. Profile with signed properties
        profile = self.client.get_profile(username)
        # 2. Verified texture map -> skin url
        textures = resolve_textures(profile, self.validator)
        texture = skin_texture(textures)
        logger.info("Skin of %s is %s", profile.name, texture.hash)
        return self.load_texture(texture)
