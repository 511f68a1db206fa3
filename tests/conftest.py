import base64
from typing import Callable, Dict, Optional, Tuple

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from skin2head import config, signature
from skin2head.pixel_grid import PixelGrid
from skin2head.signature import SignatureValidator
from skin2head.textures import SignedProperty, TextureDescriptor, TextureSlot, encode

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
YELLOW = (255, 255, 0, 255)
BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
CLEAR = (0, 0, 0, 0)

SKIN_URL = "http://textures.minecraft.net/texture/3b60a1f6d562f52aaebbf1434f1de147933a3affe0e764fa49ea057536623cd3"


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def public_key(private_key):
    return private_key.public_key()


@pytest.fixture(scope="session")
def validator(public_key) -> SignatureValidator:
    return SignatureValidator(public_key)


@pytest.fixture
def public_key_der(public_key) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )


@pytest.fixture
def sign(private_key) -> Callable[[str], str]:
    def _sign(value: str) -> str:
        raw = private_key.sign(value.encode("utf-8"), padding.PKCS1v15(), hashes.SHA1())
        return base64.b64encode(raw).decode("ascii")

    return _sign


@pytest.fixture
def textures_value() -> str:
    return encode(
        {
            TextureSlot.SKIN: TextureDescriptor(SKIN_URL, {"model": "slim"}),
            TextureSlot.CAPE: TextureDescriptor("http://textures.minecraft.net/texture/cape01"),
        },
        timestamp=1500000000000,
        profile_id="069a79f444e94726a5befca90e38aaf5",
        profile_name="Notch",
    )


@pytest.fixture
def signed_property(sign, textures_value) -> SignedProperty:
    return SignedProperty("textures", textures_value, sign(textures_value))


@pytest.fixture(autouse=True)
def clear_caches(monkeypatch):
    for name in (config.ENV_SESSION_KEY, config.ENV_HEAD_ZOOM, config.ENV_MODEL_ZOOM, config.ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)
    config.load_settings.cache_clear()
    signature.session_validator.cache_clear()
    yield
    config.load_settings.cache_clear()
    signature.session_validator.cache_clear()


# --- Skin painting helpers ---

Rect = Tuple[int, int, int, int]


def paint(grid: PixelGrid, rect: Rect, color) -> PixelGrid:
    x, y, w, h = rect
    grid.fill(color, x, y, w, h)
    return grid


def make_skin(height: int = 64, regions: Optional[Dict[Rect, tuple]] = None) -> PixelGrid:
    grid = PixelGrid(64, height)
    for rect, color in (regions or {}).items():
        paint(grid, rect, color)
    return grid


def all_pixels(grid: PixelGrid, rect: Optional[Rect] = None):
    x, y, w, h = rect or (0, 0, grid.width, grid.height)
    return {grid.get_pixel(px, py) for px in range(x, x + w) for py in range(y, y + h)}
