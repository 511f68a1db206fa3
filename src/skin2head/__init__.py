__version__ = "0.1.0"

from .errors import (
    Skin2HeadError,
    MissingSignature,
    InvalidSignature,
    MalformedSignature,
    PayloadDecodeError,
    UnsupportedSkinDimensions,
)
from .pixel_grid import PixelGrid
from .signature import SignatureValidator, load_public_key, verify
from .textures import SignedProperty, TextureDescriptor, TextureSlot, decode
from .profile import GameProfile, resolve_textures
from .compositing import SkinLayout, detect, composite_head, composite_model, scale, flip_horizontal
from .renderer import SkinRenderer
