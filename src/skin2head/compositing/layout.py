import logging
from enum import Enum

from ..errors import UnsupportedSkinDimensions
from ..pixel_grid import PixelGrid

logger = logging.getLogger(__name__)


class SkinLayout(Enum):
    LEGACY = "legacy"    # 64x32, single layer except the hat
    MODERN = "modern"    # 64x64, outer layer for every part
    INVALID = "invalid"


def detect(grid: PixelGrid) -> SkinLayout:
    width, height = grid.width, grid.height
    if width == 64 and height == 64:
        return SkinLayout.MODERN
    if width == 64 and height == 32:
        return SkinLayout.LEGACY
    return SkinLayout.INVALID


def require_layout(grid: PixelGrid) -> SkinLayout:
    """
    Like detect() but raises UnsupportedSkinDimensions instead of returning INVALID.
    """
    layout = detect(grid)
    if layout is SkinLayout.INVALID:
        raise UnsupportedSkinDimensions(grid.width, grid.height)
    logger.debug("Detected %s skin layout (%dx%d)", layout.value, grid.width, grid.height)
    return layout
