from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional, Tuple

from .layout import SkinLayout

# Canvas sizes
HEAD_SIZE = (8, 8)
MODEL_SIZE = (16, 32)


class RegionMode(Enum):
    BASE = "base"          # opaque block copy
    OVERLAY = "overlay"    # marker-colour aware copy, drawn after every base region
    MIRROR = "mirror"      # horizontal flip of an already extracted base region


@dataclass(frozen=True)
class Region:
    """
    One rectangle of the skin atlas and where it lands on the canvas.
    src is (x, y, w, h) in atlas coordinates, dst is (x, y) on the canvas.
    """
    name: str
    src: Tuple[int, int, int, int]
    dst: Tuple[int, int]
    mode: RegionMode = RegionMode.BASE
    mirror_of: Optional[str] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.src[2], self.src[3]


def _base(name, src, dst) -> Region:
    return Region(name, src, dst, RegionMode.BASE)


def _overlay(name, src, dst) -> Region:
    return Region(name, src, dst, RegionMode.OVERLAY)


def _mirror(name, of: Region, dst) -> Region:
    return Region(name, of.src, dst, RegionMode.MIRROR, mirror_of=of.name)


# --- Head icon (8x8), same for both layouts ---

HEAD_REGIONS = (
    _base("head", (8, 8, 8, 8), (0, 0)),
    _overlay("hat", (40, 8, 8, 8), (0, 0)),
)

# --- 2D model (16x32) ---
# Legacy atlases store one arm and one leg; the other side is the mirror image.

_LEGACY_RIGHT_ARM = _base("right_arm", (44, 20, 4, 12), (0, 8))
_LEGACY_RIGHT_LEG = _base("right_leg", (4, 20, 4, 12), (4, 20))

LEGACY_MODEL_REGIONS = (
    _base("head", (8, 8, 8, 8), (4, 0)),
    _base("body", (20, 20, 8, 12), (4, 8)),
    _LEGACY_RIGHT_ARM,
    _mirror("left_arm", _LEGACY_RIGHT_ARM, (12, 8)),
    _LEGACY_RIGHT_LEG,
    _mirror("left_leg", _LEGACY_RIGHT_LEG, (8, 20)),
    # Only the head has an outer layer in 64x32 skins
    _overlay("hat", (40, 8, 8, 8), (4, 0)),
)

MODERN_MODEL_REGIONS = (
    _base("head", (8, 8, 8, 8), (4, 0)),
    _base("body", (20, 20, 8, 12), (4, 8)),
    _base("right_arm", (44, 20, 4, 12), (0, 8)),
    _base("left_arm", (36, 52, 4, 12), (12, 8)),
    _base("right_leg", (4, 20, 4, 12), (4, 20)),
    _base("left_leg", (20, 52, 4, 12), (8, 20)),
    _overlay("hat", (40, 8, 8, 8), (4, 0)),
    _overlay("jacket", (20, 32, 8, 12), (4, 8)),
    _overlay("right_sleeve", (44, 32, 4, 12), (0, 8)),
    _overlay("left_sleeve", (52, 52, 4, 12), (12, 8)),
    _overlay("right_pants", (4, 36, 4, 12), (4, 20)),
    _overlay("left_pants", (4, 52, 4, 12), (8, 20)),
)

MODEL_REGIONS = MappingProxyType({
    SkinLayout.LEGACY: LEGACY_MODEL_REGIONS,
    SkinLayout.MODERN: MODERN_MODEL_REGIONS,
})
