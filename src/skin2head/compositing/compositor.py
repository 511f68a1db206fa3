import logging
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from ..pixel_grid import PixelGrid
from .layout import SkinLayout, require_layout
from .regions import HEAD_REGIONS, HEAD_SIZE, MODEL_REGIONS, MODEL_SIZE, Region, RegionMode
from .resizer import flip_horizontal

logger = logging.getLogger(__name__)


def overlay_mask(region: PixelGrid) -> np.ndarray:
    """
    True where an outer-layer pixel carries content.
    Pure black and pure white RGB (any alpha) are placeholder fill in many
    skin files and mean "nothing here".
    """
    rgb = region.pixels[:, :, :3]
    black = np.all(rgb == 0, axis=2)
    white = np.all(rgb == 255, axis=2)
    return ~(black | white)


def _draw(canvas: PixelGrid, source: PixelGrid, regions: Iterable[Region], include_overlay: bool):
    """
    Paints regions onto canvas in place.
    Base and mirrored regions first (table order), then overlays, so an outer
    layer always sits on top of every base part.
    """
    extracted: Dict[str, PixelGrid] = {}
    overlays = []

    for region in regions:
        if region.mode is RegionMode.OVERLAY:
            overlays.append(region)
            continue

        if region.mode is RegionMode.MIRROR:
            # Flip the counterpart already read from the atlas
            part = flip_horizontal(extracted[region.mirror_of])
        else:
            part = source.get_region(*region.src)
            extracted[region.name] = part

        canvas.set_region(region.dst[0], region.dst[1], part)

    if not include_overlay:
        return

    for region in overlays:
        part = source.get_region(*region.src)
        canvas.set_region(region.dst[0], region.dst[1], part, mask=overlay_mask(part))


def _composite(source: PixelGrid, regions: Tuple[Region, ...], size: Tuple[int, int],
               include_overlay: bool) -> PixelGrid:
    canvas = PixelGrid(*size)
    _draw(canvas, source, regions, include_overlay)
    return canvas


def composite_head(source: PixelGrid, include_overlay: bool = True) -> PixelGrid:
    """
    8x8 face icon: front of the head plus, optionally, the hat layer.
    Works for both layouts since the head sits at the same place in each.
    """
    require_layout(source)
    return _composite(source, HEAD_REGIONS, HEAD_SIZE, include_overlay)


def composite_model(source: PixelGrid, layout: Optional[SkinLayout] = None,
                    include_overlay: bool = True) -> PixelGrid:
    """
    16x32 front view "paper doll": head, body, both arms and both legs.
    layout is detected from the grid when not given.
    """
    detected = require_layout(source)
    if layout is None:
        layout = detected
    elif layout is not detected:
        raise ValueError(f"Skin is {detected.value} but {layout.value} layout was requested")

    logger.debug("Compositing %s model (overlay=%s)", layout.value, include_overlay)
    return _composite(source, MODEL_REGIONS[layout], MODEL_SIZE, include_overlay)
