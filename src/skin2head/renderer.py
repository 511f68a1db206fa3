import logging
from typing import Optional, Union

from PIL import Image

from .compositing import composite_head, composite_model, scale
from .config import Settings, load_settings
from .pixel_grid import PixelGrid

logger = logging.getLogger(__name__)

SkinInput = Union[PixelGrid, Image.Image]


def _as_grid(skin: SkinInput) -> PixelGrid:
    if isinstance(skin, PixelGrid):
        return skin
    return PixelGrid.from_image(skin)


class SkinRenderer:
    """
    Head and 2D model renderings of a raw skin, magnified by an integer zoom.
    Every call allocates its own canvas; one renderer can serve many threads.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or load_settings()

    def render_head(self, skin: SkinInput, zoom: Optional[int] = None, include_overlay: bool = True) -> PixelGrid:
        if zoom is None:
            zoom = self.settings.head_zoom
        head = composite_head(_as_grid(skin), include_overlay)
        return scale(head, zoom)

    def render_model(self, skin: SkinInput, zoom: Optional[int] = None, include_overlay: bool = True) -> PixelGrid:
        if zoom is None:
            zoom = self.settings.model_zoom
        model = composite_model(_as_grid(skin), include_overlay=include_overlay)
        return scale(model, zoom)
