from .layout import SkinLayout, detect, require_layout
from .regions import Region, RegionMode
from .compositor import composite_head, composite_model, overlay_mask
from .resizer import scale, flip_horizontal
