import numpy as np

from ..pixel_grid import PixelGrid


def scale(grid: PixelGrid, factor: int) -> PixelGrid:
    """
    Nearest-neighbour magnification by an integer factor.
    Each source pixel becomes a factor x factor block; no smoothing.
    Factors <= 0 are treated as 1.
    """
    if factor <= 0:
        factor = 1
    data = grid.pixels
    if factor == 1:
        return PixelGrid.from_array(data)
    return PixelGrid.from_array(np.repeat(np.repeat(data, factor, axis=0), factor, axis=1))


def flip_horizontal(grid: PixelGrid) -> PixelGrid:
    """Reverses column order, same dimensions."""
    return PixelGrid.from_array(grid.pixels[:, ::-1])
