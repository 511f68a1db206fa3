from typing import Tuple
from PIL import Image
import numpy as np

RGBA = Tuple[int, int, int, int]


class PixelGrid:
    """
    Fixed-size RGBA pixel buffer.
    Pixels live in a (height, width, 4) uint8 array, origin top-left, row-major,
    straight (non-premultiplied) alpha. Dimensions never change after construction.
    """

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid grid size: {width}x{height}")
        self._data = np.zeros((height, width, 4), dtype=np.uint8)

    @classmethod
    def from_array(cls, data: np.ndarray) -> "PixelGrid":
        """Copies an (H, W, 4) array into a new grid."""
        arr = np.asarray(data)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) array, got shape {arr.shape}")
        grid = cls(arr.shape[1], arr.shape[0])
        grid._data[:] = arr
        return grid

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelGrid":
        """
        Redraws any PIL image into a fresh RGBA grid.
        Palette, greyscale, RGB and premultiplied (RGBa) modes are all
        converted so region copies see the same channel semantics.
        """
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls.from_array(np.array(img))

    def to_image(self) -> Image.Image:
        # uint8 (H, W, 4) is read back as RGBA
        return Image.fromarray(self._data.copy())

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the underlying buffer."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "PixelGrid":
        return PixelGrid.from_array(self._data)

    def get_pixel(self, x: int, y: int) -> RGBA:
        self._check_bounds(x, y, 1, 1)
        r, g, b, a = self._data[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, color: RGBA):
        self._check_bounds(x, y, 1, 1)
        self._data[y, x] = color

    def get_argb(self, x: int, y: int) -> int:
        """Pixel packed as a 32-bit 0xAARRGGBB integer."""
        r, g, b, a = self.get_pixel(x, y)
        return (a << 24) | (r << 16) | (g << 8) | b

    def fill(self, color: RGBA, x: int = 0, y: int = 0, w: int = None, h: int = None):
        w = self.width - x if w is None else w
        h = self.height - y if h is None else h
        self._check_bounds(x, y, w, h)
        self._data[y:y + h, x:x + w] = color

    def get_region(self, x: int, y: int, w: int, h: int) -> "PixelGrid":
        """Copies the (x, y, w, h) rectangle into a new grid."""
        self._check_bounds(x, y, w, h)
        return PixelGrid.from_array(self._data[y:y + h, x:x + w])

    def set_region(self, x: int, y: int, region: "PixelGrid", mask: np.ndarray = None):
        """
        Overwrites pixels at (x, y) with region, all four channels.
        mask: optional (h, w) bool array; only pixels where it is True are written.
        """
        self._check_bounds(x, y, region.width, region.height)
        target = self._data[y:y + region.height, x:x + region.width]
        if mask is None:
            target[:] = region._data
        else:
            if mask.shape != (region.height, region.width):
                raise ValueError(f"Mask shape {mask.shape} does not match region {region.size}")
            target[mask] = region._data[mask]

    def _check_bounds(self, x: int, y: int, w: int, h: int):
        if w < 0 or h < 0 or x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise ValueError(
                f"Region ({x}, {y}, {w}, {h}) out of bounds for {self.width}x{self.height} grid"
            )

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self._data.shape == other._data.shape and np.array_equal(self._data, other._data)

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelGrid({self.width}x{self.height})"
