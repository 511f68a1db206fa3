import numpy as np
import pytest
from PIL import Image

from skin2head.pixel_grid import PixelGrid

from conftest import BLUE, CLEAR, RED, all_pixels


def test_new_grid_is_transparent():
    grid = PixelGrid(4, 3)
    assert grid.size == (4, 3)
    assert all_pixels(grid) == {CLEAR}


def test_get_region_copies():
    grid = PixelGrid(8, 8)
    grid.fill(RED, 2, 2, 3, 3)
    region = grid.get_region(2, 2, 3, 3)
    assert region.size == (3, 3)
    assert all_pixels(region) == {RED}

    # Changing the copy leaves the source alone
    region.fill(BLUE)
    assert grid.get_pixel(2, 2) == RED


def test_set_region_overwrites_all_channels():
    grid = PixelGrid(4, 4)
    grid.fill(RED)
    patch = PixelGrid(2, 2)  # fully transparent
    grid.set_region(1, 1, patch)
    assert grid.get_pixel(1, 1) == CLEAR
    assert grid.get_pixel(0, 0) == RED


def test_set_region_with_mask():
    grid = PixelGrid(2, 1)
    grid.fill(RED)
    patch = PixelGrid(2, 1)
    patch.fill(BLUE)
    grid.set_region(0, 0, patch, mask=np.array([[True, False]]))
    assert grid.get_pixel(0, 0) == BLUE
    assert grid.get_pixel(1, 0) == RED


@pytest.mark.parametrize("rect", [(-1, 0, 2, 2), (0, 0, 9, 1), (7, 7, 2, 2), (0, 0, -1, 1)])
def test_out_of_bounds_region(rect):
    grid = PixelGrid(8, 8)
    with pytest.raises(ValueError):
        grid.get_region(*rect)


def test_argb_packing():
    grid = PixelGrid(1, 1)
    grid.set_pixel(0, 0, (0x12, 0x34, 0x56, 0x78))
    assert grid.get_argb(0, 0) == 0x78123456


def test_from_image_normalizes_mode():
    img = Image.new("RGB", (3, 2), (10, 20, 30))
    grid = PixelGrid.from_image(img)
    assert grid.size == (3, 2)
    assert grid.get_pixel(2, 1) == (10, 20, 30, 255)

    palette = img.convert("P")
    assert PixelGrid.from_image(palette).get_pixel(0, 0)[3] == 255


def test_image_round_trip():
    grid = PixelGrid(5, 4)
    grid.fill((1, 2, 3, 4), 1, 1, 2, 2)
    img = grid.to_image()
    assert img.mode == "RGBA"
    assert img.size == (5, 4)
    assert PixelGrid.from_image(img) == grid


def test_pixels_view_is_read_only():
    grid = PixelGrid(2, 2)
    with pytest.raises(ValueError):
        grid.pixels[0, 0] = RED


def test_equality_checks_dimensions():
    assert PixelGrid(2, 4) != PixelGrid(4, 2)
    assert PixelGrid(3, 3) == PixelGrid(3, 3)
