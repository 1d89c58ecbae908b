"""Tests for the rectangular block-copy primitive."""

import numpy as np
import pytest

from qrtile.blit import copy_paste, solid_block
from qrtile.models import GeometryError


def _gradient(h, w):
    arr = np.arange(h * w * 4, dtype=np.uint32).reshape(h, w, 4) % 251
    return arr.astype(np.uint8)


def test_copy_is_verbatim():
    src = _gradient(8, 8)
    dst = np.zeros((10, 10, 4), dtype=np.uint8)
    copy_paste(src, dst, 2, 1, 3, 4, 5, 6)
    np.testing.assert_array_equal(dst[6:10, 5:8], src[1:5, 2:5])
    # Everything else untouched
    mask = np.ones((10, 10), dtype=bool)
    mask[6:10, 5:8] = False
    assert not dst[mask].any()


def test_source_not_modified():
    src = _gradient(4, 4)
    before = src.copy()
    copy_paste(src, np.zeros((4, 4, 4), dtype=np.uint8), 0, 0, 4, 4, 0, 0)
    np.testing.assert_array_equal(src, before)


def test_full_buffer_copy_fits_exactly():
    src = solid_block(5, (1, 2, 3, 4))
    dst = np.zeros((5, 5, 4), dtype=np.uint8)
    copy_paste(src, dst, 0, 0, 5, 5, 0, 0)
    np.testing.assert_array_equal(dst, src)


@pytest.mark.parametrize(
    "args",
    [
        (0, 0, 5, 4, 0, 0),  # wider than source
        (1, 0, 4, 4, 0, 0),  # source origin pushes past edge
        (0, 0, 4, 4, 7, 0),  # destination overflow in x
        (0, 0, 4, 4, 0, 7),  # destination overflow in y
        (-1, 0, 2, 2, 0, 0),
        (0, 0, 2, 2, 0, -1),
    ],
)
def test_out_of_bounds_is_rejected(args):
    src = np.zeros((4, 4, 4), dtype=np.uint8)
    dst = np.zeros((10, 10, 4), dtype=np.uint8)
    with pytest.raises(GeometryError):
        copy_paste(src, dst, *args)


def test_channel_mismatch_is_rejected():
    src = np.zeros((4, 4, 3), dtype=np.uint8)
    dst = np.zeros((4, 4, 4), dtype=np.uint8)
    with pytest.raises(GeometryError):
        copy_paste(src, dst, 0, 0, 4, 4, 0, 0)


def test_solid_block():
    block = solid_block(3, (0, 0, 0, 255))
    assert block.shape == (3, 3, 4)
    assert block.dtype == np.uint8
    assert (block == (0, 0, 0, 255)).all()
