from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from pipeline.pixels import (
    dark_mask,
    is_dark,
    is_similar,
    is_similar_thumbnail,
    is_white,
    reverse_and_normalize,
    similar_mask,
    white_mask,
)


def test_is_similar_is_strict_per_channel():
    assert is_similar((100, 100, 100), (144, 56, 100))
    assert not is_similar((100, 100, 100), (145, 100, 100))
    assert not is_similar((100, 100, 100), (100, 100, 55))
    assert is_similar((121, 64, 22), (125, 60, 26), threshold=5)
    assert not is_similar((121, 64, 22), (126, 64, 22), threshold=5)


def test_is_white_and_is_dark_boundaries():
    assert is_white((211, 210, 210))
    assert not is_white((210, 210, 210))
    assert is_dark((128, 128, 127))
    assert not is_dark((128, 128, 128))


def test_masks_agree_with_scalar_predicates():
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(20, 20, 3), dtype=np.uint8)
    ref = (128, 128, 128)

    wm, dm, sm = white_mask(pixels), dark_mask(pixels), similar_mask(pixels, ref)
    for y in range(20):
        for x in range(20):
            c = pixels[y, x]
            assert wm[y, x] == is_white(c)
            assert dm[y, x] == is_dark(c)
            assert sm[y, x] == is_similar(c, ref)


def test_reverse_and_normalize_maps_background_to_white():
    arr = np.zeros((4, 6, 3), dtype=np.uint8)
    arr[1, 2] = (255, 255, 255)  # 흰 글자
    img = Image.fromarray(arr)

    out = np.asarray(reverse_and_normalize(img))

    assert tuple(out[0, 0]) == (254, 254, 254)
    assert tuple(out[1, 2]) == (24, 24, 24)
    # 원본은 그대로
    assert np.array_equal(np.asarray(img), arr)


def test_reverse_and_normalize_tinted_background_is_uniform():
    arr = np.zeros((3, 3, 3), dtype=np.uint8)
    arr[:, :] = (200, 180, 160)
    out = np.asarray(reverse_and_normalize(Image.fromarray(arr)))

    assert (out == out[0, 0]).all()
    assert out.min() >= 250


def _pair_with_bad(n_bad: int, size: int = 10):
    a = np.full((size, size, 3), 100, dtype=np.uint8)
    b = a.copy()
    flat = b.reshape(-1, 3)
    flat[:n_bad] = (200, 200, 200)
    return a, b


@pytest.mark.parametrize("n_bad, expected", [(0, True), (4, True), (5, False), (30, False)])
def test_is_similar_thumbnail_bad_pixel_boundary(n_bad, expected):
    # 10x10 -> 100 // 20 = 5
    a, b = _pair_with_bad(n_bad)
    assert is_similar_thumbnail(a, b) is expected


def test_is_similar_thumbnail_requires_equal_size():
    a = np.zeros((4, 4, 3), dtype=np.uint8)
    b = np.zeros((4, 5, 3), dtype=np.uint8)
    assert not is_similar_thumbnail(a, b)
    assert not is_similar_thumbnail(a, None)
