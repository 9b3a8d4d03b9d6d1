import sys
import os
import numpy as np
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.color_delta import (
    MAX_YIQ_DELTA, blend, color_delta, color_delta_array, gray_values, rgb2y
)

BLACK = bytes([0, 0, 0, 255])
WHITE = bytes([255, 255, 255, 255])
RED = bytes([255, 0, 0, 255])
GREEN = bytes([0, 255, 0, 255])


def test_identical_samples_have_zero_delta():
    assert color_delta(RED, RED, 0, 0) == 0.0
    assert color_delta(RED, RED, 0, 0, True) == 0.0

def test_offsets_select_pixels():
    img = RED + GREEN + RED
    assert color_delta(img, img, 0, 8) == 0.0
    assert color_delta(img, img, 0, 4) != 0.0

def test_black_white_delta_is_close_to_max():
    delta = color_delta(BLACK, WHITE, 0, 0)
    assert delta == pytest.approx(0.5053 * 255 * 255, rel=1e-6)
    assert delta <= MAX_YIQ_DELTA

def test_sign_marks_brighter_first_sample():
    darker_first = color_delta(BLACK, WHITE, 0, 0)
    brighter_first = color_delta(WHITE, BLACK, 0, 0)
    assert darker_first > 0
    assert brighter_first < 0
    assert brighter_first == -darker_first

def test_y_only_returns_signed_brightness_difference():
    assert color_delta(BLACK, WHITE, 0, 0, True) == -255.0
    assert color_delta(WHITE, BLACK, 0, 0, True) == 255.0
    assert color_delta(RED, GREEN, 0, 0, True) == rgb2y(255, 0, 0) - rgb2y(0, 255, 0)

def test_transparent_pixel_blends_to_white():
    transparent = bytes([0, 0, 0, 0])
    assert color_delta(transparent, WHITE, 0, 0) == 0.0
    assert color_delta(transparent, BLACK, 0, 0) < 0

def test_semi_transparent_is_between_opaque_and_white():
    half_black = bytes([0, 0, 0, 128])
    to_black = abs(color_delta(half_black, BLACK, 0, 0))
    to_white = abs(color_delta(half_black, WHITE, 0, 0))
    assert 0 < to_black < abs(color_delta(WHITE, BLACK, 0, 0))
    assert 0 < to_white < abs(color_delta(WHITE, BLACK, 0, 0))

@pytest.mark.parametrize('c, a, expected', [
    (0, 0.0, 255),
    (100, 1.0, 100),
    (0, 0.5, 127),
    (255, 0.3, 255),
])
def test_blend(c, a, expected):
    assert blend(c, a) == expected

def test_rgb2y_stays_in_byte_range():
    assert rgb2y(0, 0, 0) == 0
    assert rgb2y(255, 255, 255) == 255
    assert rgb2y(10, 20, 30) == 18

def test_vectorized_delta_matches_scalar():
    rng = np.random.default_rng(42)
    pixels1 = rng.integers(0, 256, size=(500, 4), dtype=np.uint8)
    pixels2 = rng.integers(0, 256, size=(500, 4), dtype=np.uint8)
    pixels1[:100, 3] = 255
    pixels2[:100, 3] = 255
    pixels2[100:150] = pixels1[100:150]
    raw1 = pixels1.tobytes()
    raw2 = pixels2.tobytes()
    expected = np.array([color_delta(raw1, raw2, i * 4, i * 4) for i in range(500)])
    np.testing.assert_array_equal(color_delta_array(pixels1, pixels2), expected)

def test_gray_values():
    pixels = np.array([[10, 20, 30, 255], [10, 20, 30, 0], [255, 255, 255, 255]], dtype=np.uint8)
    gray = gray_values(pixels, 0.1)
    assert gray.dtype == np.uint8
    assert list(gray) == [231, 255, 255]
    assert gray[0] == int(255 + (rgb2y(10, 20, 30) - 255) * (0.1 * 255 / 255))
