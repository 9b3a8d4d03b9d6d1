"""
Color Delta Module
Perceptual color difference in YIQ space, following "Measuring perceived color
difference using YIQ NTSC transmission color space in mobile applications"
by Y. Kotsarenko and F. Ramos.
"""

import numpy as np

# Maximum possible value of the weighted YIQ distance
MAX_YIQ_DELTA = 35215.0


def blend(c: int, a: float) -> int:
    """Blend a channel value with white using opacity `a` in [0, 1]."""
    return int(255.0 + (c - 255.0) * a)


def rgb2y(r: int, g: int, b: int) -> int:
    return int(r * 0.29889531 + g * 0.58662247 + b * 0.11448223)


def rgb2i(r: int, g: int, b: int) -> float:
    return r * 0.59597799 - g * 0.27417610 - b * 0.32180189


def rgb2q(r: int, g: int, b: int) -> float:
    return r * 0.21147017 - g * 0.52261711 + b * 0.31114694


def color_delta(img1, img2, k: int, m: int, y_only: bool = False) -> float:
    """
    Perceptual distance between the pixel at byte offset `k` of `img1` and the
    pixel at byte offset `m` of `img2`.

    Args:
        img1, img2: bytes-like RGBA buffers (indexing must yield ints)
        k, m: byte offsets of the first channel of each pixel
        y_only: return the signed brightness difference only

    Returns:
        Weighted squared YIQ distance, negative when the `img1` pixel is the
        brighter one. With `y_only`, the luma difference Y1 - Y2.
    """
    r1, g1, b1, a1 = img1[k], img1[k + 1], img1[k + 2], img1[k + 3]
    r2, g2, b2, a2 = img2[m], img2[m + 1], img2[m + 2], img2[m + 3]

    if a1 == a2 and r1 == r2 and g1 == g2 and b1 == b2:
        return 0.0

    if a1 < 255:
        a1 /= 255.0
        r1, g1, b1 = blend(r1, a1), blend(g1, a1), blend(b1, a1)

    if a2 < 255:
        a2 /= 255.0
        r2, g2, b2 = blend(r2, a2), blend(g2, a2), blend(b2, a2)

    y1 = rgb2y(r1, g1, b1)
    y2 = rgb2y(r2, g2, b2)
    y = y1 - y2

    if y_only:
        return float(y)

    i = rgb2i(r1, g1, b1) - rgb2i(r2, g2, b2)
    q = rgb2q(r1, g1, b1) - rgb2q(r2, g2, b2)

    delta = 0.5053 * y * y + 0.299 * i * i + 0.1957 * q * q

    # sign tells which of the two pixels is darker
    return -delta if y1 > y2 else delta


def _blend_white(pixels: np.ndarray):
    """Split (n, 4) uint8 pixels into float channels blended over white."""
    channels = pixels.astype(np.float64)
    alpha = channels[:, 3] / 255.0
    # opaque pixels come out unchanged since (c - 255) * 1.0 + 255 == c
    blended = np.trunc(255.0 + (channels[:, :3] - 255.0) * alpha[:, None])
    return blended[:, 0], blended[:, 1], blended[:, 2]


def _luma(r, g, b):
    return np.trunc(r * 0.29889531 + g * 0.58662247 + b * 0.11448223)


def color_delta_array(pixels1: np.ndarray, pixels2: np.ndarray) -> np.ndarray:
    """
    Vectorized `color_delta` for two (n, 4) uint8 pixel arrays.
    Produces the same float64 values as calling `color_delta` per pixel.
    """
    r1, g1, b1 = _blend_white(pixels1)
    r2, g2, b2 = _blend_white(pixels2)

    y1 = _luma(r1, g1, b1)
    y2 = _luma(r2, g2, b2)
    y = y1 - y2
    i = ((r1 * 0.59597799 - g1 * 0.27417610 - b1 * 0.32180189) -
         (r2 * 0.59597799 - g2 * 0.27417610 - b2 * 0.32180189))
    q = ((r1 * 0.21147017 - g1 * 0.52261711 + b1 * 0.31114694) -
         (r2 * 0.21147017 - g2 * 0.52261711 + b2 * 0.31114694))

    delta = 0.5053 * y * y + 0.299 * i * i + 0.1957 * q * q
    delta = np.where(y1 > y2, -delta, delta)

    same = np.all(pixels1 == pixels2, axis=1)
    return np.where(same, 0.0, delta)


def gray_values(pixels: np.ndarray, alpha: float) -> np.ndarray:
    """Grayscale echo of (n, 4) uint8 pixels blended with white at opacity `alpha`."""
    channels = pixels.astype(np.float64)
    luma = _luma(channels[:, 0], channels[:, 1], channels[:, 2])
    opacity = alpha * channels[:, 3] / 255.0
    return np.trunc(255.0 + (luma - 255.0) * opacity).astype(np.uint8)
