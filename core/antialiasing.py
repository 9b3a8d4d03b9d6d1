"""
Anti-Aliasing Classifier Module
Tells anti-aliased edge pixels apart from real rendering changes, based on
"Anti-aliased Pixel and Intensity Slope Detector" by V. Vysniauskas, 2009.
"""

from .color_delta import color_delta
from .sibling_check import has_many_siblings, neighborhood, on_boundary


def antialiased(img, x1: int, y1: int, width: int, height: int, img2) -> bool:
    """
    Check whether the pixel at (x1, y1) of `img` looks like anti-aliasing.

    The pixel must sit on a brightness slope (both a darker and a brighter
    neighbor) and the darkest or brightest neighbor must lie in a flat area of
    identical color in both `img` and `img2`.
    """
    bounds = neighborhood(x1, y1, width, height)
    x0, y0, x2, y2 = bounds
    pos = (y1 * width + x1) * 4
    zeroes = 1 if on_boundary(x1, y1, bounds) else 0

    min_delta = 0.0
    max_delta = 0.0
    min_x = min_y = max_x = max_y = 0

    # go through 8 adjacent pixels
    for x in range(x0, x2 + 1):
        for y in range(y0, y2 + 1):
            if x == x1 and y == y1:
                continue

            # brightness delta between the center pixel and adjacent one
            delta = color_delta(img, img, pos, (y * width + x) * 4, True)

            # count the number of equal, darker and brighter adjacent pixels
            if delta == 0:
                zeroes += 1
                if zeroes > 2:
                    return False
            elif delta < min_delta:
                min_delta = delta
                min_x, min_y = x, y
            elif delta > max_delta:
                max_delta = delta
                max_x, max_y = x, y

    # no both darker and brighter pixels among siblings: not anti-aliasing
    if min_delta == 0 or max_delta == 0:
        return False

    return ((has_many_siblings(img, min_x, min_y, width, height) and
             has_many_siblings(img2, min_x, min_y, width, height)) or
            (has_many_siblings(img, max_x, max_y, width, height) and
             has_many_siblings(img2, max_x, max_y, width, height)))
