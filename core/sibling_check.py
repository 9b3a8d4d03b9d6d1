"""
Sibling Check Module
Detects pixels sitting in a flat area of identical color.
"""


def neighborhood(x: int, y: int, width: int, height: int):
    """Clamped 3x3 bounds around (x, y) as (x0, y0, x2, y2), inclusive."""
    return max(x - 1, 0), max(y - 1, 0), min(x + 1, width - 1), min(y + 1, height - 1)


def on_boundary(x: int, y: int, bounds) -> bool:
    x0, y0, x2, y2 = bounds
    return x == x0 or x == x2 or y == y0 or y == y2


def has_many_siblings(img, x1: int, y1: int, width: int, height: int) -> bool:
    """Check if a pixel has 3+ adjacent pixels of exactly the same RGBA value.

    Pixels on the image border start with one match credited, since part of
    their neighborhood lies outside the image.
    """
    bounds = neighborhood(x1, y1, width, height)
    x0, y0, x2, y2 = bounds
    pos = (y1 * width + x1) * 4
    zeroes = 1 if on_boundary(x1, y1, bounds) else 0

    for x in range(x0, x2 + 1):
        for y in range(y0, y2 + 1):
            if x == x1 and y == y1:
                continue

            pos2 = (y * width + x) * 4
            if (img[pos] == img[pos2] and
                    img[pos + 1] == img[pos2 + 1] and
                    img[pos + 2] == img[pos2 + 2] and
                    img[pos + 3] == img[pos2 + 3]):
                zeroes += 1

            if zeroes > 2:
                return True

    return False
