"""
Visual Diff Module
Pixel-level comparison of two RGBA buffers with anti-aliasing detection,
producing a diff count and a diff visualization.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from utils.buffer_utils import as_pixel_array, as_pixels
from .antialiasing import antialiased
from .color_delta import MAX_YIQ_DELTA, color_delta_array, gray_values
from .diff_options import DiffOptions
from .errors import ImageDimensionError, ImageSizeMismatchError

logger = logging.getLogger(__name__)


@dataclass
class DiffSummary:
    diff_count: int = 0
    antialiased_count: int = 0
    total_pixels: int = 0
    identical: bool = False

    @property
    def diff_ratio(self) -> float:
        if not self.total_pixels:
            return 0.0
        return self.diff_count / self.total_pixels

    def to_dict(self) -> Dict:
        return {
            'diff_count': self.diff_count,
            'antialiased_count': self.antialiased_count,
            'total_pixels': self.total_pixels,
            'diff_ratio': self.diff_ratio,
            'identical': self.identical,
        }


class VisualDiff:
    def __init__(self, threshold: float = 0.1, options: Optional[DiffOptions] = None):
        threshold = float(threshold)
        self.threshold = threshold
        self.options = options if options is not None else DiffOptions()
        # maximum acceptable square distance between two colors
        self.max_delta = MAX_YIQ_DELTA * threshold * threshold

    def compare(self, img1, img2, output, width: int, height: int) -> DiffSummary:
        """
        Compare two RGBA buffers of the same size pixel by pixel.

        Args:
            img1, img2: RGBA buffers, row-major, width * height * 4 bytes each
            output: writable buffer of the same size for the diff image, or None
            width, height: image dimensions in pixels

        Returns:
            DiffSummary with the number of differing and anti-aliased pixels

        Raises:
            TypeError: unsupported buffer type or read-only output
            ImageSizeMismatchError: buffers differ in length
            ImageDimensionError: buffer length does not match width/height
        """
        data1 = as_pixel_array(img1, 'img1')
        data2 = as_pixel_array(img2, 'img2')
        out = None if output is None else as_pixel_array(output, 'output', writable=True)
        self._check_sizes(data1, data2, out, width, height)

        total = width * height
        pixels1 = as_pixels(data1)
        pixels2 = as_pixels(data2)
        out_pixels = None if out is None else as_pixels(out)
        logger.debug(f"Comparing {width}x{height} images, max delta {self.max_delta:.2f}")

        if np.array_equal(data1, data2):
            logger.debug("Images are byte-identical")
            if out_pixels is not None:
                self._draw_background(pixels1, out_pixels, np.ones(total, dtype=bool))
            return DiffSummary(total_pixels=total, identical=True)

        deltas = color_delta_array(pixels1, pixels2)
        changed = np.abs(deltas) > self.max_delta
        candidates = np.flatnonzero(changed)

        # snapshot inputs before any output write, in case the caller aliases them
        raw1 = data1.tobytes() if candidates.size else b''
        raw2 = data2.tobytes() if candidates.size else b''

        if out_pixels is not None:
            self._draw_background(pixels1, out_pixels, ~changed)

        diff = 0
        aa = 0
        for index in candidates:
            index = int(index)
            y, x = divmod(index, width)
            if not self.options.include_aa and (
                    antialiased(raw1, x, y, width, height, raw2) or
                    antialiased(raw2, x, y, width, height, raw1)):
                # anti-aliasing; do not count as a difference
                aa += 1
                if out_pixels is not None:
                    if self.options.diff_mask:
                        out_pixels[index] = 0
                    else:
                        self._draw_pixel(out_pixels, index, self.options.aa_color)
            else:
                diff += 1
                if out_pixels is not None:
                    self._draw_pixel(out_pixels, index, self.options.color_for(float(deltas[index])))

        logger.debug(f"{diff} different pixels, {aa} anti-aliased out of {total}")
        return DiffSummary(diff_count=diff, antialiased_count=aa, total_pixels=total)

    def _check_sizes(self, data1, data2, out, width: int, height: int) -> None:
        if data1.size != data2.size or (out is not None and out.size != data1.size):
            logger.error(f"Image sizes do not match: {data1.size}, {data2.size}, "
                         f"{None if out is None else out.size}")
            raise ImageSizeMismatchError(data1.size, data2.size, None if out is None else out.size)
        if width < 0 or height < 0 or data1.size != width * height * 4:
            logger.error(f"Image data size {data1.size} does not match {width}x{height}")
            raise ImageDimensionError(data1.size, width, height)

    def _draw_background(self, pixels: np.ndarray, out_pixels: np.ndarray, mask: np.ndarray) -> None:
        """Draw unchanged pixels as grayscale img1 blended with white."""
        if self.options.diff_mask:
            out_pixels[mask] = 0
            return
        gray = gray_values(pixels[mask], self.options.alpha)
        opaque = np.full_like(gray, 255)
        out_pixels[mask] = np.stack([gray, gray, gray, opaque], axis=1)

    @staticmethod
    def _draw_pixel(out_pixels: np.ndarray, index: int, color) -> None:
        r, g, b = color
        out_pixels[index] = (r, g, b, 255)


def pixelmatch(img1, img2, output, width: int, height: int,
               threshold: float = 0.1, options: Optional[DiffOptions] = None) -> int:
    """Compare two RGBA buffers and return the number of differing pixels.

    `output` receives the diff image when given: unchanged pixels as a faint
    grayscale copy of img1, anti-aliased pixels in `aa_color`, differences in
    `diff_color`.
    """
    return VisualDiff(threshold, options).compare(img1, img2, output, width, height).diff_count
