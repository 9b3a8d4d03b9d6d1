"""
Image Comparison Module
Compares already decoded screenshots (Pillow images or numpy/OpenCV arrays)
and generates a visual diff as a Pillow image.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import cv2
import numpy as np
from PIL import Image

from core.diff_options import DiffOptions
from core.errors import ImageSizeMismatchError
from core.visual_diff import DiffSummary, VisualDiff

logger = logging.getLogger(__name__)


@dataclass
class PixelDiffResult:
    summary: DiffSummary = field(default_factory=DiffSummary)
    width: int = 0
    height: int = 0
    diff_image: Optional[Image.Image] = None

    @property
    def diff_count(self) -> int:
        return self.summary.diff_count

    def to_dict(self) -> Dict:
        result = self.summary.to_dict()
        result['width'] = self.width
        result['height'] = self.height
        return result


def to_rgba_array(image) -> np.ndarray:
    """
    Convert an in-memory image to an HxWx4 RGBA uint8 array.

    Pillow images are converted with `Image.convert`. numpy arrays follow
    OpenCV conventions: HxW is grayscale, HxWx3 is BGR, HxWx4 is taken as RGBA.
    """
    if isinstance(image, Image.Image):
        return np.asarray(image.convert('RGBA'), dtype=np.uint8)

    if not isinstance(image, np.ndarray):
        raise TypeError(f"PIL.Image.Image or numpy array expected, got {type(image).__name__}")
    if image.dtype != np.uint8:
        raise TypeError(f"uint8 image expected, got dtype {image.dtype}")

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if image.ndim == 3 and image.shape[2] == 4:
        return np.ascontiguousarray(image)
    raise TypeError(f"Unsupported image shape {image.shape}")


class ImageComparator:
    def __init__(self, threshold: float = 0.1, options: Optional[DiffOptions] = None):
        self.threshold = threshold
        self.differ = VisualDiff(threshold, options)

    def compare(self, image1, image2, draw_diff: bool = True) -> PixelDiffResult:
        """Compare two images of identical dimensions."""
        rgba1 = to_rgba_array(image1)
        rgba2 = to_rgba_array(image2)
        size1 = _size(rgba1)
        size2 = _size(rgba2)
        if size1 != size2:
            logger.error(f"Image dimensions differ: {size1} vs {size2}")
            raise ImageSizeMismatchError("{}x{}".format(*size1), "{}x{}".format(*size2))

        width, height = size1
        output = np.empty_like(rgba1) if draw_diff else None
        summary = self.differ.compare(rgba1, rgba2, output, width, height)
        diff_image = Image.fromarray(output) if output is not None else None
        return PixelDiffResult(summary=summary, width=width, height=height, diff_image=diff_image)

    def generate_diff_image(self, image1, image2) -> Image.Image:
        """Generate a visual difference image."""
        return self.compare(image1, image2).diff_image

    def count_differences(self, image1, image2) -> int:
        return self.compare(image1, image2, draw_diff=False).diff_count


def _size(rgba: np.ndarray) -> Tuple[int, int]:
    height, width = rgba.shape[:2]
    return width, height
