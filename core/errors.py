"""
Pixel Diff Errors
Exceptions raised when image buffers violate their size invariants.
"""


class PixelDiffError(ValueError):
    pass


class ImageSizeMismatchError(PixelDiffError):
    def __init__(self, img1_size, img2_size, output_size=None):
        super().__init__("Image sizes do not match: {} vs {}{}".format(
            img1_size, img2_size,
            "" if output_size is None else " (output {})".format(output_size)))
        self.img1_size = img1_size
        self.img2_size = img2_size
        self.output_size = output_size


class ImageDimensionError(PixelDiffError):
    def __init__(self, size, width, height):
        super().__init__("Image data size does not match width/height: {} bytes for {}x{}".format(
            size, width, height))
        self.size = size
        self.width = width
        self.height = height
