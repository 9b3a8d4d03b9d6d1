"""
Buffer Utilities Module
Normalizes caller-supplied RGBA buffers into flat uint8 numpy views.
"""

import numpy as np

BUFFER_TYPES = (bytes, bytearray, memoryview, np.ndarray)


def as_pixel_array(buffer, name: str, writable: bool = False) -> np.ndarray:
    """
    View an RGBA buffer as a flat uint8 array without copying where possible.

    Args:
        buffer: bytes, bytearray, memoryview or uint8 numpy array
        name: argument name used in error messages
        writable: the returned array must write through to `buffer`

    Returns:
        1-D uint8 array over the buffer's bytes

    Raises:
        TypeError: unsupported buffer type, dtype, or a read-only output
    """
    if not isinstance(buffer, BUFFER_TYPES):
        raise TypeError(f"{name}: bytes, bytearray, memoryview or uint8 numpy array expected, "
                        f"got {type(buffer).__name__}")

    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise TypeError(f"{name}: uint8 array expected, got dtype {buffer.dtype}")
        if writable:
            if not buffer.flags.writeable:
                raise TypeError(f"{name}: array is read-only")
            if not buffer.flags.c_contiguous:
                raise TypeError(f"{name}: array must be C-contiguous to be written in place")
            return buffer.reshape(-1)
        return np.ascontiguousarray(buffer).reshape(-1)

    if writable and (isinstance(buffer, bytes) or
                     (isinstance(buffer, memoryview) and buffer.readonly)):
        raise TypeError(f"{name}: buffer is read-only")

    if isinstance(buffer, memoryview) and not buffer.c_contiguous:
        if writable:
            raise TypeError(f"{name}: memoryview must be C-contiguous to be written in place")
        buffer = buffer.tobytes()

    return np.frombuffer(buffer, dtype=np.uint8)


def as_pixels(flat: np.ndarray) -> np.ndarray:
    """Reshape a flat RGBA array to one row per pixel."""
    return flat.reshape(-1, 4)
