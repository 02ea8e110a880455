"""
Pytest fixtures for color2gray tests
"""

import numpy as np
import PIL.Image
import pytest

from color2gray import ImageBuffer, PixelFormat


@pytest.fixture
def rgb_buffer() -> ImageBuffer:
    """
    A 20x10 RGB buffer with a horizontal red gradient, a vertical green
    gradient and constant blue.
    """
    data = np.zeros((10, 20, 3), dtype=np.float32)
    data[:, :, 0] = np.linspace(0.0, 1.0, 20, dtype=np.float32).reshape(1, 20)
    data[:, :, 1] = np.linspace(1.0, 0.0, 10, dtype=np.float32).reshape(10, 1)
    data[:, :, 2] = 0.5
    return ImageBuffer(data, pixel_format=PixelFormat.RGB)


@pytest.fixture
def random_rgb() -> np.ndarray:
    """Reproducible random RGB samples (H, W, 3)."""
    generator = np.random.default_rng(4711)
    return generator.random((16, 12, 3), dtype=np.float32)


@pytest.fixture
def rgba_partial() -> ImageBuffer:
    """An RGBA buffer whose alpha fades from opaque to transparent."""
    data = np.zeros((8, 16, 4), dtype=np.uint8)
    data[:, :, 0] = 200
    data[:, :, 1] = 100
    data[:, :, 2] = 50
    data[:, :, 3] = np.linspace(255, 0, 16).astype(np.uint8).reshape(1, 16)
    return ImageBuffer.from_uint8(data, pixel_format=PixelFormat.RGBA)


@pytest.fixture
def rgb_png(tmp_path):
    """Writes a small RGB PNG and returns its path."""
    data = np.zeros((12, 24, 3), dtype=np.uint8)
    data[:, :8, 0] = 255  # red block
    data[:, 8:16, 1] = 255  # green block
    data[:, 16:, 2] = 255  # blue block
    data[:6, :, :] = 128  # gray band on top
    path = tmp_path / "colors.png"
    PIL.Image.fromarray(data).save(path)
    return path


@pytest.fixture
def rgba_png(tmp_path):
    """Writes a partially transparent RGBA PNG and returns its path."""
    data = np.zeros((10, 10, 4), dtype=np.uint8)
    data[:, :, 0] = np.arange(10, dtype=np.uint8).reshape(1, 10) * 25
    data[:, :, 1] = 90
    data[:, :, 2] = np.arange(10, dtype=np.uint8).reshape(10, 1) * 20
    data[:, :, 3] = np.arange(100, dtype=np.uint8).reshape(10, 10) * 2 + 30
    path = tmp_path / "transparent.png"
    PIL.Image.fromarray(data).save(path)
    return path
