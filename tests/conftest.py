from __future__ import annotations

from io import BytesIO
from typing import Callable, Tuple, Union

import numpy as np
import pytest
from PIL import Image

from asciiconv.services.conversion_service import AsciiConversionService
from asciiconv.services.process_service import ProcessService

Color = Union[int, Tuple[int, ...]]


def encode(image: Image.Image, fmt: str = "PNG") -> bytes:
    buf = BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def process() -> ProcessService:
    return ProcessService()


@pytest.fixture
def service() -> AsciiConversionService:
    return AsciiConversionService()


@pytest.fixture
def solid_png() -> Callable[..., bytes]:
    """Однотонное изображение в виде PNG-байтов."""
    def _make(width: int, height: int, color: Color = (128, 128, 128), mode: str = "RGB") -> bytes:
        return encode(Image.new(mode, (width, height), color=color))
    return _make


@pytest.fixture
def noise_png() -> Callable[..., bytes]:
    def _make(width: int, height: int, seed: int = 0) -> bytes:
        rng = np.random.default_rng(seed)
        arr = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
        return encode(Image.fromarray(arr, mode="RGB"))
    return _make


@pytest.fixture
def gradient_png() -> Callable[..., bytes]:
    """Горизонтальный градиент: слева чёрный, справа белый."""
    def _make(width: int, height: int) -> bytes:
        row = np.linspace(0, 255, num=width).astype(np.uint8)
        arr = np.tile(row, (height, 1))
        return encode(Image.fromarray(arr, mode="L"))
    return _make
