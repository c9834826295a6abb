"""Конвейер «изображение → текст».

Этапы: Decode → Resample → ToneAdjust → Grayscale → Denoise → Quantize → MapGlyphs.
Каждый этап получает результат предыдущего и создаёт новый буфер; общего
изменяемого состояния между вызовами нет, поэтому один экземпляр сервиса
можно использовать из нескольких потоков.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

import numpy as np
from PIL import Image

from asciiconv.errors import ConversionError, InternalPipelineError
from asciiconv.models.ascii_model import ConversionResult
from asciiconv.models.config_model import ConversionConfig
from asciiconv.services.image_service import ImageService
from asciiconv.services.process_service import ProcessService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsciiConversionService:
    def __init__(self, image_service: ImageService | None = None, process_service: ProcessService | None = None) -> None:
        self._image_service = image_service or ImageService()
        self._process = process_service or ProcessService()

    def convert(self, image_bytes: bytes, config: ConversionConfig) -> ConversionResult:
        """Преобразует закодированное изображение в текст.

        Raises:
            InvalidConfiguration: конфигурация вне границ (до декодирования).
            DecodeError: байты не являются изображением.
            InternalPipelineError: непредвиденный сбой одного из этапов.
        """
        config.validate()
        image = self._image_service.decode(image_bytes)
        return self.convert_image(image, config)

    def convert_image(self, image: Image.Image, config: ConversionConfig) -> ConversionResult:
        """То же, что `convert`, для уже декодированного изображения."""
        config.validate()
        started = time.perf_counter()
        glyphs = config.glyphs
        proc = self._process

        resized = self._stage("resample", lambda: proc.resample(image, config.width))
        logger.debug("resample: %dx%d -> %dx%d", image.width, image.height, resized.width, resized.height)

        contrasted = self._stage("tone_adjust", lambda: proc.adjust_contrast(resized, config.contrast_factor))
        gray = self._stage("grayscale", lambda: np.asarray(proc.to_grayscale(contrasted), dtype=np.uint8))

        smoothed = self._stage("denoise", lambda: proc.gaussian_blur(gray, config.blur_sigma))
        logger.debug("denoise: sigma=%.2f", config.blur_sigma)

        quantized = self._stage("quantize", lambda: proc.adaptive_threshold(smoothed, len(glyphs)))
        logger.debug("quantize: %d levels", len(glyphs))

        text = self._stage("map_glyphs", lambda: proc.render_glyphs(quantized, glyphs))

        height, width = quantized.shape
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        logger.info("Converted %dx%d image to %dx%d glyph grid in %.1f ms",
                    image.width, image.height, width, height, elapsed_ms)
        return ConversionResult(text=text, width=width, height=height)

    @staticmethod
    def _stage(name: str, func: Callable[[], T]) -> T:
        try:
            return func()
        except ConversionError:
            raise
        except Exception as exc:
            logger.exception("Pipeline stage %s failed", name)
            raise InternalPipelineError(f"Сбой на этапе {name}: {exc}", stage=name) from exc
