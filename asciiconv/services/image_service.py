"""Декодирование изображений из байтов и с диска.

Принципы:
- SRP: класс отвечает только за загрузку и базовое извлечение свойств.
- Декодирование целиком делегировано Pillow; наружу выходит `DecodeError`.
"""
from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Tuple

from PIL import Image

from asciiconv.errors import DecodeError
from asciiconv.models.image_format import ImageFormat

logger = logging.getLogger(__name__)


class ImageService:
    def decode(self, data: bytes) -> Image.Image:
        """Декодирует байты в изображение Pillow.

        Args:
            data: Закодированные байты. Допускаются только форматы `ImageFormat`
                (PNG, JPEG, GIF, WebP, BMP); прочие плагины Pillow не используются.

        Returns:
            Полностью загруженный `PIL.Image.Image` в исходном режиме.

        Raises:
            DecodeError: если байты не распознаны как изображение.
        """
        if not data:
            raise DecodeError("Пустые данные изображения")
        try:
            image = Image.open(BytesIO(data), formats=ImageFormat.pil_formats())
            image.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Не удалось декодировать изображение: {exc}") from exc
        logger.debug("Decoded %s image %dx%d (%s)", image.format, image.width, image.height, image.mode)
        return image

    def read_file(self, file_path: str | Path) -> Tuple[str, str, bytes]:
        """Читает файл изображения с диска.

        Returns:
            Кортеж (имя файла, MIME-тип, байты). MIME-тип определяется по расширению;
            для неподдерживаемого расширения он равен "application/octet-stream".

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        fmt = ImageFormat.from_extension(path.suffix)
        content_type = fmt.mime_type if fmt is not None else "application/octet-stream"
        return path.name, content_type, path.read_bytes()
