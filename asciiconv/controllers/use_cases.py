"""Сценарии: загрузка изображения и конвертация сохранённого изображения в текст.

SOLID:
- SRP: сценарий только оркестрирует хранилища и сервисы, алгоритмов здесь нет.
- DIP: хранилища и сервис конвертации передаются снаружи.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from asciiconv.errors import DecodeError, ImageNotFound, ImageTooLarge, InvalidImageData, UnsupportedFormat
from asciiconv.models.ascii_model import AsciiArt
from asciiconv.models.config_model import ConversionConfig
from asciiconv.models.image_format import ImageFormat
from asciiconv.models.image_model import ImageData
from asciiconv.services.conversion_service import AsciiConversionService
from asciiconv.services.image_service import ImageService
from asciiconv.services.storage_service import AsciiArtRepository, ImageRepository
from asciiconv.settings import DEFAULT_MAX_UPLOAD_BYTES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadImageResponse:
    image_id: uuid.UUID
    format: ImageFormat
    width: int
    height: int


@dataclass(frozen=True)
class ConvertImageResponse:
    ascii_art_id: uuid.UUID
    content: str
    width: int
    height: int


class UploadImageUseCase:
    def __init__(
        self,
        repository: ImageRepository,
        max_file_size: int = DEFAULT_MAX_UPLOAD_BYTES,
        image_service: ImageService | None = None,
    ) -> None:
        self._repository = repository
        self._max_file_size = max_file_size
        self._image_service = image_service or ImageService()

    def execute(self, filename: str, content_type: str, data: bytes) -> UploadImageResponse:
        """Проверяет и сохраняет загруженное изображение.

        Raises:
            ImageTooLarge: размер данных больше лимита.
            UnsupportedFormat: MIME-тип не из поддерживаемых.
            InvalidImageData: данные не декодируются или их формат не совпадает с заявленным.
        """
        if len(data) > self._max_file_size:
            logger.warning("Rejected upload %r: %d bytes > %d", filename, len(data), self._max_file_size)
            raise ImageTooLarge(self._max_file_size)

        fmt = ImageFormat.from_mime_type(content_type)
        if fmt is None:
            logger.warning("Rejected upload %r: unsupported content type %r", filename, content_type)
            raise UnsupportedFormat(f"Неподдерживаемый формат: {content_type}")

        try:
            image = self._image_service.decode(data)
        except DecodeError as exc:
            logger.warning("Rejected upload %r: %s", filename, exc)
            raise InvalidImageData(f"Некорректные данные изображения: {filename}") from exc

        decoded = ImageFormat.from_pil_format(image.format)
        if decoded is not fmt:
            logger.warning("Rejected upload %r: declared %s, decoded %s", filename, fmt, image.format)
            raise InvalidImageData(f"Файл {filename} заявлен как {fmt}, но содержит {image.format}")

        image_data = ImageData(
            original_filename=filename,
            content_type=content_type,
            data=data,
            width=image.width,
            height=image.height,
        )
        self._repository.save(image_data)
        logger.info("Uploaded %s (%s, %dx%d) as %s", filename, fmt, image.width, image.height, image_data.id)
        return UploadImageResponse(image_id=image_data.id, format=fmt, width=image.width, height=image.height)


class ConvertImageUseCase:
    def __init__(
        self,
        image_repository: ImageRepository,
        ascii_art_repository: AsciiArtRepository,
        conversion_service: AsciiConversionService | None = None,
    ) -> None:
        self._images = image_repository
        self._arts = ascii_art_repository
        self._service = conversion_service or AsciiConversionService()

    def execute(self, image_id: uuid.UUID, config: ConversionConfig) -> ConvertImageResponse:
        """Конвертирует ранее загруженное изображение и сохраняет результат.

        Raises:
            InvalidConfiguration: конфигурация вне границ (проверяется первой).
            ImageNotFound: изображения с таким идентификатором нет.
            ConversionError: ошибка конвейера.
        """
        config.validate()

        image_data = self._images.find_by_id(image_id)
        if image_data is None:
            logger.warning("Conversion requested for unknown image %s", image_id)
            raise ImageNotFound(image_id)

        result = self._service.convert(image_data.data, config)

        art = AsciiArt(
            image_id=image_id,
            content=result.text,
            width=result.width,
            height=result.height,
            detail_level=config.detail_level,
        )
        self._arts.save(art)
        logger.info("Stored ascii art %s for image %s (%dx%d)", art.id, image_id, art.width, art.height)
        return ConvertImageResponse(ascii_art_id=art.id, content=art.content, width=art.width, height=art.height)
