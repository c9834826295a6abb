"""Иерархия ошибок конвертера.

Принципы:
- Каждая ошибка несёт контекст (этап, поле, значение), достаточный для исправления ввода.
- UI и CLI перехватывают `AsciiConvError` на верхнем уровне действия пользователя.
"""
from __future__ import annotations

from typing import Any, Optional


class AsciiConvError(Exception):
    """Базовая ошибка приложения."""


class ConversionError(AsciiConvError):
    """Ошибка конвейера преобразования изображения в текст."""

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage


class DecodeError(ConversionError):
    def __init__(self, message: str) -> None:
        super().__init__(message, stage="decode")


class InvalidConfiguration(ConversionError):
    """Параметр конфигурации вне допустимого диапазона."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message, stage="validate")
        self.field = field
        self.value = value


class InternalPipelineError(ConversionError):
    """Неожиданный сбой этапа на корректных входных данных (ошибка программы)."""


class UploadError(AsciiConvError):
    """Загрузка изображения отклонена."""


class UnsupportedFormat(UploadError):
    pass


class ImageTooLarge(UploadError):
    def __init__(self, max_size: int) -> None:
        super().__init__(f"Изображение слишком большое (максимум {max_size} байт)")
        self.max_size = max_size


class InvalidImageData(UploadError):
    pass


class ImageNotFound(AsciiConvError):
    def __init__(self, image_id: object) -> None:
        super().__init__(f"Изображение не найдено: {image_id}")
        self.image_id = image_id
