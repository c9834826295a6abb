"""Модели данных для загруженных изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель загруженного изображения.

    Fields:
        original_filename: Имя исходного файла.
        content_type: MIME-тип, например "image/png".
        data: Закодированные байты изображения.
        width: Ширина, px.
        height: Высота, px.
        id: Непрозрачный идентификатор для хранилища.
    """
    original_filename: str
    content_type: str
    data: bytes = field(repr=False)
    width: int
    height: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def aspect_ratio(self) -> float:
        """Отношение высоты к ширине."""
        return self.height / self.width

    def is_valid(self) -> bool:
        return bool(self.data) and self.width > 0 and self.height > 0

    @property
    def size_bytes(self) -> int:
        return len(self.data)
