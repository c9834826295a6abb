"""Хранилища в памяти процесса для загруженных изображений и результатов.

Данные живут только пока жив процесс. Доступ защищён блокировкой, так что один
экземпляр можно разделять между параллельными запросами.
"""
from __future__ import annotations

import threading
import uuid
from typing import Dict, Generic, Optional, TypeVar

from asciiconv.models.ascii_model import AsciiArt
from asciiconv.models.image_model import ImageData

E = TypeVar("E", ImageData, AsciiArt)


class _InMemoryRepository(Generic[E]):
    def __init__(self) -> None:
        self._storage: Dict[uuid.UUID, E] = {}
        self._lock = threading.Lock()

    def save(self, entity: E) -> None:
        with self._lock:
            self._storage[entity.id] = entity

    def find_by_id(self, entity_id: uuid.UUID) -> Optional[E]:
        with self._lock:
            return self._storage.get(entity_id)

    def delete(self, entity_id: uuid.UUID) -> None:
        with self._lock:
            self._storage.pop(entity_id, None)


class ImageRepository(_InMemoryRepository[ImageData]):
    """Загруженные изображения по идентификатору."""


class AsciiArtRepository(_InMemoryRepository[AsciiArt]):
    """Результаты конвертации по идентификатору."""
