"""Модели результата: уровни детализации, наборы символов, текстовый результат."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List


class DetailLevel(Enum):
    """Уровень детализации; каждый связан с фиксированным набором символов."""
    LOW = "low"
    HIGH = "high"

    @property
    def glyphs(self) -> "GlyphSet":
        return GlyphSet(_GLYPHS[self])

    @classmethod
    def parse(cls, value: str) -> "DetailLevel":
        """Разбирает строку "low"/"high" без учёта регистра.

        Raises:
            ValueError: если строка не является известным уровнем.
        """
        return cls(value.strip().lower())


@dataclass(frozen=True)
class GlyphSet:
    """Упорядоченный набор символов: индекс 0 — самый «пустой», последний — самый плотный.

    Индексация идёт по кодовым точкам Unicode (обычная индексация `str`),
    поэтому многобайтовые символы допустимы.
    """
    chars: str

    def __post_init__(self) -> None:
        if len(self.chars) < 2:
            raise ValueError("Набор символов должен содержать не меньше двух символов")

    def __len__(self) -> int:
        return len(self.chars)

    def __getitem__(self, index: int) -> str:
        return self.chars[index]


_GLYPHS = {
    DetailLevel.LOW: " .-:=+*#%@",
    DetailLevel.HIGH: " .`'^,:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$",
}


@dataclass(frozen=True)
class ConversionResult:
    """Текст, полученный конвейером, и размеры сетки символов."""
    text: str
    width: int
    height: int

    def rows(self) -> List[str]:
        return self.text.split("\n")


@dataclass(frozen=True)
class AsciiArt:
    """Сохранённый результат конвертации конкретного изображения."""
    image_id: uuid.UUID
    content: str
    width: int
    height: int
    detail_level: DetailLevel
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_valid(self) -> bool:
        return bool(self.content) and self.width > 0 and self.height > 0

    def line_count(self) -> int:
        return len(self.content.splitlines())
