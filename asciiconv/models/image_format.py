"""Поддерживаемые форматы загружаемых изображений."""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple


class ImageFormat(Enum):
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"
    BMP = "bmp"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value

    @property
    def pil_format(self) -> str:
        """Имя плагина Pillow (`Image.format`)."""
        return self.value.upper()

    @classmethod
    def pil_formats(cls) -> Tuple[str, ...]:
        """Плагины Pillow, которым разрешено декодировать загрузки."""
        return tuple(fmt.pil_format for fmt in cls)

    @classmethod
    def from_pil_format(cls, pil_format: Optional[str]) -> Optional["ImageFormat"]:
        # MPO — многокадровый JPEG, Pillow открывает его плагином JPEG
        name = (pil_format or "").upper()
        if name == "MPO":
            return cls.JPEG
        for fmt in cls:
            if fmt.pil_format == name:
                return fmt
        return None

    @classmethod
    def from_mime_type(cls, mime_type: str) -> Optional["ImageFormat"]:
        """Формат по MIME-типу; `image/jpg` считается синонимом `image/jpeg`."""
        mime = (mime_type or "").strip().lower()
        if mime == "image/jpg":
            return cls.JPEG
        for fmt in cls:
            if fmt.mime_type == mime:
                return fmt
        return None

    @classmethod
    def from_extension(cls, extension: str) -> Optional["ImageFormat"]:
        ext = (extension or "").strip().lower().lstrip(".")
        if ext in ("jpg", "jpeg"):
            return cls.JPEG
        for fmt in cls:
            if fmt.value == ext:
                return fmt
        return None

    @classmethod
    def file_patterns(cls) -> str:
        """Шаблоны для диалога открытия файла, например "*.jpg *.jpeg *.png ..."."""
        patterns = []
        for fmt in cls:
            patterns.append(f"*.{fmt.extension}")
            if fmt is cls.JPEG:
                patterns.append("*.jpeg")
        return " ".join(patterns)

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    ImageFormat.JPEG: "JPEG",
    ImageFormat.PNG: "PNG",
    ImageFormat.GIF: "GIF",
    ImageFormat.WEBP: "WebP",
    ImageFormat.BMP: "BMP",
}
