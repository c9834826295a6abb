"""Параметры конвертации.

`ConversionConfig` — неизменяемый объект-значение. Проверка границ выполняется
до запуска конвейера: некорректная конфигурация никогда не применяется частично.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from asciiconv.errors import InvalidConfiguration
from asciiconv.models.ascii_model import DetailLevel, GlyphSet

DEFAULT_WIDTH = 100
DEFAULT_DETAIL = DetailLevel.HIGH
DEFAULT_CONTRAST = 1.2
DEFAULT_BLUR_SIGMA = 0.5

MAX_WIDTH = 1000
MAX_CONTRAST = 3.0
MAX_BLUR_SIGMA = 5.0


@dataclass(frozen=True)
class ConversionConfig:
    """Параметры конвертации.

    Fields:
        width: Ширина сетки символов, (0, 1000].
        detail_level: Набор символов (LOW — 10, HIGH — 69).
        contrast_factor: Коэффициент контраста, (0, 3.0].
        blur_sigma: Сигма гауссова размытия, [0, 5.0]; 0 отключает размытие.
    """
    width: int = DEFAULT_WIDTH
    detail_level: DetailLevel = DEFAULT_DETAIL
    contrast_factor: float = DEFAULT_CONTRAST
    blur_sigma: float = DEFAULT_BLUR_SIGMA

    @property
    def glyphs(self) -> GlyphSet:
        return self.detail_level.glyphs

    @classmethod
    def from_params(
        cls,
        width: Optional[Any] = None,
        detail: Optional[Any] = None,
        contrast: Optional[Any] = None,
        blur: Optional[Any] = None,
    ) -> "ConversionConfig":
        """Собирает конфигурацию из необязательных значений (как из query-параметров).

        Отсутствующие значения заменяются значениями по умолчанию; границы не проверяются.

        Raises:
            InvalidConfiguration: если значение не приводится к нужному типу.
        """
        if detail is None:
            level = DEFAULT_DETAIL
        elif isinstance(detail, DetailLevel):
            level = detail
        else:
            try:
                level = DetailLevel.parse(str(detail))
            except ValueError as exc:
                raise InvalidConfiguration(
                    f"Неизвестный уровень детализации {detail!r}; допустимо 'low' или 'high'",
                    field="detail_level",
                    value=detail,
                ) from exc

        return cls(
            width=_coerce(width, DEFAULT_WIDTH, int, "width"),
            detail_level=level,
            contrast_factor=_coerce(contrast, DEFAULT_CONTRAST, float, "contrast_factor"),
            blur_sigma=_coerce(blur, DEFAULT_BLUR_SIGMA, float, "blur_sigma"),
        )

    def violations(self) -> Tuple[Tuple[str, Any, str], ...]:
        """Возвращает нарушенные границы в виде (поле, значение, диапазон)."""
        found = []
        if not (0 < self.width <= MAX_WIDTH):
            found.append(("width", self.width, f"(0, {MAX_WIDTH}]"))
        if not (0.0 < self.contrast_factor <= MAX_CONTRAST):
            found.append(("contrast_factor", self.contrast_factor, f"(0, {MAX_CONTRAST}]"))
        if not (0.0 <= self.blur_sigma <= MAX_BLUR_SIGMA):
            found.append(("blur_sigma", self.blur_sigma, f"[0, {MAX_BLUR_SIGMA}]"))
        return tuple(found)

    def is_valid(self) -> bool:
        return not self.violations()

    def validate(self) -> "ConversionConfig":
        """Проверяет границы и возвращает себя.

        Raises:
            InvalidConfiguration: с указанием первого нарушенного поля и диапазона.
        """
        problems = self.violations()
        if problems:
            field_name, value, allowed = problems[0]
            raise InvalidConfiguration(
                f"Параметр {field_name}={value!r} вне допустимого диапазона {allowed}",
                field=field_name,
                value=value,
            )
        return self


def _coerce(value: Any, default: Any, kind: type, field_name: str) -> Any:
    if value is None or value == "":
        return default
    try:
        if kind is int and isinstance(value, str):
            result = int(value.strip())
        elif kind is int and isinstance(value, float):
            if not value.is_integer():
                raise ValueError(value)
            result = int(value)
        else:
            result = kind(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(
            f"Параметр {field_name} должен быть числом, получено {value!r}",
            field=field_name,
            value=value,
        ) from exc
    if kind is float and not math.isfinite(result):
        raise InvalidConfiguration(
            f"Параметр {field_name} должен быть конечным числом, получено {value!r}",
            field=field_name,
            value=value,
        )
    return result
