from __future__ import annotations

import math

import numpy as np
from PIL import Image

from asciiconv.models.ascii_model import GlyphSet

# Высота символа моноширинного шрифта больше его ширины
GLYPH_ASPECT = 0.43
GAMMA = 0.7
MIDPOINT = 128.0


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


class ProcessService:
    # ---------- 1) Масштабирование ----------
    @staticmethod
    def target_height(source_width: int, source_height: int, width: int) -> int:
        """
        Высота сетки символов с поправкой на пропорции символа.
        Не меньше 1 даже для очень широких изображений.
        """
        raw = width * (source_height / source_width) * GLYPH_ASPECT
        return max(1, int(math.floor(raw + 0.5)))

    def to_8bit(self, image: Image.Image) -> Image.Image:
        """
        Приводит 16-битные и вещественные изображения (I;16*, I, F) к 8-битному L.
        I;16 масштабируется сдвигом на 8 бит, I и F растягиваются по min/max.
        Остальные режимы возвращаются без изменений.
        """
        if image.mode.startswith("I;16"):
            arr = np.asarray(image).astype(np.uint16)
            return Image.fromarray((arr >> 8).astype(np.uint8), mode="L")
        if image.mode not in ("I", "F"):
            return image

        arr = np.asarray(image, dtype=np.float64)
        lo, hi = float(arr.min()), float(arr.max())
        if hi > lo:
            scaled = (arr - lo) * (255.0 / (hi - lo))
        else:
            # однотонное изображение: значение просто ограничивается 8 битами
            scaled = np.clip(arr, 0.0, 255.0)
        return Image.fromarray(np.clip(np.rint(scaled), 0, 255).astype(np.uint8), mode="L")

    def resample(self, image: Image.Image, width: int) -> Image.Image:
        """
        Приводит изображение к размеру width × target_height бикубическим фильтром (Catmull-Rom).
        """
        image = self.to_8bit(image)
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        height = self.target_height(image.width, image.height, width)
        return image.resize((width, height), Image.Resampling.BICUBIC)

    # ---------- 2) Контраст ----------
    def adjust_contrast(self, image: Image.Image, factor: float) -> Image.Image:
        """
        Линейный контраст вокруг середины 128 для каждого канала:
        new = clamp((old - 128) * factor + 128, 0, 255).
        Возвращает новое RGB-изображение, исходное не меняется.
        """
        arr = np.asarray(image.convert("RGB"), dtype=np.float32)
        out = np.clip((arr - MIDPOINT) * factor + MIDPOINT, 0.0, 255.0).astype(np.uint8)
        return Image.fromarray(out, mode="RGB")

    def to_grayscale(self, image: Image.Image) -> Image.Image:
        """
        Преобразование изображения в оттенки серого (8-бит, L).
        """
        image = self.to_8bit(image)
        if image.mode == "L":
            return image.copy()
        return image.convert("L")

    # ---------- 3) Гауссово размытие ----------
    @staticmethod
    def gaussian_kernel(sigma: float) -> np.ndarray:
        """
        Нормированное одномерное гауссово ядро нечётной длины ceil(6·sigma).
        """
        size = int(math.ceil(6.0 * sigma))
        if size % 2 == 0:
            size += 1
        half = size // 2
        offsets = np.arange(-half, half + 1, dtype=np.float64)
        kernel = np.exp(-0.5 * (offsets / sigma) ** 2)
        return kernel / kernel.sum()

    def gaussian_blur(self, arr: np.ndarray, sigma: float) -> np.ndarray:
        """
        Сепарабельное гауссово размытие: сначала по строкам, затем по столбцам.
        На границах выпавшие за край отсчёты ядра отбрасываются, а оставшиеся веса
        перенормируются (без дополнения нулями). При sigma == 0 возвращает копию входа.
        """
        if sigma <= 0:
            return arr.copy()
        kernel = self.gaussian_kernel(sigma)
        horizontal = self._convolve_axis(arr, kernel, axis=1)
        return self._convolve_axis(horizontal, kernel, axis=0)

    def _convolve_axis(self, arr: np.ndarray, kernel: np.ndarray, axis: int) -> np.ndarray:
        """
        Один проход свёртки вдоль оси с усечением на границах.
        Векторизовано через сдвиги: O(K) операций над всем массивом.
        """
        src = arr.astype(np.float64)
        acc = np.zeros_like(src)
        weights = np.zeros_like(src)
        n = src.shape[axis]
        half = kernel.size // 2

        for i, w in enumerate(kernel):
            offset = i - half
            lo = max(0, -offset)
            hi = min(n, n - offset)
            if lo >= hi:
                continue
            dst_sl = [slice(None), slice(None)]
            src_sl = [slice(None), slice(None)]
            dst_sl[axis] = slice(lo, hi)
            src_sl[axis] = slice(lo + offset, hi + offset)
            acc[tuple(dst_sl)] += src[tuple(src_sl)] * w
            weights[tuple(dst_sl)] += w

        # центральный отсчёт всегда в пределах, поэтому weights > 0
        out = _round_half_up(acc / weights)
        return np.clip(out, 0, 255).astype(np.uint8)

    # ---------- 4) Эквализация и квантование ----------
    def equalize_histogram(self, arr: np.ndarray) -> np.ndarray:
        """
        Эквализация гистограммы: значение пикселя заменяется на CDF(значение) · 255.
        Для однотонного изображения все пиксели получают 255.
        """
        arr_u8 = np.asarray(arr, dtype=np.uint8)
        total = arr_u8.size
        if total == 0:
            return arr_u8.copy()
        hist = np.bincount(arr_u8.ravel(), minlength=256)
        # целочисленная кумулятивная сумма: CDF максимального значения ровно 1.0
        cdf = np.cumsum(hist).astype(np.float64) / total
        equalized = np.clip(cdf[arr_u8] * 255.0, 0.0, 255.0)
        return equalized.astype(np.uint8)

    def quantize_levels(self, arr: np.ndarray, levels: int) -> np.ndarray:
        """
        Квантование в `levels` полос: level = round(v/255·(L-1)), затем обратно в 8 бит
        как level/(L-1)·255. Повторное применение с тем же L ничего не меняет.
        """
        if levels < 2:
            raise ValueError(f"Число уровней должно быть >= 2, получено {levels}")
        steps = levels - 1
        level = _round_half_up(np.asarray(arr, dtype=np.float64) / 255.0 * steps)
        return np.clip(level / steps * 255.0, 0.0, 255.0).astype(np.uint8)

    def adaptive_threshold(self, arr: np.ndarray, levels: int) -> np.ndarray:
        """
        Адаптивный порог: эквализация гистограммы и квантование до числа доступных символов.
        """
        return self.quantize_levels(self.equalize_histogram(arr), levels)

    # ---------- 5) Символы ----------
    @staticmethod
    def map_intensity_to_index(intensity: int, char_count: int) -> int:
        """
        Индекс символа с гамма-коррекцией 0.7 (средние тона получают более плотные символы).
        """
        gamma_corrected = (intensity / 255.0) ** GAMMA
        index = int(math.floor(gamma_corrected * (char_count - 1) + 0.5))
        return max(0, min(char_count - 1, index))

    def glyph_indices(self, arr: np.ndarray, char_count: int) -> np.ndarray:
        """
        Векторизованный вариант `map_intensity_to_index` для всего буфера.
        """
        normalized = np.asarray(arr, dtype=np.float64) / 255.0
        index = _round_half_up(np.power(normalized, GAMMA) * (char_count - 1))
        return np.clip(index, 0, char_count - 1).astype(np.intp)

    def render_glyphs(self, arr: np.ndarray, glyphs: GlyphSet) -> str:
        """
        Собирает текст построчно; строки разделены переводом строки, после последней его нет.
        """
        table = np.array(list(glyphs.chars))
        grid = table[self.glyph_indices(arr, len(glyphs))]
        return "\n".join("".join(row) for row in grid)
