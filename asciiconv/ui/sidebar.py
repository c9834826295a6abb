"""Боковая панель: открытие файла, информация об изображении, параметры конвертации.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактный метод `get_params`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional

import customtkinter as ctk

from asciiconv.models.config_model import (
    DEFAULT_BLUR_SIGMA,
    DEFAULT_CONTRAST,
    DEFAULT_WIDTH,
    MAX_BLUR_SIGMA,
    MAX_CONTRAST,
    MAX_WIDTH,
)
from asciiconv.models.image_model import ImageData

_DETAIL_LABELS = {"Высокая": "high", "Низкая": "low"}


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, параметры."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_convert: Optional[Callable[[], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._name_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._format_val = ctk.StringVar(value="—")

        self._info_name = ctk.CTkLabel(self, textvariable=self._name_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_format = ctk.CTkLabel(self, textvariable=self._format_val, anchor="w", justify="left")

        self._info_name.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_format.grid(row=6, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Parameters section
        self._params_title = ctk.CTkLabel(self, text="Параметры", font=ctk.CTkFont(size=16, weight="bold"))
        self._params_title.grid(row=7, column=0, padx=8, pady=(8, 4), sticky="w")

        self._width_val = ctk.StringVar(value=str(DEFAULT_WIDTH))
        self._width_label = ctk.CTkLabel(self, text="Ширина (символов):")
        self._width_slider = ctk.CTkSlider(
            self, from_=10, to=MAX_WIDTH, number_of_steps=MAX_WIDTH - 10, command=self._on_width_change
        )
        self._width_slider.set(DEFAULT_WIDTH)
        self._width_entry = ctk.CTkEntry(self, textvariable=self._width_val, width=80)
        self._width_entry.bind("<Return>", self._on_width_commit)
        self._width_entry.bind("<FocusOut>", self._on_width_commit)
        self._width_label.grid(row=8, column=0, padx=8, pady=(0, 2), sticky="w")
        self._width_slider.grid(row=9, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._width_entry.grid(row=10, column=0, padx=8, pady=(0, 6), sticky="w")

        self._detail_label = ctk.CTkLabel(self, text="Детализация:")
        self._detail_menu = ctk.CTkOptionMenu(self, values=list(_DETAIL_LABELS))
        self._detail_menu.set("Высокая")
        self._detail_label.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="w")
        self._detail_menu.grid(row=12, column=0, padx=8, pady=(0, 6), sticky="w")

        self._contrast_val = ctk.StringVar(value=f"{DEFAULT_CONTRAST:.1f}")
        self._contrast_label = ctk.CTkLabel(self, text="Контраст:")
        self._contrast_slider = ctk.CTkSlider(
            self, from_=0.1, to=MAX_CONTRAST, number_of_steps=29, command=self._on_contrast_change
        )
        self._contrast_slider.set(DEFAULT_CONTRAST)
        self._contrast_value = ctk.CTkLabel(self, textvariable=self._contrast_val, width=48, anchor="w")
        self._contrast_label.grid(row=13, column=0, padx=8, pady=(0, 2), sticky="w")
        self._contrast_slider.grid(row=14, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._contrast_value.grid(row=15, column=0, padx=8, pady=(0, 6), sticky="w")

        self._blur_val = ctk.StringVar(value=f"{DEFAULT_BLUR_SIGMA:.1f}")
        self._blur_label = ctk.CTkLabel(self, text="Размытие (σ):")
        self._blur_slider = ctk.CTkSlider(
            self, from_=0.0, to=MAX_BLUR_SIGMA, number_of_steps=50, command=self._on_blur_change
        )
        self._blur_slider.set(DEFAULT_BLUR_SIGMA)
        self._blur_value = ctk.CTkLabel(self, textvariable=self._blur_val, width=48, anchor="w")
        self._blur_label.grid(row=16, column=0, padx=8, pady=(0, 2), sticky="w")
        self._blur_slider.grid(row=17, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._blur_value.grid(row=18, column=0, padx=8, pady=(0, 10), sticky="w")

        # filler
        self.grid_rowconfigure(99, weight=1)

        self._convert_btn = ctk.CTkButton(self, text="Преобразовать", command=self._emit_convert)
        self._convert_btn.grid(row=100, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_image_info(self, image_data: ImageData, format_name: str) -> None:
        """Отображает метаданные загруженного изображения."""
        self._name_val.set(image_data.original_filename)
        self._size_val.set(self._format_size(image_data.size_bytes))
        self._dims_val.set(f"{image_data.width} × {image_data.height} px")
        self._format_val.set(format_name)

    def get_params(self) -> Dict[str, object]:
        """Возвращает параметры конвертации в виде query-подобного словаря."""
        return {
            "width": self._width_val.get().strip(),
            "detail": _DETAIL_LABELS.get(self._detail_menu.get(), "high"),
            "contrast": round(float(self._contrast_slider.get()), 2),
            "blur": round(float(self._blur_slider.get()), 2),
        }

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_convert(self) -> None:
        if self.on_convert:
            self.on_convert()

    def _on_width_change(self, value: float) -> None:
        self._width_val.set(str(int(round(value))))

    def _on_width_commit(self, _event: object) -> None:
        try:
            width = int(self._width_val.get())
        except ValueError:
            # оставляем как есть: ошибку покажет проверка конфигурации
            return
        self._width_slider.set(max(10, min(MAX_WIDTH, width)))

    def _on_contrast_change(self, value: float) -> None:
        self._contrast_val.set(f"{value:.1f}")

    def _on_blur_change(self, value: float) -> None:
        self._blur_val.set(f"{value:.1f}")

    # ---- Helpers ----
    def _format_size(self, size_bytes: int) -> str:
        if size_bytes < 1024:
            return f"{size_bytes} Б"
        if size_bytes < 1024**2:
            return f"{size_bytes / 1024:.1f} КБ"
        return f"{size_bytes / 1024**2:.1f} МБ"
