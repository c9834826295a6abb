"""Контроллер приложения: оркестрация UI и сценариев.

SOLID:
- SRP: класс управляет связями между UI и сценариями (без логики обработки изображений).
- DIP: зависит от сценариев как от абстрактных ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import TclError, filedialog
from typing import Optional

import customtkinter as ctk

from asciiconv.controllers.use_cases import ConvertImageUseCase, UploadImageUseCase
from asciiconv.errors import AsciiConvError
from asciiconv.models.config_model import ConversionConfig
from asciiconv.models.image_format import ImageFormat
from asciiconv.services.image_service import ImageService
from asciiconv.services.storage_service import AsciiArtRepository, ImageRepository
from asciiconv.settings import Settings
from asciiconv.ui.ascii_viewer import AsciiViewer
from asciiconv.ui.bottom_bar import BottomBar
from asciiconv.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Загрузка изображений через `UploadImageUseCase`.
    - Конвертация с параметрами из сайдбара через `ConvertImageUseCase`.
    - Копирование и сохранение результата.
    """
    viewer: AsciiViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk
    settings: Settings = field(default_factory=Settings.from_env)

    _image_service: ImageService = field(default_factory=ImageService)
    _images: ImageRepository = field(default_factory=ImageRepository)
    _arts: AsciiArtRepository = field(default_factory=AsciiArtRepository)
    _current_image_id: Optional[uuid.UUID] = None

    def __post_init__(self) -> None:
        self._upload = UploadImageUseCase(self._images, self.settings.max_upload_bytes, self._image_service)
        self._convert = ConvertImageUseCase(self._images, self._arts)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Сохраняет слабую связность: компоненты UI ничего не знают друг о друге,
        общаются через контроллер.
        """
        self.sidebar.on_open_file = self.open_file
        self.sidebar.on_convert = self.convert

        self.bottom.on_font_size_change = self._handle_font_size_change
        self.bottom.on_copy = self.copy_result
        self.bottom.on_save = self.save_result

    # ---- Actions (also bound to keyboard shortcuts) ----
    def open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(
                    ("Images", ImageFormat.file_patterns()),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        try:
            filename, content_type, data = self._image_service.read_file(file_path)
            response = self._upload.execute(filename, content_type, data)
        except (OSError, AsciiConvError) as exc:
            self.bottom.set_status(str(exc), error=True)
            return

        if self._current_image_id is not None:
            self._images.delete(self._current_image_id)
        self._current_image_id = response.image_id

        image_data = self._images.find_by_id(response.image_id)
        if image_data is not None:
            self.sidebar.set_image_info(image_data, str(response.format))
        self.convert()

    def convert(self) -> None:
        if self._current_image_id is None:
            self.bottom.set_status("Сначала откройте изображение", error=True)
            return
        try:
            config = ConversionConfig.from_params(**self.sidebar.get_params())
            response = self._convert.execute(self._current_image_id, config)
        except AsciiConvError as exc:
            self.bottom.set_status(str(exc), error=True)
            return

        self.viewer.set_text(response.content)
        self.bottom.set_status(f"{response.width} × {response.height} символов")

    def _handle_font_size_change(self, size: int) -> None:
        self.viewer.set_font_size(size)

    def copy_result(self) -> None:
        text = self.viewer.get_text()
        if not text:
            return
        self.window.clipboard_clear()
        self.window.clipboard_append(text)
        self.bottom.set_status("Скопировано в буфер обмена")

    def save_result(self) -> None:
        text = self.viewer.get_text()
        if not text:
            self.bottom.set_status("Нет результата для сохранения", error=True)
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить результат",
                defaultextension=".txt",
                filetypes=(("Text", "*.txt"), ("All files", "*.*")),
            )
        except TclError:
            return
        if not file_path:
            return
        try:
            Path(file_path).write_text(text + "\n", encoding="utf-8")
        except OSError as exc:
            self.bottom.set_status(f"Не удалось сохранить: {exc}", error=True)
            return
        logger.info("Saved result to %s", file_path)
        self.bottom.set_status(f"Сохранено: {Path(file_path).name}")

