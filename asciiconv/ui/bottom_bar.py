from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from asciiconv.ui.ascii_viewer import DEFAULT_FONT_SIZE, MAX_FONT_SIZE, MIN_FONT_SIZE


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_font_size_change: Optional[Callable[[int], None]] = None
        self.on_copy: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)  # slider stretches
        self.grid_columnconfigure(5, weight=1)  # status stretches

        # Font size controls
        self._font_label = ctk.CTkLabel(self, text="Шрифт")
        self._font_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._font_value = ctk.StringVar(value=f"{DEFAULT_FONT_SIZE} pt")
        self._font_slider = ctk.CTkSlider(
            self,
            from_=MIN_FONT_SIZE,
            to=MAX_FONT_SIZE,
            number_of_steps=MAX_FONT_SIZE - MIN_FONT_SIZE,
            command=self._on_slider_change,
        )
        self._font_slider.set(DEFAULT_FONT_SIZE)
        self._font_slider.grid(row=0, column=1, padx=6, pady=8, sticky="ew")
        self._font_value_label = ctk.CTkLabel(self, textvariable=self._font_value, width=48, anchor="w")
        self._font_value_label.grid(row=0, column=2, padx=(6, 12), pady=8, sticky="w")

        # Result actions
        self._copy_btn = ctk.CTkButton(self, text="Копировать", width=110, command=self._emit_copy)
        self._copy_btn.grid(row=0, column=3, padx=6, pady=8, sticky="w")
        self._save_btn = ctk.CTkButton(self, text="Сохранить .txt…", width=130, command=self._emit_save)
        self._save_btn.grid(row=0, column=4, padx=6, pady=8, sticky="w")

        # Status line
        self._status = ctk.StringVar(value="")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, anchor="w")
        self._status_label.grid(row=0, column=5, padx=(12, 10), pady=8, sticky="ew")

    # public API (sync from controller)
    def set_font_size(self, size: int) -> None:
        self._font_slider.set(size)
        self._font_value.set(f"{size} pt")

    def set_status(self, message: str, error: bool = False) -> None:
        self._status.set(message)
        self._status_label.configure(text_color=("#B00020", "#FF6B6B") if error else ("gray10", "gray90"))

    # events
    def _on_slider_change(self, value: float) -> None:
        size = int(round(value))
        self._font_value.set(f"{size} pt")
        if self.on_font_size_change:
            self.on_font_size_change(size)

    def _emit_copy(self) -> None:
        if self.on_copy:
            self.on_copy()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()
