"""Виджет просмотра текстового результата моноширинным шрифтом.

Принципы:
- SRP: отвечает только за представление текста.
"""
from __future__ import annotations

import tkinter as tk

import customtkinter as ctk

DEFAULT_FONT_SIZE = 8
MIN_FONT_SIZE = 4
MAX_FONT_SIZE = 24


class AsciiViewer(ctk.CTkFrame):
    """Текстовое поле только для чтения, без переноса строк."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._font_size = DEFAULT_FONT_SIZE
        self._textbox = ctk.CTkTextbox(self, wrap="none", font=self._make_font())
        self._textbox.grid(row=0, column=0, sticky="nsew")
        self._textbox.configure(state="disabled")
        self._text = ""

    # ---- Public API ----
    def set_text(self, text: str) -> None:
        """Заменяет содержимое виджета."""
        self._text = text
        self._textbox.configure(state="normal")
        self._textbox.delete("1.0", "end")
        self._textbox.insert("1.0", text)
        self._textbox.configure(state="disabled")

    def get_text(self) -> str:
        return self._text

    def clear(self) -> None:
        self.set_text("")

    def set_font_size(self, size: int) -> None:
        """Устанавливает размер шрифта (4–24 pt)."""
        self._font_size = max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, int(size)))
        self._textbox.configure(font=self._make_font())

    def get_font_size(self) -> int:
        return self._font_size

    # ---- Internals ----
    def _make_font(self) -> ctk.CTkFont:
        return ctk.CTkFont(family="Courier New", size=self._font_size)
