"""Главное окно: текст слева, параметры справа, действия и статус снизу."""
import logging

import customtkinter as ctk

from asciiconv.controllers.app_controller import AppController
from asciiconv.settings import Settings
from asciiconv.ui.ascii_viewer import AsciiViewer
from asciiconv.ui.bottom_bar import BottomBar
from asciiconv.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)


class AsciiConverterApp(ctk.CTk):
    def __init__(self, settings: Settings) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")
        self.title("ASCII Converter")
        self.minsize(960, 640)

        self._viewer, self._sidebar, self._bottom = self._build_layout()

        self._controller = AppController(
            viewer=self._viewer, sidebar=self._sidebar, bottom=self._bottom, window=self, settings=settings
        )
        self._controller.bind_events()
        self._bind_shortcuts()
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        logger.debug("Main window ready (upload limit %d bytes)", settings.max_upload_bytes)

    def _build_layout(self):
        # viewer takes all spare space; sidebar keeps its fixed width
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        viewer = AsciiViewer(self)
        viewer.grid(row=0, column=0, sticky="nsew", padx=(12, 6), pady=(12, 6))
        sidebar = Sidebar(self)
        sidebar.grid(row=0, column=1, sticky="ns", padx=(6, 12), pady=(12, 6))
        bottom = BottomBar(self)
        bottom.grid(row=1, column=0, columnspan=2, sticky="ew", padx=12, pady=(0, 12))
        return viewer, sidebar, bottom

    def _bind_shortcuts(self) -> None:
        actions = {
            "<Control-o>": self._controller.open_file,
            "<Control-Return>": self._controller.convert,
            "<Control-s>": self._controller.save_result,
            "<Control-Shift-C>": self._controller.copy_result,
        }
        for sequence, action in actions.items():
            self.bind(sequence, lambda _event, run=action: run())

    def _on_close(self) -> None:
        logger.info("Closing main window")
        self.destroy()
