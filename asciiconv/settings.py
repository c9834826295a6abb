"""Настройки приложения и логирование.

Значения читаются из переменных окружения один раз при старте:
- `ASCIICONV_MAX_UPLOAD_BYTES` — лимит размера загружаемого файла;
- `ASCIICONV_LOG_LEVEL` — уровень логирования.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Собирает настройки из окружения; некорректные значения заменяются значениями по умолчанию."""
        env = os.environ if env is None else env

        max_upload = DEFAULT_MAX_UPLOAD_BYTES
        raw = env.get("ASCIICONV_MAX_UPLOAD_BYTES")
        if raw:
            try:
                max_upload = int(raw)
                if max_upload <= 0:
                    raise ValueError(raw)
            except ValueError:
                logger.warning("Некорректный ASCIICONV_MAX_UPLOAD_BYTES=%r, используется %d", raw, DEFAULT_MAX_UPLOAD_BYTES)
                max_upload = DEFAULT_MAX_UPLOAD_BYTES

        level = env.get("ASCIICONV_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
        if not isinstance(logging.getLevelName(level), int):
            logger.warning("Неизвестный уровень логирования %r, используется %s", level, DEFAULT_LOG_LEVEL)
            level = DEFAULT_LOG_LEVEL

        return cls(max_upload_bytes=max_upload, log_level=level)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Настраивает корневой логгер (повторный вызов не добавляет обработчиков)."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
