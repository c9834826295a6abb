"""Точка входа в приложение."""
from asciiconv.app import AsciiConverterApp
from asciiconv.settings import Settings, configure_logging


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = AsciiConverterApp(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
