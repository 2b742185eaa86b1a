"""Точка входа в приложение."""
import logging
import sys

from image_props.app import ImagePropsApp
from image_props.config import load_config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr)


def main() -> None:
    """Читает настройки, создаёт и запускает главное окно приложения."""
    config = load_config()
    configure_logging(config.log_level)
    app = ImagePropsApp(config)
    app.mainloop()


if __name__ == "__main__":
    main()
