import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Базовая настройка логгера для всего приложения."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
