import logging


def configure_logging(level: int = logging.INFO) -> None:
    """Basic console logging for scripts. The library itself never adds handlers."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
