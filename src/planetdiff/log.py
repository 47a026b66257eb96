"""Logging for planetdiff."""

import logging
import typing as t

root_logger = logging.getLogger("planetdiff")
root_logger.addHandler(logging.NullHandler())


def setup_log(level: int = logging.INFO, fmt: t.Optional[str] = None) -> None:
    """Attach a stream handler to the package logger.

    Args:
        level: The logging level.
        fmt: Optional format string for the handler.

    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt or "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


class Loggable:
    """Mixin giving a class its own logger under ``planetdiff``."""

    def __init__(self, name: t.Optional[str] = None) -> None:
        self._log_name = f"planetdiff.{name or self.__class__.__name__}"
        self._logger = logging.getLogger(self._log_name)

    def debug(self, message: str, *args: t.Any, **kwargs: t.Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: t.Any, **kwargs: t.Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: t.Any, **kwargs: t.Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: t.Any, **kwargs: t.Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def critical(self, message: str, *args: t.Any, **kwargs: t.Any) -> None:
        self._logger.critical(message, *args, **kwargs)
