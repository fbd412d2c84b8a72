import logging
import sys

_FORMAT = "%(asctime)s [%(levelname)s] [%(component)s] %(message)s"


class _ComponentFilter(logging.Filter):
    """Fill in the component tag for records logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = "slipstage"
        return True


class Log:
    """Centralized logging; every message carries its originating component tag."""

    _logger: logging.Logger = logging.getLogger("slipstage")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(_ComponentFilter())
            handler.setFormatter(logging.Formatter(_FORMAT))
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, component: str, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra={"component": component, **kwargs})

    @classmethod
    def error(cls, component: str, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra={"component": component, **kwargs})

    @classmethod
    def warning(cls, component: str, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra={"component": component, **kwargs})

    @classmethod
    def debug(cls, component: str, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra={"component": component, **kwargs})
