import logging
import sys

_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class _ContextFormatter(logging.Formatter):
    """Appends `key=value` pairs passed to Log.* as keyword arguments."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if not context:
            return line
        return line + " " + " ".join(f"{key}={value}" for key, value in sorted(context.items()))


class Log:
    """Centralized logging; keyword arguments become trailing context fields."""

    _logger: logging.Logger = logging.getLogger("docintake")

    @classmethod
    def configure(cls, log_level: str) -> None:
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _ContextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra=context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra=context)

    @classmethod
    def exception(cls, message: str, **context: object) -> None:
        """Log at ERROR with the active exception's traceback."""
        cls._logger.exception(message, extra=context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra=context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra=context)
