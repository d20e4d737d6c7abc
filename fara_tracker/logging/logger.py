import logging
import sys
from typing import ClassVar


class Log:
    """Pipeline-wide logger.

    Every module logs through this class so a run produces one stream of
    ``fara_tracker`` records on stdout. HTTP and PDF libraries are held at
    WARNING because they log every request and every malformed object at
    INFO/DEBUG, which drowns the per-document progress lines.
    """

    _logger: logging.Logger = logging.getLogger("fara_tracker")
    _handler: ClassVar[logging.Handler | None] = None

    NOISY_LIBRARIES: ClassVar[tuple[str, ...]] = (
        "httpx",
        "httpcore",
        "openai",
        "pdfminer",
        "psycopg.pool",
    )

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the pipeline log level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        cls._logger.propagate = False
        if cls._handler is None:
            cls._handler = logging.StreamHandler(sys.stdout)
            cls._handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(cls._handler)
        for name in cls.NOISY_LIBRARIES:
            logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Log at ERROR with the active exception's traceback."""
        cls._logger.exception(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
