import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] [app %(application_id)s] %(message)s"

# Request-level chatter from the HTTP and AWS stacks.
THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "boto3", "botocore", "s3transfer", "urllib3")


class _ApplicationFilter(logging.Filter):
    """Stamps every record with the planning application being scraped."""

    def __init__(self) -> None:
        super().__init__()
        self.application_id = "-"

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "application_id"):
            record.application_id = self.application_id
        return True


class Log:
    """Centralized logging for the scraper run."""

    _logger: logging.Logger = logging.getLogger("planning_scraper")
    _application = _ApplicationFilter()

    @classmethod
    def configure(cls, log_level: str, third_party_level: str = "WARNING") -> None:
        """Set levels and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if cls._application not in cls._logger.filters:
            cls._logger.addFilter(cls._application)
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            cls._logger.addHandler(handler)
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(third_party_level.upper())

    @classmethod
    def bind_application(cls, application_id: str) -> None:
        cls._application.application_id = application_id
        if cls._application not in cls._logger.filters:
            cls._logger.addFilter(cls._application)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
