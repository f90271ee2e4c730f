import logging
import sys

from loguru import logger


class _InterceptHandler(logging.Handler):
    """Route stdlib records (httpx, uvicorn, our modules) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(exception=record.exc_info, depth=6).log(level, record.getMessage())


def setup_logging(level: str = "INFO"):
    logger.remove()
    logger.add(sys.stdout, level=level.upper(),
               backtrace=True, diagnose=False,
               format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | {message}")
    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    return logger
