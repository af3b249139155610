"""로깅 설정

`product_feed` 로거 하나를 모든 모듈이 공유합니다. 메시지는 `[FastPath]`, `[Playwright]`
같은 태그로 시작합니다.
"""
import logging
import sys

from product_feed.core.config import settings


LOGGER_NAME = "product_feed"

_FORMATS = {
    "production": "%(asctime)s - %(levelname)s - %(message)s",
    "development": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
}

# 요청마다 DEBUG/INFO를 쏟아내는 라이브러리 로거
_NOISY_LOGGERS = ("asyncio", "curl_cffi", "httpx", "uvicorn.access")


def is_production() -> bool:
    return settings.environment.strip().lower() == "production"


def resolve_level(level_name: str, production: bool) -> int:
    """설정된 레벨 이름 → logging 레벨. 운영에서는 최소 INFO."""
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    if production:
        level = max(level, logging.INFO)
    return level


def setup_logging() -> logging.Logger:
    production = is_production()
    level = resolve_level(settings.log_level, production)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter(
                fmt=_FORMATS["production" if production else "development"],
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """사용자 입력/예외 메시지를 한 줄로 만들고 길이를 자릅니다.

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        개행이 제거된 문자열. 비어 있으면 "[empty]".
    """
    if not value:
        return "[empty]"

    result = " ".join(value.splitlines())

    if len(result) > max_length:
        result = result[:max_length] + "..."

    return result
