"""로깅 설정

- 로거 이름: price_search (모듈은 여기서 만든 logger를 import)
- 메시지는 컴포넌트 태그로 시작: [API], [ORCHESTRATOR], [CACHE], [<vendor>]
- 포맷/레벨/환경은 Settings에서 결정
"""
import logging
import re
import sys
from typing import Optional

from price_search.core.config import Settings, settings

LOGGER_NAME = "price_search"

_FORMATS = {
    "compact": "%(asctime)s %(levelname)s %(message)s",
    "verbose": "%(asctime)s %(levelname)-7s %(name)s %(module)s:%(lineno)d %(message)s",
}
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 사용자 입력에 섞인 개행/제어 문자 (로그 위조 방지)
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]+")
_SECRET_PATTERNS = ("password", "token", "api_key", "apikey", "secret")


def _resolve_level(config: Settings) -> int:
    level_name = config.log_level.upper()
    # production에서는 DEBUG 로그를 남기지 않음
    if config.is_production and level_name == "DEBUG":
        level_name = "INFO"
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """price_search 로거 초기화

    여러 번 호출해도 핸들러는 하나만 유지하고, 레벨/포맷만 갱신합니다.
    """
    config = config or settings
    level = _resolve_level(config)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if h.get_name() == LOGGER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(LOGGER_NAME)
        logger.addHandler(handler)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMATS[config.effective_log_format], datefmt=_DATE_FORMAT))

    for name in config.quiet_logger_list:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


logger = setup_logging()


def sanitize_for_log(value: str, max_length: Optional[int] = None) -> str:
    """사용자 입력(검색어 등)을 로그에 남길 수 있는 형태로 변환

    - 제어 문자 → 공백 (한 줄 유지)
    - 비밀값으로 보이는 입력은 전체 마스킹
    - max_length (기본값: settings.log_max_input_length) 초과 시 절단

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        로깅용 문자열
    """
    if not value:
        return "[empty]"

    limit = max_length or settings.log_max_input_length
    result = _CONTROL_CHARS_RE.sub(" ", value).strip()
    if not result:
        return "[empty]"

    lowered = result.lower()
    if any(pattern in lowered for pattern in _SECRET_PATTERNS):
        return "***"

    if len(result) > limit:
        result = result[:limit] + "..."
    return result
