"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # 결과 캐시 (프로세스 메모리)
    search_cache_ttl_s: int = 300  # 5분
    search_cache_sweep_threshold: int = 100

    # 요청 전체 하드 캡 (호스팅 플랫폼 최대 실행 시간보다 짧게)
    search_timeout_s: float = 55.0
    search_max_query_length: int = 200
    search_max_vendor_tokens: int = 20

    # 벤더 스크래퍼
    scraper_request_timeout_s: float = 15.0
    scraper_max_results_per_vendor: int = 40
    scraper_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    scraper_accept_language: str = "en-US,en;q=0.9"
    scraper_impersonate: str = "chrome110"
    scraper_max_clients: int = 20

    # 벤더 미지정 요청 시 조회할 기본 벤더 (콤마 구분)
    default_vendors: str = "amazon,flipkart,ebay,myntra,croma,ajio,snapdeal"

    # API
    api_title: str = "멀티 벤더 최저가 검색 서비스"
    api_version: str = "1.0.0"
    api_description: str = "여러 쇼핑몰을 동시에 조회하여 가격순으로 병합합니다."

    # 실행 환경 / 로깅
    environment: str = "development"
    log_level: str = "INFO"
    # verbose: 파일/라인 포함, compact: 시각/레벨/메시지만 (production 기본값)
    log_format: str = ""
    # 요청 단위 로그에 남길 사용자 입력 최대 길이
    log_max_input_length: int = 100
    # WARNING 미만 로그를 숨길 서드파티 로거 (콤마 구분)
    log_quiet_loggers: str = "curl_cffi,httpx,asyncio"

    @field_validator("search_cache_ttl_s", "search_cache_sweep_threshold")
    @classmethod
    def validate_cache_settings(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache settings must be positive")
        return v

    @field_validator("search_timeout_s", "scraper_request_timeout_s")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator(
        "search_max_query_length",
        "search_max_vendor_tokens",
        "scraper_max_results_per_vendor",
        "scraper_max_clients",
        "log_max_input_length",
    )
    @classmethod
    def validate_limits(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("limits must be positive")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("", "verbose", "compact"):
            raise ValueError("log_format must be 'verbose' or 'compact'")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def effective_log_format(self) -> str:
        """명시값이 없으면 production → compact, 그 외 → verbose"""
        if self.log_format:
            return self.log_format
        return "compact" if self.is_production else "verbose"

    @property
    def quiet_logger_list(self) -> list[str]:
        return [name.strip() for name in self.log_quiet_loggers.split(",") if name.strip()]

    @property
    def default_vendor_list(self) -> list[str]:
        """기본 벤더 목록 (빈 토큰 제거)"""
        return [v.strip() for v in self.default_vendors.split(",") if v.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
