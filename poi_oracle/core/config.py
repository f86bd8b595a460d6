# poi_oracle/core/config.py
# -----------------------------------------------------------------------------
# 전역 설정 관리 (pydantic-settings v2)
# - .env 파일과 OS 환경변수를 기동 시 한 번만 읽어 Settings 객체로 제공
# - frozen=True: 런타임 중 변경 불가 (요청마다 환경변수 재조회 금지)
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict

SIMULATE = "simulate"


class Settings(BaseSettings):
    # 기본
    APP_NAME: str = "POI Oracle"
    ENV: str = "dev"

    # LLM 사용 여부 / 공급자 ("ollama" | "openai" | "simulate")
    USE_LLM: bool = False
    LLM_PROVIDER: str = "ollama"

    # Ollama (OpenAI 호환 API)
    OLLAMA_URL: str = "http://localhost:11434/v1"
    OLLAMA_MODEL: str = "llama3.2"

    # OpenAI
    OPENAI_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_API_KEY: str | None = None

    # 생성 파라미터 / 타임아웃(초)
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 600
    LLM_TIMEOUT: float = 10.0
    LLM_PROBE_TIMEOUT: float = 5.0

    # 로깅
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", frozen=True  # .env에 추가 필드 무시
    )

    @property
    def llm_enabled(self) -> bool:
        """LLM 모드 여부 (비활성/simulate 이면 휴리스틱 모드)"""
        return self.USE_LLM and self.LLM_PROVIDER.lower() != SIMULATE


settings = Settings()
