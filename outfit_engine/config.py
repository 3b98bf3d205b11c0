from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=True, alias="DEBUG")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # LLM Settings (Steal-the-Look AI 매칭)
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_chat_model: str = Field(default="gpt-4o-mini", alias="OPENAI_CHAT_MODEL")
    llm_timeout: int = Field(default=30, alias="LLM_TIMEOUT")
    llm_temperature: float = Field(default=0.0, alias="LLM_TEMPERATURE")
    llm_max_tokens: int = Field(default=1500, alias="LLM_MAX_TOKENS")
    llm_max_retries: int = Field(default=3, ge=1, alias="LLM_MAX_RETRIES")
    llm_json_mode: bool = Field(default=True, alias="LLM_JSON_MODE")

    # False면 AI 없이 속성 기반 매칭만 사용
    use_ai_matching: bool = Field(default=False, alias="USE_AI_MATCHING")

    @property
    def ai_matching_enabled(self: "Settings") -> bool:
        return self.use_ai_matching and bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
