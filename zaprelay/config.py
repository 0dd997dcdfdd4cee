from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./zaprelay.db"
    debug: bool = False
    log_level: str = "INFO"
    port: int = 3000

    jwt_secret: str = "change-me"
    jwt_expires_days: int = 7

    n8n_webhook_url: str = ""
    n8n_timeout_seconds: float = 30.0

    uazapi_url: str = ""
    uazapi_token: str = ""
    uazapi_timeout_seconds: float = 30.0

    cors_allow_origins: str = "*"
    display_timezone: str = "America/Sao_Paulo"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]
        return origins or ["*"]


settings = Settings()
