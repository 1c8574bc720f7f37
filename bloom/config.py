from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "bloom-dev-secret-change-me"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8080

    database_url: str = "sqlite:///./bloom.db"

    jwt_secret: str = DEV_JWT_SECRET
    jwt_issuer: str = "bloom"
    jwt_audience: str = "bloom"
    jwt_expires_minutes: int = 72 * 60

    password_min_length: int = 6

    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]

    @model_validator(mode="after")
    def _check(self) -> "Settings":
        if self.app_env == "prod" and (not self.jwt_secret or self.jwt_secret == DEV_JWT_SECRET):
            raise ValueError("JWT_SECRET must be set in prod")

        if not self.database_url.startswith(("sqlite", "postgresql")):
            raise ValueError(f"DATABASE_URL must be sqlite or postgresql, got {self.database_url!r}")
        return self

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

settings = Settings()
