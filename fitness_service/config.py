from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend_common.database import database_name_from_uri, redact_mongo_uri

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DATABASE_NAME = "fitness-tracker"


class Settings(BaseSettings):
    service_name: str = "fitness-service"
    mongodb_uri: str = f"mongodb://localhost:27017/{DEFAULT_DATABASE_NAME}"
    host: str = "0.0.0.0"
    port: int = 5000
    app_env: str = "development"
    static_dir: Path = PROJECT_ROOT / "public"
    index_document: str = "pages/index.html"
    db_retry_delay_seconds: float = Field(default=5.0, ge=0)
    db_server_selection_timeout_ms: int = 5000
    enable_metrics: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def database_name(self) -> str:
        return database_name_from_uri(self.mongodb_uri, DEFAULT_DATABASE_NAME)

    @property
    def redacted_mongodb_uri(self) -> str:
        return redact_mongo_uri(self.mongodb_uri)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
