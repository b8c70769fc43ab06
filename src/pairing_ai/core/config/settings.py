"""Service configuration.

Values come from YAML files under ``config/`` (base files plus overrides for
the current ``APP_ENV``), environment variables and ``.env``. Secrets
(``OPENAI_API_KEY``, ``REDIS_PASSWORD``) are only read from the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated
from urllib.parse import quote

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


NON_PRODUCTION_ENVIRONMENTS = ("local", "test", "development")


def parse_list(v: str | list[str]) -> list[str]:
    """Accept ``a, b`` from the environment as well as YAML lists."""
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class AppSettings(BaseModel):
    name: str = "Saveurs Maison IA Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """HTTP surface: every route lives under ``prefix``."""

    prefix: str = "/ai/pairings"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []
    # Relative to prefix; not request-logged and not in HTTP metrics
    quiet_paths: Annotated[list[str], BeforeValidator(parse_list)] = [
        "/health",
        "/ready",
        "/metrics",
    ]
    slow_request_seconds: float = 10.0


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "json"  # "json" or "text"


class MetricsSettings(BaseModel):
    enabled: bool = True


class ObservabilitySettings(BaseModel):
    metrics: MetricsSettings = MetricsSettings()


class RedisSettings(BaseModel):
    """Audit log store connection."""

    host: str = "localhost"
    port: int = 6379
    user: str | None = None  # ACL user, Redis 6+
    db: int = 0
    max_connections: int = 20


class CatalogSettings(BaseModel):
    """Catalog service serving the in-stock wine and cheese listings."""

    url: str = "http://localhost:8081"
    timeout: float = 10.0
    in_stock_only: bool = True


class LLMSettings(BaseModel):
    """OpenAI-compatible chat completion provider."""

    url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    timeout: float = 30.0
    max_tokens: int = 600
    temperature: float = 0.3
    max_retries: int = 0
    requests_per_minute: float | None = None  # unset: no client-side throttle


class PairingSettings(BaseModel):
    """Recommendation pipeline knobs."""

    catalog_listing_limit: int = 50
    max_wine_ceiling: int = 5
    history_limit: int = 20
    restrict_to_catalog: bool = False
    audit_enabled: bool = True


class Settings(BaseSettings):
    """Root settings object, built once and injected into the components.

    Priority, highest first: constructor arguments, environment variables
    (``LLM__MODEL=gpt-4o`` sets ``llm.model``), ``.env``, YAML for
    ``APP_ENV``, base YAML, the defaults above.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    redis: RedisSettings = RedisSettings()
    catalog: CatalogSettings = CatalogSettings()
    llm: LLMSettings = LLMSettings()
    pairing: PairingSettings = PairingSettings()

    OPENAI_API_KEY: str = ""
    REDIS_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML sits below the environment and above file secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def redis_url(self) -> str:
        """``redis://[user][:password@]host:port/db``."""
        # Credentials may contain URL delimiters (@ : /)
        user = quote(self.redis.user, safe="") if self.redis.user else ""
        password = f":{quote(self.REDIS_PASSWORD, safe='')}" if self.REDIS_PASSWORD else ""
        credentials = f"{user}{password}@" if user or password else ""
        return f"redis://{credentials}{self.redis.host}:{self.redis.port}/{self.redis.db}"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    @property
    def is_testing(self) -> bool:
        return self.APP_ENV == "test"

    @property
    def is_non_production(self) -> bool:
        """Environments that expose the OpenAPI docs."""
        return self.APP_ENV in NON_PRODUCTION_ENVIRONMENTS


@lru_cache
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return Settings()
