from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_CONNECTIONS = 10
DEFAULT_MAX_KEEPALIVE = 5
DEFAULT_USER_AGENT = "Newsdesk/0.1 (+https://example.com; contact=admin@example.com)"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    http_max_connections: int = Field(
        DEFAULT_MAX_CONNECTIONS, ge=1, alias="HTTP_MAX_CONNECTIONS"
    )
    http_max_keepalive: int = Field(
        DEFAULT_MAX_KEEPALIVE, ge=1, alias="HTTP_MAX_KEEPALIVE"
    )
    http_user_agent: str = Field(DEFAULT_USER_AGENT, alias="HTTP_USER_AGENT")

    guardian_base_url: HttpUrl = Field(
        "https://content.guardianapis.com", alias="GUARDIAN_BASE_URL"
    )
    guardian_api_key: str = Field("test", alias="GUARDIAN_API_KEY")

    default_query: str = Field("", alias="NEWS_DEFAULT_QUERY")
    order_by: Literal["newest", "oldest", "relevance"] = Field(
        "newest", alias="NEWS_ORDER_BY"
    )
    page_size: int = Field(20, ge=1, le=50, alias="NEWS_PAGE_SIZE")

    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    return Settings()
