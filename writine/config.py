import warnings
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from writine.services.platform_routes import PLATFORM_RESERVED_LABELS

# ── Known insecure default keys (must never be used in production) ──
_INSECURE_KEYS = {
    "change_this",
    "change_this_to_a_secure_random_string",
    "secret",
}


def _split_csv(value: str) -> List[str]:
    return [item.strip().lower() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    APP_NAME: str = "Writine"
    APP_ENV: str = "development"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "change_this"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8  # 8 days
    ALGORITHM: str = "HS256"

    # CORS
    BACKEND_CORS_ORIGINS: str = ""

    # Database (DATABASE_URL wins over the POSTGRES_* parts)
    DATABASE_URL: str = ""
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "writine"
    DB_ECHO: bool = False

    # ── Tenant routing ──
    PLATFORM_APEX_DOMAIN: str = "writine.com"
    MARKETING_SITE_URL: str = "https://writine.com"
    # Labels under the apex that are never tenant handles, on top of the
    # platform's own path prefixes (docs, metrics, health ...)
    RESERVED_SUBDOMAINS: str = (
        "www,api,app,dashboard,login,signup,profile,billing,domains,"
        "templates,analytics,blog,auth,site,sites"
    )
    DEV_HOSTS: str = "localhost,127.0.0.1,::1,0.0.0.0"
    PREVIEW_HOST_SUFFIXES: str = ".vercel.app"

    # ── Custom domain verification ──
    DOH_RESOLVER_URL: str = "https://dns.google/resolve"
    DNS_CNAME_TARGET: str = "writine.com"
    DNS_VERIFICATION_TOKEN: str = "writine-verify"
    DNS_LOOKUP_TIMEOUT_SECONDS: float = 5.0

    # Public blog pages
    BLOG_PAGE_SIZE: int = 20

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _validate_production_security(self) -> "Settings":
        """Block startup if critical secrets are insecure in production / staging."""
        if self.APP_ENV in ("production", "staging"):
            if self.SECRET_KEY in _INSECURE_KEYS or len(self.SECRET_KEY) < 32:
                raise ValueError(
                    f"SECRET_KEY is insecure ('{self.SECRET_KEY[:8]}…'). "
                    "Set a strong random key (≥ 32 chars) in .env or environment."
                )
            if not self.DATABASE_URL and self.POSTGRES_PASSWORD in ("postgres", ""):
                raise ValueError(
                    "POSTGRES_PASSWORD is set to default 'postgres'. "
                    "Set a strong password in .env or environment."
                )
            if self.DOH_RESOLVER_URL.startswith("http://"):
                warnings.warn(
                    "DOH_RESOLVER_URL is not HTTPS; DNS answers can be tampered with.",
                    UserWarning,
                    stacklevel=2,
                )
        return self

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}/{self.POSTGRES_DB}"
        )

    @property
    def reserved_subdomains(self) -> List[str]:
        return sorted(set(_split_csv(self.RESERVED_SUBDOMAINS)) | PLATFORM_RESERVED_LABELS)

    @property
    def dev_hosts(self) -> List[str]:
        return _split_csv(self.DEV_HOSTS)

    @property
    def preview_host_suffixes(self) -> List[str]:
        return _split_csv(self.PREVIEW_HOST_SUFFIXES)

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def is_staging(self) -> bool:
        return self.APP_ENV == "staging"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"


settings = Settings()
