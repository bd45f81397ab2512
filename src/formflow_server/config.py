"""Settings for the formflow server, taken from the environment.

Only the server reads these.  The SDK's own knob (the default star count
for rating fields) lives in ``formflow.constants``.

    SERVER_HOST / SERVER_PORT     bind address (0.0.0.0:8080)
    SERVER_CORS_ORIGINS           comma-separated origins ("*")
    SERVER_FORMS_DIR              YAML forms directory (forms/ at repo root)
    SERVER_LOG_LEVEL              root log level (INFO)
    SESSION_TTL_MINUTES           idle minutes before a session is dropped (0 = never)
    ADMIN_API_KEY                 enables /admin endpoints when set
    TRUSTED_PROXY_SECRET          required X-Proxy-Secret value when set
    DEFAULT_PAGE_LIMIT / MAX_PAGE_LIMIT   session listing page sizes (20 / 100)
"""

import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_optional(name: str) -> str | None:
    # Empty strings count as unset
    return os.getenv(name) or None


# Read at import: FastAPI binds Query() defaults when routes are declared.
DEFAULT_PAGE_LIMIT = _env_int("DEFAULT_PAGE_LIMIT", 20)
MAX_PAGE_LIMIT = _env_int("MAX_PAGE_LIMIT", 100)


@dataclass(frozen=True)
class ServerSettings:
    """One snapshot of the server's configuration, passed to ``create_app``."""

    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # None lets FormStore fall back to forms/ at the repo root
    forms_dir: str | None = None
    log_level: str = "INFO"

    session_ttl_minutes: int = 0

    admin_api_key: str | None = None
    trusted_proxy_secret: str | None = None


def load_settings() -> ServerSettings:
    """Build a ``ServerSettings`` from the variables listed above."""
    origins = [o.strip() for o in os.getenv("SERVER_CORS_ORIGINS", "*").split(",")]
    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=_env_int("SERVER_PORT", 8080),
        cors_origins=[o for o in origins if o],
        forms_dir=_env_optional("SERVER_FORMS_DIR"),
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        session_ttl_minutes=_env_int("SESSION_TTL_MINUTES", 0),
        admin_api_key=_env_optional("ADMIN_API_KEY"),
        trusted_proxy_secret=_env_optional("TRUSTED_PROXY_SECRET"),
    )
