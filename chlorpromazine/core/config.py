"""Configuration management for the Chlorpromazine server."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, AnyHttpUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parents[2]
_PACKAGE_DIR = Path(__file__).resolve().parents[1]
# Repo-root .env first, then the package directory and the working directory.
_ENV_FILE_CANDIDATES: tuple[str, ...] = (
    str(_REPO_ROOT / ".env"),
    str(_PACKAGE_DIR / ".env"),
    ".env",
)

DEFAULT_SITES: tuple[str, ...] = (
    "stackoverflow.com",
    "stackexchange.com",
    "reddit.com",
    "github.com",
    "docs.python.org",
    "docs.oracle.com",
    "learn.microsoft.com",
    "developer.mozilla.org",
    "kotlinlang.org",
    "go.dev",
    "rust-lang.org",
    "docs.ruby-lang.org",
    "nodejs.org",
    "pypi.org",
    "maven.apache.org",
)

DEFAULT_GROUNDING_FILES: tuple[str, ...] = ("README.md", "CHANGELOG.md", "pyproject.toml")


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class ServerSettings(BaseSettings):
    """Centralised configuration derived from environment variables."""

    app_env: Literal["development", "staging", "production"] = "development"
    hardened_errors: bool | None = Field(
        None,
        description="Force error sanitization on/off; defaults to on in production",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: str | None = Field(
        None,
        description="Log file path; None or empty string keeps logging on stderr only",
    )

    server_host: str = Field("0.0.0.0", description="HTTP transport bind host")
    server_port: int = Field(
        3000,
        description="HTTP transport bind port",
        validation_alias=AliasChoices("SERVER_PORT", "PORT"),
    )
    transport: Literal["http", "stdio"] = Field("http", description="Transport started by the launcher")
    api_key: SecretStr | None = Field(None, description="Bearer token required by the HTTP transport")

    serpapi_key: SecretStr | None = Field(None, description="SerpAPI key; search is disabled without it")
    serpapi_base_url: AnyHttpUrl = Field("https://serpapi.com", description="SerpAPI endpoint")
    site_filter: str = Field("", description="Comma separated site whitelist for searches")
    search_timeout_seconds: float = Field(10.0, gt=0, description="HTTP timeout for SerpAPI calls")

    tool_timeout_seconds: float = Field(15.0, gt=0, description="Upper bound for one tool invocation")
    rate_limit_max_calls: int = Field(30, ge=1, description="Tool calls allowed per caller and window")
    rate_limit_window_seconds: float = Field(60.0, gt=0, description="Rate limit window length")

    project_root: Path = Field(default_factory=Path.cwd, description="Root for grounding files")
    grounding_files: str = Field(
        ",".join(DEFAULT_GROUNDING_FILES),
        description="Comma separated whitelist of project files read by sober_thinking",
    )
    max_file_bytes: int = Field(64_000, ge=1, description="Per-file read limit for grounding files")

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_CANDIDATES,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def search_sites(self) -> list[str]:
        return _split_csv(self.site_filter) or list(DEFAULT_SITES)

    @property
    def grounding_file_list(self) -> list[str]:
        return _split_csv(self.grounding_files)

    @property
    def errors_hardened(self) -> bool:
        if self.hardened_errors is not None:
            return self.hardened_errors
        return self.app_env == "production"


@lru_cache
def get_settings() -> ServerSettings:
    """Return a cached ServerSettings instance."""

    return ServerSettings()


def resolved_env_file() -> str | None:
    """Return the first readable .env file from the candidate list."""

    for candidate in _ENV_FILE_CANDIDATES:
        path = Path(candidate).expanduser()
        if path.is_file():
            return str(path)
    return None


def env_file_candidates() -> tuple[str, ...]:
    """Expose configured env file search order for diagnostics."""

    return _ENV_FILE_CANDIDATES
