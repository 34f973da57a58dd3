"""
Configuration management for translate-cms-ai.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from translate_cms_ai.locales import DEFAULT_LOCALE, LOCALES, Locale, LocaleTable

# Load .env file if present (before Settings initialization)
load_dotenv()


class LLMProvider(str, Enum):
    """Available translation service providers."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"


class PathsConfig(BaseModel):
    """Configuration for file paths."""

    content_dir: Path = Field(default=Path("./content"))
    schema_file: Path = Field(default=Path("./tina/__generated__/_schema.json"))

    @field_validator("content_dir", "schema_file")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory and make path absolute."""
        return Path(v).expanduser().resolve()


class LocalesConfig(BaseModel):
    """Configured locales and the default (source) locale."""

    default: str = Field(default=DEFAULT_LOCALE)
    available: list[Locale] = Field(default_factory=lambda: list(LOCALES))

    @model_validator(mode="after")
    def _default_is_available(self) -> LocalesConfig:
        if self.default not in {locale.code for locale in self.available}:
            raise ValueError(f"Default locale '{self.default}' is not among available locales")
        return self

    def table(self) -> LocaleTable:
        """Build the locale table."""
        return LocaleTable(self.available, default=self.default)


class TranslationConfig(BaseModel):
    """Configuration for the translation service."""

    # "openai" or any OpenAI-compatible endpoint via "openrouter"
    provider: LLMProvider = Field(default=LLMProvider.OPENAI)
    model: str = Field(default="gpt-4o-mini")
    base_url: str | None = Field(default=None)
    api_key: str = Field(default="")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=16384, ge=256, le=128000)
    timeout: float = Field(default=120.0, ge=1.0, le=600.0)
    max_retries: int = Field(default=3, ge=1, le=10)
    # Number of target locales translated concurrently
    locale_batch_size: int = Field(default=4, ge=1, le=32)


class GitHubConfig(BaseModel):
    """Optional version-control remote used to commit published translations."""

    token: str = Field(default="")
    owner: str = Field(default="")
    repo: str = Field(default="")
    branch: str = Field(default="main")
    api_url: str = Field(default="https://api.github.com")
    author_name: str = Field(default="Auto-Translation")
    author_email: str = Field(default="noreply@example.com")
    timeout: float = Field(default=30.0, ge=1.0, le=300.0)

    @property
    def configured(self) -> bool:
        """True when token, owner and repo are all set."""
        return bool(self.token and self.owner and self.repo)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO")
    file: Path | None = Field(default=Path("./logs/translate_cms.log"))
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    max_file_size_mb: int = Field(default=10, ge=1, le=100)
    backup_count: int = Field(default=5, ge=1, le=20)


class ProjectConfig(BaseModel):
    """Project metadata configuration."""

    name: str = Field(default="translate-cms")
    description: str = Field(default="")


def _default_collections() -> dict[str, str]:
    return {"page": "pages", "post": "posts", "service": "services"}


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for simpler env vars
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Configuration sections
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    locales: LocalesConfig = Field(default_factory=LocalesConfig)
    # Collection name -> content folder
    collections: dict[str, str] = Field(default_factory=_default_collections)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable fallbacks for credentials."""
        super().__init__(**data)
        # Override credentials from environment if not set in config
        if not self.translation.api_key:
            env_var = (
                "OPENROUTER_API_KEY"
                if self.translation.provider == LLMProvider.OPENROUTER
                else "OPENAI_API_KEY"
            )
            self.translation.api_key = os.getenv(env_var, "")
        if not self.github.token:
            self.github.token = os.getenv("GITHUB_TOKEN") or os.getenv(
                "GITHUB_PERSONAL_ACCESS_TOKEN", ""
            )
        if not self.github.owner:
            self.github.owner = os.getenv("GITHUB_OWNER", "")
        if not self.github.repo:
            self.github.repo = os.getenv("GITHUB_REPO", "")

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML file, with environment variable overrides."""
        path = Path(path)
        if not path.exists():
            # Return defaults if file doesn't exist
            return cls()

        with open(path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        # Process environment variable substitutions in YAML values
        yaml_config = _substitute_env_vars(yaml_config)

        return cls(**yaml_config)

    def locale_table(self) -> LocaleTable:
        """Locale table built from the ``locales`` section."""
        return self.locales.table()


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively substitute ${ENV_VAR} patterns in config values."""
    result = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key] = _substitute_env_vars(value)
        elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            result[key] = os.getenv(env_var, "")
        elif isinstance(value, list):
            result[key] = [
                _substitute_env_vars(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load configuration from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, looks for config.yaml in current directory.

    Returns:
        Settings instance with merged YAML and environment configurations.
    """
    if path is None:
        # Look for config.yaml in current directory
        default_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(".translate-cms.yaml"),
        ]
        for p in default_paths:
            if p.exists():
                path = p
                break

    if path is not None:
        return Settings.from_yaml(path)

    return Settings()


DEFAULT_CONFIG = """# translate-cms-ai configuration
project:
  name: "my-site"
  description: "Multi-locale content site"

paths:
  content_dir: "./content"
  schema_file: "./tina/__generated__/_schema.json"

locales:
  # Source locale; its documents live at unqualified paths
  default: "en"
  available:
    - {code: "en", name: "English", native_name: "English"}
    - {code: "ru", name: "Russian", native_name: "Русский"}
    - {code: "de", name: "German", native_name: "Deutsch"}
    - {code: "fr", name: "French", native_name: "Français"}

# Collection name -> folder under content_dir
collections:
  page: "pages"
  post: "posts"
  service: "services"

translation:
  # "openai" or "openrouter" (any OpenAI-compatible endpoint)
  provider: "openai"
  model: "gpt-4o-mini"
  temperature: 0.3
  # api_key: ${OPENAI_API_KEY}
  # Target locales translated concurrently
  locale_batch_size: 4

github:
  # Optional: commit published translations in one atomic commit
  # token: ${GITHUB_TOKEN}
  owner: ""
  repo: ""
  branch: "main"

logging:
  level: "INFO"
  file: "./logs/translate_cms.log"
"""


def create_default_config(path: Path | str = "config.yaml") -> None:
    """Create a default configuration file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(DEFAULT_CONFIG)
