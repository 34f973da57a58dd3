# tests/test_config.py
"""Tests for settings loading, locales and logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from rich.logging import RichHandler

from translate_cms_ai.config import (
    LLMProvider,
    LoggingConfig,
    Settings,
    create_default_config,
    load_config,
)
from translate_cms_ai.errors import ConfigurationError
from translate_cms_ai.llm import create_llm_provider
from translate_cms_ai.llm.openai_compat import OpenAICompatibleProvider
from translate_cms_ai.locales import ALL_LOCALE_CODES, Locale, LocaleTable
from translate_cms_ai.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "OPENAI_API_KEY",
        "OPENROUTER_API_KEY",
        "GITHUB_TOKEN",
        "GITHUB_PERSONAL_ACCESS_TOKEN",
        "GITHUB_OWNER",
        "GITHUB_REPO",
    ):
        monkeypatch.delenv(var, raising=False)


class TestSettings:
    """YAML and environment configuration."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.translation.provider == LLMProvider.OPENAI
        assert settings.translation.model == "gpt-4o-mini"
        assert settings.translation.locale_batch_size == 4
        assert settings.collections == {"page": "pages", "post": "posts", "service": "services"}
        assert settings.locale_table().default.code == "en"
        assert settings.github.configured is False

    def test_credentials_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "ghp_test")
        monkeypatch.setenv("GITHUB_OWNER", "acme")
        monkeypatch.setenv("GITHUB_REPO", "site")

        settings = Settings()

        assert settings.translation.api_key == "sk-test"
        assert settings.github.token == "ghp_test"
        assert settings.github.configured is True

    def test_openrouter_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")

        settings = Settings(translation={"provider": "openrouter"})

        assert settings.translation.api_key == "sk-or-test"

    def test_from_yaml_with_env_substitution(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MY_KEY", "sk-from-yaml")
        path = tmp_path / "config.yaml"
        path.write_text(
            "\n".join(
                [
                    "translation:",
                    "  api_key: ${MY_KEY}",
                    "  locale_batch_size: 2",
                    "locales:",
                    "  default: de",
                    "  available:",
                    "    - {code: de, name: German}",
                    "    - {code: fr, name: French}",
                    "collections:",
                    "  page: seiten",
                ]
            ),
            encoding="utf-8",
        )

        settings = load_config(path)

        assert settings.translation.api_key == "sk-from-yaml"
        assert settings.translation.locale_batch_size == 2
        assert settings.locale_table().codes == ["de", "fr"]
        assert settings.locale_table().default.code == "de"
        assert settings.collections == {"page": "seiten"}

    def test_default_locale_must_be_available(self) -> None:
        with pytest.raises(ValueError):
            Settings(locales={"default": "xx", "available": [{"code": "en", "name": "English"}]})

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert Settings.from_yaml(tmp_path / "missing.yaml").translation.model == "gpt-4o-mini"

    def test_default_config_loads(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        create_default_config(path)

        settings = load_config(path)

        assert settings.project.name == "my-site"
        assert settings.locale_table().codes == ["en", "ru", "de", "fr"]


class TestProviderFactory:
    """Building the translation service provider."""

    def test_missing_key(self) -> None:
        with pytest.raises(ConfigurationError):
            create_llm_provider("openai", api_key="")

    def test_invalid_type(self) -> None:
        with pytest.raises(ConfigurationError):
            create_llm_provider("carrier-pigeon", api_key="x")

    def test_openrouter(self) -> None:
        provider = create_llm_provider(
            LLMProvider.OPENROUTER, api_key="sk-or", model="openai/gpt-4o-mini"
        )

        assert isinstance(provider, OpenAICompatibleProvider)
        assert provider.name == "openrouter"
        assert provider.model == "openai/gpt-4o-mini"


class TestLocaleTable:
    """Locale lookup and locale-qualified paths."""

    def test_builtin_table(self) -> None:
        table = LocaleTable()

        assert table.codes == list(ALL_LOCALE_CODES)
        assert table.language_name("de") == "German"
        assert table.language_name("xx") == "xx"
        assert table.targets_for("en") == [c for c in ALL_LOCALE_CODES if c != "en"]

    def test_require(self) -> None:
        with pytest.raises(ConfigurationError):
            LocaleTable().require("xx")

    def test_default_must_exist(self) -> None:
        with pytest.raises(ConfigurationError):
            LocaleTable([Locale(code="de", name="German")], default="en")

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("home.mdx", ("en", "home.mdx")),
            ("de/home.mdx", ("de", "home.mdx")),
            ("/fr/blog/post.md", ("fr", "blog/post.md")),
            ("blog/post.md", ("en", "blog/post.md")),
            ("en/home.mdx", ("en", "home.mdx")),
        ],
    )
    def test_split_qualified(self, path: str, expected: tuple[str, str]) -> None:
        assert LocaleTable().split_qualified(path) == expected

    def test_qualify(self) -> None:
        table = LocaleTable()

        assert table.qualify("en", "home.mdx") == "home.mdx"
        assert table.qualify("ja", "/home.mdx") == "ja/home.mdx"


def test_setup_logging(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "app.log"

    logger = setup_logging(LoggingConfig(level="debug", file=log_file))
    logging.getLogger(f"{PACKAGE_LOGGER}.tests").info("hello")

    assert logger.level == logging.DEBUG
    assert [type(h) for h in logger.handlers] == [RichHandler, RotatingFileHandler]
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")

    setup_logging(LoggingConfig(file=None))
    assert [type(h) for h in logger.handlers] == [RichHandler]
