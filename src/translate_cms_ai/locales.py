"""
Locale table.

One configured locale is the default (source) locale. Documents in the default
locale live at unqualified relative paths (``home.mdx``); every other locale
lives under a locale-qualified path (``de/home.mdx``).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict

from translate_cms_ai.errors import ConfigurationError


class Locale(BaseModel):
    """A language/region code with display names."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    native_name: str = ""

    def __str__(self) -> str:
        return self.code


DEFAULT_LOCALE = "en"

LOCALES: tuple[Locale, ...] = (
    Locale(code="en", name="English", native_name="English"),
    Locale(code="ru", name="Russian", native_name="Русский"),
    Locale(code="de", name="German", native_name="Deutsch"),
    Locale(code="es", name="Spanish", native_name="Español"),
    Locale(code="fr", name="French", native_name="Français"),
    Locale(code="it", name="Italian", native_name="Italiano"),
    Locale(code="pt", name="Portuguese", native_name="Português"),
    Locale(code="zh", name="Chinese", native_name="中文"),
    Locale(code="ja", name="Japanese", native_name="日本語"),
    Locale(code="ko", name="Korean", native_name="한국어"),
    Locale(code="pl", name="Polish", native_name="Polski"),
)

ALL_LOCALE_CODES: tuple[str, ...] = tuple(locale.code for locale in LOCALES)


class LocaleTable:
    """Configured locales and the default locale."""

    def __init__(self, locales: Iterable[Locale] = LOCALES, default: str = DEFAULT_LOCALE):
        self._locales: dict[str, Locale] = {locale.code: locale for locale in locales}
        if default not in self._locales:
            raise ConfigurationError(f"Default locale '{default}' is not in the locale table")
        self._default = default

    def __iter__(self) -> Iterator[Locale]:
        return iter(self._locales.values())

    def __len__(self) -> int:
        return len(self._locales)

    def __contains__(self, code: object) -> bool:
        return code in self._locales

    @property
    def default(self) -> Locale:
        """The default (source) locale."""
        return self._locales[self._default]

    @property
    def codes(self) -> list[str]:
        """All configured locale codes, in table order."""
        return list(self._locales)

    def get(self, code: str) -> Locale | None:
        """Look up a locale by code."""
        return self._locales.get(code)

    def require(self, code: str) -> Locale:
        """Look up a locale by code, raising if it is not configured."""
        locale = self.get(code)
        if locale is None:
            raise ConfigurationError(
                f"Unknown locale: {code}. Configured: {', '.join(self._locales)}"
            )
        return locale

    def language_name(self, code: str) -> str:
        """Human-readable language name, falling back to the code itself."""
        locale = self.get(code)
        return locale.name if locale else code

    def targets_for(self, source: str) -> list[str]:
        """Every configured locale other than ``source``."""
        return [code for code in self._locales if code != source]

    def qualify(self, code: str, name: str) -> str:
        """Relative path of document ``name`` in locale ``code``."""
        name = name.lstrip("/")
        if code == self._default:
            return name
        return f"{code}/{name}"

    def split_qualified(self, relative_path: str) -> tuple[str, str]:
        """
        Split a relative path into (locale code, document name).

        Paths whose first segment is not a configured locale are treated as
        default-locale paths.
        """
        relative_path = relative_path.lstrip("/")
        head, sep, rest = relative_path.partition("/")
        if sep and rest and head in self._locales:
            return head, rest
        return self._default, relative_path
