"""
Localized attribute names.

CSV headers are the human-readable names of model attributes. Any object
with a human_attribute_name(field) method can act as the resolver; the
catalog below provides one backed by YAML locale files of the form:

    ja:
      attributes:
        user:
          name: 氏名
          email: メールアドレス
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

import yaml

from recordcsv.core.config import settings

logger = logging.getLogger(__name__)


@runtime_checkable
class NameResolver(Protocol):
    def human_attribute_name(self, field: str) -> str:
        ...


def humanize(field: str) -> str:
    """
    Fallback display name for an attribute.

    "first_name" -> "First name", "company_id" -> "Company"
    """
    name = field
    if name.endswith("_id") and len(name) > 3:
        name = name[:-3]
    name = name.replace("_", " ").strip()
    return name[:1].upper() + name[1:]


@dataclass(frozen=True)
class ModelAttributeNames:
    """Name resolver bound to one model's translations."""

    model: str
    names: Dict[str, str]

    def human_attribute_name(self, field: str) -> str:
        return self.names.get(field) or humanize(field)


class AttributeNameCatalog:
    """
    Loader for attribute name translations.

    Reads <locale>.yml files from a directory and caches them per locale.
    """

    def __init__(self, locale_path: Optional[Path] = None, default_locale: Optional[str] = None):
        """
        Initialize catalog.

        Args:
            locale_path: Directory with <locale>.yml files (default: settings.LOCALE_PATH)
            default_locale: Locale used when none is requested (default: settings.LOCALE)
        """
        if locale_path is None and settings.LOCALE_PATH:
            locale_path = Path(settings.LOCALE_PATH)
        self.locale_path = locale_path
        self.default_locale = default_locale or settings.LOCALE
        self._cache: Dict[str, Dict[str, Dict[str, str]]] = {}

    def load(self, locale: Optional[str] = None, force_reload: bool = False) -> Dict[str, Dict[str, str]]:
        """
        Load translations for a locale.

        Returns:
            {model: {field: label}}; empty when no file exists
        """
        locale = locale or self.default_locale
        if locale in self._cache and not force_reload:
            return self._cache[locale]

        attributes: Dict[str, Dict[str, str]] = {}
        locale_file = self.locale_path / f"{locale}.yml" if self.locale_path else None

        if locale_file is not None and locale_file.exists():
            with open(locale_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            raw = (data.get(locale) or {}).get("attributes") or {}
            attributes = {
                model: {str(k): str(v) for k, v in (names or {}).items()}
                for model, names in raw.items()
            }
        else:
            logger.debug(f"No attribute names for locale '{locale}', using humanized names")

        self._cache[locale] = attributes
        return attributes

    def for_model(self, model: str, locale: Optional[str] = None) -> ModelAttributeNames:
        """Get a name resolver for one model."""
        return ModelAttributeNames(model=model, names=self.load(locale).get(model, {}))
