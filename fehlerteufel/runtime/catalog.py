"""
String tables for localized lookups.

A Catalog holds, per locale, named tables that map lookup keys to templates.
Lookups walk the locale fallback chain ("de_DE" -> "de" -> "") and return the
key itself when no table has an entry, so a missing translation never fails.

On disk a catalog is a directory:

    strings/
        Localizable.yaml        # base locale ("")
        Severity.yaml
        de/
            Localizable.yaml
            Severity.json

Each file is a flat mapping of key to template.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml
from jsonschema import ValidationError, validate

from ..errors import CatalogError
from .clause import placeholders

logger = logging.getLogger(__name__)

BASE_LOCALE = ""
TABLE_SUFFIXES = (".yaml", ".yml", ".json")

TABLE_SCHEMA = {
    "type": "object",
    "propertyNames": {"type": "string"},
    "additionalProperties": {"type": "string"},
}


def locale_chain(locale: str) -> List[str]:
    """
    Locales to search for `locale`, most specific first.

    Example:
        >>> locale_chain("de_DE")
        ['de_DE', 'de', '']
    """
    chain: List[str] = []
    locale = (locale or "").replace("-", "_")
    while locale:
        chain.append(locale)
        if "_" not in locale:
            break
        locale = locale.rsplit("_", 1)[0]
    chain.append(BASE_LOCALE)
    return chain


@dataclass(frozen=True)
class CatalogIssue:
    """A template that references parameters its source text never binds."""
    locale: str
    table: str
    key: str
    missing: frozenset      # Bound in the source, unused by the template
    unknown: frozenset      # Used by the template, never bound

    def __str__(self) -> str:
        details = []
        if self.unknown:
            details.append(f"unknown {sorted(self.unknown)}")
        if self.missing:
            details.append(f"unused {sorted(self.missing)}")
        return f"{self.locale or '<base>'}/{self.table}: {self.key!r}: {', '.join(details)}"


class Catalog:
    """
    Localized string tables with locale fallback.

    Tables are shared between catalogs created with with_locale(); adding
    entries after construction is meant for setup code and tests.
    """

    def __init__(
        self,
        tables: Optional[Mapping[str, Mapping[str, Mapping[str, str]]]] = None,
        locale: str = BASE_LOCALE
    ):
        """
        Initialize catalog.

        Args:
            tables: {locale: {table: {key: template}}}
            locale: Locale used for lookups ("" for the base language)
        """
        self._tables: Dict[str, Dict[str, Dict[str, str]]] = {}
        self.locale = locale
        for loc, loc_tables in (tables or {}).items():
            for table, entries in loc_tables.items():
                self.add(loc, table, entries)

    def add(self, locale: str, table: str, entries: Mapping[str, str]) -> None:
        """Merge entries into a table, replacing existing keys."""
        self._tables.setdefault(locale, {}).setdefault(table, {}).update(entries)

    def with_locale(self, locale: str) -> "Catalog":
        """Catalog over the same tables, resolving for another locale."""
        other = Catalog(locale=locale)
        other._tables = self._tables
        return other

    def locales(self) -> List[str]:
        return sorted(self._tables)

    def tables(self, locale: str = BASE_LOCALE) -> List[str]:
        return sorted(self._tables.get(locale, {}))

    def entries(self, locale: str, table: str) -> Dict[str, str]:
        return dict(self._tables.get(locale, {}).get(table, {}))

    def lookup(self, key: str, table: str) -> str:
        """
        Find the template for `key` in `table`.

        Returns:
            The first entry along the locale chain, or `key` when none exists
        """
        for locale in locale_chain(self.locale):
            entries = self._tables.get(locale, {}).get(table)
            if entries and key in entries:
                return entries[key]
        logger.debug(f"Catalog miss: {table}/{key!r} (locale {self.locale!r})")
        return key

    def check(self, base_locale: str = BASE_LOCALE) -> List[CatalogIssue]:
        """
        Find templates that reference parameters their source text never binds.

        A translation is compared with the base locale's entry for the same
        key, or with the placeholders in the key itself (a Clause skeleton)
        when there is no base entry. Leaving a parameter out is allowed.
        """
        issues: List[CatalogIssue] = []
        base_tables = self._tables.get(base_locale, {})
        for locale in self.locales():
            for table in self.tables(locale):
                base = {} if locale == base_locale else base_tables.get(table, {})
                for key, template in self._tables[locale][table].items():
                    expected = set(placeholders(base[key] if key in base else key))
                    found = set(placeholders(template))
                    if found - expected:
                        issues.append(CatalogIssue(
                            locale=locale,
                            table=table,
                            key=key,
                            missing=frozenset(expected - found),
                            unknown=frozenset(found - expected),
                        ))
        return issues

    @classmethod
    def load_directory(cls, path, locale: str = BASE_LOCALE) -> "Catalog":
        """
        Load every table file below `path`.

        Files directly in `path` belong to the base locale; each
        subdirectory is a locale.

        Raises:
            FileNotFoundError: If path is not a directory
            CatalogError: If a file cannot be parsed or is not a flat string mapping (E100)
        """
        root = Path(path)
        if not root.is_dir():
            raise FileNotFoundError(f"Catalog directory not found: {path}")

        catalog = cls(locale=locale)
        for file in sorted(root.iterdir()):
            if file.is_dir():
                for table_file in sorted(file.iterdir()):
                    if table_file.suffix in TABLE_SUFFIXES:
                        catalog.add(file.name, table_file.stem, load_table(table_file))
            elif file.suffix in TABLE_SUFFIXES:
                catalog.add(BASE_LOCALE, file.stem, load_table(file))

        logger.info(f"Loaded catalog from {root} with locales {catalog.locales()}")
        return catalog


def load_table(path) -> Dict[str, str]:
    """
    Read one string table from a YAML or JSON file.

    An empty file is an empty table.

    Raises:
        CatalogError: On parse errors or schema violations (E100)
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(
            code="E100",
            message=f"Cannot read string table {path}: {e}"
        ) from e

    if data is None:
        data = {}
    try:
        validate(instance=data, schema=TABLE_SCHEMA)
    except ValidationError as e:
        raise CatalogError(
            code="E100",
            message=f"Invalid string table {path}: {e.message}",
            hint="String tables must map keys to plain strings"
        ) from e

    logger.debug(f"Loaded {len(data)} entries from {path}")
    return data


# Default catalog instance (lazy-loaded from configuration)
_default_catalog: Optional[Catalog] = None


def get_default_catalog() -> Catalog:
    """Get default catalog (singleton pattern).

    Loads FEHLERTEUFEL_STRINGS_PATH when configured, otherwise starts empty.
    """
    global _default_catalog
    if _default_catalog is None:
        from ..config import get_default_config
        config = get_default_config()
        if config.strings_path:
            _default_catalog = Catalog.load_directory(config.strings_path, locale=config.locale)
        else:
            _default_catalog = Catalog(locale=config.locale)
    return _default_catalog


def set_default_catalog(catalog: Optional[Catalog]) -> None:
    """Replace the default catalog; None resets it to lazy loading."""
    global _default_catalog
    _default_catalog = catalog
