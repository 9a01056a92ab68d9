"""
fehlerteufel Configuration Module

Centralized configuration for localized error descriptions.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable.

    Raises:
        ValueError: If the value is not one of TRUE_VALUES or FALSE_VALUES
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(
        f"{name} must be one of {TRUE_VALUES + FALSE_VALUES}, got {value!r}"
    )


@dataclass
class FehlerteufelConfig:
    """Configuration for catalog lookups and error descriptions.

    All settings have defaults that work without any string tables: lookups
    miss and every error renders its own text.
    """

    # ====================
    # Localization
    # ====================

    locale: str = ""
    """Locale used for lookups, e.g. "de_DE".

    Lookups fall back from "de_DE" to "de" to the base language ("").
    """

    strings_path: Optional[str] = None
    """Directory holding string tables for the default catalog.

    Layout: <strings_path>/<Table>.yaml for the base language and
    <strings_path>/<locale>/<Table>.yaml per locale.
    Default: None (empty catalog)
    """

    default_table: str = "Localizable"
    """Table used when a Clause or error type names none."""

    # ====================
    # Error descriptions
    # ====================

    include_cause: bool = True
    """Include the text of causes that are not localized errors.

    When enabled, `description` appends str(cause) for plain exceptions.
    When disabled, such causes contribute nothing.
    Localized causes are always included.
    """

    separator: str = " - "
    """Separator between description, failure reason, recovery and cause."""

    @classmethod
    def from_env(cls) -> "FehlerteufelConfig":
        """Load configuration from environment variables.

        Environment variables:
          FEHLERTEUFEL_LOCALE - Lookup locale (e.g. de_DE)
          FEHLERTEUFEL_STRINGS_PATH - String table directory
          FEHLERTEUFEL_DEFAULT_TABLE - Default table name
          FEHLERTEUFEL_INCLUDE_CAUSE - Include plain causes (true/false, yes/no, on/off, 1/0)
          FEHLERTEUFEL_SEPARATOR - Description separator

        Returns:
            FehlerteufelConfig instance with values from environment

        Raises:
            ValueError: If FEHLERTEUFEL_INCLUDE_CAUSE is not a boolean spelling
        """
        return cls(
            locale=os.getenv("FEHLERTEUFEL_LOCALE", ""),
            strings_path=os.getenv("FEHLERTEUFEL_STRINGS_PATH") or None,
            default_table=os.getenv("FEHLERTEUFEL_DEFAULT_TABLE", "Localizable"),
            include_cause=_env_flag("FEHLERTEUFEL_INCLUDE_CAUSE", True),
            separator=os.getenv("FEHLERTEUFEL_SEPARATOR", " - "),
        )

    def validate(self) -> None:
        """Validate configuration settings.

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.separator:
            raise ValueError("separator must not be empty")

        if not self.default_table:
            raise ValueError("default_table must not be empty")

        if self.strings_path and not Path(self.strings_path).is_dir():
            raise ValueError(
                f"strings_path must be a directory, got {self.strings_path}"
            )

    def get_summary(self) -> str:
        """Get human-readable configuration summary.

        Returns:
            Formatted string describing current configuration
        """
        lines = [
            "fehlerteufel Configuration Summary",
            "=" * 50,
            "",
            "Localization:",
            f"  Locale: {self.locale or '<base>'}",
            f"  Strings: {self.strings_path or 'Not set'}",
            f"  Default Table: {self.default_table}",
            "",
            "Descriptions:",
            f"  Include Plain Causes: {self.include_cause}",
            f"  Separator: {self.separator!r}",
        ]
        return "\n".join(lines)


# Default configuration instance (lazy-loaded from environment)
_default_config: Optional[FehlerteufelConfig] = None


def get_default_config() -> FehlerteufelConfig:
    """Get default configuration instance (singleton pattern).

    Returns:
        Default FehlerteufelConfig loaded from environment
    """
    global _default_config
    if _default_config is None:
        _default_config = FehlerteufelConfig.from_env()
        _default_config.validate()
    return _default_config


def set_default_config(config: Optional[FehlerteufelConfig]) -> None:
    """Replace the default configuration; None reloads from environment on next use."""
    global _default_config
    _default_config = config
